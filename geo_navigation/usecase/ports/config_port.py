"""설정 포트 인터페이스.

애플리케이션 설정의 로딩을 추상화한다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class SensorOptions:
    """위치 센서 획득 옵션.

    Args:
        enable_high_accuracy: 고정밀 모드 사용 여부.
        timeout_ms: 단발 위치 획득 제한 시간 (ms).
        maximum_age_ms: 캐시된 fix 허용 최대 경과 시간 (ms).
    """

    enable_high_accuracy: bool = True
    timeout_ms: int = 15000
    maximum_age_ms: int = 5000


@dataclass(frozen=True)
class PositionFilterConfig:
    """GPS 노이즈 필터 설정.

    Args:
        enabled: 필터 사용 여부. False면 모든 fix를 수락한다.
        min_accuracy: 허용 최대 정확도 반경 (m). 초과 시 거부.
        min_movement: 최소 이동 거리 (m). 미만이면 정지로 보고 거부.
        max_speed: 현실적인 최대 속도 (m/s). 초과 시 순간이동으로 보고 거부.
    """

    enabled: bool = True
    min_accuracy: float = 50.0
    min_movement: float = 2.0
    max_speed: float = 50.0


@dataclass(frozen=True)
class EngineConfig:
    """근접 엔진 설정.

    Args:
        proximity_check_interval_ms: 근접 평가 최소 간격 (ms).
        max_history_size: 위치 이력 최대 개수.
        default_target_radius: 반경 미지정 목표의 기본 도착 반경 (m).
    """

    proximity_check_interval_ms: float = 2000.0
    max_history_size: int = 10
    default_target_radius: float = 20.0


@dataclass(frozen=True)
class MqttConfig:
    """MQTT 브로커 접속 설정.

    Args:
        broker_host: 브로커 호스트 주소.
        broker_port: 브로커 포트 번호.
        keepalive_sec: 연결 유지 간격 (초).
        reconnect_max_delay_sec: 재연결 최대 대기 시간 (초).
        fix_topic: 위치 fix를 수신할 토픽.
        qos: 구독 QoS 레벨.
    """

    broker_host: str = 'localhost'
    broker_port: int = 1883
    keepalive_sec: int = 60
    reconnect_max_delay_sec: int = 60
    fix_topic: str = 'owntracks/player/device'
    qos: int = 1


@dataclass(frozen=True)
class AppConfig:
    """애플리케이션 전체 설정."""

    sensor: SensorOptions = field(default_factory=SensorOptions)
    position_filter: PositionFilterConfig = field(
        default_factory=PositionFilterConfig
    )
    engine: EngineConfig = field(default_factory=EngineConfig)
    mqtt: MqttConfig = field(default_factory=MqttConfig)


class ConfigPort(ABC):
    """설정 로더 인터페이스."""

    @abstractmethod
    def load(self) -> AppConfig:
        """설정을 로드한다.

        Returns:
            누락된 항목이 기본값으로 채워진 AppConfig.
        """
