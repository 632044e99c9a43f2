"""유스케이스 포트 인터페이스 (ABC).

infra 레이어에서 구현해야 하는 추상 인터페이스를 정의한다.
"""

from geo_navigation.usecase.ports.config_port import (
    AppConfig,
    ConfigPort,
    EngineConfig,
    MqttConfig,
    PositionFilterConfig,
    SensorOptions,
)
from geo_navigation.usecase.ports.event_publisher import EventPublisher
from geo_navigation.usecase.ports.sensor_provider import (
    ErrorCallback,
    FixCallback,
    SensorProvider,
)

__all__ = [
    "AppConfig",
    "ConfigPort",
    "EngineConfig",
    "ErrorCallback",
    "EventPublisher",
    "FixCallback",
    "MqttConfig",
    "PositionFilterConfig",
    "SensorOptions",
    "SensorProvider",
]
