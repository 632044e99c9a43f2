"""위치 및 속도 관련 값 객체."""

from __future__ import annotations

from dataclasses import dataclass
import math

from geo_navigation.domain.exceptions import InvalidPositionError
from geo_navigation.domain.geodesy import ensure_valid_coordinate


def _is_finite(value: object) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


@dataclass(frozen=True)
class Velocity:
    """연속된 두 수락 위치로부터 계산된 이동 속도.

    Args:
        speed: 속도 (m/s).
        speed_kmh: 속도 (km/h).
        bearing: 이동 방위각 (deg), 0 ~ 360.
    """

    speed: float
    speed_kmh: float
    bearing: float


@dataclass(frozen=True)
class Position:
    """센서 fix가 필터를 통과하여 생성된 위치.

    생성 시점에 좌표를 검증하므로 유효하지 않은 Position은 존재하지 않는다.
    새 fix마다 새 인스턴스로 대체되며 수정되지 않는다.

    Args:
        lat: 위도 (deg), -90 ~ 90.
        lng: 경도 (deg), -180 ~ 180.
        accuracy: 수평 정확도 반경 (m).
        timestamp: 측정 시각 (epoch ms).
        altitude: 고도 (m).
        altitude_accuracy: 고도 정확도 (m).
        heading: 센서 보고 진행 방향 (deg).
        speed: 센서 보고 속도 (m/s).
        velocity: 직전 수락 위치 기준 계산 속도. 알 수 없으면 None.

    Raises:
        InvalidCoordinateError: 좌표가 유효하지 않은 경우.
        InvalidPositionError: 정확도가 음수이거나 정확도/시각이
            유한한 숫자가 아닌 경우.
    """

    lat: float
    lng: float
    accuracy: float
    timestamp: float
    altitude: float | None = None
    altitude_accuracy: float | None = None
    heading: float | None = None
    speed: float | None = None
    velocity: Velocity | None = None

    def __post_init__(self) -> None:
        ensure_valid_coordinate(self.lat, self.lng)
        if not _is_finite(self.accuracy) or self.accuracy < 0:
            raise InvalidPositionError(
                f'Invalid accuracy: {self.accuracy!r}'
            )
        if not _is_finite(self.timestamp):
            raise InvalidPositionError(
                f'Invalid timestamp: {self.timestamp!r}'
            )


@dataclass(frozen=True)
class VelocitySample:
    """위치 이력에서 추출한 속도 기록.

    Args:
        timestamp: 측정 시각 (epoch ms).
        speed: 속도 (m/s).
        speed_kmh: 속도 (km/h).
        bearing: 이동 방위각 (deg).
    """

    timestamp: float
    speed: float
    speed_kmh: float
    bearing: float
