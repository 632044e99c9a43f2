"""내비게이션 목표 지점 값 객체."""

from __future__ import annotations

from dataclasses import dataclass
import math

from geo_navigation.domain.geodesy import ensure_valid_coordinate

DEFAULT_TARGET_RADIUS_M = 20.0


@dataclass(frozen=True)
class Target:
    """플레이어가 향하는 목표 지점.

    Args:
        lat: 위도 (deg).
        lng: 경도 (deg).
        radius: 도착 판정 반경 (m). 경계값도 도착으로 본다.

    Raises:
        InvalidCoordinateError: 좌표가 유효하지 않은 경우.
        ValueError: 반경이 음수이거나 유한하지 않은 경우.
    """

    lat: float
    lng: float
    radius: float = DEFAULT_TARGET_RADIUS_M

    def __post_init__(self) -> None:
        ensure_valid_coordinate(self.lat, self.lng)
        if not math.isfinite(self.radius) or self.radius < 0:
            raise ValueError(f'Invalid target radius: {self.radius!r}')

    @property
    def key(self) -> str:
        """도착 기록에 사용하는 목표 식별자 (좌표 쌍)."""
        return f'{float(self.lat)!r},{float(self.lng)!r}'
