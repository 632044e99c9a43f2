"""구면 지구 근사 기반 측지 계산.

거리(haversine)와 초기 방위각(forward azimuth)을 계산한다.
모든 함수는 상태가 없으며 잘못된 좌표에 대해
InvalidCoordinateError를 즉시 발생시킨다.
"""

from __future__ import annotations

import math
from typing import Protocol

from geo_navigation.domain.exceptions import InvalidCoordinateError

EARTH_RADIUS_M = 6_371_000.0


class GeoPoint(Protocol):
    """위도/경도를 가진 객체."""

    @property
    def lat(self) -> float: ...

    @property
    def lng(self) -> float: ...


def is_valid_coordinate(lat: object, lng: object) -> bool:
    """위도/경도가 유한한 숫자이며 유효 범위 안에 있는지 확인한다."""
    for value in (lat, lng):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if not math.isfinite(value):
            return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0


def ensure_valid_coordinate(lat: object, lng: object) -> None:
    """유효하지 않은 좌표이면 InvalidCoordinateError를 발생시킨다."""
    if not is_valid_coordinate(lat, lng):
        raise InvalidCoordinateError(
            f'Invalid coordinate: lat={lat!r}, lng={lng!r}'
        )


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """두 지점 사이의 대원 거리를 계산한다.

    Args:
        a: 시작 지점.
        b: 끝 지점.

    Returns:
        거리 (m). 동일 좌표는 정확히 0.0.

    Raises:
        InvalidCoordinateError: 좌표가 유효하지 않은 경우.
    """
    ensure_valid_coordinate(a.lat, a.lng)
    ensure_valid_coordinate(b.lat, b.lng)
    if a.lat == b.lat and a.lng == b.lng:
        return 0.0

    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lng - a.lng)

    h = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    # 반올림 오차로 [0, 1]을 벗어나면 sqrt가 NaN을 만든다
    h = min(1.0, max(0.0, h))
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c


def bearing(a: GeoPoint, b: GeoPoint) -> float:
    """a에서 b로 향하는 초기 방위각을 계산한다.

    Returns:
        방위각 (deg), [0, 360) 범위.

    Raises:
        InvalidCoordinateError: 좌표가 유효하지 않은 경우.
    """
    ensure_valid_coordinate(a.lat, a.lng)
    ensure_valid_coordinate(b.lat, b.lng)

    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_lambda = math.radians(b.lng - a.lng)

    y = math.sin(d_lambda) * math.cos(phi2)
    x = (
        math.cos(phi1) * math.sin(phi2)
        - math.sin(phi1) * math.cos(phi2) * math.cos(d_lambda)
    )
    result = math.degrees(math.atan2(y, x)) % 360.0
    # 아주 작은 음수는 % 연산 후 360.0이 될 수 있다
    if result >= 360.0:
        result = 0.0
    return result


def format_distance(meters: float) -> str:
    """거리를 화면 표시용 문자열로 변환한다.

    1 km 미만은 미터 단위 정수, 이상은 소수 첫째 자리 km.
    """
    if meters < 1000:
        return f'{math.floor(meters + 0.5)}m'
    return f'{meters / 1000:.1f}km'
