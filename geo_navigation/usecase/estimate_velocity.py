"""수락 위치 이력 기반 속도 추정."""

from __future__ import annotations

from collections.abc import Iterable

from geo_navigation.domain.geodesy import bearing, distance
from geo_navigation.domain.value_objects.position import (
    Position,
    Velocity,
    VelocitySample,
)

DEFAULT_MOVING_THRESHOLD_MPS = 0.5


def compute_velocity(prev: Position, curr: Position) -> Velocity | None:
    """연속된 두 수락 위치 사이의 속도를 계산한다.

    시간차가 0 이하이면 속도를 알 수 없으므로 None을 반환한다.
    None은 정지(0 m/s)와 구별되어야 한다.
    """
    dt_sec = (curr.timestamp - prev.timestamp) / 1000
    if dt_sec <= 0:
        return None

    speed = distance(prev, curr) / dt_sec
    return Velocity(
        speed=speed,
        speed_kmh=speed * 3.6,
        bearing=bearing(prev, curr),
    )


def velocity_history(positions: Iterable[Position]) -> list[VelocitySample]:
    """속도가 계산된 위치만 골라 속도 기록으로 변환한다."""
    return [
        VelocitySample(
            timestamp=p.timestamp,
            speed=p.velocity.speed,
            speed_kmh=p.velocity.speed_kmh,
            bearing=p.velocity.bearing,
        )
        for p in positions
        if p.velocity is not None
    ]


def average_speed(positions: Iterable[Position]) -> float:
    """이력의 평균 속도 (m/s). 속도 기록이 없으면 0.0."""
    samples = velocity_history(positions)
    if not samples:
        return 0.0
    return sum(s.speed for s in samples) / len(samples)


def is_moving(
    positions: Iterable[Position],
    threshold_mps: float = DEFAULT_MOVING_THRESHOLD_MPS,
) -> bool:
    """평균 속도가 임계값을 넘으면 이동 중으로 판정한다.

    위치가 2개 미만이면 항상 False.
    """
    positions = list(positions)
    if len(positions) < 2:
        return False
    return average_speed(positions) > threshold_mps
