"""Geo Navigation 값 객체 (불변, 동등성 기반 비교)."""

from geo_navigation.domain.value_objects.position import (
    Position,
    Velocity,
    VelocitySample,
)
from geo_navigation.domain.value_objects.target import (
    DEFAULT_TARGET_RADIUS_M,
    Target,
)

__all__ = [
    'DEFAULT_TARGET_RADIUS_M',
    'Position',
    'Target',
    'Velocity',
    'VelocitySample',
]
