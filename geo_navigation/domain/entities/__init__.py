"""Geo Navigation 도메인 엔티티."""

from geo_navigation.domain.entities.navigation_state import (
    NavigationState,
    NavigationStats,
)
from geo_navigation.domain.entities.position_history import (
    DEFAULT_MAX_HISTORY_SIZE,
    PositionHistory,
)
from geo_navigation.domain.entities.target_registry import TargetRegistry

__all__ = [
    'DEFAULT_MAX_HISTORY_SIZE',
    'NavigationState',
    'NavigationStats',
    'PositionHistory',
    'TargetRegistry',
]
