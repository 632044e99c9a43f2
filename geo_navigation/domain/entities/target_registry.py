"""활성 목표와 도착 기록을 관리하는 엔티티."""

from __future__ import annotations

from geo_navigation.domain.entities.navigation_state import NavigationState
from geo_navigation.domain.value_objects.target import Target


class TargetRegistry:
    """세션 단위 목표 저장소.

    활성 목표는 최대 하나이며 새 목표는 기존 목표를 즉시 대체한다.
    도착 기록(ArrivedTargets)은 목표 해제 시에도 유지되고
    reset()에서만 비워진다.
    """

    def __init__(self) -> None:
        self._active: Target | None = None
        self._navigating = False
        self._arrived: set[str] = set()
        self._last_distance: float | None = None
        self._last_bearing: float | None = None

    @property
    def active_target(self) -> Target | None:
        return self._active

    @property
    def is_navigating(self) -> bool:
        return self._navigating

    @property
    def arrived_keys(self) -> frozenset[str]:
        """도착 이벤트가 이미 발행된 목표 식별자 집합."""
        return frozenset(self._arrived)

    @property
    def navigation_state(self) -> NavigationState:
        return NavigationState(
            is_navigating=self._navigating,
            current_target=self._active,
            last_bearing=self._last_bearing,
            last_distance=self._last_distance,
        )

    def set_target(self, target: Target) -> Target | None:
        """활성 목표를 교체하고 내비게이션을 활성화한다.

        Returns:
            교체된 이전 목표. 없으면 None.
        """
        previous = self._active
        self._active = target
        self._navigating = True
        return previous

    def clear_target(self) -> Target | None:
        """활성 목표를 제거한다. 도착 기록은 유지한다."""
        previous = self._active
        self._active = None
        self._navigating = False
        return previous

    def deactivate(self) -> None:
        """목표는 남겨두고 내비게이션만 중단한다."""
        self._navigating = False

    def record_measurement(self, distance: float, bearing: float) -> None:
        self._last_distance = distance
        self._last_bearing = bearing

    def has_arrived(self, target: Target) -> bool:
        return target.key in self._arrived

    def mark_arrived(self, target: Target) -> bool:
        """목표를 도착 기록에 추가한다.

        Returns:
            처음 추가된 경우 True, 이미 기록되어 있으면 False.
        """
        if target.key in self._arrived:
            return False
        self._arrived.add(target.key)
        return True

    def reset(self) -> None:
        """세션 전체를 초기화한다 (도착 기록 포함)."""
        self._active = None
        self._navigating = False
        self._arrived.clear()
        self._last_distance = None
        self._last_bearing = None
