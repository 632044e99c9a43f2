"""목표 근접 평가 유스케이스.

현재 위치와 활성 목표 사이의 거리/방위각을 스로틀 간격마다 계산하여
내비게이션 이벤트를 발행하고, 목표당 한 번만 도착 이벤트를 발행한다.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
import time

from geo_navigation.domain.entities.target_registry import TargetRegistry
from geo_navigation.domain.events.location_events import (
    NavigationUpdatedEvent,
    TargetReachedEvent,
)
from geo_navigation.domain.geodesy import bearing, distance
from geo_navigation.domain.value_objects.position import Position
from geo_navigation.domain.value_objects.target import Target
from geo_navigation.usecase.ports.event_publisher import EventPublisher

logger = logging.getLogger(__name__)

DEFAULT_CHECK_INTERVAL_MS = 2000.0


def monotonic_ms() -> float:
    """단조 증가 시계 (ms)."""
    return time.monotonic() * 1000


class ProximityEngine:
    """스로틀 근접 평가기.

    평가 간격은 check_interval_ms 이상으로 제한되어
    fix 수신 빈도가 높아도 CPU/배터리 사용량이 일정하다.

    Args:
        registry: 목표 저장소.
        event_publisher: 이벤트 발행자.
        check_interval_ms: 평가 최소 간격 (ms).
        clock: 현재 시각 (ms) 공급 함수.
    """

    def __init__(
        self,
        registry: TargetRegistry,
        event_publisher: EventPublisher,
        check_interval_ms: float = DEFAULT_CHECK_INTERVAL_MS,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._registry = registry
        self._event_publisher = event_publisher
        self._clock = clock or monotonic_ms
        self._last_check_ms: float | None = None
        self.check_interval_ms = check_interval_ms

    @property
    def check_interval_ms(self) -> float:
        return self._check_interval_ms

    @check_interval_ms.setter
    def check_interval_ms(self, value: float) -> None:
        if value < 0:
            raise ValueError(
                f'check_interval_ms must be >= 0, got {value}'
            )
        self._check_interval_ms = float(value)

    def reset_throttle(self) -> None:
        """다음 evaluate() 호출이 즉시 평가되도록 스로틀 창을 초기화한다."""
        self._last_check_ms = None

    def evaluate(
        self, position: Position | None
    ) -> NavigationUpdatedEvent | None:
        """현재 위치로 근접 평가를 수행한다.

        Args:
            position: 현재 위치.

        Returns:
            발행된 내비게이션 이벤트. 스로틀되었거나
            내비게이션 중이 아니면 None.
        """
        target = self._registry.active_target
        if (
            position is None
            or target is None
            or not self._registry.is_navigating
        ):
            return None

        now = self._clock()
        if (
            self._last_check_ms is not None
            and now - self._last_check_ms < self._check_interval_ms
        ):
            return None
        self._last_check_ms = now

        dist = distance(position, target)
        brg = bearing(position, target)
        self._registry.record_measurement(dist, brg)

        event = NavigationUpdatedEvent(
            distance=dist,
            bearing=brg,
            target=target,
            position=position,
        )
        self._event_publisher.publish(event)

        # 경계값(dist == radius)도 도착으로 본다
        if dist <= target.radius:
            self._handle_target_reached(target, position, dist)

        return event

    def distance_to_target(self, position: Position | None) -> float | None:
        target = self._registry.active_target
        if position is None or target is None:
            return None
        return distance(position, target)

    def bearing_to_target(self, position: Position | None) -> float | None:
        target = self._registry.active_target
        if position is None or target is None:
            return None
        return bearing(position, target)

    def _handle_target_reached(
        self, target: Target, position: Position, dist: float
    ) -> None:
        """목표당 최초 1회만 도착 이벤트를 발행한다."""
        if not self._registry.mark_arrived(target):
            return

        logger.info(
            "Target reached: %.6f, %.6f (distance=%.1fm, radius=%.1fm)",
            target.lat, target.lng, dist, target.radius,
        )
        self._event_publisher.publish(
            TargetReachedEvent(
                target=target,
                position=position,
                distance=dist,
            )
        )
