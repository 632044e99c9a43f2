"""프로세스 내부 센서 (SensorProvider 구현체).

수동 위치 입력, 기록된 fix 재생, 테스트에서 사용한다.
fix를 밀어 넣는 쪽의 스레드에서 구독자 콜백이 동기 호출된다.
"""

from __future__ import annotations

from collections.abc import Iterable
import itertools
import logging
import threading

from geo_navigation.domain.enums import LocationErrorCode
from geo_navigation.domain.exceptions import LocationAcquisitionError
from geo_navigation.domain.value_objects.position import Position
from geo_navigation.usecase.ports.config_port import SensorOptions
from geo_navigation.usecase.ports.sensor_provider import (
    ErrorCallback,
    FixCallback,
    SensorProvider,
)

logger = logging.getLogger(__name__)


class ManualSensorProvider(SensorProvider):
    """SensorProvider의 인메모리 구현체.

    clock()은 마지막으로 제공된 fix의 timestamp를 반환하므로
    재생 시 스로틀이 기록된 시간 축을 따른다.

    Args:
        current_fix: 단발 획득 시 반환할 초기 fix.
    """

    def __init__(self, current_fix: Position | None = None) -> None:
        self._lock = threading.Lock()
        self._current_fix = current_fix
        self._pending_error: LocationAcquisitionError | None = None
        self._handles = itertools.count(1)
        self._subscribers: dict[int, tuple[FixCallback, ErrorCallback]] = {}
        self._clock_ms = current_fix.timestamp if current_fix else 0.0

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def clock(self) -> float:
        """재생 시각 (ms)."""
        return self._clock_ms

    def set_current_fix(self, position: Position) -> None:
        """단발 획득 시 반환할 fix를 설정한다 (수동 위치 입력)."""
        with self._lock:
            self._current_fix = position

    def fail_next_fix(self, error: LocationAcquisitionError) -> None:
        """다음 단발 획득을 지정한 에러로 실패시킨다."""
        with self._lock:
            self._pending_error = error

    def get_current_fix(self, options: SensorOptions) -> Position:
        with self._lock:
            error, self._pending_error = self._pending_error, None
            fix = self._current_fix

        if error is not None:
            raise error
        if fix is None:
            raise LocationAcquisitionError(
                LocationErrorCode.POSITION_UNAVAILABLE,
                'No manual fix available',
            )
        self._advance_clock(fix)
        return fix

    def subscribe(
        self,
        on_fix: FixCallback,
        on_error: ErrorCallback,
        options: SensorOptions,
    ) -> int:
        with self._lock:
            handle = next(self._handles)
            self._subscribers[handle] = (on_fix, on_error)
        return handle

    def unsubscribe(self, handle: int) -> None:
        with self._lock:
            self._subscribers.pop(handle, None)

    def push_fix(self, position: Position) -> None:
        """연속 구독자에게 fix를 전달한다."""
        with self._lock:
            self._current_fix = position
            subscribers = list(self._subscribers.values())
        self._advance_clock(position)
        for on_fix, _ in subscribers:
            on_fix(position)

    def push_error(self, error: LocationAcquisitionError) -> None:
        """연속 구독자에게 센서 에러를 전달한다."""
        with self._lock:
            subscribers = list(self._subscribers.values())
        for _, on_error in subscribers:
            on_error(error)

    def replay(self, fixes: Iterable[Position]) -> int:
        """기록된 fix를 순서대로 전달한다.

        Returns:
            전달한 fix 개수.
        """
        count = 0
        for fix in fixes:
            self.push_fix(fix)
            count += 1
        logger.info("Replayed %d fixes", count)
        return count

    def _advance_clock(self, position: Position) -> None:
        self._clock_ms = max(self._clock_ms, position.timestamp)
