"""최근 수락 위치 이력 엔티티."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

from geo_navigation.domain.value_objects.position import Position

DEFAULT_MAX_HISTORY_SIZE = 10


class PositionHistory:
    """고정 용량 FIFO 위치 이력.

    속도 계산에만 사용하며, 용량을 넘으면 가장 오래된 항목이 제거된다.
    시간 경과로 만료되지 않는다.

    Args:
        max_size: 최대 보관 개수 (1 이상).
    """

    def __init__(self, max_size: int = DEFAULT_MAX_HISTORY_SIZE) -> None:
        if max_size < 1:
            raise ValueError(f'max_size must be >= 1, got {max_size}')
        self._entries: deque[Position] = deque(maxlen=max_size)

    @property
    def max_size(self) -> int:
        return self._entries.maxlen

    @property
    def latest(self) -> Position | None:
        """가장 최근 위치. 비어 있으면 None."""
        return self._entries[-1] if self._entries else None

    def append(self, position: Position) -> None:
        self._entries.append(position)

    def resize(self, max_size: int) -> None:
        """용량을 변경한다. 줄어들면 오래된 항목부터 제거된다."""
        if max_size < 1:
            raise ValueError(f'max_size must be >= 1, got {max_size}')
        self._entries = deque(self._entries, maxlen=max_size)

    def clear(self) -> None:
        self._entries.clear()

    def snapshot(self) -> tuple[Position, ...]:
        """오래된 순서의 불변 복사본을 반환한다."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Position]:
        return iter(tuple(self._entries))
