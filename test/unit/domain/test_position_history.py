"""PositionHistory 단위 테스트."""

import pytest

from geo_navigation.domain.entities.position_history import (
    DEFAULT_MAX_HISTORY_SIZE,
    PositionHistory,
)


class TestPositionHistory:
    def test_default_capacity(self):
        assert PositionHistory().max_size == DEFAULT_MAX_HISTORY_SIZE == 10

    def test_empty(self):
        history = PositionHistory()
        assert len(history) == 0
        assert history.latest is None

    def test_evicts_oldest(self, make_fix):
        history = PositionHistory(max_size=3)
        fixes = [make_fix(0.0, 0.001 * i, timestamp=i) for i in range(5)]
        for fix in fixes:
            history.append(fix)

        assert len(history) == 3
        assert history.snapshot() == tuple(fixes[2:])
        assert history.latest is fixes[-1]

    def test_resize_keeps_newest(self, make_fix):
        history = PositionHistory(max_size=5)
        fixes = [make_fix(0.0, 0.001 * i, timestamp=i) for i in range(5)]
        for fix in fixes:
            history.append(fix)

        history.resize(2)
        assert history.snapshot() == tuple(fixes[3:])

    def test_clear(self, make_fix):
        history = PositionHistory()
        history.append(make_fix(0.0, 0.0))
        history.clear()
        assert len(history) == 0

    def test_iteration_is_oldest_first(self, make_fix):
        history = PositionHistory()
        a = make_fix(0.0, 0.0, timestamp=1)
        b = make_fix(0.0, 0.001, timestamp=2)
        history.append(a)
        history.append(b)
        assert list(history) == [a, b]

    @pytest.mark.parametrize('size', [0, -1])
    def test_invalid_capacity(self, size):
        with pytest.raises(ValueError):
            PositionHistory(max_size=size)
