"""ProximityEngine 단위 테스트."""

from unittest.mock import MagicMock

import pytest

from geo_navigation.domain.entities.target_registry import TargetRegistry
from geo_navigation.domain.events.location_events import (
    NavigationUpdatedEvent,
    TargetReachedEvent,
)
from geo_navigation.domain.value_objects.target import Target
from geo_navigation.usecase.check_proximity import ProximityEngine


@pytest.fixture
def registry(floresta_target):
    reg = TargetRegistry()
    reg.set_target(floresta_target)
    return reg


@pytest.fixture
def pub():
    return MagicMock()


@pytest.fixture
def clock(clock):
    clock.advance(100_000)
    return clock


@pytest.fixture
def engine(registry, pub, clock):
    return ProximityEngine(registry, pub, check_interval_ms=2000, clock=clock)


@pytest.fixture
def far_fix(make_fix):
    return make_fix(-27.620, -48.670)


def _published(pub, event_type):
    events = [c[0][0] for c in pub.publish.call_args_list]
    return [e for e in events if isinstance(e, event_type)]


class TestEvaluate:
    def test_far_target_navigation_only(self, engine, pub, registry, far_fix):
        event = engine.evaluate(far_fix)

        assert event.distance > 20
        assert 0 <= event.bearing < 360
        assert _published(pub, NavigationUpdatedEvent) == [event]
        assert _published(pub, TargetReachedEvent) == []
        assert registry.navigation_state.last_distance == event.distance

    def test_colocated_arrives_with_zero_distance(
        self, engine, pub, floresta_fix,
    ):
        engine.evaluate(floresta_fix)

        reached = _published(pub, TargetReachedEvent)
        assert len(reached) == 1
        assert reached[0].distance == 0.0

    def test_boundary_counts_as_arrived(
        self, pub, clock, floresta, make_fix, offset_north,
    ):
        registry = TargetRegistry()
        position = make_fix(*offset_north(*floresta, 15.0))
        engine = ProximityEngine(registry, pub, clock=clock)
        registry.set_target(Target(lat=floresta[0], lng=floresta[1], radius=0.0))
        exact = engine.distance_to_target(position)
        registry.set_target(
            Target(lat=floresta[0], lng=floresta[1], radius=exact)
        )

        engine.evaluate(position)

        assert len(_published(pub, TargetReachedEvent)) == 1

    def test_navigation_event_precedes_arrival(
        self, engine, pub, floresta_fix,
    ):
        engine.evaluate(floresta_fix)
        events = [c[0][0] for c in pub.publish.call_args_list]
        assert isinstance(events[0], NavigationUpdatedEvent)
        assert isinstance(events[1], TargetReachedEvent)

    def test_no_position_or_target(self, pub, clock, floresta_fix):
        engine = ProximityEngine(TargetRegistry(), pub, clock=clock)
        assert engine.evaluate(floresta_fix) is None
        assert engine.evaluate(None) is None
        pub.publish.assert_not_called()

    def test_inactive_navigation_skipped(
        self, engine, registry, pub, floresta_fix,
    ):
        registry.deactivate()
        assert engine.evaluate(floresta_fix) is None
        pub.publish.assert_not_called()


class TestThrottle:
    def test_burst_is_throttled(self, engine, pub, clock, far_fix):
        for _ in range(10):
            engine.evaluate(far_fix)
            clock.advance(100)

        assert len(_published(pub, NavigationUpdatedEvent)) == 1

    def test_runs_again_after_interval(self, engine, clock, far_fix):
        engine.evaluate(far_fix)
        clock.advance(1999)
        assert engine.evaluate(far_fix) is None
        clock.advance(1)
        assert engine.evaluate(far_fix) is not None

    def test_reset_throttle(self, engine, far_fix):
        engine.evaluate(far_fix)
        engine.reset_throttle()
        assert engine.evaluate(far_fix) is not None

    def test_interval_change_applies_next_evaluation(
        self, engine, clock, far_fix,
    ):
        engine.evaluate(far_fix)
        engine.check_interval_ms = 500
        clock.advance(500)
        assert engine.evaluate(far_fix) is not None

    def test_negative_interval_rejected(self, engine):
        with pytest.raises(ValueError):
            engine.check_interval_ms = -1


class TestArrivalIdempotence:
    def test_enter_stay_leave_reenter(
        self, engine, pub, clock, floresta, make_fix, offset_north,
    ):
        inside = make_fix(*floresta)
        outside = make_fix(*offset_north(*floresta, 200.0))

        for position in [inside, inside, outside, outside, inside, inside]:
            engine.evaluate(position)
            clock.advance(2000)

        assert len(_published(pub, NavigationUpdatedEvent)) == 6
        assert len(_published(pub, TargetReachedEvent)) == 1

    def test_new_target_arrives_independently(
        self, engine, registry, pub, clock, floresta, make_fix, offset_north,
    ):
        engine.evaluate(make_fix(*floresta))
        other = offset_north(*floresta, 300.0)
        registry.set_target(Target(lat=other[0], lng=other[1], radius=20.0))
        clock.advance(2000)

        engine.evaluate(make_fix(*other))

        assert len(_published(pub, TargetReachedEvent)) == 2


class TestAccessors:
    def test_distance_and_bearing(
        self, engine, floresta, make_fix, offset_north,
    ):
        position = make_fix(*offset_north(*floresta, 100.0))
        assert engine.distance_to_target(position) == pytest.approx(
            100.0, abs=0.01
        )
        assert engine.bearing_to_target(position) == pytest.approx(
            180.0, abs=0.01
        )

    def test_none_without_position(self, engine):
        assert engine.distance_to_target(None) is None
        assert engine.bearing_to_target(None) is None
