"""공통 테스트 fixture."""

import pytest

from geo_navigation.domain.events.location_events import DomainEvent
from geo_navigation.domain.value_objects.position import Position
from geo_navigation.domain.value_objects.target import Target
from geo_navigation.infra.event.in_memory_event_publisher import (
    InMemoryEventPublisher,
)
from geo_navigation.infra.sensor.manual_sensor_provider import (
    ManualSensorProvider,
)
from geo_navigation.usecase.ports.config_port import (
    EngineConfig,
    PositionFilterConfig,
    SensorOptions,
)
from geo_navigation.usecase.track_location import TrackingController

# 위도 1도당 거리 (m), 구면 근사
_METERS_PER_DEG_LAT = 111_194.93


class FakeClock:
    """수동으로 진행시키는 ms 단위 시계."""

    def __init__(self, now_ms: float = 0.0) -> None:
        self.now_ms = now_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> None:
        self.now_ms += ms


class EventRecorder:
    """발행된 모든 이벤트를 순서대로 기록한다."""

    def __init__(self) -> None:
        self.events = []

    def __call__(self, event) -> None:
        self.events.append(event)

    def of_type(self, event_type):
        return [e for e in self.events if isinstance(e, event_type)]


# Pedra Branca 지역 실측 좌표


@pytest.fixture
def floresta():
    return (-27.63054776462635, -48.681133649550205)


@pytest.fixture
def casa_will():
    return (-27.630903061716687, -48.67974685847095)


@pytest.fixture
def laboratorio():
    return (-27.624056768580015, -48.68124296486716)


@pytest.fixture
def make_fix():
    """Position 생성 함수."""

    def _make(lat, lng, timestamp=0.0, accuracy=10.0):
        return Position(
            lat=lat, lng=lng, accuracy=accuracy, timestamp=timestamp,
        )

    return _make


@pytest.fixture
def offset_north():
    """위도 방향으로 meters 만큼 이동한 좌표를 반환하는 함수."""

    def _offset(lat, lng, meters):
        return lat + meters / _METERS_PER_DEG_LAT, lng

    return _offset


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def publisher():
    return InMemoryEventPublisher()


@pytest.fixture
def recorder(publisher):
    rec = EventRecorder()
    publisher.subscribe(DomainEvent, rec)
    return rec


@pytest.fixture
def floresta_fix(floresta, make_fix):
    return make_fix(*floresta, timestamp=0.0)


@pytest.fixture
def floresta_target(floresta):
    return Target(lat=floresta[0], lng=floresta[1], radius=20.0)


@pytest.fixture
def sensor(floresta_fix):
    return ManualSensorProvider(current_fix=floresta_fix)


@pytest.fixture
def controller(sensor, publisher, clock):
    return TrackingController(
        sensor,
        publisher,
        sensor_options=SensorOptions(),
        filter_config=PositionFilterConfig(),
        engine_config=EngineConfig(),
        clock=clock,
    )
