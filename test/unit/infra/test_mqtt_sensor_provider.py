"""MqttSensorProvider 유닛 테스트."""

import json
import threading
from unittest.mock import MagicMock, patch

import pytest

from geo_navigation.domain.enums import LocationErrorCode
from geo_navigation.domain.events.location_events import PositionUpdatedEvent
from geo_navigation.domain.exceptions import LocationAcquisitionError
from geo_navigation.infra.mqtt.mqtt_sensor_provider import MqttSensorProvider
from geo_navigation.usecase.ports.config_port import SensorOptions
from geo_navigation.usecase.track_location import TrackingController

TOPIC = 'owntracks/player/device'


def _payload(**fields):
    data = {'lat': 37.5, 'lng': 127.0, 'accuracy': 5, 'timestamp': 1000}
    data.update(fields)
    return json.dumps(data).encode('utf-8')


@pytest.fixture
def mqtt_client():
    return MagicMock()


@pytest.fixture
def provider(mqtt_client):
    return MqttSensorProvider(mqtt_client, TOPIC, qos=1)


@pytest.fixture
def deliver(mqtt_client, provider):
    """MqttClient에 등록된 메시지 핸들러."""
    handler = mqtt_client.subscribe.call_args[0][1]
    return lambda payload: handler(TOPIC, payload)


@pytest.fixture
def subscriber(provider):
    on_fix, on_error = MagicMock(), MagicMock()
    provider.subscribe(on_fix, on_error, SensorOptions())
    return on_fix, on_error


class TestSetup:
    def test_subscribes_topic(self, mqtt_client, provider):
        assert mqtt_client.subscribe.call_args[0][0] == TOPIC
        assert mqtt_client.subscribe.call_args[1]['qos'] == 1
        mqtt_client.add_disconnect_handler.assert_called_once()


class TestStreaming:
    def test_fix_delivered(self, deliver, subscriber):
        on_fix, on_error = subscriber

        deliver(_payload())

        position = on_fix.call_args[0][0]
        assert position.lat == 37.5
        assert position.timestamp == 1000
        on_error.assert_not_called()

    def test_error_payload_delivered(self, deliver, subscriber):
        on_fix, on_error = subscriber

        deliver(b'{"_type": "error", "code": "TIMEOUT"}')

        on_fix.assert_not_called()
        assert on_error.call_args[0][0].code is LocationErrorCode.TIMEOUT

    @pytest.mark.parametrize('payload', [
        b'garbage',
        _payload(lat=123.0),
        b'{"lat": 1.0}',
        b'{"lat": 37.5, "lng": 127.0, "accuracy": 5, "timestamp": Infinity}',
        b'{"lat": 37.5, "lng": 127.0, "accuracy": NaN, "timestamp": 1000}',
        b'{"_type": "location", "lat": 37.5, "lon": 127.0, "tst": -Infinity}',
    ])
    def test_invalid_payload_dropped(self, deliver, subscriber, payload):
        on_fix, on_error = subscriber

        deliver(payload)

        on_fix.assert_not_called()
        on_error.assert_not_called()

    def test_non_location_type_ignored(self, deliver, subscriber):
        on_fix, _ = subscriber
        deliver(b'{"_type": "waypoint"}')
        on_fix.assert_not_called()

    def test_unsubscribe(self, provider, deliver):
        on_fix = MagicMock()
        handle = provider.subscribe(on_fix, MagicMock(), SensorOptions())
        provider.unsubscribe(handle)

        deliver(_payload())

        on_fix.assert_not_called()

    def test_handles_are_unique(self, provider):
        options = SensorOptions()
        first = provider.subscribe(MagicMock(), MagicMock(), options)
        second = provider.subscribe(MagicMock(), MagicMock(), options)
        assert first != second

    def test_disconnect_reports_unavailable(
        self, mqtt_client, provider, subscriber,
    ):
        _, on_error = subscriber
        handler = mqtt_client.add_disconnect_handler.call_args[0][0]

        handler()

        error = on_error.call_args[0][0]
        assert isinstance(error, LocationAcquisitionError)
        assert error.code is LocationErrorCode.POSITION_UNAVAILABLE


class TestCurrentFix:
    def test_timeout_without_fix(self, provider):
        with pytest.raises(LocationAcquisitionError) as exc_info:
            provider.get_current_fix(SensorOptions(timeout_ms=0))
        assert exc_info.value.code is LocationErrorCode.TIMEOUT

    def test_fresh_cached_fix(self, provider, deliver):
        deliver(_payload())
        position = provider.get_current_fix(SensorOptions(timeout_ms=0))
        assert position.lat == 37.5

    def test_stale_cached_fix_times_out(self, provider, deliver):
        module = 'geo_navigation.infra.mqtt.mqtt_sensor_provider'
        with patch(f'{module}._wall_clock_ms', return_value=0.0):
            deliver(_payload())
        with patch(f'{module}._wall_clock_ms', return_value=10_000.0):
            with pytest.raises(LocationAcquisitionError):
                provider.get_current_fix(
                    SensorOptions(timeout_ms=0, maximum_age_ms=5000)
                )

    def test_waits_for_next_fix(self, provider, deliver):
        timer = threading.Timer(0.05, deliver, args=(_payload(lat=10.0),))
        timer.start()
        try:
            position = provider.get_current_fix(SensorOptions(timeout_ms=2000))
        finally:
            timer.join()
        assert position.lat == 10.0


class TestTrackingPipeline:
    def test_non_finite_timestamp_does_not_block_later_fixes(
        self, provider, deliver, publisher, recorder, offset_north,
    ):
        deliver(_payload(timestamp=0))
        controller = TrackingController(provider, publisher)
        controller.start()

        deliver(
            b'{"lat": 37.6, "lng": 127.0, "accuracy": 5, "timestamp": Infinity}'
        )
        lat, lng = 37.5, 127.0
        for i in range(1, 6):
            lat, lng = offset_north(lat, lng, 20.0)
            deliver(_payload(lat=lat, lng=lng, timestamp=i * 10_000))

        assert len(recorder.of_type(PositionUpdatedEvent)) == 6
        assert controller.current_position.timestamp == 50_000
