"""fix 메시지 직렬화/역직렬화 단위 테스트."""

import json

import pytest

from geo_navigation.domain.enums import LocationErrorCode
from geo_navigation.domain.exceptions import (
    InvalidCoordinateError,
    InvalidPositionError,
    LocationAcquisitionError,
)
from geo_navigation.domain.value_objects.position import Position
from geo_navigation.infra.mqtt.fix_serializer import (
    FixDecodeError,
    deserialize_message,
    parse_error,
    parse_fix,
    serialize_fix,
)


class TestParseFix:
    def test_generic_format(self, floresta):
        position = parse_fix({
            'lat': floresta[0], 'lng': floresta[1],
            'accuracy': 8, 'timestamp': 1_700_000_000_000,
            'speed': 1.5, 'heading': 90,
        })

        assert position.lat == floresta[0]
        assert position.accuracy == 8.0
        assert position.timestamp == 1_700_000_000_000
        assert position.speed == 1.5
        assert position.heading == 90.0
        assert position.altitude is None

    def test_owntracks_format(self):
        position = parse_fix({
            '_type': 'location', 'lat': 37.5, 'lon': 127.0, 'acc': 12,
            'tst': 1_700_000_000, 'alt': 35, 'vac': 4, 'cog': 270,
            'vel': 36,
        })

        assert position.lng == 127.0
        assert position.timestamp == 1_700_000_000_000
        assert position.altitude == 35.0
        assert position.altitude_accuracy == 4.0
        assert position.heading == 270.0
        assert position.speed == pytest.approx(10.0)

    def test_received_time_fallback(self):
        position = parse_fix(
            {'lat': 1.0, 'lng': 2.0, 'accuracy': 5}, received_at_ms=42.0,
        )
        assert position.timestamp == 42.0

    def test_missing_timestamp(self):
        with pytest.raises(FixDecodeError):
            parse_fix({'lat': 1.0, 'lng': 2.0, 'accuracy': 5})

    @pytest.mark.parametrize('missing', ['lat', 'lng', 'accuracy'])
    def test_missing_required_field(self, missing):
        data = {'lat': 1.0, 'lng': 2.0, 'accuracy': 5, 'timestamp': 0}
        del data[missing]
        with pytest.raises(FixDecodeError):
            parse_fix(data)

    def test_non_numeric_field(self):
        with pytest.raises(FixDecodeError):
            parse_fix(
                {'lat': 'north', 'lng': 2.0, 'accuracy': 5, 'timestamp': 0}
            )

    def test_out_of_range_coordinate(self):
        with pytest.raises(InvalidCoordinateError):
            parse_fix({'lat': 95.0, 'lng': 2.0, 'accuracy': 5, 'timestamp': 0})

    @pytest.mark.parametrize('field, value', [
        ('timestamp', float('inf')),
        ('timestamp', float('nan')),
        ('accuracy', float('nan')),
        ('accuracy', -1.0),
    ])
    def test_invalid_measurement(self, field, value):
        data = {'lat': 1.0, 'lng': 2.0, 'accuracy': 5, 'timestamp': 0}
        data[field] = value
        with pytest.raises(InvalidPositionError):
            parse_fix(data)


class TestParseError:
    def test_known_code(self):
        error = parse_error(
            {'_type': 'error', 'code': 'permission_denied', 'message': 'no'}
        )
        assert error.code is LocationErrorCode.PERMISSION_DENIED
        assert error.detail == 'no'

    def test_unknown_code(self):
        error = parse_error({'_type': 'error', 'code': 'EXPLODED'})
        assert error.code is LocationErrorCode.UNKNOWN


class TestDeserializeMessage:
    def test_location_bytes(self):
        payload = json.dumps(
            {'lat': 1.0, 'lng': 2.0, 'accuracy': 5, 'timestamp': 10}
        ).encode('utf-8')

        message = deserialize_message(payload)

        assert isinstance(message, Position)
        assert message.timestamp == 10

    def test_error_message(self):
        message = deserialize_message(
            '{"_type": "error", "code": "TIMEOUT"}'
        )
        assert isinstance(message, LocationAcquisitionError)
        assert message.code is LocationErrorCode.TIMEOUT

    def test_other_type_ignored(self):
        assert deserialize_message('{"_type": "transition"}') is None

    def test_not_json(self):
        with pytest.raises(FixDecodeError):
            deserialize_message(b'not json')

    def test_not_object(self):
        with pytest.raises(FixDecodeError):
            deserialize_message('[1, 2]')

    def test_not_utf8(self):
        with pytest.raises(FixDecodeError):
            deserialize_message(b'\xff\xfe')

    @pytest.mark.parametrize('constant', ['Infinity', '-Infinity', 'NaN'])
    def test_non_finite_constant(self, constant):
        with pytest.raises(FixDecodeError):
            deserialize_message(
                f'{{"lat": 1, "lng": 2, "acc": 5, "tst": {constant}}}'
            )


class TestSerializeFix:
    def test_omits_missing_optionals(self, make_fix):
        data = json.loads(serialize_fix(make_fix(1.0, 2.0, timestamp=10)))
        assert data == {
            '_type': 'location', 'lat': 1.0, 'lng': 2.0,
            'accuracy': 10.0, 'timestamp': 10,
        }

    def test_readable_by_deserializer(self):
        original = Position(
            lat=1.0, lng=2.0, accuracy=3.0, timestamp=4.0, speed=5.0,
        )
        assert deserialize_message(serialize_fix(original)) == original
