"""위치 fix 메시지 JSON 직렬화/역직렬화.

두 가지 payload 형식을 지원한다.

* OwnTracks 형식: ``{"_type": "location", "lat", "lon", "acc", "tst", ...}``
  (tst는 초 단위, vel은 km/h)
* 일반 형식: ``{"lat", "lng", "accuracy", "timestamp", ...}``
  (timestamp는 ms, speed는 m/s)

센서 에러는 ``{"_type": "error", "code", "message"}`` 로 전달된다.
"""

from __future__ import annotations

import json
from typing import Any

from geo_navigation.domain.enums import LocationErrorCode
from geo_navigation.domain.exceptions import LocationAcquisitionError
from geo_navigation.domain.value_objects.position import Position

_TYPE_LOCATION = 'location'
_TYPE_ERROR = 'error'


class FixDecodeError(ValueError):
    """fix payload를 해석할 수 없는 경우."""


def _reject_constant(name: str) -> Any:
    raise FixDecodeError(f'Non-finite number in payload: {name}')


def _first(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _optional_float(value: Any) -> float | None:
    return None if value is None else float(value)


def parse_fix(
    data: dict[str, Any], received_at_ms: float | None = None
) -> Position:
    """dict 형태의 fix를 Position으로 변환한다.

    Args:
        data: fix 필드 dict.
        received_at_ms: 시각 필드가 없을 때 사용할 수신 시각 (ms).

    Raises:
        FixDecodeError: 필수 필드가 없거나 숫자가 아닌 경우.
        InvalidPositionError: 좌표, 정확도, 시각이 유효하지 않은 경우.
    """
    lat = _first(data, 'lat', 'latitude')
    lng = _first(data, 'lng', 'lon', 'longitude')
    accuracy = _first(data, 'accuracy', 'acc')
    if lat is None or lng is None or accuracy is None:
        raise FixDecodeError(
            f'Fix requires lat, lng and accuracy: {sorted(data)}'
        )

    if data.get('timestamp') is not None:
        raw_timestamp, scale = data['timestamp'], 1
    elif data.get('tst') is not None:
        raw_timestamp, scale = data['tst'], 1000
    elif received_at_ms is not None:
        raw_timestamp, scale = received_at_ms, 1
    else:
        raise FixDecodeError('Fix has no timestamp')

    try:
        fields = {
            'lat': float(lat),
            'lng': float(lng),
            'accuracy': float(accuracy),
            'timestamp': float(raw_timestamp) * scale,
            'altitude': _optional_float(_first(data, 'altitude', 'alt')),
            'altitude_accuracy': _optional_float(
                _first(data, 'altitude_accuracy', 'vac')
            ),
            'heading': _optional_float(_first(data, 'heading', 'cog')),
            'speed': _optional_float(data.get('speed')),
        }
        # OwnTracks vel은 km/h
        if fields['speed'] is None and data.get('vel') is not None:
            fields['speed'] = float(data['vel']) / 3.6
    except (TypeError, ValueError) as exc:
        raise FixDecodeError(f'Invalid fix field: {exc}') from exc

    return Position(**fields)


def parse_error(data: dict[str, Any]) -> LocationAcquisitionError:
    """에러 payload를 LocationAcquisitionError로 변환한다."""
    try:
        code = LocationErrorCode(str(data.get('code', '')).upper())
    except ValueError:
        code = LocationErrorCode.UNKNOWN
    return LocationAcquisitionError(code, str(data.get('message', '')))


def deserialize_message(
    payload: str | bytes, received_at_ms: float | None = None
) -> Position | LocationAcquisitionError | None:
    """MQTT payload를 fix 또는 센서 에러로 역직렬화한다.

    Returns:
        Position, LocationAcquisitionError, 또는 위치와 무관한
        메시지 유형이면 None.

    Raises:
        FixDecodeError: JSON이 아니거나 fix 필드가 잘못된 경우.
        InvalidPositionError: 좌표, 정확도, 시각이 유효하지 않은 경우.
    """
    try:
        if isinstance(payload, bytes):
            payload = payload.decode('utf-8')
        data = json.loads(payload, parse_constant=_reject_constant)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise FixDecodeError(f'Payload is not JSON: {exc}') from exc

    if not isinstance(data, dict):
        raise FixDecodeError('Payload must be a JSON object')

    message_type = data.get('_type', _TYPE_LOCATION)
    if message_type == _TYPE_ERROR:
        return parse_error(data)
    if message_type != _TYPE_LOCATION:
        return None
    return parse_fix(data, received_at_ms)


def serialize_fix(position: Position) -> str:
    """Position을 일반 형식 JSON 문자열로 직렬화한다."""
    data: dict[str, Any] = {
        '_type': _TYPE_LOCATION,
        'lat': position.lat,
        'lng': position.lng,
        'accuracy': position.accuracy,
        'timestamp': position.timestamp,
    }
    optional = {
        'altitude': position.altitude,
        'altitude_accuracy': position.altitude_accuracy,
        'heading': position.heading,
        'speed': position.speed,
    }
    data.update({k: v for k, v in optional.items() if v is not None})
    return json.dumps(data)
