"""MQTT 위치 스트림 센서 (SensorProvider 구현체).

단말(OwnTracks 등)이 MQTT 토픽으로 발행하는 위치 fix를 수신한다.
"""

from __future__ import annotations

import itertools
import logging
import threading
import time

from geo_navigation.domain.enums import LocationErrorCode
from geo_navigation.domain.exceptions import (
    InvalidPositionError,
    LocationAcquisitionError,
)
from geo_navigation.domain.value_objects.position import Position
from geo_navigation.infra.mqtt.fix_serializer import (
    FixDecodeError,
    deserialize_message,
)
from geo_navigation.infra.mqtt.mqtt_client import MqttClient
from geo_navigation.usecase.ports.config_port import SensorOptions
from geo_navigation.usecase.ports.sensor_provider import (
    ErrorCallback,
    FixCallback,
    SensorProvider,
)

logger = logging.getLogger(__name__)


def _wall_clock_ms() -> float:
    return time.time() * 1000


class MqttSensorProvider(SensorProvider):
    """SensorProvider의 MQTT 구현체.

    토픽 하나를 구독하여 모든 연속 구독자에게 fix를 전달한다.
    해석할 수 없는 payload는 로깅 후 버린다.

    Args:
        mqtt_client: MQTT 클라이언트 래퍼.
        topic: fix 수신 토픽.
        qos: 구독 QoS 레벨.
    """

    def __init__(
        self, mqtt_client: MqttClient, topic: str, qos: int = 1
    ) -> None:
        self._client = mqtt_client
        self._topic = topic
        self._qos = qos
        self._lock = threading.Lock()
        self._fix_arrived = threading.Condition(self._lock)
        self._handles = itertools.count(1)
        self._subscribers: dict[int, tuple[FixCallback, ErrorCallback]] = {}
        self._last_fix: Position | None = None
        self._last_fix_received_ms: float | None = None

        self._client.subscribe(topic, self._handle_message, qos=qos)
        self._client.add_disconnect_handler(self._handle_disconnect)

    def get_current_fix(self, options: SensorOptions) -> Position:
        """캐시된 fix가 maximum_age 이내면 즉시 반환하고,
        아니면 다음 fix를 timeout까지 기다린다.
        """
        deadline = time.monotonic() + options.timeout_ms / 1000
        with self._fix_arrived:
            if self._is_fresh(options.maximum_age_ms):
                return self._last_fix

            previous = self._last_fix
            while self._last_fix is previous:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise LocationAcquisitionError(
                        LocationErrorCode.TIMEOUT,
                        f'No fix on {self._topic} within '
                        f'{options.timeout_ms} ms',
                    )
                self._fix_arrived.wait(remaining)
            return self._last_fix

    def subscribe(
        self,
        on_fix: FixCallback,
        on_error: ErrorCallback,
        options: SensorOptions,
    ) -> int:
        with self._lock:
            handle = next(self._handles)
            self._subscribers[handle] = (on_fix, on_error)
        logger.info("Fix subscription %d on %s", handle, self._topic)
        return handle

    def unsubscribe(self, handle: int) -> None:
        with self._lock:
            self._subscribers.pop(handle, None)
        logger.info("Fix subscription %d removed", handle)

    def _is_fresh(self, maximum_age_ms: float) -> bool:
        if self._last_fix is None or self._last_fix_received_ms is None:
            return False
        return _wall_clock_ms() - self._last_fix_received_ms <= maximum_age_ms

    def _handle_message(self, topic: str, payload: bytes) -> None:
        """MQTT 메시지를 fix 또는 에러로 변환하여 구독자에게 전달한다."""
        received_ms = _wall_clock_ms()
        try:
            message = deserialize_message(payload, received_at_ms=received_ms)
        except (FixDecodeError, InvalidPositionError) as exc:
            logger.warning("Dropping invalid fix on %s: %s", topic, exc)
            return

        if message is None:
            logger.debug("Ignoring non-location message on %s", topic)
            return

        if isinstance(message, LocationAcquisitionError):
            self._dispatch_error(message)
            return

        with self._fix_arrived:
            self._last_fix = message
            self._last_fix_received_ms = received_ms
            self._fix_arrived.notify_all()
            subscribers = list(self._subscribers.values())

        for on_fix, _ in subscribers:
            on_fix(message)

    def _handle_disconnect(self) -> None:
        self._dispatch_error(
            LocationAcquisitionError(
                LocationErrorCode.POSITION_UNAVAILABLE,
                'MQTT connection to the location stream was lost',
            )
        )

    def _dispatch_error(self, error: LocationAcquisitionError) -> None:
        with self._lock:
            subscribers = list(self._subscribers.values())
        for _, on_error in subscribers:
            on_error(error)
