"""위치 스트림용 paho-mqtt 클라이언트.

브로커 연결 유지, 끊김 후 자동 재연결, 재연결 시 토픽 필터 재구독을
담당한다. 토픽 필터에는 ``owntracks/+/+`` 같은 와일드카드를 쓸 수 있다.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
import threading
from typing import Any

import paho.mqtt.client as mqtt

from geo_navigation.usecase.ports.config_port import MqttConfig

logger = logging.getLogger(__name__)

MessageCallback = Callable[[str, bytes], None]


class MqttClient:
    """paho-mqtt 래퍼.

    메시지 콜백은 paho 네트워크 스레드에서 호출된다.

    Args:
        config: 브로커 접속 설정.
        client_id: MQTT 클라이언트 ID. 빈 문자열이면 브로커가 부여한다.
    """

    def __init__(self, config: MqttConfig, client_id: str = '') -> None:
        self._config = config
        self._lock = threading.Lock()
        self._connected = False
        self._filters: dict[str, tuple[MessageCallback, int]] = {}
        self._disconnect_handlers: list[Callable[[], None]] = []

        self._client = mqtt.Client(
            mqtt.CallbackAPIVersion.VERSION2,
            client_id=client_id,
            protocol=mqtt.MQTTv311,
        )
        self._client.on_connect = self._on_connect
        self._client.on_disconnect = self._on_disconnect
        self._client.on_message = self._on_message
        self._client.reconnect_delay_set(
            min_delay=1, max_delay=config.reconnect_max_delay_sec,
        )

    @property
    def is_connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        """브로커에 연결하고 네트워크 루프 스레드를 시작한다."""
        logger.info(
            'Connecting to MQTT broker %s:%d',
            self._config.broker_host, self._config.broker_port,
        )
        self._client.connect(
            host=self._config.broker_host,
            port=self._config.broker_port,
            keepalive=self._config.keepalive_sec,
        )
        self._client.loop_start()

    def disconnect(self) -> None:
        logger.info('Disconnecting from MQTT broker')
        self._client.loop_stop()
        self._client.disconnect()
        self._connected = False

    def publish(
        self, topic: str, payload: str, qos: int = 0, retain: bool = False
    ) -> None:
        """UTF-8 문자열 payload를 발행한다. 실패는 로그만 남긴다."""
        with self._lock:
            info = self._client.publish(
                topic, payload.encode('utf-8'), qos=qos, retain=retain
            )
        if info.rc != mqtt.MQTT_ERR_SUCCESS:
            logger.error('Publish to %s failed (rc=%d)', topic, info.rc)

    def subscribe(
        self, topic_filter: str, callback: MessageCallback, qos: int = 0
    ) -> None:
        """토픽 필터를 구독한다.

        필터와 QoS는 저장되어 재연결 시 그대로 복원된다.

        Args:
            topic_filter: 토픽 또는 와일드카드 필터.
            callback: ``(topic, payload)`` 수신 콜백.
            qos: 구독 QoS.
        """
        with self._lock:
            self._filters[topic_filter] = (callback, qos)
            self._client.subscribe(topic_filter, qos=qos)
        logger.info('Subscribed to %s (qos=%d)', topic_filter, qos)

    def unsubscribe(self, topic_filter: str) -> None:
        with self._lock:
            if self._filters.pop(topic_filter, None) and self._connected:
                self._client.unsubscribe(topic_filter)

    def add_disconnect_handler(self, handler: Callable[[], None]) -> None:
        """예기치 않은 연결 끊김 시 호출할 핸들러를 등록한다."""
        with self._lock:
            self._disconnect_handlers.append(handler)

    def _on_connect(
        self,
        client: mqtt.Client,
        userdata: Any,
        flags: Any,
        reason_code: Any,
        properties: Any = None,
    ) -> None:
        if reason_code.is_failure:
            logger.error('MQTT connection refused: %s', reason_code)
            return

        self._connected = True
        logger.info('MQTT connected')
        with self._lock:
            for topic_filter, (_, qos) in self._filters.items():
                self._client.subscribe(topic_filter, qos=qos)
                logger.debug('Restored subscription %s', topic_filter)

    def _on_disconnect(
        self,
        client: mqtt.Client,
        userdata: Any,
        disconnect_flags: Any,
        reason_code: Any,
        properties: Any = None,
    ) -> None:
        self._connected = False
        if not reason_code.is_failure:
            return

        logger.warning('MQTT connection lost (%s), reconnecting', reason_code)
        with self._lock:
            handlers = list(self._disconnect_handlers)
        for handler in handlers:
            try:
                handler()
            except Exception:
                logger.exception('Disconnect handler failed')

    def _on_message(
        self, client: mqtt.Client, userdata: Any, msg: mqtt.MQTTMessage
    ) -> None:
        with self._lock:
            callbacks = [
                callback
                for topic_filter, (callback, _) in self._filters.items()
                if mqtt.topic_matches_sub(topic_filter, msg.topic)
            ]

        if not callbacks:
            logger.debug('Unhandled message on %s', msg.topic)
            return

        for callback in callbacks:
            try:
                callback(msg.topic, msg.payload)
            except Exception:
                logger.exception('Message handler failed for %s', msg.topic)
