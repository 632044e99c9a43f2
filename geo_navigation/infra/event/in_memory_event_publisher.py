"""인메모리 도메인 이벤트 발행자 구현체."""

import logging
import threading
from collections.abc import Callable

from geo_navigation.domain.events.location_events import DomainEvent
from geo_navigation.usecase.ports.event_publisher import EventPublisher

logger = logging.getLogger(__name__)


class InMemoryEventPublisher(EventPublisher):
    """EventPublisher의 인메모리 구현체.

    동기 방식으로 이벤트를 핸들러에 전달한다.
    핸들러는 구독 순서대로 호출되며, 구독한 타입의 하위 타입
    이벤트도 수신한다 (DomainEvent 구독 시 전체 수신).
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscriptions: list[
            tuple[type[DomainEvent], Callable[[DomainEvent], None]]
        ] = []

    def publish(self, event: DomainEvent) -> None:
        """도메인 이벤트를 발행한다.

        등록된 모든 핸들러를 동기적으로 호출한다.
        개별 핸들러의 예외는 로깅 후 무시하여
        다른 핸들러 실행에 영향을 주지 않는다.
        """
        event_type = type(event)
        with self._lock:
            handlers = [
                handler
                for subscribed_type, handler in self._subscriptions
                if isinstance(event, subscribed_type)
            ]

        logger.debug(
            "Publishing event: %s (handlers=%d)",
            event_type.__name__, len(handlers),
        )

        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Error in event handler for %s", event_type.__name__
                )

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: Callable[[DomainEvent], None],
    ) -> None:
        """특정 타입의 도메인 이벤트를 구독한다."""
        with self._lock:
            self._subscriptions.append((event_type, handler))
        logger.debug(
            "Subscribed to event: %s", event_type.__name__
        )

    def unsubscribe(
        self,
        event_type: type[DomainEvent],
        handler: Callable[[DomainEvent], None],
    ) -> None:
        """구독을 해제한다. 같은 핸들러가 여러 번 등록되었으면 첫 번째만 제거한다."""
        with self._lock:
            for index, (subscribed_type, subscribed) in enumerate(
                self._subscriptions
            ):
                if subscribed_type is event_type and subscribed == handler:
                    del self._subscriptions[index]
                    logger.debug(
                        "Unsubscribed from event: %s", event_type.__name__
                    )
                    return
