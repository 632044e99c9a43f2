"""위치 추적 도메인 이벤트 정의.

엔진에서 발생하는 이벤트를 이벤트 종류별 타입으로 정의한다.
UI, 미션 로직, 에러 처리기 등 외부 협력자가 구독하여 처리한다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import ClassVar

from geo_navigation.domain.enums import EventKind
from geo_navigation.domain.exceptions import LocationAcquisitionError
from geo_navigation.domain.value_objects.position import Position
from geo_navigation.domain.value_objects.target import Target


@dataclass(frozen=True)
class DomainEvent:
    """도메인 이벤트 기본 클래스.

    Args:
        timestamp: 이벤트 발생 시각 (UTC).
    """

    kind: ClassVar[EventKind | None] = None

    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True)
class PositionUpdatedEvent(DomainEvent):
    """필터를 통과한 새 위치 이벤트.

    Args:
        position: 새 현재 위치.
    """

    kind: ClassVar[EventKind] = EventKind.POSITION_UPDATE

    position: Position | None = None


@dataclass(frozen=True)
class TargetSetEvent(DomainEvent):
    """목표 설정 이벤트.

    Args:
        target: 새 활성 목표.
    """

    kind: ClassVar[EventKind] = EventKind.TARGET_SET

    target: Target | None = None


@dataclass(frozen=True)
class TargetClearedEvent(DomainEvent):
    """목표 해제 이벤트."""

    kind: ClassVar[EventKind] = EventKind.TARGET_CLEARED


@dataclass(frozen=True)
class NavigationUpdatedEvent(DomainEvent):
    """근접 평가 결과 이벤트 (스로틀 주기마다 발행).

    Args:
        distance: 목표까지 거리 (m).
        bearing: 목표 방위각 (deg).
        target: 활성 목표.
        position: 평가에 사용한 현재 위치.
    """

    kind: ClassVar[EventKind] = EventKind.NAVIGATION_UPDATE

    distance: float = 0.0
    bearing: float = 0.0
    target: Target | None = None
    position: Position | None = None


@dataclass(frozen=True)
class TargetReachedEvent(DomainEvent):
    """목표 도착 이벤트. 세션 내 목표당 최대 한 번 발행된다.

    Args:
        target: 도착한 목표.
        position: 도착 판정 시 위치.
        distance: 도착 판정 시 목표까지 거리 (m).
    """

    kind: ClassVar[EventKind] = EventKind.TARGET_REACHED

    target: Target | None = None
    position: Position | None = None
    distance: float = 0.0


@dataclass(frozen=True)
class TrackingStartedEvent(DomainEvent):
    """위치 추적 시작 이벤트.

    Args:
        position: 추적 시작 시 현재 위치. 첫 fix가 필터링되면 None.
    """

    kind: ClassVar[EventKind] = EventKind.TRACKING_STARTED

    position: Position | None = None


@dataclass(frozen=True)
class TrackingStoppedEvent(DomainEvent):
    """위치 추적 중지 이벤트."""

    kind: ClassVar[EventKind] = EventKind.TRACKING_STOPPED


@dataclass(frozen=True)
class LocationErrorEvent(DomainEvent):
    """센서 위치 획득 실패 이벤트.

    Args:
        error: 센서가 보고한 원본 에러.
        message: 사용자 표시용 메시지.
    """

    kind: ClassVar[EventKind] = EventKind.LOCATION_ERROR

    error: LocationAcquisitionError | None = None
    message: str = ''


LocationEvent = (
    PositionUpdatedEvent
    | TargetSetEvent
    | TargetClearedEvent
    | NavigationUpdatedEvent
    | TargetReachedEvent
    | TrackingStartedEvent
    | TrackingStoppedEvent
    | LocationErrorEvent
)
