"""Geo Navigation 도메인 이벤트."""

from geo_navigation.domain.events.location_events import (
    DomainEvent,
    LocationErrorEvent,
    LocationEvent,
    NavigationUpdatedEvent,
    PositionUpdatedEvent,
    TargetClearedEvent,
    TargetReachedEvent,
    TargetSetEvent,
    TrackingStartedEvent,
    TrackingStoppedEvent,
)

__all__ = [
    "DomainEvent",
    "LocationErrorEvent",
    "LocationEvent",
    "NavigationUpdatedEvent",
    "PositionUpdatedEvent",
    "TargetClearedEvent",
    "TargetReachedEvent",
    "TargetSetEvent",
    "TrackingStartedEvent",
    "TrackingStoppedEvent",
]
