"""Geo Navigation 도메인 열거형 정의."""

from enum import StrEnum


class TrackingState(StrEnum):
    """위치 추적 상태."""

    IDLE = 'IDLE'
    TRACKING = 'TRACKING'


class LocationErrorCode(StrEnum):
    """센서 위치 획득 실패 유형."""

    PERMISSION_DENIED = 'PERMISSION_DENIED'
    POSITION_UNAVAILABLE = 'POSITION_UNAVAILABLE'
    TIMEOUT = 'TIMEOUT'
    UNKNOWN = 'UNKNOWN'


class FilterVerdict(StrEnum):
    """위치 필터 판정 결과."""

    ACCEPTED = 'ACCEPTED'
    LOW_ACCURACY = 'LOW_ACCURACY'
    NO_MOVEMENT = 'NO_MOVEMENT'
    TOO_FAST = 'TOO_FAST'


class EventKind(StrEnum):
    """이벤트 채널로 발행되는 이벤트 종류."""

    POSITION_UPDATE = 'positionUpdate'
    TARGET_SET = 'targetSet'
    TARGET_CLEARED = 'targetCleared'
    NAVIGATION_UPDATE = 'navigationUpdate'
    TARGET_REACHED = 'targetReached'
    TRACKING_STARTED = 'trackingStarted'
    TRACKING_STOPPED = 'trackingStopped'
    LOCATION_ERROR = 'locationError'
