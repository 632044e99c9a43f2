"""Geo Navigation 유스케이스 레이어.

도메인 로직을 포트를 통해 조율하는 애플리케이션 서비스를 정의한다.
domain 레이어만 의존하며, infra 레이어 의존성은 없다.
"""

from geo_navigation.usecase.check_proximity import ProximityEngine
from geo_navigation.usecase.filter_position import (
    PositionFilter,
    accept_fix,
    evaluate_fix,
)
from geo_navigation.usecase.track_location import TrackingController

__all__ = [
    "PositionFilter",
    "ProximityEngine",
    "TrackingController",
    "accept_fix",
    "evaluate_fix",
]
