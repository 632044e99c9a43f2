"""내비게이션 상태 스냅샷 엔티티."""

from dataclasses import dataclass

from geo_navigation.domain.value_objects.position import Position
from geo_navigation.domain.value_objects.target import Target


@dataclass(frozen=True)
class NavigationState:
    """UI 폴링용 내비게이션 상태 스냅샷.

    변경 시마다 새로 생성되는 파생 뷰이며, 권위 있는 정보는
    이벤트 스트림이다.

    Args:
        is_navigating: 활성 목표를 향해 내비게이션 중인지 여부.
        current_target: 활성 목표.
        last_bearing: 마지막 평가 시 목표 방위각 (deg).
        last_distance: 마지막 평가 시 목표까지 거리 (m).
    """

    is_navigating: bool = False
    current_target: Target | None = None
    last_bearing: float | None = None
    last_distance: float | None = None


@dataclass(frozen=True)
class NavigationStats:
    """추적 세션 통계 스냅샷.

    Args:
        current_position: 현재 위치.
        target: 활성 목표.
        is_tracking: 추적 중 여부.
        is_navigating: 내비게이션 중 여부.
        history_size: 위치 이력 개수.
        accuracy: 현재 위치 정확도 (m).
        distance_to_target: 목표까지 거리 (m).
        bearing_to_target: 목표 방위각 (deg).
        formatted_distance: 표시용 거리 문자열.
    """

    current_position: Position
    target: Target | None
    is_tracking: bool
    is_navigating: bool
    history_size: int
    accuracy: float
    distance_to_target: float | None = None
    bearing_to_target: float | None = None
    formatted_distance: str | None = None
