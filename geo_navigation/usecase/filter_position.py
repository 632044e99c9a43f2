"""GPS fix 노이즈 필터.

정확도, 최소 이동 거리, 현실적인 최대 속도 기준으로
새 fix의 수락 여부를 판정한다. 거부는 예상된 빈번한 결과이므로
예외가 아니라 판정값으로 반환한다.
"""

from __future__ import annotations

import logging

from geo_navigation.domain.enums import FilterVerdict
from geo_navigation.domain.geodesy import distance
from geo_navigation.domain.value_objects.position import Position
from geo_navigation.usecase.ports.config_port import PositionFilterConfig

logger = logging.getLogger(__name__)


def evaluate_fix(
    new_fix: Position,
    previous: Position | None,
    config: PositionFilterConfig,
) -> FilterVerdict:
    """새 fix를 직전 수락 위치와 비교하여 판정한다.

    규칙은 순서대로 적용된다.
    1. 필터 비활성 시 무조건 수락.
    2. accuracy > min_accuracy 이면 거부.
    3. 직전 수락 위치가 없으면 수락.
    4. 이동 거리 < min_movement 이면 거부.
    5. 시간차 > 0 이고 추정 속도 > max_speed 이면 거부.

    Args:
        new_fix: 새로 수신한 fix.
        previous: 직전 수락 위치.
        config: 필터 설정.

    Returns:
        판정 결과.
    """
    if not config.enabled:
        return FilterVerdict.ACCEPTED

    # NaN 정확도도 거부
    if not new_fix.accuracy <= config.min_accuracy:
        return FilterVerdict.LOW_ACCURACY

    if previous is None:
        return FilterVerdict.ACCEPTED

    moved = distance(previous, new_fix)
    if moved < config.min_movement:
        return FilterVerdict.NO_MOVEMENT

    dt_sec = (new_fix.timestamp - previous.timestamp) / 1000
    if dt_sec > 0 and moved / dt_sec > config.max_speed:
        return FilterVerdict.TOO_FAST

    return FilterVerdict.ACCEPTED


def accept_fix(
    new_fix: Position,
    previous: Position | None,
    config: PositionFilterConfig,
) -> bool:
    """새 fix의 수락 여부를 반환한다."""
    return evaluate_fix(new_fix, previous, config) is FilterVerdict.ACCEPTED


class PositionFilter:
    """교체 가능한 설정을 가진 위치 필터.

    설정 변경은 다음 판정부터 적용된다.

    Args:
        config: 초기 필터 설정.
    """

    def __init__(self, config: PositionFilterConfig | None = None) -> None:
        self.config = config or PositionFilterConfig()

    def accept(self, new_fix: Position, previous: Position | None) -> bool:
        verdict = evaluate_fix(new_fix, previous, self.config)
        if verdict is not FilterVerdict.ACCEPTED:
            logger.debug(
                "Fix rejected (%s): %.6f, %.6f (±%.0fm)",
                verdict.value, new_fix.lat, new_fix.lng, new_fix.accuracy,
            )
            return False
        return True
