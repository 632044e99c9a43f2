"""위치 추적 유스케이스.

센서 fix 수신 → 필터 → 이력/속도 → 근접 평가 → 이벤트 발행 흐름을
조율한다. 추적 세션의 모든 상태(현재 위치, 이력, 목표, 도착 기록)는
컨트롤러 인스턴스가 소유한다.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from functools import partial
import logging
import threading

from geo_navigation.domain.entities.navigation_state import (
    NavigationState,
    NavigationStats,
)
from geo_navigation.domain.entities.position_history import PositionHistory
from geo_navigation.domain.entities.target_registry import TargetRegistry
from geo_navigation.domain.enums import TrackingState
from geo_navigation.domain.events.location_events import (
    LocationErrorEvent,
    PositionUpdatedEvent,
    TargetClearedEvent,
    TargetSetEvent,
    TrackingStartedEvent,
    TrackingStoppedEvent,
)
from geo_navigation.domain.exceptions import (
    LocationAcquisitionError,
    describe_location_error,
)
from geo_navigation.domain.geodesy import format_distance
from geo_navigation.domain.value_objects.position import (
    Position,
    VelocitySample,
)
from geo_navigation.domain.value_objects.target import Target
from geo_navigation.usecase.check_proximity import ProximityEngine
from geo_navigation.usecase.estimate_velocity import (
    DEFAULT_MOVING_THRESHOLD_MPS,
    average_speed,
    compute_velocity,
    is_moving,
    velocity_history,
)
from geo_navigation.usecase.filter_position import PositionFilter
from geo_navigation.usecase.ports.config_port import (
    EngineConfig,
    PositionFilterConfig,
    SensorOptions,
)
from geo_navigation.usecase.ports.event_publisher import EventPublisher
from geo_navigation.usecase.ports.sensor_provider import SensorProvider

logger = logging.getLogger(__name__)


class TrackingController:
    """위치 추적 세션 컨트롤러.

    상태는 IDLE → TRACKING → IDLE 두 가지이며, stop() 후 start()로만
    재진입한다. fix 처리와 start/stop은 재진입 가능한 Lock으로
    직렬화되므로 센서 콜백이 별도 스레드에서 호출되어도
    stop() 반환 이후에는 위치 이벤트가 발행되지 않는다.

    Args:
        sensor: 위치 센서.
        event_publisher: 이벤트 발행자.
        sensor_options: 센서 획득 옵션.
        filter_config: 위치 필터 설정.
        engine_config: 근접 엔진 설정.
        clock: 스로틀 판정용 현재 시각 (ms) 공급 함수.
    """

    def __init__(
        self,
        sensor: SensorProvider,
        event_publisher: EventPublisher,
        sensor_options: SensorOptions | None = None,
        filter_config: PositionFilterConfig | None = None,
        engine_config: EngineConfig | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        engine_config = engine_config or EngineConfig()

        self._sensor = sensor
        self._event_publisher = event_publisher
        self._sensor_options = sensor_options or SensorOptions()
        self._default_radius = engine_config.default_target_radius

        self._lock = threading.RLock()
        self._state = TrackingState.IDLE
        self._session = 0
        self._subscription: int | None = None
        self._current: Position | None = None

        self._history = PositionHistory(engine_config.max_history_size)
        self._registry = TargetRegistry()
        self._filter = PositionFilter(filter_config)
        self._proximity = ProximityEngine(
            self._registry,
            event_publisher,
            check_interval_ms=engine_config.proximity_check_interval_ms,
            clock=clock,
        )

    # -- 상태 조회 --

    @property
    def state(self) -> TrackingState:
        return self._state

    @property
    def is_tracking(self) -> bool:
        return self._state is TrackingState.TRACKING

    @property
    def current_position(self) -> Position | None:
        return self._current

    @property
    def target(self) -> Target | None:
        return self._registry.active_target

    @property
    def navigation_state(self) -> NavigationState:
        return self._registry.navigation_state

    @property
    def arrived_targets(self) -> frozenset[str]:
        return self._registry.arrived_keys

    @property
    def position_history(self) -> tuple[Position, ...]:
        return self._history.snapshot()

    @property
    def sensor_options(self) -> SensorOptions:
        return self._sensor_options

    @property
    def filter_config(self) -> PositionFilterConfig:
        return self._filter.config

    @property
    def proximity_check_interval_ms(self) -> float:
        return self._proximity.check_interval_ms

    # -- 추적 시작/중지 --

    def start(self) -> None:
        """위치 추적을 시작한다.

        이미 추적 중이면 아무것도 하지 않는다. 단발 fix로 센서 사용
        가능 여부를 확인한 뒤 연속 수신을 구독한다.

        Raises:
            LocationAcquisitionError: 첫 fix를 얻지 못한 경우.
                상태는 IDLE로 유지된다.
        """
        with self._lock:
            if self.is_tracking:
                logger.info("Tracking already active")
                return
            options = self._sensor_options

        # 단발 획득은 timeout_ms까지 블록되므로 Lock 밖에서 수행한다
        logger.info("Starting location tracking...")
        try:
            initial = self._sensor.get_current_fix(options)
        except LocationAcquisitionError as exc:
            logger.error(
                "Failed to start tracking: %s", describe_location_error(exc),
            )
            raise

        with self._lock:
            if self.is_tracking:
                logger.info("Tracking already active")
                return

            self._process_fix(initial)

            self._session += 1
            session = self._session
            self._state = TrackingState.TRACKING
            try:
                self._subscription = self._sensor.subscribe(
                    partial(self._on_fix, session),
                    partial(self._on_error, session),
                    self._sensor_options,
                )
            except Exception:
                self._state = TrackingState.IDLE
                raise

            logger.info("Location tracking started")
            self._event_publisher.publish(
                TrackingStartedEvent(position=self._current)
            )

    def stop(self) -> None:
        """위치 추적을 중지한다.

        내비게이션은 비활성화되지만 목표, 도착 기록, 설정은 유지된다.
        반환 이후 도착한 fix는 폐기된다.
        """
        with self._lock:
            if not self.is_tracking:
                return

            self._state = TrackingState.IDLE
            self._registry.deactivate()
            handle, self._subscription = self._subscription, None
            if handle is not None:
                self._sensor.unsubscribe(handle)

            logger.info("Location tracking stopped")
            self._event_publisher.publish(TrackingStoppedEvent())

    def reset_session(self) -> None:
        """추적을 중지하고 이력, 목표, 도착 기록을 모두 비운다."""
        with self._lock:
            self.stop()
            self._history.clear()
            self._current = None
            self._registry.reset()
            self._proximity.reset_throttle()
            logger.info("Tracking session reset")

    # -- 목표 --

    def set_target(
        self, lat: float, lng: float, radius: float | None = None
    ) -> Target:
        """활성 목표를 설정한다.

        현재 위치가 있고 새 목표이면 다음 fix를 기다리지 않고 즉시 평가한다.
        활성 목표와 좌표, 반경이 모두 같으면 스로틀 간격을 따른다.

        Args:
            lat: 목표 위도.
            lng: 목표 경도.
            radius: 도착 반경 (m). None이면 설정 기본값.

        Returns:
            설정된 목표.

        Raises:
            InvalidCoordinateError: 좌표가 유효하지 않은 경우.
        """
        target = Target(
            lat=lat,
            lng=lng,
            radius=self._default_radius if radius is None else radius,
        )
        with self._lock:
            previous = self._registry.set_target(target)
            # 같은 목표를 다시 설정하면 스로틀 창을 유지한다
            if previous != target:
                self._proximity.reset_throttle()

            logger.info(
                "Target set: %.6f, %.6f (radius: %.0fm)",
                target.lat, target.lng, target.radius,
            )
            self._event_publisher.publish(TargetSetEvent(target=target))

            if self._current is not None:
                self._proximity.evaluate(self._current)
        return target

    def clear_target(self) -> None:
        """활성 목표를 제거한다. 도착 기록은 유지된다."""
        with self._lock:
            self._registry.clear_target()
            logger.info("Target cleared")
            self._event_publisher.publish(TargetClearedEvent())

    # -- 설정 --

    def set_position_filter(self, **options: object) -> PositionFilterConfig:
        """위치 필터 설정 일부를 변경한다.

        Raises:
            TypeError: 알 수 없는 옵션인 경우.
        """
        with self._lock:
            self._filter.config = replace(self._filter.config, **options)
            logger.info("Position filter updated: %s", self._filter.config)
            return self._filter.config

    def set_sensor_options(self, **options: object) -> SensorOptions:
        """센서 옵션 일부를 변경한다. 다음 획득부터 적용된다.

        Raises:
            TypeError: 알 수 없는 옵션인 경우.
        """
        with self._lock:
            self._sensor_options = replace(self._sensor_options, **options)
            logger.info("Sensor options updated: %s", self._sensor_options)
            return self._sensor_options

    def set_proximity_check_interval(self, interval_ms: float) -> None:
        with self._lock:
            self._proximity.check_interval_ms = interval_ms

    def set_max_history_size(self, max_size: int) -> None:
        with self._lock:
            self._history.resize(max_size)

    # -- 통계 --

    def get_navigation_stats(self) -> NavigationStats | None:
        """현재 세션 통계를 반환한다. 현재 위치가 없으면 None."""
        with self._lock:
            position = self._current
            if position is None:
                return None

            target = self._registry.active_target
            dist = self._proximity.distance_to_target(position)
            return NavigationStats(
                current_position=position,
                target=target,
                is_tracking=self.is_tracking,
                is_navigating=self._registry.is_navigating,
                history_size=len(self._history),
                accuracy=position.accuracy,
                distance_to_target=dist,
                bearing_to_target=self._proximity.bearing_to_target(position),
                formatted_distance=(
                    format_distance(dist) if dist is not None else None
                ),
            )

    def get_velocity_history(self) -> list[VelocitySample]:
        return velocity_history(self._history)

    def get_average_speed(self) -> float:
        return average_speed(self._history)

    def is_moving(
        self, threshold_mps: float = DEFAULT_MOVING_THRESHOLD_MPS
    ) -> bool:
        return is_moving(self._history, threshold_mps)

    # -- fix 처리 --

    def _on_fix(self, session: int, position: Position) -> None:
        """연속 수신 콜백. 중지된 세션의 fix는 폐기한다."""
        with self._lock:
            if not self.is_tracking or session != self._session:
                logger.debug("Discarding fix delivered after stop")
                return
            self._process_fix(position)

    def _on_error(self, session: int, error: LocationAcquisitionError) -> None:
        """연속 수신 에러 콜백. 재시도하지 않고 이벤트로 전달한다."""
        with self._lock:
            if not self.is_tracking or session != self._session:
                return
            message = describe_location_error(error)
            logger.error("Location tracking error: %s", message)
            self._event_publisher.publish(
                LocationErrorEvent(error=error, message=message)
            )

    def _process_fix(self, fix: Position) -> bool:
        """fix 하나를 필터부터 이벤트 발행까지 처리한다.

        Returns:
            수락되어 현재 위치가 갱신되었으면 True.
        """
        previous = self._current

        if previous is not None and fix.timestamp < previous.timestamp:
            logger.warning(
                "Out-of-order fix dropped: %.0f < %.0f",
                fix.timestamp, previous.timestamp,
            )
            return False

        if not self._filter.accept(fix, previous):
            return False

        velocity = (
            compute_velocity(previous, fix) if previous is not None else None
        )
        position = replace(fix, velocity=velocity)

        self._current = position
        self._history.append(position)

        self._event_publisher.publish(PositionUpdatedEvent(position=position))

        if self._registry.is_navigating:
            self._proximity.evaluate(position)

        logger.debug(
            "Position updated: %.6f, %.6f (±%.0fm)",
            position.lat, position.lng, position.accuracy,
        )
        return True
