"""위치 센서 포트 인터페이스.

플랫폼 위치 센서(GPS, MQTT 위치 스트림, 수동 입력 등)를 추상화한다.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from geo_navigation.domain.exceptions import LocationAcquisitionError
from geo_navigation.domain.value_objects.position import Position
from geo_navigation.usecase.ports.config_port import SensorOptions

FixCallback = Callable[[Position], None]
ErrorCallback = Callable[[LocationAcquisitionError], None]


class SensorProvider(ABC):
    """위치 센서 인터페이스."""

    @abstractmethod
    def get_current_fix(self, options: SensorOptions) -> Position:
        """단발성으로 현재 위치를 획득한다.

        Args:
            options: 센서 옵션 (timeout, maximum age 등).

        Returns:
            현재 위치.

        Raises:
            LocationAcquisitionError: 위치를 얻지 못한 경우.
        """

    @abstractmethod
    def subscribe(
        self,
        on_fix: FixCallback,
        on_error: ErrorCallback,
        options: SensorOptions,
    ) -> int:
        """연속 위치 수신을 구독한다.

        Args:
            on_fix: fix 수신 콜백.
            on_error: 센서 에러 콜백.
            options: 센서 옵션.

        Returns:
            구독 해제에 사용할 핸들.
        """

    @abstractmethod
    def unsubscribe(self, handle: int) -> None:
        """연속 위치 구독을 해제한다.

        Args:
            handle: subscribe()가 반환한 핸들.
        """
