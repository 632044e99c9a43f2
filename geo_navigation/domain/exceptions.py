"""Geo Navigation 도메인 예외 정의."""

from geo_navigation.domain.enums import LocationErrorCode


class DomainError(Exception):
    """도메인 계층 기본 예외."""


class InvalidPositionError(DomainError, ValueError):
    """fix의 측정값이 위치로 쓸 수 없는 경우."""


class InvalidCoordinateError(InvalidPositionError):
    """유한하지 않거나 범위를 벗어난 좌표가 전달된 경우."""


class LocationAcquisitionError(DomainError):
    """센서가 위치를 제공하지 못한 경우.

    Args:
        code: 실패 유형.
        detail: 센서가 전달한 원본 설명.
    """

    def __init__(
        self,
        code: LocationErrorCode = LocationErrorCode.UNKNOWN,
        detail: str = '',
    ) -> None:
        super().__init__(detail or code.value)
        self.code = code
        self.detail = detail


_ERROR_MESSAGES: dict[LocationErrorCode, str] = {
    LocationErrorCode.PERMISSION_DENIED: (
        'Location permission denied by the user'
    ),
    LocationErrorCode.POSITION_UNAVAILABLE: (
        'Location unavailable. Check that GPS is enabled'
    ),
    LocationErrorCode.TIMEOUT: (
        'Timed out while acquiring location. Try again'
    ),
}


def describe_location_error(error: LocationAcquisitionError) -> str:
    """위치 획득 실패를 사용자에게 보여줄 메시지로 변환한다."""
    message = _ERROR_MESSAGES.get(error.code)
    if message is not None:
        return message
    return f'Unknown location error: {error.detail or error.code.value}'
