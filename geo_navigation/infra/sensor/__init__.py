"""프로세스 내부 센서 인프라 (SensorProvider 구현)."""

from geo_navigation.infra.sensor.manual_sensor_provider import (
    ManualSensorProvider,
)

__all__ = ["ManualSensorProvider"]
