"""MQTT 통신 인프라 (SensorProvider 구현)."""

from geo_navigation.infra.mqtt.mqtt_client import MqttClient
from geo_navigation.infra.mqtt.mqtt_sensor_provider import MqttSensorProvider

__all__ = ["MqttClient", "MqttSensorProvider"]
