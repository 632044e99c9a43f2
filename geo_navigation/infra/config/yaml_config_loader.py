"""YAML 파일 기반 설정 로더 구현체."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from geo_navigation.usecase.ports.config_port import (
    AppConfig,
    ConfigPort,
    EngineConfig,
    MqttConfig,
    PositionFilterConfig,
    SensorOptions,
)

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = (
    Path(__file__).resolve().parent.parent.parent
    / "config"
    / "default_params.yaml"
)


class YamlConfigLoader(ConfigPort):
    """ConfigPort의 YAML 파일 구현체.

    YAML 파일에서 설정을 읽어 AppConfig로 변환한다.
    파일이 없거나 형식이 잘못되면 기본값을 사용한다.

    Args:
        config_path: YAML 설정 파일 경로. None이면 기본 경로 사용.
    """

    def __init__(self, config_path: Path | str | None = None) -> None:
        self._path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    def load(self) -> AppConfig:
        """YAML 파일에서 설정을 로드한다."""
        params = self._extract_params(self._read_yaml())

        sensor_data = self._section(params, "sensor")
        filter_data = self._section(params, "position_filter")
        engine_data = self._section(params, "engine")
        mqtt_data = self._section(params, "mqtt")

        sensor = SensorOptions()
        position_filter = PositionFilterConfig()
        engine = EngineConfig()
        mqtt = MqttConfig()

        config = AppConfig(
            sensor=SensorOptions(
                enable_high_accuracy=bool(sensor_data.get(
                    "enable_high_accuracy", sensor.enable_high_accuracy
                )),
                timeout_ms=int(sensor_data.get(
                    "timeout_ms", sensor.timeout_ms
                )),
                maximum_age_ms=int(sensor_data.get(
                    "maximum_age_ms", sensor.maximum_age_ms
                )),
            ),
            position_filter=PositionFilterConfig(
                enabled=bool(filter_data.get(
                    "enabled", position_filter.enabled
                )),
                min_accuracy=float(filter_data.get(
                    "min_accuracy", position_filter.min_accuracy
                )),
                min_movement=float(filter_data.get(
                    "min_movement", position_filter.min_movement
                )),
                max_speed=float(filter_data.get(
                    "max_speed", position_filter.max_speed
                )),
            ),
            engine=EngineConfig(
                proximity_check_interval_ms=float(engine_data.get(
                    "proximity_check_interval_ms",
                    engine.proximity_check_interval_ms,
                )),
                max_history_size=int(engine_data.get(
                    "max_history_size", engine.max_history_size
                )),
                default_target_radius=float(engine_data.get(
                    "default_target_radius", engine.default_target_radius
                )),
            ),
            mqtt=MqttConfig(
                broker_host=mqtt_data.get("broker_host", mqtt.broker_host),
                broker_port=int(mqtt_data.get(
                    "broker_port", mqtt.broker_port
                )),
                keepalive_sec=int(mqtt_data.get(
                    "keepalive_sec", mqtt.keepalive_sec
                )),
                reconnect_max_delay_sec=int(mqtt_data.get(
                    "reconnect_max_delay_sec", mqtt.reconnect_max_delay_sec
                )),
                fix_topic=mqtt_data.get("fix_topic", mqtt.fix_topic),
                qos=int(mqtt_data.get("qos", mqtt.qos)),
            ),
        )

        logger.info("Config loaded from %s", self._path)
        return config

    def _read_yaml(self) -> dict[str, Any]:
        """YAML 파일을 dict로 읽는다."""
        if not self._path.exists():
            logger.warning(
                "Config file not found: %s, using defaults", self._path
            )
            return {}

        with open(self._path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            logger.warning("Invalid YAML format, using defaults")
            return {}

        return data

    def _extract_params(self, raw: dict[str, Any]) -> dict[str, Any]:
        """최상위 geo_navigation 키가 있으면 그 아래를 사용한다."""
        node_data = raw.get("geo_navigation", raw)
        if isinstance(node_data, dict):
            return node_data
        return {}

    def _section(self, params: dict[str, Any], name: str) -> dict[str, Any]:
        """섹션을 dict로 반환한다. 없거나 dict가 아니면 빈 dict."""
        data = params.get(name) or {}
        if not isinstance(data, dict):
            logger.warning("Invalid '%s' section, using defaults", name)
            return {}
        return data
