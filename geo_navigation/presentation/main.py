r"""Geo Navigation 진입점.

실시간 모드는 MQTT 위치 스트림을, 재생 모드는 YAML로 기록된 fix 목록을
추적 엔진에 공급하고 발생한 이벤트를 로그로 출력한다.

실행: geo_navigation -c config.yaml --target -27.630548 -48.681134 \\
        --radius 20 [--replay fixes.yaml]
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
import threading

import yaml

from geo_navigation.domain.events.location_events import (
    DomainEvent,
    LocationErrorEvent,
    NavigationUpdatedEvent,
    PositionUpdatedEvent,
    TargetReachedEvent,
)
from geo_navigation.domain.exceptions import (
    LocationAcquisitionError,
    describe_location_error,
)
from geo_navigation.domain.value_objects.position import Position
from geo_navigation.infra.config.yaml_config_loader import YamlConfigLoader
from geo_navigation.infra.event.in_memory_event_publisher import (
    InMemoryEventPublisher,
)
from geo_navigation.infra.mqtt.fix_serializer import parse_fix
from geo_navigation.infra.mqtt.mqtt_client import MqttClient
from geo_navigation.infra.mqtt.mqtt_sensor_provider import MqttSensorProvider
from geo_navigation.infra.sensor.manual_sensor_provider import (
    ManualSensorProvider,
)
from geo_navigation.usecase.ports.config_port import AppConfig
from geo_navigation.usecase.track_location import TrackingController

logger = logging.getLogger('geo_navigation')


def load_fixes(path: str | Path) -> list[Position]:
    """YAML 파일에서 fix 목록을 읽는다.

    최상위가 리스트이거나 ``fixes`` 키 아래 리스트여야 한다.

    Raises:
        ValueError: 목록이 없거나 fix를 해석할 수 없는 경우
            (FixDecodeError, InvalidPositionError 포함).
    """
    with open(path, encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if isinstance(data, dict):
        data = data.get('fixes')
    if not isinstance(data, list) or not data:
        raise ValueError(f'No fix list found in {path}')
    if not all(isinstance(item, dict) for item in data):
        raise ValueError(f'Every fix in {path} must be a mapping')
    return [parse_fix(item) for item in data]


def _log_event(event: DomainEvent) -> None:
    """이벤트를 종류별로 로그에 남긴다."""
    if isinstance(event, PositionUpdatedEvent):
        logger.info(
            'positionUpdate: %.6f, %.6f (±%.0fm)',
            event.position.lat, event.position.lng, event.position.accuracy,
        )
    elif isinstance(event, NavigationUpdatedEvent):
        logger.info(
            'navigationUpdate: distance=%.1fm, bearing=%.0f°',
            event.distance, event.bearing,
        )
    elif isinstance(event, TargetReachedEvent):
        logger.info('targetReached: distance=%.1fm', event.distance)
    elif isinstance(event, LocationErrorEvent):
        logger.warning('locationError: %s', event.message)
    else:
        logger.info('%s', event.kind)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='geo_navigation',
        description='Location tracking and proximity engine',
    )
    parser.add_argument(
        '-c', '--config_file', type=str, default=None,
        help='Path to the config.yaml file (default: packaged defaults)',
    )
    parser.add_argument(
        '--target', type=float, nargs=2, metavar=('LAT', 'LNG'),
        help='Target coordinate to navigate to',
    )
    parser.add_argument(
        '--radius', type=float, default=None,
        help='Arrival radius in meters (default: from config)',
    )
    parser.add_argument(
        '--replay', type=str, default=None,
        help='Replay recorded fixes from a YAML file instead of MQTT',
    )
    return parser


def run_replay(
    config: AppConfig,
    publisher: InMemoryEventPublisher,
    fixes: list[Position],
    target: tuple[float, float] | None,
    radius: float | None,
) -> TrackingController:
    """기록된 fix를 재생한다. 스로틀은 fix timestamp 시간 축을 따른다."""
    if not fixes:
        raise ValueError('Replay requires at least one fix')

    sensor = ManualSensorProvider(current_fix=fixes[0])
    controller = TrackingController(
        sensor,
        publisher,
        sensor_options=config.sensor,
        filter_config=config.position_filter,
        engine_config=config.engine,
        clock=sensor.clock,
    )
    controller.start()
    try:
        if target is not None:
            controller.set_target(target[0], target[1], radius)
        sensor.replay(fixes[1:])

        stats = controller.get_navigation_stats()
        if stats is not None:
            logger.info(
                'Replay finished: history=%d, distance=%s, moving=%s',
                stats.history_size, stats.formatted_distance,
                controller.is_moving(),
            )
    finally:
        controller.stop()
    return controller


def run_live(
    config: AppConfig,
    publisher: InMemoryEventPublisher,
    target: tuple[float, float] | None,
    radius: float | None,
) -> None:
    """MQTT 위치 스트림으로 추적한다. Ctrl-C로 종료한다."""
    mqtt_client = MqttClient(config.mqtt, client_id='geo_navigation')
    sensor = MqttSensorProvider(
        mqtt_client, config.mqtt.fix_topic, qos=config.mqtt.qos
    )
    controller = TrackingController(
        sensor,
        publisher,
        sensor_options=config.sensor,
        filter_config=config.position_filter,
        engine_config=config.engine,
    )

    mqtt_client.connect()
    try:
        controller.start()
        if target is not None:
            controller.set_target(target[0], target[1], radius)
        threading.Event().wait()
    except KeyboardInterrupt:
        logger.info('Keyboard interrupt received')
    finally:
        controller.stop()
        mqtt_client.disconnect()


def main(argv: list[str] | None = None) -> int:
    """엔진을 시작한다.

    Args:
        argv: 커맨드 라인 인자 (프로그램 이름 제외).

    Returns:
        종료 코드.
    """
    logging.basicConfig(
        level=logging.INFO,
        format='[%(name)s] %(levelname)s: %(message)s',
    )

    args = _build_parser().parse_args(argv)
    config = YamlConfigLoader(args.config_file).load()
    target = tuple(args.target) if args.target else None

    publisher = InMemoryEventPublisher()
    publisher.subscribe(DomainEvent, _log_event)

    try:
        if args.replay:
            try:
                fixes = load_fixes(args.replay)
            except (OSError, yaml.YAMLError, ValueError) as exc:
                logger.error(
                    'Cannot load replay file %s: %s', args.replay, exc
                )
                return 1
            run_replay(config, publisher, fixes, target, args.radius)
        else:
            run_live(config, publisher, target, args.radius)
    except LocationAcquisitionError as exc:
        logger.error('Tracking failed: %s', describe_location_error(exc))
        return 1
    except ValueError as exc:
        # 좌표 범위, 음수 반경
        logger.error('Invalid target: %s', exc)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
