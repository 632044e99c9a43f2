#!/usr/bin/env python3
"""기록된 fix를 MQTT 위치 토픽으로 발행하는 스크립트.

실시간 모드 엔진을 단말 없이 확인하는 용도.

Usage:
    python3 scripts/publish_fixes.py fixes.yaml -c config.yaml --interval 1.0
"""

import argparse
import logging
import time

from geo_navigation.infra.config.yaml_config_loader import YamlConfigLoader
from geo_navigation.infra.mqtt.fix_serializer import serialize_fix
from geo_navigation.infra.mqtt.mqtt_client import MqttClient
from geo_navigation.presentation.main import load_fixes

logger = logging.getLogger('publish_fixes')


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='[%(name)s] %(levelname)s: %(message)s',
    )
    parser = argparse.ArgumentParser(description='Publish recorded fixes')
    parser.add_argument('fixes', help='YAML file with recorded fixes')
    parser.add_argument('-c', '--config_file', default=None)
    parser.add_argument(
        '--interval', type=float, default=1.0,
        help='Seconds between published fixes',
    )
    args = parser.parse_args()

    config = YamlConfigLoader(args.config_file).load()
    client = MqttClient(config.mqtt, client_id='geo_navigation_publisher')
    client.connect()
    try:
        for fix in load_fixes(args.fixes):
            client.publish(
                config.mqtt.fix_topic, serialize_fix(fix), qos=config.mqtt.qos
            )
            logger.info('Published fix %.6f, %.6f', fix.lat, fix.lng)
            time.sleep(args.interval)
    finally:
        client.disconnect()


if __name__ == '__main__':
    main()
