#!/usr/bin/env python3
"""
RQ Worker for match notifications.

Usage:
    python -m notification.worker
    python -m notification.worker --burst
    python -m notification.worker --verbose
"""

import sys
import argparse
import logging

from redis import Redis
from rq import Worker

from core.config_loader import get_config
from notification.service import QUEUE_NAME

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def start_worker(burst: bool = False, queues: list = None):
    """Start the RQ worker."""
    redis_url = get_config().notifications.redis_url or 'redis://localhost:6379/0'
    queues = queues or [QUEUE_NAME]

    logger.info(f"Starting RQ worker on queues: {', '.join(queues)} (burst={burst})")

    try:
        redis_conn = Redis.from_url(redis_url)
        redis_conn.ping()
        Worker(queues, connection=redis_conn).work(burst=burst)
    except KeyboardInterrupt:
        logger.info("Worker stopped")
    except Exception as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


def main():
    parser = argparse.ArgumentParser(description='VolunteerMatch Notification Worker')
    parser.add_argument('--burst', action='store_true', help='Process all and exit')
    parser.add_argument('--queues', nargs='+', default=[QUEUE_NAME])
    parser.add_argument('--verbose', action='store_true')

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    start_worker(burst=args.burst, queues=args.queues)


if __name__ == '__main__':
    main()
