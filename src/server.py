"""Protean Engine runner for the marketplace domain.

Processes events asynchronously when the ``production`` overlay is active:
- OutboxProcessor: polls the outbox table, publishes events to Redis Streams
- StreamSubscriptions: reads Redis Streams, invokes projectors such as
  MemberReviewStatsProjector

Usage:
    PROTEAN_ENV=production python src/server.py
    PROTEAN_ENV=production python src/server.py --test-mode  # drain and exit
"""

import argparse

from protean.server.engine import Engine


def main():
    parser = argparse.ArgumentParser(description="Marketplace Engine runner")
    parser.add_argument("--test-mode", action="store_true", help="Process pending messages and exit")
    args = parser.parse_args()

    from marketplace.domain import marketplace

    marketplace.init()
    Engine(marketplace, test_mode=args.test_mode).run()


if __name__ == "__main__":
    main()
