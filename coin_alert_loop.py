# coin_alert_loop.py
"""
Polling loop that renders a Slack message per coin and posts it.
Environment configuration:
  COINS          comma separated coin ids (or pass --coin, repeatable)
  SLACK_CHANNEL  target channel (or --channel)
  SLEEP_SECONDS  delay between cycles
  LOG_LEVEL      logging level
Run:
  python3 coin_alert_loop.py --coin bitcoin --coin ethereum --once
"""

import argparse
import logging
import os
import random
import signal
import sys
import time
from typing import Callable, List, Optional

from slack_payload import build_slack_payload
from slack_poster import post_payload

log = logging.getLogger(__name__)

shutdown = False
def _sigterm(*_):
    global shutdown
    shutdown = True


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def parse_coins(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [c.strip() for c in value.split(",") if c.strip()]


def sleep_with_jitter(sec):
    time.sleep(max(0, sec + random.uniform(0, 0.25*sec)))


def run_cycle(coins: List[str], channel: Optional[str] = None,
              build: Callable = build_slack_payload, post: Callable = post_payload) -> int:
    """Build and post one message per coin. Returns how many were posted."""
    posted = 0
    for coin_id in coins:
        try:
            payload = build(coin_id)
        except Exception as e:
            log.error("build error for %s: %r", coin_id, e)
            continue
        if payload is None:
            log.warning("unknown coin id %s, skipped", coin_id)
            continue
        try:
            if post(payload, channel=channel):
                posted += 1
            else:
                log.warning("SLACK_BOT_TOKEN not set, message for %s not sent", coin_id)
        except Exception as e:
            log.error("Slack post error for %s: %r", coin_id, e)
    return posted


def main_loop(coins: List[str], channel: Optional[str], sleep_sec: int, once: bool = False):
    log.info("coin alerts: %s | channel: %s | every %ss", ",".join(coins), channel or "default", sleep_sec)

    backoff = sleep_sec
    while not shutdown:
        t0 = time.time()
        try:
            posted = run_cycle(coins, channel)
            log.info("posted %d/%d in %.2fs", posted, len(coins), time.time() - t0)
            backoff = sleep_sec
        except Exception as e:
            if once:
                raise
            log.error("cycle failed: %r | backoff:%ss", e, backoff)
            time.sleep(backoff)
            backoff = min(backoff * 2, 600)
            continue

        if once:
            break
        sleep_with_jitter(sleep_sec)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Post coin market updates to Slack")
    parser.add_argument("--coin", action="append", dest="coins", help="coin id, e.g. bitcoin (repeatable)")
    parser.add_argument("--channel", default=os.getenv("SLACK_CHANNEL") or None)
    parser.add_argument("--sleep", type=int, default=int(os.getenv("SLEEP_SECONDS", "3600")))
    parser.add_argument("--once", action="store_true", help="run a single cycle and exit")
    args = parser.parse_args(argv)

    setup_logging(os.getenv("LOG_LEVEL", "INFO"))

    coins = args.coins or parse_coins(os.getenv("COINS"))
    if not coins:
        raise SystemExit("Coin ids required (env COINS or --coin).")

    signal.signal(signal.SIGINT, _sigterm)
    signal.signal(signal.SIGTERM, _sigterm)
    main_loop(coins, args.channel, args.sleep, args.once)


if __name__ == "__main__":
    main()
