#!/usr/bin/env python
"""
Replay a put/get access trace against an LRU cache.

Without --trace, replays the built-in demonstration (capacity 2,
[[1,1],[2,2],[1],[3,3],[2],[4,4],[1],[3],[4]]) and prints 1, -1, -1, 3, 4.
Each get result goes to stdout on its own line; logs go to stderr.

Usage:
    intlru-replay
    intlru-replay --capacity 128 --trace accesses.json
    intlru-replay --capacity 128 --trace accesses.json --variant reference --progress
    python -m intlru.cli.replay --trace accesses.json -v
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from tqdm import tqdm

from intlru.cache import LRUCache
from intlru.constants import DEMO_CAPACITY
from intlru.errors import IntLruError
from intlru.reference import OrderedLRUCache
from intlru.trace import Put, demo_trace, load_trace, split_counts

logger = logging.getLogger(__name__)

VARIANTS = ("linked", "reference")


def build_cache(capacity: int, variant: str = "linked", debug: bool = False):
    """Construct the cache implementation named by ``variant``."""
    if variant == "linked":
        return LRUCache(capacity, debug=debug)
    if variant == "reference":
        return OrderedLRUCache(capacity)
    raise ValueError(f"Unknown variant: {variant}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Replay a put/get trace against an LRU cache'
    )
    parser.add_argument(
        '--capacity', type=int, default=DEMO_CAPACITY,
        help=f'Cache capacity (default: {DEMO_CAPACITY})'
    )
    parser.add_argument(
        '--trace', type=str, default=None,
        help='JSON trace file, [k, v] = put and [k] = get (default: built-in demo)'
    )
    parser.add_argument(
        '--variant', choices=VARIANTS, default='linked',
        help='Cache implementation (default: linked)'
    )
    parser.add_argument(
        '--progress', action='store_true',
        help='Show a progress bar while replaying'
    )
    parser.add_argument(
        '--debug', action='store_true',
        help='Check cache invariants after every operation (linked variant only)'
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='Log at DEBUG level, including evictions'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )

    logger.info(f"Options: capacity={args.capacity}, variant={args.variant}, debug={args.debug}")

    try:
        cache = build_cache(args.capacity, args.variant, debug=args.debug)
        if args.trace:
            logger.info(f"Loading trace from {args.trace}")
            ops = load_trace(args.trace)
        else:
            logger.info("Using built-in demonstration trace")
            ops = demo_trace()
    except (IntLruError, OSError) as e:
        logger.warning(f"Cannot start replay: {e}")
        return 2

    puts, gets = split_counts(ops)
    logger.info(f"Trace: {len(ops)} operations ({puts} put, {gets} get)")

    start_time = time.time()
    with tqdm(total=len(ops), desc="Replaying", unit="op", disable=not args.progress,
              file=sys.stderr) as pbar:
        for op in ops:
            if isinstance(op, Put):
                cache.put(op.key, op.value)
            else:
                print(cache.get(op.key))
            pbar.update(1)

    elapsed = time.time() - start_time
    logger.info("=" * 60)
    logger.info("SUMMARY")
    logger.info("=" * 60)
    logger.info(f"Operations: {len(ops)}")
    logger.info(f"Live entries: {len(cache)}/{cache.capacity}")
    logger.info(f"Time: {elapsed:.3f}s")
    return 0


if __name__ == '__main__':
    sys.exit(main())
