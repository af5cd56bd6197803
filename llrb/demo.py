"""Demonstration driver for the tree.

Usage:
    python -m llrb [--size N] [--max-key K] [--seed S] [--mode {2-3,2-3-4}] [--verbose]

Loads N random keys in 1..K, deletes the fourth one and prints the
remaining keys in order together with their colours. --mode and --seed
default to the LLRB_MODE and LLRB_SEED environment variables when set.
"""

import argparse
import logging
import os
import random
from typing import List

from .llrbtree import LeftLeaningRedBlackTree, Mode

logger = logging.getLogger(__name__)


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    env = os.environ
    modes = [mode.value for mode in Mode]
    parser = argparse.ArgumentParser(description="Left-leaning red-black tree demo")
    parser.add_argument("--size", type=int, default=10)
    parser.add_argument("--max-key", dest="max_key", type=int, default=200)
    parser.add_argument("--seed", type=int, default=env.get("LLRB_SEED"))
    parser.add_argument("--mode", choices=modes, default=env.get("LLRB_MODE", Mode.TWO_THREE.value))
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)
    # choices are not applied to a default taken from the environment
    if args.mode not in modes:
        parser.error(f"LLRB_MODE must be one of {', '.join(modes)}, got {args.mode!r}")
    return args


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    rng = random.Random(args.seed)
    keys = [rng.randint(1, args.max_key) for _ in range(args.size)]
    print("Values: " + "\t".join(str(k) for k in keys))

    tree = LeftLeaningRedBlackTree(mode=Mode(args.mode), check_invariants=True)
    for key in keys:
        tree.insert(key)
    logger.info("loaded %d distinct keys", len(tree))

    if len(keys) > 3:
        print(f"Deleting 4th key: {keys[3]}")
        tree.delete(keys[3])

    print("Traversal:")
    shape = tree.to_graph()
    tree.traverse(lambda key, _: print(f"({shape.nodes[key]['colour'].title()}) {key}"))

    tree.clear()
    logger.info("tree cleared")
    return 0
