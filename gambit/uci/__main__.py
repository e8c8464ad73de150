"""
Main entry point for running Gambit as a UCI engine.

Usage:
    python -m gambit.uci [--depth 2] [--seed 0] [--log-dir ~/.gambit] [--debug]
"""

import argparse

from gambit.config import EngineConfig
from gambit.uci.interface import UCIEngine


def main():
    parser = argparse.ArgumentParser(description="Gambit UCI engine")
    parser.add_argument("--depth", type=int, default=2, help="Search depth (1-6)")
    parser.add_argument("--seed", type=int, default=None, help="Evaluation jitter seed")
    parser.add_argument("--log-dir", type=str, default=None, help="Directory for engine.log")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    args = parser.parse_args()

    options = dict(search_depth=args.depth, random_seed=args.seed, debug=args.debug)
    if args.log_dir:
        options["log_dir"] = args.log_dir

    UCIEngine(EngineConfig(**options)).run()


if __name__ == "__main__":
    main()
