from __future__ import annotations

import argparse
import logging
import os
import sys

from . import __version__
from .app import run_auto, run_gui, run_headless
from .config import load_config
from .exceptions import ConfigError


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    level_name = os.getenv("CATCHFALL_LOG_LEVEL")
    if level_name:
        level = getattr(logging, level_name.upper(), level)
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="catchfall",
        description="Catchfall - catch the falling objects",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--gui", action="store_true", help="Force GUI mode (Arcade)")
    mode.add_argument("--headless", action="store_true", help="Force headless mode (simulated autopilot)")
    parser.add_argument("--max-steps", type=int, default=None, help="Stop after N ticks (for testing)")
    parser.add_argument("--tick-rate", type=float, default=60.0, help="Target tick rate (Hz)")
    parser.add_argument("--config", default=None, help="YAML file overriding the default tunables")
    parser.add_argument("--seed", type=int, default=None, help="Seed spawn randomness for reproducible runs")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        config = load_config(args.config, seed=args.seed)
    except ConfigError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    # Honor CLI over env vars
    if args.gui:
        os.environ["CATCHFALL_GUI"] = "1"
        os.environ.pop("CATCHFALL_HEADLESS", None)
        return run_gui(max_steps=args.max_steps, tick_rate=args.tick_rate, config=config)

    if args.headless:
        os.environ["CATCHFALL_HEADLESS"] = "1"
        os.environ.pop("CATCHFALL_GUI", None)
        return run_headless(max_steps=args.max_steps, tick_rate=args.tick_rate, config=config)

    return run_auto(max_steps=args.max_steps, tick_rate=args.tick_rate, config=config)


if __name__ == "__main__":
    sys.exit(main())
