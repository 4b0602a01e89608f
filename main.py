"""
Restaurant role-play entry point.

Starts the console front end, either against the live chat gateway or
replaying a scripted scenario offline.

Usage:
    Live console:  python main.py console [--language vi] [--model gpt-4o-mini]
    Offline demo:  python main.py demo [scenario]
"""

import logging
import sys

from customer_sim.config import settings

logger = logging.getLogger(__name__)


def _run_console_mode(argv: list[str]) -> None:
    """Play against the live chat gateway (requires the gateway service)."""
    from console_demo import main as console_main

    logger.info("Starting %s console against %s", settings.app_name, settings.gateway.base_url)
    console_main(argv)


def _run_demo_mode(argv: list[str]) -> None:
    """Replay a scripted scenario (no gateway required)."""
    from console_demo import main as console_main

    if argv and not argv[0].startswith("-"):
        scenario, options = argv[0], argv[1:]
    else:
        scenario, options = "happy", argv
    console_main(["--scenario", scenario, *options])


if __name__ == "__main__":
    mode = sys.argv[1] if len(sys.argv) > 1 else "console"
    rest = sys.argv[2:]
    if mode == "demo":
        _run_demo_mode(rest)
    elif mode == "console":
        _run_console_mode(rest)
    else:
        print(f"Unknown mode {mode!r}; use 'console' or 'demo'", file=sys.stderr)
        sys.exit(2)
