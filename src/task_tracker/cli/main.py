# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (the storage handle is acquired once here),
loads the task collection, runs the interactive menu, and always releases the
storage handle on the way out.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Release the storage handle; a failing close is logged, never raised."""
    try:
        store = getattr(state, "store", None)
        if store is not None:
            store.close()
    except Exception:
        logger.debug("Store close failed.", exc_info=True)


def main() -> int:
    settings = get_settings()

    # Unknown level names fall back to WARNING.
    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    log_dir = settings.data_dir if getattr(settings, "log_to_file", True) else None
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)
    print(f"Starting {settings.app_name}...")

    state = None
    try:
        state = create_initial_state(settings=settings)
        state.repository.initialize()
        run_console_loop(state)
    except Exception:
        logger.exception("Fatal error; exiting.")
        print("Fatal error, see the log for details.", file=sys.stderr)
        return 1
    finally:
        if state is not None:
            _shutdown(state)
        logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
