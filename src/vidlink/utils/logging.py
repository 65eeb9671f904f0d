"""
Logging setup and elapsed-time log lines for resolution runs.
"""

import logging
import sys
import time

logger = logging.getLogger("vidlink")

# Libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(verbose: bool = False) -> None:
    """Route log output to stderr.

    Args:
        verbose: Debug level for vidlink and its HTTP stack. Otherwise INFO
            for vidlink with per-request HTTP logging silenced.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)


def log_timed(msg: str, start_time: float | None = None, level: int = logging.INFO) -> None:
    """Log a message prefixed with the seconds elapsed since ``start_time``.

    Args:
        msg: Message to log
        start_time: Start time from time.time(), or None for [START]
        level: Logging level for the line
    """
    elapsed = f"[{time.time() - start_time:.1f}s]" if start_time else "[START]"
    logger.log(level, f"{elapsed} {msg}")
