"""Logging configuration for sltodo."""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path


def setup_logging(verbose: int = 0, log_file: Path | None = None) -> None:
    """Configure logging based on verbosity level and optional file output.

    Args:
        verbose: Verbosity level (0=off, 1=INFO, 2+=DEBUG)
        log_file: Optional path to write logs to file
    """
    if verbose == 0 and log_file is None:
        # Nothing to configure; records are dropped
        return

    # -vv for DEBUG; -v or a bare --log-file for INFO
    level = logging.DEBUG if verbose >= 2 else logging.INFO

    # Everything under the sltodo package logs through this logger
    logger = logging.getLogger("sltodo")
    logger.setLevel(level)

    # timestamp - module - level - message
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # stderr is hidden while the TUI runs; prefer --log-file there
    if verbose > 0:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(level)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    # File output, appended across runs
    if log_file is not None:
        # Create the log directory on first use
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Banner separating runs in a shared log file
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    logger.info("")
    logger.info("=" * 60)
    logger.info("sltodo starting | %s | level=%s", timestamp, logging.getLevelName(level))
    logger.info("=" * 60)
