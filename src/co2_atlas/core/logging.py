"""Loguru logging configuration for the import CLI.

Every run logs human-readable lines to stderr. With a ``log_dir`` two file
sinks are added: ``co2-atlas.log`` mirrors the console, and
``import-runs.jsonl`` receives one serialized record per finished run (the
records bound with a ``run_report`` payload), so run history can be
compared without parsing console text.
"""

import sys
from pathlib import Path

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"

RUN_LOG_FILENAME = "co2-atlas.log"
RUN_REPORT_FILENAME = "import-runs.jsonl"


def _is_run_report(record: dict) -> bool:
    return "run_report" in record["extra"]


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> None:
    """Configure Loguru sinks for the import CLI.

    Args:
        log_level: Minimum log level to emit on the console and run log.
        log_dir: Optional directory for log files. When set, a rotating run
            log (rotated every 24 hours, retained 7 days) and an append-only
            JSON-lines file of run reports are written there.
    """
    level = log_level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=_LOG_FORMAT)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / RUN_LOG_FILENAME,
            level=level,
            format=_LOG_FORMAT,
            rotation="24h",
            retention="7 days",
        )
        # Reports are logged at INFO; keep them even when the console is quieter
        logger.add(
            log_path / RUN_REPORT_FILENAME,
            level="INFO",
            serialize=True,
            filter=_is_run_report,
        )
