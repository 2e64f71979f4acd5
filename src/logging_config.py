"""Configure application logging using the Python standard library.

Records are rendered as one JSON object per line with the timestamp,
level, module and message, plus the optional ``user_id`` field and any
``extra`` dict passed by the caller.  Console output goes to stderr so
that it never mixes with the receipts printed on stdout; a rotating file
handler is added when a log directory is given.
"""

import json
import logging
import logging.handlers
import os
from datetime import datetime, timezone
from typing import Optional


class JsonFormatter(logging.Formatter):
    """Format log records as JSON strings."""

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.module,
            "message": record.getMessage(),
        }
        if hasattr(record, "user_id"):
            log_record["user_id"] = getattr(record, "user_id")
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            # Merge into the top level rather than nesting under "extra"
            log_record.update(extra)
        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_record, default=str)


def configure_logging(log_dir: Optional[str] = None, level: int = logging.INFO) -> None:
    """Configure the root logger with JSON formatting.

    Args:
        log_dir: Directory where ``checkout.log`` is written.  Created if
            missing.  When None only the console handler is installed.
        level: Logging level for the root logger and its handlers.
    """
    logger = logging.getLogger()
    logger.setLevel(level)
    # Reconfiguring replaces whatever was installed before
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    formatter = JsonFormatter()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=os.path.join(log_dir, "checkout.log"),
            maxBytes=5 * 1024 * 1024,  # 5 MB per log file
            backupCount=3,
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)
