"""
Logging setup for the API process.

Module loggers use logging.getLogger(__name__); setup_logging() installs one
stream handler on the root logger, either human-readable or one JSON object
per line.
"""
import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = ("user_id", "note_id", "path", "status_code")


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record):
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


# PUBLIC_INTERFACE
def setup_logging(level="INFO", fmt="text"):
    """Configure root logging once; repeated calls replace the handler."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_notes_api", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._notes_api = True
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
