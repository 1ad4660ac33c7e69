import json
import logging
from datetime import datetime, timezone

from agrosim.core.config import settings

EXTRA_FIELDS = ("request_id", "method", "path", "status_code", "duration_ms")


class JSONFormatter(logging.Formatter):
    def format(self, record):
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service": "agrosim-backend",
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log[field] = getattr(record, field)

        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)

        return json.dumps(log)


logger = logging.getLogger("agrosim")
logger.setLevel(settings.LOG_LEVEL)

console_handler = logging.StreamHandler()
console_handler.setFormatter(JSONFormatter())

if not logger.handlers:
    logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Module names already sit under the service logger, so records share its handler."""
    return logging.getLogger(name)
