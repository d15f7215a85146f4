# app/core/logging_config.py
"""
Logging setup shared by the API and the services.

Records are written to stderr either as one JSON object per line
(the default, friendly to log shippers) or as plain text for local runs.
Structured fields are passed the same way everywhere:

    logger.info("calendar_built", extra={"extra": {"origin": "JFK"}})
"""

import json
import logging
import time

_TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_HANDLER_NAME = "budget_flight_finder"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = {
            "level": record.levelname,
            "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(record.created)),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if hasattr(record, "extra") and isinstance(record.extra, dict):
            base.update(record.extra)
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, default=str)


def setup_logging(level: str = "INFO", json_output: bool = True) -> None:
    """
    Install our stderr handler on the root logger.

    Safe to call more than once: only the handler installed by a previous
    call is swapped out, handlers added by others (pytest's caplog,
    uvicorn) are left alone.
    """
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))

    root = logging.getLogger()
    root.setLevel(level.upper())
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
        existing.close()
    root.addHandler(handler)

    # httpx logs every request at INFO, including the api_key query param
    logging.getLogger("httpx").setLevel(logging.WARNING)
