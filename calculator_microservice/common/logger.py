"""
Logging sink shared by the validator, the dispatcher and the server.

The module exposes a named ``logger`` that handlers import or receive by
injection. Nothing is attached to it at import time; ``configure_logging``
wires it to a queue so request threads only enqueue records, while a
single listener thread writes them to:

- the console
- ``error.log`` (ERROR and above)
- ``combined.log`` (every level)
"""
from datetime import datetime, timezone
import json
import logging
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import SimpleQueue
from typing import List, Union

LOGGER_NAME = "calculator_microservice"
SERVICE_NAME = "calculator-microservice"

logger: logging.Logger = logging.getLogger(LOGGER_NAME)


class JsonLineFormatter(logging.Formatter):
    """Format a record as a single JSON object per line."""

    def __init__(self, service_name: str = SERVICE_NAME) -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname.lower(),
            "message": record.getMessage(),
            "service": self.service_name,
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def build_handlers(log_dir: Path, service_name: str = SERVICE_NAME) -> List[logging.Handler]:
    """
    Create the console, error-file and combined-file handlers.

    :param Path log_dir: Directory holding ``error.log`` and ``combined.log``
    :param str service_name: Service name written in every file record

    :return: Handlers to be driven by the queue listener
    :rtype: List[logging.Handler]
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    # Files are opened in append mode, only the listener thread writes to them
    error_file = logging.FileHandler(log_dir / "error.log", mode="a", encoding="utf-8")
    error_file.setLevel(logging.ERROR)
    error_file.setFormatter(JsonLineFormatter(service_name))

    combined_file = logging.FileHandler(log_dir / "combined.log", mode="a", encoding="utf-8")
    combined_file.setFormatter(JsonLineFormatter(service_name))

    return [console, error_file, combined_file]


def configure_logging(
    log_dir: Path,
    level: Union[int, str] = logging.INFO,
    service_name: str = SERVICE_NAME,
    target: logging.Logger = logger,
) -> QueueListener:
    """
    Route the service logger through a queue to the console and log files.

    Calling it again replaces the previous queue handler, so the logger
    never emits a record twice.

    :param Path log_dir: Directory for the log files
    :param level: Minimum level of the service logger
    :param str service_name: Service name written in every file record
    :param logging.Logger target: Logger to route, the service logger by default

    :return: The started listener, to be passed to ``shutdown_logging``
    :rtype: QueueListener
    """
    for handler in list(target.handlers):
        if isinstance(handler, QueueHandler):
            target.removeHandler(handler)

    queue: SimpleQueue = SimpleQueue()
    listener = QueueListener(queue, *build_handlers(Path(log_dir), service_name), respect_handler_level=True)

    target.addHandler(QueueHandler(queue))
    target.setLevel(level)
    target.propagate = False

    listener.start()
    return listener


def shutdown_logging(listener: QueueListener, target: logging.Logger = logger) -> None:
    """Flush pending records, close the log files and detach the queue handler."""
    listener.stop()
    for handler in listener.handlers:
        handler.close()
    for handler in list(target.handlers):
        if isinstance(handler, QueueHandler):
            target.removeHandler(handler)
    target.propagate = True
