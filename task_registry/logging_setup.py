"""Logging configuration for the task registry."""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import LoggingSettings


def setup_logging(settings: LoggingSettings, *, echo_sql: bool = False) -> None:
    """Install a rich console handler on the root logger.

    Existing root handlers are removed so repeated calls do not duplicate
    output. Call once, early, before the first log record.
    """
    root = logging.getLogger()
    root.setLevel(settings.level)

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=settings.rich_tracebacks,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)

    logging.captureWarnings(True)

    # SQLAlchemy logs every statement at INFO when echo is on.
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if echo_sql else logging.WARNING
    )
