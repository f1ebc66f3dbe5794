"""
Logging setup for the service.

``setup_logging`` configures the root logger from ``Settings``: a
console handler always, plus a file handler when ``LOG_FILE`` is set.
The log file path goes through ``Settings.log_path`` so a relative
value lands under the project root like the data file does, whatever
the working directory.  Configuration happens once per process.
"""

import logging

from .config import Settings


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(settings: Settings) -> None:
    """Attach handlers to the root logger unless it already has some.

    The level comes from ``settings.log_level``, which ``Settings``
    has already normalised to a standard level name.
    """
    root = logging.getLogger()
    if root.handlers:
        # Already configured, e.g. by pytest or a previous create_app().
        return

    root.setLevel(settings.log_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    log_path = settings.log_path
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
