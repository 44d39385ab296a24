import logging
import sys
from typing import Dict, Optional, Union

from tqdm import tqdm

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"

Level = Union[int, str]


class LogWithTqdm(logging.Handler):
    """
    Writes records through `tqdm.write()` so log lines printed during a batch
    audit land above the progress bar instead of tearing it.
    """
    def emit(self, record):
        try:
            tqdm.write(self.format(record), file=sys.stderr)
            self.flush()
        except Exception:
            self.handleError(record)


def _as_level(level: Optional[Level], fallback: int) -> int:
    """Accepts 'debug', 'INFO', 20 or None; unknown names give ``fallback``."""
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        value = logging.getLevelName(level.strip().upper())
        if isinstance(value, int):
            return value
    return fallback


def configure_logger(
        general_level: Optional[Level] = "INFO",
        module_specific_levels: Optional[Dict[str, Level]] = None,
        silenced_loggers: Optional[Dict[str, Level]] = None
) -> logging.Logger:
    """
    Installs the tqdm-aware handler on the root logger and applies levels.

    Calling it again replaces the handler it installed earlier; handlers added
    by anything else (a host application, a test runner) are left alone.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(_as_level(general_level, logging.INFO))

    for handler in [h for h in root_logger.handlers if isinstance(h, LogWithTqdm)]:
        root_logger.removeHandler(handler)

    handler = LogWithTqdm()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    for name, level in (module_specific_levels or {}).items():
        logging.getLogger(name).setLevel(_as_level(level, logging.INFO))

    # Muzzle noisy loggers
    for name, level in (silenced_loggers or {}).items():
        logging.getLogger(name).setLevel(_as_level(level, logging.CRITICAL))

    return root_logger
