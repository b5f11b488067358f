import logging
import sys


class Logger:
    """Logger wrapper with a single stdout handler per name."""

    def __init__(self, name: str = __name__, level: str | None = None):
        self._logger = logging.getLogger(name)
        if not self._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            self._logger.addHandler(handler)
            self._logger.setLevel(level or _configured_level())

    @property
    def name(self) -> str:
        return self._logger.name

    def info(self, msg: str, *args, **kwargs):
        self._logger.info(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self._logger.error(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self._logger.warning(msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs):
        self._logger.debug(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        """Log at ERROR with the active exception's traceback attached."""
        self._logger.exception(msg, *args, **kwargs)


def _configured_level() -> str:
    # Imported lazily: config.database builds a Logger while config loads.
    from catalog_admin.config.settings import settings

    return settings.log_level.upper()
