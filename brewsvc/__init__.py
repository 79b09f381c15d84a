"""brewsvc - run Homebrew formula services under systemd."""

from loguru import logger

__version__ = "0.3.0"
__logo__ = "🍺"

logger.disable("brewsvc")
