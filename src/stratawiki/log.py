"""Process-wide logging setup"""

import logging


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the root logger at the given level."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)
