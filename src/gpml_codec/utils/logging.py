import logging
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name: str,
                 level: int = logging.WARNING,
                 log_dir: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Set up and configure logger with a console handler and an optional file handler.

    Args:
        name: Name of the logger, typically __name__ from the calling module
        level: Threshold for the logger and its handlers
        log_dir: Directory for ``gpml_codec.log``; no file handler when omitted

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT)

    # Add handlers to logger if they haven't been added already
    if not logger.handlers:
        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(formatter)
        logger.addHandler(ch)

        if log_dir is not None:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(log_path / "gpml_codec.log")
            fh.setLevel(level)
            fh.setFormatter(formatter)
            logger.addHandler(fh)

    return logger
