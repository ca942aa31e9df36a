import logging

from linkboard.config import Config


def get_logger(name: str):
    """
    Shared application logger
    - console output only, level taken from LOG_LEVEL
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(Config.LOG_LEVEL.upper())

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
