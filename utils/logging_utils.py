import logging

from config import LOG_LEVEL


def setup_logger(name: str) -> logging.Logger:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s",
    )
    logger = logging.getLogger(name)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logger
