import logging
import sys

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def setup_logger(name: str = "balatro_rules", level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        logger.setLevel(level)
        return logger

    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stdout)
    fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s", "%H:%M:%S")
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def parse_log_level(raw: str) -> int:
    name = raw.strip().upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {raw!r}, expected one of {', '.join(LOG_LEVELS)}")
    return getattr(logging, name)
