import logging, json, sys, time, os

from .config import resolve_log_level


def get_logger(name="lexsign", level=None, to_file=None):
    """Unified structured logger for all lexsign components."""
    logger = logging.getLogger(name)
    bad_level = None
    if level is None:
        try:
            level = logging.getLevelName(resolve_log_level())
        except ValueError as exc:
            # a typo in the env must not break imports
            bad_level, level = exc, logging.INFO
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            fmt=json.dumps({
                "ts": "%(asctime)s",
                "level": "%(levelname)s",
                "name": "%(name)s",
                "msg": "%(message)s"
            }),
            datefmt="%Y-%m-%dT%H:%M:%SZ",
        )
        formatter.converter = time.gmtime  # Use UTC timestamps
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        if to_file:
            # Ensure the directory exists before writing
            os.makedirs(os.path.dirname(to_file) or ".", exist_ok=True)
            file_handler = logging.FileHandler(to_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    if bad_level is not None:
        logger.warning(f"[LOG] {bad_level}, falling back to INFO")
    return logger
