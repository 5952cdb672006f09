import logging
from pathlib import Path
from logging.handlers import RotatingFileHandler
from countup.common.setup import PATHS

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Adds the handler built by make_handler() unless one with this name is already attached, so calling get_logger
# repeatedly never doubles up output.
def _attach_handler(logger, handler_name, make_handler, level, fmt):
    existing = next((h for h in logger.handlers if h.get_name() == handler_name), None)
    if existing is not None:
        return existing
    handler = make_handler()
    handler.setLevel(level)
    handler.setFormatter(fmt)
    handler.set_name(handler_name)
    logger.addHandler(handler)
    return handler

def get_logger(
        name = "countup",
        level = logging.INFO,
        log_dir: Path | None = None,
        max_bytes = 5 * 1024 * 1024,
        backup_count = 5,
        persistent = True,
        console = False,
) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(level)

    log_dir = log_dir or PATHS.logs
    log_dir.mkdir(parents=True,exist_ok=True)
    fmt = logging.Formatter(LOG_FORMAT,LOG_DATE_FORMAT)

    # Every run appends here, rolled over at max_bytes
    if persistent:
        _attach_handler(
            logger, f"{name}:persistent",
            lambda: RotatingFileHandler(log_dir / f"{name}.log", maxBytes=max_bytes,
                                        backupCount=backup_count, encoding="utf-8"),
            level, fmt,
        )

    # Only the current run, truncated on start
    _attach_handler(
        logger, f"{name}:latest",
        lambda: logging.FileHandler(log_dir / "latest.log", mode="w", encoding="utf-8"),
        level, fmt,
    )

    if console:
        _attach_handler(logger, f"{name}:console", logging.StreamHandler, level, fmt)

    return logger

# Attaches the console handler after the fact, used by --verbose.
def enable_console(logger: logging.Logger | None = None) -> logging.Logger:
    logger = logger or log
    return get_logger(name=logger.name, level=logger.level, console=True)

log = get_logger(level=logging.DEBUG,console=False)
log.info("=== INITIALIZED NEW SESSION ===")
