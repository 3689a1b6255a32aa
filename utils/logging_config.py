import logging
import os
from pythonjsonlogger import jsonlogger

APP_LOGGER = "quiz_api"
SECURITY_LOGGER = "quiz_api.security"


def setup_logging(app):
    """
    Configures structured JSON logging for the application and the
    append-only security log.
    """
    formatter = jsonlogger.JsonFormatter(
        '%(asctime)s %(name)s %(levelname)s %(message)s'
    )

    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Log to console
    if not logger.handlers:
        log_handler = logging.StreamHandler()
        log_handler.setFormatter(formatter)
        logger.addHandler(log_handler)

    security_logger = logging.getLogger(SECURITY_LOGGER)
    security_logger.setLevel(logging.INFO)

    log_file = app.config.get("SECURITY_LOG_FILE")
    if log_file and not any(
        isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(log_file)
        for h in security_logger.handlers
    ):
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(jsonlogger.JsonFormatter(
            '%(asctime)s %(levelname)s %(message)s',
            rename_fields={"asctime": "timestamp", "levelname": "level", "message": "event"},
        ))
        security_logger.addHandler(file_handler)

    return logger
