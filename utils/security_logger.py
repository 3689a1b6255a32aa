import logging
from flask import has_request_context, request
from utils.helpers import truncate
from utils.logging_config import SECURITY_LOGGER

logger = logging.getLogger(SECURITY_LOGGER)

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _request_details():
    if not has_request_context():
        return {
            "client_ip": None,
            "user_agent": None,
            "request_uri": None,
            "method": None,
        }

    from utils.security import get_client_ip

    return {
        "client_ip": get_client_ip(),
        "user_agent": request.headers.get("User-Agent", "Unknown"),
        "request_uri": request.full_path.rstrip("?"),
        "method": request.method,
    }


def log_security_event(event, level="INFO", **context):
    """Append one structured entry to the security log."""
    extra = _request_details()
    extra["context"] = context
    logger.log(LEVELS.get(level, logging.INFO), event, extra=extra)


def log_sql_injection_attempt(field, suspicious_input):
    log_security_event(
        "SQL injection attempt detected", "CRITICAL",
        field=field, suspicious_input=truncate(suspicious_input),
    )


def log_xss_attempt(field, suspicious_input):
    log_security_event(
        "XSS attempt detected", "CRITICAL",
        field=field, suspicious_input=truncate(suspicious_input),
    )


def log_path_traversal_attempt(field, suspicious_input):
    log_security_event(
        "Path traversal attempt", "CRITICAL",
        field=field, suspicious_input=truncate(suspicious_input),
    )


def log_invalid_input(field, value, reason):
    log_security_event(
        "Invalid input detected", "WARNING",
        field=field, value=truncate(value), reason=reason,
    )


def log_rate_limit_exceeded(limit, window):
    log_security_event("Rate limit exceeded", "WARNING", limit=limit, window_seconds=window)


def log_api_usage(endpoint, response_code, response_time):
    log_security_event(
        "API request", "INFO",
        endpoint=endpoint,
        response_code=response_code,
        response_time_ms=round(response_time * 1000, 2),
    )


def log_database_error(error):
    log_security_event("Database error", "ERROR", error=str(error))
