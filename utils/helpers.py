from datetime import date, datetime
from urllib.parse import urlparse

ALLOWED_URL_SCHEMES = ("http", "https")


def format_datetime(datetime_obj):
    """Format datetime to a readable string."""
    if not datetime_obj:
        return None
    return datetime_obj.strftime('%Y-%m-%d %H:%M:%S')


def is_valid_url(value, schemes=ALLOWED_URL_SCHEMES):
    """True when value is an absolute URL with an allowed scheme and a host."""
    if not isinstance(value, str) or not value or any(c.isspace() for c in value):
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme.lower() in schemes and bool(parsed.netloc) and bool(parsed.hostname)


def truncate(value, length=100):
    text = value if isinstance(value, str) else str(value)
    return text[:length]


def serialize_row(row):
    """Turn a result row mapping into a JSON-ready dict."""
    record = {}
    for key, value in dict(row).items():
        if isinstance(value, datetime):
            value = format_datetime(value)
        elif isinstance(value, date):
            value = value.isoformat()
        record[key] = value
    return record
