import re
import bleach

from classes.errors import SecurityViolation, ValidationError
from utils.helpers import is_valid_url
from utils.security_logger import (
    log_invalid_input,
    log_path_traversal_attempt,
    log_sql_injection_attempt,
    log_xss_attempt,
)

SQL_INJECTION_PATTERNS = [
    re.compile(r"\bUNION\b\s+(ALL\s+)?\bSELECT\b", re.I),
    re.compile(r"\bSELECT\b\s+(\*|[\w\s,.()]+?)\s+\bFROM\b\s+\w+.*\bWHERE\b", re.I | re.S),
    re.compile(r"\bSELECT\b\s+\*\s+\bFROM\b", re.I),
    re.compile(r"\bINSERT\s+INTO\b", re.I),
    re.compile(r"\bDELETE\s+FROM\b", re.I),
    re.compile(r"\bDROP\s+(TABLE|DATABASE|SCHEMA)\b", re.I),
    re.compile(r"\b(CREATE|ALTER|TRUNCATE)\s+TABLE\b", re.I),
    re.compile(r"\bUPDATE\b\s+\w+\s+\bSET\b\s+\w+\s*=", re.I),
    re.compile(r"['\"`]\s*(OR|AND)\s+['\"`]?\w*['\"`]?\s*=\s*['\"`]?\w*", re.I),
    re.compile(r"\b(OR|AND)\s+(\d+)\s*=\s*\2\b", re.I),
    re.compile(r";\s*--"),
    re.compile(r"['\"]\s*--\s*$"),
    re.compile(r"/\*|\*/"),
]

XSS_PATTERNS = [
    re.compile(r"<\s*script[^>]*>", re.I),
    re.compile(r"<\s*iframe[^>]*>", re.I),
    re.compile(r"javascript\s*:", re.I),
    re.compile(r"vbscript\s*:", re.I),
    re.compile(r"data\s*:\s*text/html", re.I),
    re.compile(r"<[^>]*\bon\w+\s*=", re.I),
    re.compile(r"\bon\w+\s*=\s*['\"]", re.I),
]

PATH_TRAVERSAL_MARKERS = ("../", "..\\")

TRUE_VALUES = (True, 1, "1", "true")
FALSE_VALUES = (False, 0, "0", "false")

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_length(field_name, value, max_length):
    if len(value) > max_length:
        raise ValueError(f"Field '{field_name}' cannot exceed {max_length} characters")


def sanitize_text(value):
    """Escape markup so stored text renders as plain text."""
    return bleach.clean(value, tags=set(), attributes={}, strip=False)


def check_for_security_threats(field, value):
    """Raise SecurityViolation when value carries an injection signature."""
    if not isinstance(value, str):
        return

    for pattern in SQL_INJECTION_PATTERNS:
        if pattern.search(value):
            log_sql_injection_attempt(field, value)
            raise SecurityViolation(f"Potential SQL injection detected in field '{field}'", field)

    for pattern in XSS_PATTERNS:
        if pattern.search(value):
            log_xss_attempt(field, value)
            raise SecurityViolation(f"Potential XSS attempt detected in field '{field}'", field)

    if any(marker in value for marker in PATH_TRAVERSAL_MARKERS):
        log_path_traversal_attempt(field, value)
        raise SecurityViolation(f"Path traversal attempt detected in field '{field}'", field)


class FieldRule:
    """How one payload field is checked and sanitized."""

    TYPES = ("string", "int", "bool", "url", "email")

    def __init__(self, type="string", required=False, min_length=None, max_length=None,
                 min=None, max=None, pattern=None, choices=None, aliases=(),
                 message=None, default=None, sanitize=True):
        if type not in self.TYPES:
            raise ValueError(f"Unknown validation type: {type}")
        self.type = type
        self.required = required
        self.min_length = min_length
        self.max_length = max_length
        self.min = min
        self.max = max
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.choices = tuple(choices) if choices else None
        self.aliases = tuple(aliases)
        self.message = message
        self.default = default
        self.sanitize = sanitize

    def lookup(self, field, payload):
        """Return (present, value) for field or the first alias found."""
        for name in (field,) + self.aliases:
            if name in payload:
                return True, payload[name]
        return False, None

    def apply(self, field, value):
        handler = getattr(self, f"_check_{self.type}")
        return handler(field, value)

    def _check_string(self, field, value):
        if not isinstance(value, str):
            raise ValueError(f"Field '{field}' must be a string")
        value = value.strip()
        if self.min_length and len(value) < self.min_length:
            raise ValueError(f"Field '{field}' must be at least {self.min_length} characters")
        if self.max_length:
            validate_length(field, value, self.max_length)
        if self.pattern is not None and value and not self.pattern.match(value):
            raise ValueError(self.message or f"Field '{field}' contains invalid characters")
        if self.choices is not None and value not in self.choices:
            raise ValueError(f"Field '{field}' must be one of: {', '.join(self.choices)}")
        return value

    def _check_int(self, field, value):
        if isinstance(value, bool):
            raise ValueError(f"Field '{field}' must be a number")
        if isinstance(value, str):
            try:
                value = int(value.strip())
            except ValueError:
                raise ValueError(f"Field '{field}' must be a number") from None
        elif isinstance(value, float) and value.is_integer():
            value = int(value)
        elif not isinstance(value, int):
            raise ValueError(f"Field '{field}' must be a number")
        if self.min is not None and value < self.min:
            raise ValueError(f"Field '{field}' must be at least {self.min}")
        if self.max is not None and value > self.max:
            raise ValueError(f"Field '{field}' cannot exceed {self.max}")
        return value

    def _check_bool(self, field, value):
        candidate = value.strip().lower() if isinstance(value, str) else value
        if candidate in TRUE_VALUES:
            return True
        if candidate in FALSE_VALUES:
            return False
        raise ValueError(f"Field '{field}' must be a boolean value")

    def _check_url(self, field, value):
        if not isinstance(value, str):
            raise ValueError(f"Field '{field}' must be a string")
        value = value.strip()
        if self.max_length:
            validate_length(field, value, self.max_length)
        if not is_valid_url(value):
            raise ValueError(f"Field '{field}' must be a valid http or https URL")
        return value

    def _check_email(self, field, value):
        if not isinstance(value, str):
            raise ValueError(f"Field '{field}' must be a string")
        value = value.strip()
        if self.max_length:
            validate_length(field, value, self.max_length)
        if not EMAIL_PATTERN.match(value):
            raise ValueError(f"Field '{field}' must be a valid email address")
        return value


class Validator:
    """
    Validates a decoded request payload against a table of FieldRules.

    Fields not named in the table are ignored. Every failing field is
    collected and reported together in one ValidationError; a security
    signature aborts immediately with SecurityViolation. validate() returns
    the trimmed text as submitted; sanitize() escapes it for storage.
    """

    def __init__(self, rules, check_security=True):
        self.rules = rules
        self.check_security = check_security

    def validate(self, payload, partial=False):
        values = {}
        errors = []

        for field, rule in self.rules.items():
            present, value = rule.lookup(field, payload)

            if not present or value is None or (isinstance(value, str) and not value.strip()):
                if rule.required and not partial:
                    errors.append(f"Field '{field}' is required")
                    log_invalid_input(field, "" if value is None else value, "missing")
                elif present and not rule.required:
                    # explicit null/blank clears an optional field
                    values[field] = rule.default
                elif present and partial:
                    errors.append(f"Field '{field}' cannot be empty")
                    log_invalid_input(field, "" if value is None else value, "empty")
                continue

            if self.check_security:
                check_for_security_threats(field, value)

            try:
                values[field] = rule.apply(field, value)
            except ValueError as e:
                errors.append(str(e))
                log_invalid_input(field, value, str(e))

        if errors:
            raise ValidationError(errors)

        return values

    def sanitize(self, record):
        """HTML-escape the free-text fields of record for storage."""
        escaped = dict(record)
        for field, rule in self.rules.items():
            value = escaped.get(field)
            if rule.type == "string" and rule.sanitize and isinstance(value, str):
                escaped[field] = sanitize_text(value)
        return escaped
