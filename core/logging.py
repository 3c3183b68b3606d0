"""
Logging for the storefront API.

Every module logs through ``get_logger(__name__)``. Records pass through
``RedactSecretsFilter`` before they are written, so a Supabase JWT or a
customer email echoed inside an exception message never lands in the Vercel
log stream verbatim.

Helpers for values we log on purpose:
- mask_email_for_logging: customer contact addresses
- mask_ip_for_logging: visitor IPs seen by the rate limiter
- sanitize_id_for_logging / sanitize_string_for_logging: ids, slugs, free text
"""

import logging
import os
import re
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
# Vercel stamps every line itself
LOG_FORMAT_VERCEL = "%(levelname)s [%(name)s] %(message)s"

# supabase-py logs each PostgREST/auth round trip at INFO
THIRD_PARTY_LEVELS = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "hpack": logging.WARNING,
    "h2": logging.WARNING,
    "postgrest": logging.WARNING,
    "supabase": logging.WARNING,
    "supabase_auth": logging.WARNING,
    "upstash_redis": logging.WARNING,
}

_JWT_PATTERN = re.compile(r"eyJ[\w-]+\.[\w-]+\.[\w-]+")
_BEARER_PATTERN = re.compile(r"(?i)(bearer\s+)\S+")
_EMAIL_PATTERN = re.compile(r"([\w.+-])[\w.+-]*@([\w-]+(?:\.[\w-]+)+)")

_CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": None})


class RedactSecretsFilter(logging.Filter):
    """Masks tokens and email addresses in the rendered message."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Leave bad format args for the handler to report
            return True
        redacted = redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def redact(text: str) -> str:
    text = _JWT_PATTERN.sub("[jwt]", text)
    text = _BEARER_PATTERN.sub(r"\1[redacted]", text)
    return _EMAIL_PATTERN.sub(r"\1***@\2", text)


def _level_from_env() -> int:
    level = logging.getLevelName(os.environ.get("LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
    """
    Install the stdout handler once per process.

    Hosts that already configured the root logger (uvicorn --log-config,
    pytest's capture) keep their handlers; only the redaction filter and the
    third-party levels are applied to them.
    """
    root = logging.getLogger()
    redactor = RedactSecretsFilter()

    if not root.handlers:
        root.setLevel(_level_from_env())
        handler = logging.StreamHandler(sys.stdout)
        fmt = LOG_FORMAT_VERCEL if os.environ.get("VERCEL") == "1" else LOG_FORMAT
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)

    for handler in root.handlers:
        if not any(isinstance(f, RedactSecretsFilter) for f in handler.filters):
            handler.addFilter(redactor)

    for name, level in THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(level)


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _clean(value) -> str:
    # Strip characters that could forge extra log lines
    return str(value).translate(_CONTROL_CHARS)


def sanitize_id_for_logging(id_value: str | None) -> str:
    """First 8 characters of an order/product id."""
    if not id_value:
        return "N/A"
    return _clean(id_value)[:8]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Escape and truncate caller-supplied text such as store slugs."""
    if not value:
        return "N/A"
    safe_value = _clean(value)
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


def mask_email_for_logging(email: str | None) -> str:
    """``ada@example.com`` -> ``a***@example.com``."""
    if not email or "@" not in email:
        return "N/A"
    local, _, domain = _clean(email).strip().rpartition("@")
    return f"{local[:1]}***@{domain}"


def mask_ip_for_logging(ip: str | None) -> str:
    """Drop the host part: last IPv4 octet, or everything past the /48 for IPv6."""
    if not ip:
        return "N/A"
    ip = _clean(ip)
    if ":" in ip:
        return ":".join(ip.split(":")[:3]) + "::"
    parts = ip.split(".")
    if len(parts) == 4:
        return ".".join(parts[:3]) + ".0"
    return sanitize_string_for_logging(ip, max_length=15)


__all__ = [
    "RedactSecretsFilter",
    "configure_logging",
    "get_logger",
    "mask_email_for_logging",
    "mask_ip_for_logging",
    "redact",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
