import re
from urllib.parse import quote, urlparse

from vitrine.config import get_settings


_NON_DIGIT_RE = re.compile(r"\D+")
_ALLOWED_HTTP_SCHEMES = {"http", "https"}
# Characters JavaScript's encodeURIComponent leaves untouched.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def normalize_phone(phone):
    return _NON_DIGIT_RE.sub("", str(phone or ""))


def validate_base_url(base_url):
    parsed = urlparse(base_url)
    scheme = parsed.scheme.lower()
    if scheme not in _ALLOWED_HTTP_SCHEMES or not parsed.netloc:
        raise RuntimeError("WHATSAPP_BASE_URL must be an absolute HTTP(S) URL")
    return base_url.rstrip("/")


def encode_message(message):
    return quote(message, safe=_URI_COMPONENT_SAFE)


def build_whatsapp_link(message=None, phone=None, base_url=None):
    settings = get_settings()
    base_value = validate_base_url(base_url or settings.WHATSAPP_BASE_URL)
    digits = normalize_phone(phone if phone is not None else settings.WHATSAPP_NUMBER)
    if not digits:
        raise ValueError("phone is required")

    link = "{}/{}".format(base_value, digits)
    if message:
        link = "{}?text={}".format(link, encode_message(message))
    return link


def format_display_phone(phone):
    """Render a Brazilian mobile number as ``(67) 99111-6421``."""
    digits = normalize_phone(phone)
    if digits.startswith("55") and len(digits) in (12, 13):
        digits = digits[2:]
    if len(digits) == 11:
        return "({}) {}-{}".format(digits[:2], digits[2:7], digits[7:])
    if len(digits) == 10:
        return "({}) {}-{}".format(digits[:2], digits[2:6], digits[6:])
    return digits


__all__ = [
    "build_whatsapp_link",
    "encode_message",
    "format_display_phone",
    "normalize_phone",
    "validate_base_url",
]
