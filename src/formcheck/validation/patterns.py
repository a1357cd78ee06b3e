"""Type-specific format patterns.

Each entry of the type catalog maps a declared field type to a compiled
pattern. The empty string never matches a type, whatever the pattern says.
"""

import re

# Unicode ranges accepted as letters in emails and URLs
_UCS = r"\u00A0-\uD7FF\uF900-\uFDCF\uFDF0-\uFFEF"

_EMAIL_ATOM = rf"[a-z\d!#$%&'*+\-/=?^_`{{|}}~{_UCS}]+"
_EMAIL_LABEL = rf"(?:[a-z\d{_UCS}](?:[a-z\d\-._~{_UCS}]*[a-z\d{_UCS}])?)"
_EMAIL_TLD = rf"(?:[a-z{_UCS}](?:[a-z\d\-._~{_UCS}]*[a-z{_UCS}])?)"

# The top-level domain is two to six repetitions of the label form, so a
# single letter (``a@b.c``) is rejected
EMAIL_PATTERN = re.compile(
    rf"^{_EMAIL_ATOM}(?:\.{_EMAIL_ATOM})*@(?:{_EMAIL_LABEL}\.)+(?:{_EMAIL_TLD}){{2,6}}$",
    re.IGNORECASE,
)

NUMBER_PATTERN = re.compile(r"^-?(?:\d+|\d{1,3}(?:,\d{3})+)?(?:\.\d+)?$")

DIGITS_PATTERN = re.compile(r"^\d+$")

ALPHANUM_PATTERN = re.compile(r"^\w+$")

DATE_ISO_PATTERN = re.compile(r"^(\d{4})\D?(0[1-9]|1[0-2])\D?([12]\d|0[1-9]|3[01])$")

PHONE_PATTERN = re.compile(
    r"^((\+\d{1,3}(-| )?\(?\d\)?(-| )?\d{1,5})|(\(?\d{2,6}\)?))"
    r"(-| )?(\d{3,4})(-| )?(\d{4})(( x| ext)\d{1,5})?$"
)

_URL_CHAR = rf"[a-z\d\-._~{_UCS}]|%[\da-f]{{2}}|[!$&'()*+,;=]|:"
_URL_OCTET = r"(?:\d|[1-9]\d|1\d\d|2[0-4]\d|25[0-5])"
_URL_HOST_LABEL = rf"(?:[a-z\d{_UCS}](?:[a-z\d\-._~{_UCS}]*[a-z\d{_UCS}])?)"
_URL_HOST_TLD = rf"(?:[a-z{_UCS}](?:[a-z\d\-._~{_UCS}]*[a-z{_UCS}])?)"

URL_PATTERN = re.compile(
    r"^(https?|s?ftp|git)://"
    rf"(?:(?:{_URL_CHAR})*@)?"
    rf"(?:{_URL_OCTET}(?:\.{_URL_OCTET}){{3}}|(?:{_URL_HOST_LABEL}\.)+{_URL_HOST_TLD}\.?)"
    r"(?::\d*)?"
    rf"(?:/(?:(?:{_URL_CHAR}|@)+(?:/(?:{_URL_CHAR}|@)*)*)?)?"
    rf"(?:\?(?:{_URL_CHAR}|@|[\uE000-\uF8FF]|/|\?)*)?"
    rf"(?:#(?:{_URL_CHAR}|@|/|\?)*)?$",
    re.IGNORECASE,
)

# Schemes recognised by the lenient ``url`` type before it assumes http://
URL_SCHEME_PATTERN = re.compile(r"^(https?|s?ftp|git)://", re.IGNORECASE)

DEFAULT_URL_SCHEME = "http://"

TYPE_PATTERNS: dict[str, re.Pattern[str]] = {
    "alphanum": ALPHANUM_PATTERN,
    "dateIso": DATE_ISO_PATTERN,
    "digits": DIGITS_PATTERN,
    "email": EMAIL_PATTERN,
    "number": NUMBER_PATTERN,
    "phone": PHONE_PATTERN,
    "url": URL_PATTERN,
    "urlstrict": URL_PATTERN,
}

SUPPORTED_TYPES = tuple(TYPE_PATTERNS)


def normalize_url(value: str) -> str:
    """Prefix the default scheme unless the value already names one."""
    if URL_SCHEME_PATTERN.search(value):
        return value
    return DEFAULT_URL_SCHEME + value


def matches_type(value: object, type_name: str) -> bool:
    """Check a value against the catalog pattern for ``type_name``.

    Unknown types never match. The empty string never matches. The whole
    value must match: a trailing newline is not tolerated by ``$``.
    """
    pattern = TYPE_PATTERNS.get(type_name)
    if pattern is None:
        return False

    text = "" if value is None else str(value)
    if text == "":
        return False

    if type_name == "url":
        text = normalize_url(text)

    return pattern.fullmatch(text) is not None
