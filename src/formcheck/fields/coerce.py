"""Decoding of declared option values.

Options are declared as text (``data-*`` attributes, YAML strings). They are
decoded the way a browser data store would decode them:

    "true"    -> True
    "false"   -> False
    "null"    -> None
    "5"       -> 5        (only when the number prints back identically)
    "5.0"     -> "5.0"
    "[10,20]" -> [10, 20] (JSON, when it parses)

Non-string values are returned unchanged.
"""

import json
import re
from typing import Any

_JSON_PREFIX = re.compile(r"^(?:\{[\w\W]*\}|\[[\w\W]*\])$")
_NUMBER = re.compile(r"^-?\d+(?:\.\d+)?$")


def _as_number(text: str) -> int | float | None:
    if not _NUMBER.match(text):
        return None
    try:
        number: int | float = int(text)
    except ValueError:
        try:
            number = float(text)
        except ValueError:
            return None
    if isinstance(number, float) and number.is_integer():
        canonical = str(int(number))
    else:
        canonical = str(number)
    return number if canonical == text else None


def coerce(value: Any) -> Any:
    """Decode a declared option value."""
    if not isinstance(value, str):
        return value

    if value == "true":
        return True
    if value == "false":
        return False
    if value == "null":
        return None

    number = _as_number(value)
    if number is not None:
        return number

    if _JSON_PREFIX.match(value):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value

    return value
