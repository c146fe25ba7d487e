"""Single-string inspection of scalar values."""

from __future__ import annotations

import json


def inspect_primitive(value: object) -> str:
    """Return the display form of a scalar value.

    Strings are double-quoted with JSON escaping; everything else uses
    repr().
    """
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return repr(value)
