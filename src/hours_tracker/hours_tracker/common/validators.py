from __future__ import annotations

import math


def parse_hours(raw: object) -> float:
    """Coerce user input for the hours column.

    Empty, unparsable, negative and non-finite values all become 0.
    """
    if raw is None:
        return 0.0
    text = str(raw).strip()
    if not text:
        return 0.0
    try:
        value = float(text)
    except ValueError:
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value
