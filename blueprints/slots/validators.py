from __future__ import annotations
import re
from datetime import time

TIME_RANGE_RE = re.compile(r"^(\d{2}):(\d{2})-(\d{2}):(\d{2})$")

def parse_time_range(value: str) -> tuple[time, time]:
    m = TIME_RANGE_RE.match(value or "")
    if not m:
        raise ValueError("time_range must look like HH:MM-HH:MM")
    h1, m1, h2, m2 = (int(x) for x in m.groups())
    try:
        start, end = time(h1, m1), time(h2, m2)
    except ValueError:
        raise ValueError("time_range has an invalid clock value") from None
    if end <= start:
        raise ValueError("end time must be > start time")
    return start, end

def ensure_time_range(value: str):
    parse_time_range(value)
