import math
from datetime import timezone as dt_tz

def to_utc_iso(dt):
    if dt is None:
        return None
    return dt.astimezone(dt_tz.utc).isoformat()

def minutes_until(dt, now):
    """Whole minutes from ``now`` until ``dt``, rounded up; None when ``dt`` is None."""
    if dt is None:
        return None
    return max(0, math.ceil((dt - now).total_seconds() / 60))
