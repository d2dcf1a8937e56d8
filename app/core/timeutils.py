from datetime import datetime
from typing import Optional, Tuple

import pytz

from app.core.config import settings
from app.core.exceptions import ValidationError


def split_timestamp(value: str, timezone: Optional[str] = None) -> Tuple[str, str]:
    """
    Splits one ISO timestamp into the stored `date` ('YYYY-MM-DD') and
    `time` ('HH:MM:SS') columns.

    Aware timestamps are converted into the configured timezone first;
    naive ones are taken as already being in it. Both parts always come
    from the same converted value.
    """
    try:
        dt = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid appointment date: {value!r}")

    tz = pytz.timezone(timezone or settings.timezone)
    if dt.tzinfo is None:
        dt = tz.localize(dt)
    else:
        dt = dt.astimezone(tz)

    return dt.strftime("%Y-%m-%d"), dt.strftime("%H:%M:%S")
