import re
from dataclasses import dataclass
from datetime import datetime, timezone
from countup.common.logger import log
from countup.util.misc import utc_now

# Date counted from when no --date is given.
DEFAULT_START = "2022-11-25"
DATE_FORMAT = "%Y-%m-%d"
# strptime alone would also take unpadded input like 2022-1-5
_DATE_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2}")


# Raised when a start date can't be used, either because it doesn't parse or because it's in the future.
class InvalidInput(ValueError):

    def __init__(self, text, reason):
        super().__init__(f"Invalid date '{text}': {reason}")
        self.text = text
        self.reason = reason


# Everything the controller needs to know about where counting starts.
@dataclass(frozen=True)
class ResolvedStart:
    start_instant: datetime
    total_days: int
    label: str


# Parses a YYYY-MM-DD string into midnight UTC of that day.
def parse_start_date(text):
    try:
        text_clean = text.strip()
        if not _DATE_SHAPE.fullmatch(text_clean):
            raise ValueError(text_clean)
        parsed = datetime.strptime(text_clean, DATE_FORMAT)
    except (AttributeError, ValueError):
        raise InvalidInput(text, "expected format YYYY-MM-DD") from None
    return parsed.replace(tzinfo=timezone.utc)


# Whole days between start and now. Clamped at zero so a clock that jumps backwards can't go negative.
def days_since(start, now=None):
    now = now or utc_now()
    return max(0, (now - start).days)


# DD/MM/YYYY, zero padded.
def format_label(start):
    return f"{start.day:02d}/{start.month:02d}/{start.year}"


# Turns the optional --date value into a ResolvedStart, falling back on DEFAULT_START. Raises InvalidInput for
# unparsable or future dates.
def resolve_start(date_text=None, now=None):
    now = now or utc_now()
    if date_text is None:
        start = parse_start_date(DEFAULT_START)
        log.debug(f"No date supplied, using default start {DEFAULT_START}")
    else:
        start = parse_start_date(date_text)
        if start > now:
            raise InvalidInput(date_text, "date must be in the past")

    resolved = ResolvedStart(
        start_instant=start,
        total_days=days_since(start, now),
        label=format_label(start),
    )
    log.info(f"Resolved start date {resolved.label}, {resolved.total_days} days elapsed")
    return resolved
