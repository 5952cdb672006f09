from datetime import datetime, timezone


# Simply returns the current local time as an ISO8601 string with timezone offset.
def now_iso():
    return datetime.now().astimezone().isoformat()


# Current instant as an aware UTC datetime. This is the default clock everything elapsed-day related runs on.
def utc_now():
    return datetime.now(timezone.utc)
