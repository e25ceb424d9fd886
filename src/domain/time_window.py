"""Selection of submissions made during the previous calendar day."""

from datetime import date, datetime, timedelta


def target_day(now: datetime | None = None) -> date:
    """Calendar date of the day before ``now`` in local time."""
    now = now or datetime.now()
    return (now - timedelta(days=1)).date()


def is_in_target_window(epoch_seconds: int | float, now: datetime | None = None) -> bool:
    """
    Check whether a timestamp falls on the calendar day before ``now``.

    Only the year/month/day components of the local time are compared, so the
    window is the full wall-clock day rather than a rolling 24 hours.
    """
    submitted = datetime.fromtimestamp(int(epoch_seconds)).date()
    return submitted == target_day(now)
