"""
Time-Slot Policy.

Pure checks over a lesson window ``[start, end)``:

    Alignment:  start.minute % 15 == 0, no seconds, no microseconds
    Duration:   15 min <= end - start <= 240 min, end strictly after start

The policy works on whatever representation the timestamps are stored in
(naive UTC in this project) and never converts timezones itself. Use
``to_storage`` before validating values that came from the outside world.
"""

from datetime import datetime, timedelta, timezone

from lessonbook.errors import SlotValidationError

SLOT_INCREMENT_MINUTES = 15
MIN_DURATION_MINUTES = 15
MAX_DURATION_MINUTES = 240

RULE_ALIGNMENT = "alignment"
RULE_END_BEFORE_START = "end-before-start"
RULE_TOO_SHORT = "duration-too-short"
RULE_TOO_LONG = "duration-too-long"


def to_storage(ts: datetime) -> datetime:
    """Normalize a timestamp to the stored representation (naive UTC)."""
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(timezone.utc).replace(tzinfo=None)


def is_aligned_slot(ts: datetime) -> bool:
    """True iff ``ts`` falls on a clean 15-minute boundary."""
    return (
        ts.minute % SLOT_INCREMENT_MINUTES == 0
        and ts.second == 0
        and ts.microsecond == 0
    )


def duration_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes between start and end (floored)."""
    return int((end - start).total_seconds() // 60)


def is_valid_duration(start: datetime, end: datetime) -> bool:
    """True iff end is after start and the window lasts 15 min to 4 hours."""
    if end <= start:
        return False
    length = end - start
    return (
        timedelta(minutes=MIN_DURATION_MINUTES)
        <= length
        <= timedelta(minutes=MAX_DURATION_MINUTES)
    )


def validate_slot(start: datetime, end: datetime) -> None:
    """Raise SlotValidationError naming the first rule the window breaks.

    Rules are checked in order: alignment, end-before-start,
    duration-too-short, duration-too-long.
    """
    if not is_aligned_slot(start):
        raise SlotValidationError(
            RULE_ALIGNMENT,
            "Start time must be on a 15-minute increment "
            "(e.g., 14:00, 14:15, 14:30, 14:45) with no seconds or milliseconds",
        )
    if end <= start:
        raise SlotValidationError(RULE_END_BEFORE_START, "End time must be after start time")

    length = end - start
    if length < timedelta(minutes=MIN_DURATION_MINUTES):
        raise SlotValidationError(
            RULE_TOO_SHORT,
            f"Lesson must last at least {MIN_DURATION_MINUTES} minutes",
        )
    if length > timedelta(minutes=MAX_DURATION_MINUTES):
        raise SlotValidationError(
            RULE_TOO_LONG,
            f"Lesson must not last longer than {MAX_DURATION_MINUTES // 60} hours",
        )


def utcnow() -> datetime:
    """Current time in the stored representation."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
