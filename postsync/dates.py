"""
Date parsing for front-matter timestamps.

Four layouts are recognised, selected by the end of the string:

    2023-05-01T12:00:00Z            RFC 3339, UTC
    2023-05-01 12:00:00 +0200 CET   numeric offset, literal zone name
    2023-05-01 12:00:00 +0200 CEST  same, summer time
    2023-05-01T12:00:00+02:00       everything else

A string that does not match its layout exactly is rejected; there is no
fallback to another layout.
"""
import re
from datetime import datetime, timedelta, timezone

from postsync.errors import DateParseError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Anything at or below this is treated as a zero/garbage date
MIN_EPOCH_MS = 1000

_DATE = r'(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})'
_TIME = r'(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})(?P<fraction>\.\d+)?'

RFC3339_UTC_RE = re.compile(rf'^{_DATE}T{_TIME}Z$', re.ASCII)
ZONE_NAME_RE = re.compile(
    rf'^{_DATE} {_TIME} (?P<sign>[+-])(?P<off_h>\d{{2}})(?P<off_m>\d{{2}}) (?P<zone>CEST|CET)$',
    re.ASCII,
)
NUMERIC_OFFSET_RE = re.compile(
    rf'^{_DATE}T{_TIME}(?P<sign>[+-])(?P<off_h>\d{{2}}):(?P<off_m>\d{{2}})$',
    re.ASCII,
)


def to_epoch_ms(dt: datetime) -> int:
    """Milliseconds since the Unix epoch, computed without float rounding."""
    return (dt - EPOCH) // timedelta(milliseconds=1)


def _offset(match) -> timezone:
    hours, minutes = int(match['off_h']), int(match['off_m'])
    if minutes > 59:
        raise ValueError(f"invalid offset minutes {minutes}")
    delta = timedelta(hours=hours, minutes=minutes)
    return timezone(-delta if match['sign'] == '-' else delta)


def _build(match, tz: timezone) -> datetime:
    fraction = match['fraction']
    # datetime only keeps microseconds, extra digits are dropped
    micro = int(fraction[1:7].ljust(6, '0')) if fraction else 0
    return datetime(
        int(match['year']), int(match['month']), int(match['day']),
        int(match['hour']), int(match['minute']), int(match['second']),
        micro, tzinfo=tz,
    )


def _parse_layout(raw: str, pattern, zone_suffix=None) -> datetime:
    match = pattern.match(raw)
    if not match:
        raise ValueError(f"does not match layout {pattern.pattern!r}")
    if zone_suffix and match['zone'] != zone_suffix:
        raise ValueError(f"expected zone {zone_suffix}")
    tz = timezone.utc if pattern is RFC3339_UTC_RE else _offset(match)
    return _build(match, tz)


def parse_date(raw: str) -> datetime:
    """Parse a front-matter date into an aware datetime.

    Raises DateParseError if the string does not fit the layout chosen by its
    suffix, or if the instant is not after the epoch plausibility threshold.
    """
    try:
        if raw.endswith('Z'):
            parsed = _parse_layout(raw, RFC3339_UTC_RE)
        elif raw.endswith('CEST'):
            parsed = _parse_layout(raw, ZONE_NAME_RE, 'CEST')
        elif raw.endswith('CET'):
            parsed = _parse_layout(raw, ZONE_NAME_RE, 'CET')
        else:
            parsed = _parse_layout(raw, NUMERIC_OFFSET_RE)
    except ValueError as e:
        raise DateParseError(f"Could not parse time {raw!r}: {e}") from e

    if to_epoch_ms(parsed) < MIN_EPOCH_MS:
        raise DateParseError(f"Implausible time {raw!r} (before epoch threshold)")
    return parsed
