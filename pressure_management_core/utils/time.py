import datetime
import typing as t

import dateutil.parser

SECONDS_PER_DAY = 86400


def clock_to_seconds(value: t.Union[str, int, float]) -> int:
    """Convert a clock time into seconds after midnight. ``value`` can be one of the following

        * A number of seconds (eg. ``3600``)
        * A `dateutil` parsable time of day (eg. ``'01:00'``, ``'5:30:15'``, ``'1 AM'``)

    A string representing a single integer is interpreted as a number of seconds
    """
    if isinstance(value, (int, float)):
        return int(value)
    try:
        return int(value)
    except ValueError:
        pass
    parsed = dateutil.parser.parse(value, default=datetime.datetime(2000, 1, 1))
    return parsed.hour * 3600 + parsed.minute * 60 + parsed.second


def format_clock_time(seconds: t.Union[int, float]) -> str:
    """Format an elapsed simulation time as ``h:mm:ss``. Hours are not wrapped at 24"""
    seconds = int(seconds)
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"


def time_of_day(seconds: t.Union[int, float]) -> int:
    return int(seconds) % SECONDS_PER_DAY
