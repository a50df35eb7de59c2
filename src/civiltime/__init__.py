# The MIT License (MIT)
#
# Copyright (c) Arie Bovenberg
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

# Maintainer's notes:
#
# - Why is everything in one file?
#   - Flat is better than nested
#   - It prevents circular imports since the classes 'know' about each other
#   - It's easier to vendor (i.e. copy-paste) this library if needed
# - Every date/time type stores exactly one integer (days or milliseconds).
#   All calendar fields are derived from it on access and never cached.
# - There is some code duplication in the field accessors of the offset
#   and zoned types. This is intentional: each type has its own projection.
from __future__ import annotations

__version__ = "0.1.0"

import enum
from abc import ABC, abstractmethod
from datetime import (
    datetime as _datetime,
    timedelta as _timedelta,
    timezone as _timezone,
    tzinfo as _tzinfo,
)
from time import time_ns as _time_ns
from typing import TYPE_CHECKING, ClassVar, no_type_check, overload
from zoneinfo import ZoneInfo

__all__ = [
    # calendar calculus
    "is_leap_year",
    "days_in_month",
    "days_in_year",
    "ymd_to_days",
    "days_to_ymd",
    "yd_to_days",
    "yearday_of",
    "weekday_of",
    "Month",
    "Weekday",
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "SUNDAY",
    "MIN_YEAR",
    "MAX_YEAR",
    # types
    "DatePiece",
    "TimePiece",
    "Duration",
    "LocalDate",
    "LocalTime",
    "LocalDateTime",
    "Instant",
    "Offset",
    "AwareDateTime",
    "OffsetDateTime",
    "TimeZone",
    "ZonedDateTime",
    # errors
    "OutOfRange",
    "SignMismatch",
    "DateFieldError",
]


MIN_YEAR = -999_999
MAX_YEAR = 999_999

_MS_PER_SECOND = 1_000
_MS_PER_MINUTE = 60_000
_MS_PER_HOUR = 3_600_000
_MS_PER_DAY = 86_400_000
_MIN_SECONDS = -(2**63)
_MAX_SECONDS = 2**63 - 1
_MAX_OFFSET_SECONDS = 86_400

# Index 0 is unused so that months can index these directly
_DAYS_IN_MONTH = (0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_DAYS_BEFORE_MONTH = (0, 0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)

# Day numbers count from 1970-01-01 (day 0). The ordinal of that date,
# counting 0001-01-01 as day 1, converts between the two systems.
_EPOCH_ORDINAL = 719_163
_DAYS_IN_400Y = 146_097
_DAYS_IN_100Y = 36_524
_DAYS_IN_4Y = 1_461


class _ImmutableBase:
    __slots__ = ()

    # Immutable classes don't need to be copied
    @no_type_check
    def __copy__(self):
        return self

    @no_type_check
    def __deepcopy__(self, _):
        return self


class Month(enum.IntEnum):
    """The months of the year; ``.value`` is the ordinal (January is 1)"""

    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    def length(self, leap_year: bool) -> int:
        """The number of days in this month

        Example
        -------

        >>> Month.FEBRUARY.length(leap_year=True)
        29
        >>> Month.APRIL.length(leap_year=True)
        30

        """
        return _DAYS_IN_MONTH[self] + (self is Month.FEBRUARY and leap_year)

    def days_before(self, leap_year: bool) -> int:
        """The number of days in the year preceding the first of this month"""
        return _DAYS_BEFORE_MONTH[self] + (self > Month.FEBRUARY and leap_year)


class Weekday(enum.Enum):
    """The days of the week; ``.value`` corresponds with ISO numbering."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7


MONDAY = Weekday.MONDAY
TUESDAY = Weekday.TUESDAY
WEDNESDAY = Weekday.WEDNESDAY
THURSDAY = Weekday.THURSDAY
FRIDAY = Weekday.FRIDAY
SATURDAY = Weekday.SATURDAY
SUNDAY = Weekday.SUNDAY


def is_leap_year(year: int) -> bool:
    """Whether the year is a leap year in the proleptic Gregorian calendar

    Example
    -------

    >>> is_leap_year(2000), is_leap_year(1900), is_leap_year(2024)
    (True, False, True)

    """
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def days_in_month(year: int, month: int) -> int:
    """The number of days in the given month of the given year

    Raises
    ------
    OutOfRange
        If the month isn't in 1..12
    """
    return Month(_check_month(month)).length(is_leap_year(year))


def ymd_to_days(year: int, month: int, day: int) -> int:
    """The number of days since 1970-01-01 for the given date.
    Inverse of :func:`days_to_ymd`.

    Example
    -------

    >>> ymd_to_days(1970, 1, 1)
    0
    >>> ymd_to_days(2000, 3, 1)
    11017
    >>> ymd_to_days(1969, 12, 31)
    -1

    Raises
    ------
    OutOfRange
        If any of the fields is invalid. The day is validated against
        the length of the month in that particular year.
    """
    _check_ymd(year, month, day)
    return _ymd_to_days_unchecked(year, month, day)


def days_to_ymd(days: int) -> tuple[int, int, int]:
    """The ``(year, month, day)`` for the given number of days since
    1970-01-01. Inverse of :func:`ymd_to_days`.

    Example
    -------

    >>> days_to_ymd(0)
    (1970, 1, 1)
    >>> days_to_ymd(11016)
    (2000, 2, 29)

    """
    # Work with the zero-based offset from 0001-01-01. The pattern of leap
    # years repeats every 400 years, so find the closest 400-year boundary
    # at or before the date and continue from there.
    # Floor division keeps the remainder positive for dates before year 1.
    n = days + _EPOCH_ORDINAL - 1
    n400, n = divmod(n, _DAYS_IN_400Y)
    year = n400 * 400 + 1
    n100, n = divmod(n, _DAYS_IN_100Y)
    n4, n = divmod(n, _DAYS_IN_4Y)
    n1, n = divmod(n, 365)
    year += n100 * 100 + n4 * 4 + n1
    # n1 (or n100) of 4 means the last day of a leap year ending a cycle
    if n1 == 4 or n100 == 4:
        return year - 1, 12, 31

    leap = n1 == 3 and (n4 != 24 or n100 == 3)
    # This estimate is either exact or one too large
    month = (n + 50) >> 5
    preceding = _DAYS_BEFORE_MONTH[month] + (month > 2 and leap)
    if preceding > n:
        month -= 1
        preceding -= _DAYS_IN_MONTH[month] + (month == 2 and leap)
    return year, month, n - preceding + 1


def yd_to_days(year: int, yearday: int) -> int:
    """The number of days since 1970-01-01 for the given day of the year

    Example
    -------

    >>> yd_to_days(1970, 1)
    0
    >>> yd_to_days(2024, 366)
    20088

    Raises
    ------
    OutOfRange
        If the year or the day of the year is out of range
    """
    _check_year(year)
    n = days_in_year(year)
    if not 1 <= yearday <= n:
        raise OutOfRange.for_field("yearday", yearday, 1, n)
    return _days_before_year(year) + yearday - _EPOCH_ORDINAL


def yearday_of(year: int, month: int, day: int) -> int:
    """The day of the year (1-366) of the given date

    Example
    -------

    >>> yearday_of(2023, 3, 1)
    60
    >>> yearday_of(2024, 3, 1)
    61

    """
    _check_ymd(year, month, day)
    return Month(month).days_before(is_leap_year(year)) + day


def weekday_of(days: int) -> Weekday:
    """The day of the week of the given number of days since 1970-01-01

    Example
    -------

    >>> weekday_of(0)
    Weekday.THURSDAY

    """
    # 1970-01-01 was a Thursday
    return Weekday((days + 3) % 7 + 1)


class DatePiece(ABC):
    """The calendar fields of something that has a date.

    Each implementation derives the fields in its own way, but the
    values always follow the proleptic Gregorian calendar.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def year(self) -> int: ...

    @property
    @abstractmethod
    def month(self) -> Month: ...

    @property
    @abstractmethod
    def day(self) -> int:
        """The day of the month, starting at 1"""

    @property
    @abstractmethod
    def yearday(self) -> int:
        """The day of the year, from 1 to 365 (366 in leap years)"""

    @property
    @abstractmethod
    def weekday(self) -> Weekday: ...


class TimePiece(ABC):
    """The time-of-day fields of something that has a time"""

    __slots__ = ()

    @property
    @abstractmethod
    def hour(self) -> int: ...

    @property
    @abstractmethod
    def minute(self) -> int: ...

    @property
    @abstractmethod
    def second(self) -> int: ...

    @property
    @abstractmethod
    def millisecond(self) -> int: ...


class Duration(_ImmutableBase):
    """A signed span of time with millisecond precision.

    Internally, the duration is whole seconds plus a millisecond remainder.
    The remainder always has the same sign as the seconds, so -1.5 seconds
    is stored as -1 seconds and -500 milliseconds.

    Example
    -------

    >>> d = Duration(hours=1, minutes=30)
    Duration(01:30:00)
    >>> d.lengths()
    (5400, 0)
    >>> Duration.of_ms(-1, -500).in_milliseconds()
    -1500

    Note
    ----
    The seconds are bounded to the signed 64-bit range.
    Going beyond it raises :class:`OverflowError`.
    """

    __slots__ = ("_secs", "_ms")

    ZERO: ClassVar[Duration]
    """A duration of zero"""

    def __init__(
        self,
        *,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        milliseconds: int = 0,
    ) -> None:
        self._secs, self._ms = _split_ms(
            days * _MS_PER_DAY
            + hours * _MS_PER_HOUR
            + minutes * _MS_PER_MINUTE
            + seconds * _MS_PER_SECOND
            + milliseconds
        )

    @classmethod
    def of(cls, seconds: int, /) -> Duration:
        """Create a duration of the given number of seconds"""
        return cls._from_ms_unchecked(seconds * _MS_PER_SECOND)

    @classmethod
    def of_ms(cls, seconds: int, milliseconds: int, /) -> Duration:
        """Create a duration from seconds and milliseconds.
        The two parts are normalized, so they may have any sign.

        Example
        -------

        >>> Duration.of_ms(1, 1500)
        Duration(00:00:02.500)
        >>> Duration.of_ms(-2, 500)
        Duration(-00:00:01.500)

        """
        return cls._from_ms_unchecked(seconds * _MS_PER_SECOND + milliseconds)

    @classmethod
    def _from_ms_unchecked(cls, total: int) -> Duration:
        self = _object_new(cls)
        self._secs, self._ms = _split_ms(total)
        return self

    def lengths(self) -> tuple[int, int]:
        """The ``(seconds, milliseconds)`` making up this duration.
        Both parts always carry the same sign.
        """
        return self._secs, self._ms

    def in_seconds(self) -> float:
        """The total duration in seconds

        Example
        -------

        >>> Duration(minutes=2, seconds=1, milliseconds=500).in_seconds()
        121.5

        """
        return self.in_milliseconds() / _MS_PER_SECOND

    def in_milliseconds(self) -> int:
        return self._secs * _MS_PER_SECOND + self._ms

    def __eq__(self, other: object) -> bool:
        """Compare for equality

        Example
        -------

        >>> d = Duration(hours=1, minutes=30)
        >>> d == Duration(minutes=90)
        True
        >>> d == Duration(hours=2)
        False

        """
        if not isinstance(other, Duration):
            return NotImplemented
        return self._secs == other._secs and self._ms == other._ms

    def __hash__(self) -> int:
        return hash((self._secs, self._ms))

    def __lt__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.in_milliseconds() < other.in_milliseconds()

    def __le__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.in_milliseconds() <= other.in_milliseconds()

    def __gt__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.in_milliseconds() > other.in_milliseconds()

    def __ge__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.in_milliseconds() >= other.in_milliseconds()

    def __bool__(self) -> bool:
        """True if the duration is non-zero"""
        return bool(self._secs or self._ms)

    def __add__(self, other: Duration) -> Duration:
        """Add two durations together

        Example
        -------

        >>> Duration.of_ms(1, 700) + Duration.of_ms(0, 400)
        Duration(00:00:02.100)

        """
        if not isinstance(other, Duration):
            return NotImplemented
        return self._from_ms_unchecked(
            self.in_milliseconds() + other.in_milliseconds()
        )

    def __sub__(self, other: Duration) -> Duration:
        """Subtract two durations

        Example
        -------

        >>> Duration.of(1) - Duration.of_ms(1, 500)
        Duration(-00:00:00.500)

        """
        if not isinstance(other, Duration):
            return NotImplemented
        return self._from_ms_unchecked(
            self.in_milliseconds() - other.in_milliseconds()
        )

    def __mul__(self, other: int) -> Duration:
        """Multiply by a whole number

        Example
        -------

        >>> Duration.of_ms(1, 500) * 3
        Duration(00:00:04.500)

        """
        if not isinstance(other, int) or isinstance(other, bool):
            return NotImplemented
        return self._from_ms_unchecked(self.in_milliseconds() * other)

    __rmul__ = __mul__

    def __neg__(self) -> Duration:
        return self._from_ms_unchecked(-self.in_milliseconds())

    def __abs__(self) -> Duration:
        return self._from_ms_unchecked(abs(self.in_milliseconds()))

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Convert to a tuple of (hours, minutes, seconds, milliseconds)

        Example
        -------

        >>> Duration(hours=1, minutes=30, milliseconds=5_090).as_tuple()
        (1, 30, 5, 90)
        >>> Duration(minutes=-90).as_tuple()
        (-1, -30, 0, 0)

        """
        hours, rem = divmod(abs(self._secs), 3_600)
        mins, secs = divmod(rem, 60)
        ms = abs(self._ms)
        return (
            (hours, mins, secs, ms)
            if self._secs >= 0 and self._ms >= 0
            else (-hours, -mins, -secs, -ms)
        )

    def canonical_format(self) -> str:
        """The duration in canonical format.

        The format is:

        .. code-block:: text

           HH:MM:SS(.fff)

        For example:

        .. code-block:: text

           01:24:45.089

        """
        hrs, mins, secs, ms = abs(self).as_tuple()
        return (
            f"{'-' * (self.in_milliseconds() < 0)}{hrs:02}:{mins:02}:{secs:02}"
            + f".{ms:03}" * bool(ms)
        )

    __str__ = canonical_format

    def py_timedelta(self) -> _timedelta:
        """Convert to a :class:`~datetime.timedelta`"""
        return _timedelta(milliseconds=self.in_milliseconds())

    def __repr__(self) -> str:
        return f"Duration({self})"


def _split_ms(total: int) -> tuple[int, int]:
    # divmod on the absolute value, so the remainder takes the sign
    # of the whole seconds instead of always being positive
    secs, ms = divmod(abs(total), _MS_PER_SECOND)
    if total < 0:
        secs, ms = -secs, -ms
    if not _MIN_SECONDS <= secs <= _MAX_SECONDS:
        raise OverflowError("duration out of range")
    return secs, ms


class LocalDate(_ImmutableBase, DatePiece):
    """A calendar date without a time or UTC offset

    Example
    -------

    >>> d = LocalDate(2021, 1, 2)
    LocalDate(2021-01-02)
    >>> d.weekday
    Weekday.SATURDAY
    >>> LocalDate(2023, 2, 29)
    Traceback (most recent call last):
      ...
    OutOfRange: day must be in 1..28, got 29

    """

    __slots__ = ("_days",)

    MIN: ClassVar[LocalDate]
    MAX: ClassVar[LocalDate]

    def __init__(self, year: int, month: int, day: int) -> None:
        self._days = ymd_to_days(year, month, day)

    @classmethod
    def yd(cls, year: int, yearday: int, /) -> LocalDate:
        """Create from a year and a day of the year

        Example
        -------

        >>> LocalDate.yd(2024, 60)
        LocalDate(2024-02-29)

        """
        return cls._from_days_unchecked(yd_to_days(year, yearday))

    @classmethod
    def from_days(cls, days: int, /) -> LocalDate:
        """Create from the number of days since 1970-01-01.
        Inverse of :meth:`days_since_epoch`.
        """
        if not _MIN_DAYS <= days <= _MAX_DAYS:
            raise OutOfRange.for_field("days", days, _MIN_DAYS, _MAX_DAYS)
        return cls._from_days_unchecked(days)

    @classmethod
    def _from_days_unchecked(cls, days: int) -> LocalDate:
        self = _object_new(cls)
        self._days = days
        return self

    def days_since_epoch(self) -> int:
        return self._days

    @property
    def year(self) -> int:
        return days_to_ymd(self._days)[0]

    @property
    def month(self) -> Month:
        return Month(days_to_ymd(self._days)[1])

    @property
    def day(self) -> int:
        return days_to_ymd(self._days)[2]

    @property
    def yearday(self) -> int:
        return _yearday_from_days(self._days)

    @property
    def weekday(self) -> Weekday:
        return weekday_of(self._days)

    def canonical_format(self) -> str:
        """The date in canonical format.
        Years outside 0-9999 are written with a sign and six digits.

        Example
        -------

        >>> LocalDate(2021, 1, 2).canonical_format()
        '2021-01-02'
        >>> LocalDate(-44, 3, 15).canonical_format()
        '-000044-03-15'

        """
        return _format_ymd(*days_to_ymd(self._days))

    __str__ = canonical_format

    def __repr__(self) -> str:
        return f"LocalDate({self})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LocalDate):
            return NotImplemented
        return self._days == other._days

    def __hash__(self) -> int:
        return hash(self._days)

    def __lt__(self, other: LocalDate) -> bool:
        if not isinstance(other, LocalDate):
            return NotImplemented
        return self._days < other._days

    def __le__(self, other: LocalDate) -> bool:
        if not isinstance(other, LocalDate):
            return NotImplemented
        return self._days <= other._days

    def __gt__(self, other: LocalDate) -> bool:
        if not isinstance(other, LocalDate):
            return NotImplemented
        return self._days > other._days

    def __ge__(self, other: LocalDate) -> bool:
        if not isinstance(other, LocalDate):
            return NotImplemented
        return self._days >= other._days

    def __reduce__(self) -> tuple[object, ...]:
        return (_unpkl_date, (self._days,))


def _unpkl_date(days: int) -> LocalDate:
    return LocalDate._from_days_unchecked(days)


class LocalTime(_ImmutableBase, TimePiece):
    """A time of day, with millisecond precision

    Example
    -------

    >>> t = LocalTime(13, 30, 5, 250)
    LocalTime(13:30:05.250)
    >>> t.minute
    30

    """

    __slots__ = ("_ms",)

    MIDNIGHT: ClassVar[LocalTime]

    def __init__(
        self, hour: int, minute: int = 0, second: int = 0, millisecond: int = 0
    ) -> None:
        if not 0 <= hour <= 23:
            raise OutOfRange.for_field("hour", hour, 0, 23)
        if not 0 <= minute <= 59:
            raise OutOfRange.for_field("minute", minute, 0, 59)
        if not 0 <= second <= 59:
            raise OutOfRange.for_field("second", second, 0, 59)
        if not 0 <= millisecond <= 999:
            raise OutOfRange.for_field("millisecond", millisecond, 0, 999)
        self._ms = (
            hour * _MS_PER_HOUR
            + minute * _MS_PER_MINUTE
            + second * _MS_PER_SECOND
            + millisecond
        )

    @classmethod
    def from_ms(cls, ms: int, /) -> LocalTime:
        """Create from the number of milliseconds since midnight"""
        if not 0 <= ms < _MS_PER_DAY:
            raise OutOfRange.for_field(
                "milliseconds since midnight", ms, 0, _MS_PER_DAY - 1
            )
        return cls._from_ms_unchecked(ms)

    @classmethod
    def _from_ms_unchecked(cls, ms: int) -> LocalTime:
        self = _object_new(cls)
        self._ms = ms
        return self

    def ms_since_midnight(self) -> int:
        return self._ms

    @property
    def hour(self) -> int:
        return self._ms // _MS_PER_HOUR

    @property
    def minute(self) -> int:
        return self._ms // _MS_PER_MINUTE % 60

    @property
    def second(self) -> int:
        return self._ms // _MS_PER_SECOND % 60

    @property
    def millisecond(self) -> int:
        return self._ms % _MS_PER_SECOND

    def canonical_format(self) -> str:
        """The time in ``HH:MM:SS(.fff)`` format"""
        return _format_time(self._ms)

    __str__ = canonical_format

    def __repr__(self) -> str:
        return f"LocalTime({self})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LocalTime):
            return NotImplemented
        return self._ms == other._ms

    def __hash__(self) -> int:
        return hash(self._ms)

    def __lt__(self, other: LocalTime) -> bool:
        if not isinstance(other, LocalTime):
            return NotImplemented
        return self._ms < other._ms

    def __le__(self, other: LocalTime) -> bool:
        if not isinstance(other, LocalTime):
            return NotImplemented
        return self._ms <= other._ms

    def __gt__(self, other: LocalTime) -> bool:
        if not isinstance(other, LocalTime):
            return NotImplemented
        return self._ms > other._ms

    def __ge__(self, other: LocalTime) -> bool:
        if not isinstance(other, LocalTime):
            return NotImplemented
        return self._ms >= other._ms

    def __reduce__(self) -> tuple[object, ...]:
        return (_unpkl_time, (self._ms,))


def _unpkl_time(ms: int) -> LocalTime:
    return LocalTime._from_ms_unchecked(ms)


class LocalDateTime(_ImmutableBase, DatePiece, TimePiece):
    """A wall clock reading: a date and a time, not associated with UTC.

    The value is a single count of milliseconds since 1970-01-01T00:00.
    Every field is derived from it on access.

    Example
    -------

    >>> d = LocalDateTime(2020, 2, 28, hour=23, minute=30)
    LocalDateTime(2020-02-28T23:30:00)
    >>> d + Duration(hours=1)
    LocalDateTime(2020-02-29T00:30:00)
    >>> (d + Duration(days=1, hours=1)).month
    Month.MARCH

    """

    __slots__ = ("_ms",)

    MIN: ClassVar[LocalDateTime]
    MAX: ClassVar[LocalDateTime]

    def __init__(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
    ) -> None:
        self._ms = (
            ymd_to_days(year, month, day) * _MS_PER_DAY
            + LocalTime(hour, minute, second, millisecond)._ms
        )

    @classmethod
    def combine(cls, date: LocalDate, time: LocalTime, /) -> LocalDateTime:
        """Create from a date and a time of day"""
        return cls._from_ms_unchecked(date._days * _MS_PER_DAY + time._ms)

    @classmethod
    def at(cls, seconds: int, /) -> LocalDateTime:
        """Create from the number of seconds since 1970-01-01T00:00

        Example
        -------

        >>> LocalDateTime.at(1_000_000_000)
        LocalDateTime(2001-09-09T01:46:40)

        """
        return cls.at_ms(seconds, 0)

    @classmethod
    def at_ms(cls, seconds: int, milliseconds: int, /) -> LocalDateTime:
        """Create from seconds and milliseconds since 1970-01-01T00:00

        Raises
        ------
        OutOfRange
            If the result falls outside the supported years
        """
        ms = seconds * _MS_PER_SECOND + milliseconds
        if not _MIN_MS <= ms <= _MAX_MS:
            raise OutOfRange.for_field(
                "seconds",
                seconds,
                _MIN_MS // _MS_PER_SECOND,
                _MAX_MS // _MS_PER_SECOND,
            )
        return cls._from_ms_unchecked(ms)

    @classmethod
    def from_instant(cls, instant: Instant, /) -> LocalDateTime:
        """The reading of a UTC clock at the given instant.
        Inverse of :meth:`to_instant`.
        """
        return cls._from_ms_unchecked(instant._ms)

    def to_instant(self) -> Instant:
        """The instant at which a UTC clock shows this reading"""
        return Instant._from_ms_unchecked(self._ms)

    @classmethod
    def _from_ms_unchecked(cls, ms: int) -> LocalDateTime:
        self = _object_new(cls)
        self._ms = ms
        return self

    def date(self) -> LocalDate:
        return LocalDate._from_days_unchecked(self._ms // _MS_PER_DAY)

    def time(self) -> LocalTime:
        return LocalTime._from_ms_unchecked(self._ms % _MS_PER_DAY)

    @property
    def year(self) -> int:
        return days_to_ymd(self._ms // _MS_PER_DAY)[0]

    @property
    def month(self) -> Month:
        return Month(days_to_ymd(self._ms // _MS_PER_DAY)[1])

    @property
    def day(self) -> int:
        return days_to_ymd(self._ms // _MS_PER_DAY)[2]

    @property
    def yearday(self) -> int:
        return _yearday_from_days(self._ms // _MS_PER_DAY)

    @property
    def weekday(self) -> Weekday:
        return weekday_of(self._ms // _MS_PER_DAY)

    @property
    def hour(self) -> int:
        return self._ms % _MS_PER_DAY // _MS_PER_HOUR

    @property
    def minute(self) -> int:
        return self._ms // _MS_PER_MINUTE % 60

    @property
    def second(self) -> int:
        return self._ms // _MS_PER_SECOND % 60

    @property
    def millisecond(self) -> int:
        return self._ms % _MS_PER_SECOND

    def __add__(self, other: Duration) -> LocalDateTime:
        """Add a duration to this datetime

        Example
        -------

        >>> LocalDateTime(2023, 12, 31, 23, 59, 59) + Duration.of(1)
        LocalDateTime(2024-01-01T00:00:00)

        Raises
        ------
        OverflowError
            If the result falls outside the supported years
        """
        if not isinstance(other, Duration):
            return NotImplemented
        return self._from_ms_unchecked(
            _check_ms(self._ms + other.in_milliseconds())
        )

    @overload
    def __sub__(self, other: LocalDateTime) -> Duration: ...

    @overload
    def __sub__(self, other: Duration) -> LocalDateTime: ...

    def __sub__(
        self, other: LocalDateTime | Duration
    ) -> LocalDateTime | Duration:
        """Subtract a duration, or another datetime to get the
        duration between them

        Example
        -------

        >>> LocalDateTime(2024, 3, 1) - LocalDateTime(2024, 2, 28)
        Duration(48:00:00)
        >>> LocalDateTime(2024, 3, 1) - Duration(hours=1)
        LocalDateTime(2024-02-29T23:00:00)

        """
        if isinstance(other, LocalDateTime):
            return Duration._from_ms_unchecked(self._ms - other._ms)
        elif isinstance(other, Duration):
            return self._from_ms_unchecked(
                _check_ms(self._ms - other.in_milliseconds())
            )
        return NotImplemented

    def canonical_format(self, sep: str = "T") -> str:
        """Format as ``YYYY-MM-DDTHH:MM:SS(.fff)``"""
        days, ms = divmod(self._ms, _MS_PER_DAY)
        return f"{_format_ymd(*days_to_ymd(days))}{sep}{_format_time(ms)}"

    __str__ = canonical_format

    def __repr__(self) -> str:
        return f"LocalDateTime({self})"

    def __eq__(self, other: object) -> bool:
        """Compare for equality. Two readings are equal if and only if
        they have the same underlying milliseconds value.
        """
        if not isinstance(other, LocalDateTime):
            return NotImplemented
        return self._ms == other._ms

    def __hash__(self) -> int:
        return hash(self._ms)

    def __lt__(self, other: LocalDateTime) -> bool:
        if not isinstance(other, LocalDateTime):
            return NotImplemented
        return self._ms < other._ms

    def __le__(self, other: LocalDateTime) -> bool:
        if not isinstance(other, LocalDateTime):
            return NotImplemented
        return self._ms <= other._ms

    def __gt__(self, other: LocalDateTime) -> bool:
        if not isinstance(other, LocalDateTime):
            return NotImplemented
        return self._ms > other._ms

    def __ge__(self, other: LocalDateTime) -> bool:
        if not isinstance(other, LocalDateTime):
            return NotImplemented
        return self._ms >= other._ms

    def __reduce__(self) -> tuple[object, ...]:
        return (_unpkl_local, (self._ms,))


def _unpkl_local(ms: int) -> LocalDateTime:
    return LocalDateTime._from_ms_unchecked(ms)


class Instant(_ImmutableBase):
    """A moment on the UTC time line, with millisecond precision

    Example
    -------

    >>> Instant.at(0)
    Instant(1970-01-01T00:00:00Z)
    >>> Instant.at_ms(-1, 250).seconds()
    -1

    """

    __slots__ = ("_ms",)

    @classmethod
    def at(cls, seconds: int, /) -> Instant:
        """Create from the number of seconds since the UNIX epoch"""
        return cls.at_ms(seconds, 0)

    @classmethod
    def at_ms(cls, seconds: int, milliseconds: int, /) -> Instant:
        """Create from seconds and milliseconds since the UNIX epoch

        Raises
        ------
        OutOfRange
            If the instant falls outside the supported years
        """
        return cls._from_ms_unchecked(
            LocalDateTime.at_ms(seconds, milliseconds)._ms
        )

    @classmethod
    def now(cls) -> Instant:
        """The current time, according to the system clock"""
        return cls._from_ms_unchecked(_time_ns() // 1_000_000)

    @classmethod
    def _from_ms_unchecked(cls, ms: int) -> Instant:
        self = _object_new(cls)
        self._ms = ms
        return self

    def seconds(self) -> int:
        """Whole seconds since the UNIX epoch, rounded down"""
        return self._ms // _MS_PER_SECOND

    def milliseconds(self) -> int:
        """The millisecond part, always in 0..999"""
        return self._ms % _MS_PER_SECOND

    def __add__(self, other: Duration) -> Instant:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._from_ms_unchecked(
            _check_ms(self._ms + other.in_milliseconds())
        )

    @overload
    def __sub__(self, other: Instant) -> Duration: ...

    @overload
    def __sub__(self, other: Duration) -> Instant: ...

    def __sub__(self, other: Instant | Duration) -> Instant | Duration:
        if isinstance(other, Instant):
            return Duration._from_ms_unchecked(self._ms - other._ms)
        elif isinstance(other, Duration):
            return self._from_ms_unchecked(
                _check_ms(self._ms - other.in_milliseconds())
            )
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self._ms == other._ms

    def __hash__(self) -> int:
        return hash(self._ms)

    def __lt__(self, other: Instant) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self._ms < other._ms

    def __le__(self, other: Instant) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self._ms <= other._ms

    def __gt__(self, other: Instant) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self._ms > other._ms

    def __ge__(self, other: Instant) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self._ms >= other._ms

    def __repr__(self) -> str:
        return f"Instant({LocalDateTime._from_ms_unchecked(self._ms)}Z)"

    def __reduce__(self) -> tuple[object, ...]:
        return (_unpkl_instant, (self._ms,))


def _unpkl_instant(ms: int) -> Instant:
    return Instant._from_ms_unchecked(ms)


class Offset(_ImmutableBase):
    """A fixed displacement from UTC, in seconds east of Greenwich.

    Either UTC itself (no offset at all) or a number of seconds within
    a day in either direction. Validation only happens when an offset is
    created. After that, it can be applied to any datetime without checks.

    Example
    -------

    >>> Offset.of_hours_and_minutes(5, 30)
    Offset(+05:30)
    >>> Offset.of_seconds(-3600).seconds
    -3600
    >>> Offset.utc()
    Offset(Z)

    Note
    ----
    The UTC offset and an offset of zero seconds shift datetimes
    in the same way, but they don't compare equal.
    """

    __slots__ = ("_secs",)

    def __init__(self, seconds: int | None = None, /) -> None:
        if seconds is not None and not (
            -_MAX_OFFSET_SECONDS <= seconds <= _MAX_OFFSET_SECONDS
        ):
            raise OutOfRange.for_field(
                "offset seconds",
                seconds,
                -_MAX_OFFSET_SECONDS,
                _MAX_OFFSET_SECONDS,
            )
        self._secs = seconds

    @classmethod
    def utc(cls) -> Offset:
        """The UTC offset. Shifting by it leaves a datetime unchanged."""
        return _UTC_OFFSET

    @classmethod
    def of_seconds(cls, seconds: int, /) -> Offset:
        """Create an offset of the given number of seconds.
        Both ``-86400`` and ``86400`` are accepted.

        Raises
        ------
        OutOfRange
            If the offset is more than a full day in either direction
        """
        return cls(seconds)

    @classmethod
    def of_hours_and_minutes(cls, hours: int, minutes: int, /) -> Offset:
        """Create an offset from hours and minutes.

        Both components must have the same sign, but either may be zero.

        Example
        -------

        >>> Offset.of_hours_and_minutes(-3, -45)
        Offset(-03:45)
        >>> Offset.of_hours_and_minutes(-4, 30)
        Traceback (most recent call last):
          ...
        SignMismatch: hours and minutes must have the same sign, got -4 and 30

        Raises
        ------
        SignMismatch
            If one component is positive and the other negative
        OutOfRange
            If hours is not within (-24, 24) or minutes not within (-60, 60)
        """
        if (hours > 0 and minutes < 0) or (hours < 0 and minutes > 0):
            raise SignMismatch.for_components(hours, minutes)
        elif not -24 < hours < 24:
            raise OutOfRange.for_field("hours", hours, -23, 23)
        elif not -60 < minutes < 60:
            raise OutOfRange.for_field("minutes", minutes, -59, 59)
        return cls.of_seconds(hours * 3_600 + minutes * 60)

    @property
    def seconds(self) -> int | None:
        """The offset in seconds, or ``None`` for :meth:`utc`"""
        return self._secs

    def is_utc(self) -> bool:
        return self._secs is None

    def _adjust(self, local: LocalDateTime) -> LocalDateTime:
        if self._secs is None:
            return local
        # may land just outside MIN/MAX, which the fields handle fine
        return LocalDateTime._from_ms_unchecked(
            local._ms + self._secs * _MS_PER_SECOND
        )

    def transform_date(self, local: LocalDateTime, /) -> OffsetDateTime:
        """Pair a datetime with this offset.

        The given datetime is kept as-is. Its fields are only shifted
        by the offset when they are read from the result.

        Example
        -------

        >>> d = Offset.of_hours_and_minutes(1, 0).transform_date(
        ...     LocalDateTime(2020, 8, 15, hour=23)
        ... )
        >>> d.hour, d.day
        (0, 16)
        >>> d.local
        LocalDateTime(2020-08-15T23:00:00)

        """
        return OffsetDateTime._from_parts_unchecked(local, self)

    def transform_fields(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
    ) -> OffsetDateTime:
        """Like :meth:`transform_date`, but build the datetime from fields

        Raises
        ------
        DateFieldError
            If a field is invalid. The original :class:`OutOfRange`
            is attached as ``__cause__``.
        """
        return self.transform_date(
            _local_from_fields(
                year, month, day, hour, minute, second, millisecond
            )
        )

    def canonical_format(self) -> str:
        """Format as ``Z`` for UTC, otherwise as ``±HH:MM(:SS)``"""
        if self._secs is None:
            return "Z"
        hrs, rem = divmod(abs(self._secs), 3_600)
        mins, secs = divmod(rem, 60)
        return (
            f"{'-' if self._secs < 0 else '+'}{hrs:02}:{mins:02}"
            + f":{secs:02}" * bool(secs)
        )

    __str__ = canonical_format

    def __repr__(self) -> str:
        return f"Offset({self})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Offset):
            return NotImplemented
        return self._secs == other._secs

    def __hash__(self) -> int:
        return hash(self._secs)

    def __reduce__(self) -> tuple[object, ...]:
        return (Offset, (self._secs,))


class AwareDateTime(_ImmutableBase, DatePiece, TimePiece):
    """Abstract base class for datetimes bound to UTC
    (:class:`OffsetDateTime` and :class:`ZonedDateTime`).

    These store an unadjusted :class:`LocalDateTime` which marks the moment
    in time. Their calendar fields are that moment, shifted by the offset
    that applies. Comparisons and arithmetic use the moment.
    """

    __slots__ = ("_local",)
    _local: LocalDateTime

    @property
    def local(self) -> LocalDateTime:
        """The stored datetime, without the offset applied"""
        return self._local

    @property
    @abstractmethod
    def offset(self) -> Offset:
        """The offset applied to the fields"""

    @abstractmethod
    def projected(self) -> LocalDateTime:
        """The wall clock reading: the stored datetime shifted by the offset.
        Its fields are equal to the fields of this datetime.
        """

    @abstractmethod
    def exact_eq(self, other: AwareDateTime, /) -> bool:
        """Compare objects by their values (instead of the moment they
        represent). Different types are never equal.

        Example
        -------

        >>> local = LocalDateTime(2020, 8, 15, hour=12)
        >>> a = Offset.of_seconds(3600).transform_date(local)
        >>> b = Offset.of_seconds(7200).transform_date(local)
        >>> a == b
        True  # the same moment
        >>> a.exact_eq(b)
        False  # different offsets
        """

    def to_instant(self) -> Instant:
        return self._local.to_instant()

    # Hiding __eq__ from mypy ensures that --strict-equality works
    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            """Check if two datetimes represent the same moment in time"""
            if not isinstance(other, AwareDateTime):
                return NotImplemented
            return self._local == other._local

    def __hash__(self) -> int:
        return hash(self._local)

    def __lt__(self, other: AwareDateTime) -> bool:
        if not isinstance(other, AwareDateTime):
            return NotImplemented
        return self._local < other._local

    def __le__(self, other: AwareDateTime) -> bool:
        if not isinstance(other, AwareDateTime):
            return NotImplemented
        return self._local <= other._local

    def __gt__(self, other: AwareDateTime) -> bool:
        if not isinstance(other, AwareDateTime):
            return NotImplemented
        return self._local > other._local

    def __ge__(self, other: AwareDateTime) -> bool:
        if not isinstance(other, AwareDateTime):
            return NotImplemented
        return self._local >= other._local

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self})"

    def __str__(self) -> str:
        return self.canonical_format()

    @abstractmethod
    def canonical_format(self, sep: str = "T") -> str: ...


class OffsetDateTime(AwareDateTime):
    """A datetime with a fixed UTC offset. Create one with
    :meth:`Offset.transform_date` or :meth:`Offset.transform_fields`.

    Example
    -------

    >>> offset = Offset.of_hours_and_minutes(-6, 0)
    >>> d = offset.transform_fields(2023, 4, 21, hour=15)
    OffsetDateTime(2023-04-21T09:00:00-06:00)
    >>> d.hour
    9

    Note
    ----
    The offset is applied again every time a field is read.
    Reading never changes the stored datetime.
    """

    __slots__ = ("_offset",)

    @classmethod
    def _from_parts_unchecked(
        cls, local: LocalDateTime, offset: Offset
    ) -> OffsetDateTime:
        self = _object_new(cls)
        self._local = local
        self._offset = offset
        return self

    @property
    def offset(self) -> Offset:
        return self._offset

    def projected(self) -> LocalDateTime:
        return self._offset._adjust(self._local)

    @property
    def year(self) -> int:
        return self._offset._adjust(self._local).year

    @property
    def month(self) -> Month:
        return self._offset._adjust(self._local).month

    @property
    def day(self) -> int:
        return self._offset._adjust(self._local).day

    @property
    def yearday(self) -> int:
        return self._offset._adjust(self._local).yearday

    @property
    def weekday(self) -> Weekday:
        return self._offset._adjust(self._local).weekday

    @property
    def hour(self) -> int:
        return self._offset._adjust(self._local).hour

    @property
    def minute(self) -> int:
        return self._offset._adjust(self._local).minute

    @property
    def second(self) -> int:
        return self._offset._adjust(self._local).second

    @property
    def millisecond(self) -> int:
        return self._offset._adjust(self._local).millisecond

    def with_offset(self, offset: Offset, /) -> OffsetDateTime:
        """The same moment, seen through another offset"""
        return offset.transform_date(self._local)

    def in_zone(self, zone: TimeZone, /) -> ZonedDateTime:
        """The same moment, seen through a timezone"""
        return zone.transform_date(self._local)

    def exact_eq(self, other: AwareDateTime, /) -> bool:
        return (
            type(other) is OffsetDateTime
            and self._local == other._local
            and self._offset == other._offset
        )

    def __add__(self, other: Duration) -> OffsetDateTime:
        """Add a duration, keeping the offset"""
        if not isinstance(other, Duration):
            return NotImplemented
        return self._from_parts_unchecked(self._local + other, self._offset)

    @overload
    def __sub__(self, other: AwareDateTime) -> Duration: ...

    @overload
    def __sub__(self, other: Duration) -> OffsetDateTime: ...

    def __sub__(
        self, other: AwareDateTime | Duration
    ) -> OffsetDateTime | Duration:
        """Subtract a duration, or another datetime to get the
        duration between the two moments

        Example
        -------

        >>> d = Offset.utc().transform_fields(2020, 8, 15, hour=23)
        >>> d - Offset.of_seconds(7200).transform_fields(2020, 8, 15, hour=20)
        Duration(03:00:00)

        """
        if isinstance(other, AwareDateTime):
            return self._local - other._local
        elif isinstance(other, Duration):
            return self._from_parts_unchecked(
                self._local - other, self._offset
            )
        return NotImplemented

    def canonical_format(self, sep: str = "T") -> str:
        """Format as ``YYYY-MM-DDTHH:MM:SS(.fff)±HH:MM``, or with a ``Z``
        suffix for UTC
        """
        return (
            self._offset._adjust(self._local).canonical_format(sep)
            + self._offset.canonical_format()
        )

    def __reduce__(self) -> tuple[object, ...]:
        return (_unpkl_offset, (self._local._ms, self._offset._secs))


def _unpkl_offset(ms: int, offset_secs: int | None) -> OffsetDateTime:
    return OffsetDateTime._from_parts_unchecked(
        LocalDateTime._from_ms_unchecked(ms), Offset(offset_secs)
    )


class TimeZone(_ImmutableBase):
    """A named zone, whose offset from UTC may vary over time.

    The rules come from the IANA database, through :mod:`zoneinfo`.
    Zones with the same key share their rule data.

    Example
    -------

    >>> ams = TimeZone("Europe/Amsterdam")
    >>> ams.offset_at(LocalDateTime(2024, 1, 1))
    Offset(+01:00)
    >>> ams.offset_at(LocalDateTime(2024, 7, 1))
    Offset(+02:00)

    Raises
    ------
    ~zoneinfo.ZoneInfoNotFoundError
        If the timezone ID is not found in the IANA database.
    """

    __slots__ = ("_key", "_tz")

    def __init__(self, key: str, /) -> None:
        self._tz: _tzinfo = ZoneInfo(key)
        self._key = key

    @classmethod
    def from_tzinfo(cls, tz: _tzinfo, /, name: str | None = None) -> TimeZone:
        """Wrap any :class:`~datetime.tzinfo` as a rule source.
        The name defaults to the zone's key, if it has one.
        """
        self = _object_new(cls)
        self._tz = tz
        self._key = name or getattr(tz, "key", None) or str(tz)
        return self

    @classmethod
    def utc(cls) -> TimeZone:
        return _UTC_ZONE

    @property
    def key(self) -> str:
        return self._key

    def offset_at(self, local: LocalDateTime, /) -> Offset:
        """The offset in effect at the moment marked by the datetime.

        Moments before or after the range of the rule source use its
        earliest or latest rule.
        """
        ms = min(max(local._ms, _RULES_MIN_MS), _RULES_MAX_MS)
        utcoffset = (
            (_EPOCH + _timedelta(milliseconds=ms))
            .astimezone(self._tz)
            .utcoffset()
        )
        return Offset.of_seconds(
            utcoffset // _timedelta(seconds=1)  # type: ignore[operator]
        )

    def _adjust(self, local: LocalDateTime) -> LocalDateTime:
        return self.offset_at(local)._adjust(local)

    def transform_date(self, local: LocalDateTime, /) -> ZonedDateTime:
        """Pair a datetime with this zone. As with
        :meth:`Offset.transform_date`, the datetime is kept as-is.
        """
        return ZonedDateTime._from_parts_unchecked(local, self)

    def transform_fields(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
    ) -> ZonedDateTime:
        """Like :meth:`transform_date`, but build the datetime from fields

        Raises
        ------
        DateFieldError
            If a field is invalid. The original :class:`OutOfRange`
            is attached as ``__cause__``.
        """
        return self.transform_date(
            _local_from_fields(
                year, month, day, hour, minute, second, millisecond
            )
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeZone):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __repr__(self) -> str:
        return f"TimeZone({self._key})"

    def __reduce__(self) -> tuple[object, ...]:
        return (_unpkl_zone, (self._tz, self._key))


def _unpkl_zone(tz: _tzinfo, key: str) -> TimeZone:
    return TimeZone.from_tzinfo(tz, key)


class ZonedDateTime(AwareDateTime):
    """A datetime in a named timezone. Create one with
    :meth:`TimeZone.transform_date` or :meth:`TimeZone.transform_fields`.

    The offset is looked up in the zone for the moment of the datetime,
    so it follows daylight saving time.

    Example
    -------

    >>> ams = TimeZone("Europe/Amsterdam")
    >>> ams.transform_fields(2024, 7, 1, hour=12)
    ZonedDateTime(2024-07-01T14:00:00+02:00[Europe/Amsterdam])
    >>> ams.transform_fields(2024, 1, 1, hour=12).hour
    13

    """

    __slots__ = ("_zone",)

    @classmethod
    def _from_parts_unchecked(
        cls, local: LocalDateTime, zone: TimeZone
    ) -> ZonedDateTime:
        self = _object_new(cls)
        self._local = local
        self._zone = zone
        return self

    @property
    def zone(self) -> TimeZone:
        return self._zone

    @property
    def offset(self) -> Offset:
        return self._zone.offset_at(self._local)

    def projected(self) -> LocalDateTime:
        return self._zone._adjust(self._local)

    @property
    def year(self) -> int:
        return self._zone._adjust(self._local).year

    @property
    def month(self) -> Month:
        return self._zone._adjust(self._local).month

    @property
    def day(self) -> int:
        return self._zone._adjust(self._local).day

    @property
    def yearday(self) -> int:
        return self._zone._adjust(self._local).yearday

    @property
    def weekday(self) -> Weekday:
        return self._zone._adjust(self._local).weekday

    @property
    def hour(self) -> int:
        return self._zone._adjust(self._local).hour

    @property
    def minute(self) -> int:
        return self._zone._adjust(self._local).minute

    @property
    def second(self) -> int:
        return self._zone._adjust(self._local).second

    @property
    def millisecond(self) -> int:
        return self._zone._adjust(self._local).millisecond

    def with_zone(self, zone: TimeZone, /) -> ZonedDateTime:
        """The same moment, seen through another timezone"""
        return zone.transform_date(self._local)

    def as_offset(self) -> OffsetDateTime:
        """The same moment, with the offset that applies to it fixed"""
        return self.offset.transform_date(self._local)

    def exact_eq(self, other: AwareDateTime, /) -> bool:
        return (
            type(other) is ZonedDateTime
            and self._local == other._local
            and self._zone == other._zone
        )

    def __add__(self, other: Duration) -> ZonedDateTime:
        """Add a duration. The offset of the result is looked up again,
        so it may differ if a transition is crossed.

        Example
        -------

        >>> ams = TimeZone("Europe/Amsterdam")
        >>> d = ams.transform_fields(2024, 3, 31, hour=0, minute=30)
        ZonedDateTime(2024-03-31T01:30:00+01:00[Europe/Amsterdam])
        >>> d + Duration(hours=1)
        ZonedDateTime(2024-03-31T03:30:00+02:00[Europe/Amsterdam])

        """
        if not isinstance(other, Duration):
            return NotImplemented
        return self._from_parts_unchecked(self._local + other, self._zone)

    @overload
    def __sub__(self, other: AwareDateTime) -> Duration: ...

    @overload
    def __sub__(self, other: Duration) -> ZonedDateTime: ...

    def __sub__(
        self, other: AwareDateTime | Duration
    ) -> ZonedDateTime | Duration:
        if isinstance(other, AwareDateTime):
            return self._local - other._local
        elif isinstance(other, Duration):
            return self._from_parts_unchecked(self._local - other, self._zone)
        return NotImplemented

    def canonical_format(self, sep: str = "T") -> str:
        """Format as ``YYYY-MM-DDTHH:MM:SS(.fff)±HH:MM[ZONE]``"""
        offset = self._zone.offset_at(self._local)
        return (
            f"{offset._adjust(self._local).canonical_format(sep)}"
            f"{offset.canonical_format()}[{self._zone.key}]"
        )

    def __reduce__(self) -> tuple[object, ...]:
        return (_unpkl_zoned, (self._local._ms, self._zone))


def _unpkl_zoned(ms: int, zone: TimeZone) -> ZonedDateTime:
    return ZonedDateTime._from_parts_unchecked(
        LocalDateTime._from_ms_unchecked(ms), zone
    )


class OutOfRange(ValueError):
    """A numeric field is outside of its admissible range"""

    field: str = ""
    """The name of the field that failed"""

    @staticmethod
    def for_field(field: str, value: int, lo: int, hi: int) -> OutOfRange:
        exc = OutOfRange(f"{field} must be in {lo}..{hi}, got {value}")
        exc.field = field
        return exc


class SignMismatch(ValueError):
    """Hours and minutes of an offset have opposite signs"""

    @staticmethod
    def for_components(hours: int, minutes: int) -> SignMismatch:
        return SignMismatch(
            "hours and minutes must have the same sign, "
            f"got {hours} and {minutes}"
        )


class DateFieldError(ValueError):
    """A datetime field is invalid. The :class:`OutOfRange` error
    for the specific field is attached as ``__cause__``.
    """


def _check_year(year: int) -> None:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise OutOfRange.for_field("year", year, MIN_YEAR, MAX_YEAR)


def _check_month(month: int) -> int:
    if not 1 <= month <= 12:
        raise OutOfRange.for_field("month", month, 1, 12)
    return month


def _check_ymd(year: int, month: int, day: int) -> None:
    _check_year(year)
    # validates the month before the day is looked at
    n = days_in_month(year, month)
    if not 1 <= day <= n:
        raise OutOfRange.for_field("day", day, 1, n)


def _check_ms(ms: int) -> int:
    if not _MIN_MS <= ms <= _MAX_MS:
        raise OverflowError("datetime out of range")
    return ms


def _days_before_year(year: int) -> int:
    # days from 0001-01-01 up to the first of the given year
    y = year - 1
    return y * 365 + y // 4 - y // 100 + y // 400


def _ymd_to_days_unchecked(year: int, month: int, day: int) -> int:
    return (
        _days_before_year(year)
        + _DAYS_BEFORE_MONTH[month]
        + (month > 2 and is_leap_year(year))
        + day
        - _EPOCH_ORDINAL
    )


def _yearday_from_days(days: int) -> int:
    return days - _ymd_to_days_unchecked(days_to_ymd(days)[0], 1, 1) + 1


def _local_from_fields(
    year: int,
    month: int,
    day: int,
    hour: int,
    minute: int,
    second: int,
    millisecond: int,
) -> LocalDateTime:
    try:
        return LocalDateTime(
            year, month, day, hour, minute, second, millisecond
        )
    except OutOfRange as e:
        raise DateFieldError(f"datetime field out of range: {e}") from e


def _format_ymd(year: int, month: int, day: int) -> str:
    y = f"{year:04}" if 0 <= year <= 9999 else f"{year:+07}"
    return f"{y}-{month:02}-{day:02}"


def _format_time(ms: int) -> str:
    hrs, rem = divmod(ms, _MS_PER_HOUR)
    mins, rem = divmod(rem, _MS_PER_MINUTE)
    secs, ms = divmod(rem, _MS_PER_SECOND)
    return f"{hrs:02}:{mins:02}:{secs:02}" + f".{ms:03}" * bool(ms)


# Helpers that pre-compute/lookup as much as possible
_object_new = object.__new__
_MIN_DAYS = _ymd_to_days_unchecked(MIN_YEAR, 1, 1)
_MAX_DAYS = _ymd_to_days_unchecked(MAX_YEAR, 12, 31)
_MIN_MS = _MIN_DAYS * _MS_PER_DAY
_MAX_MS = (_MAX_DAYS + 1) * _MS_PER_DAY - 1
_EPOCH = _datetime(1970, 1, 1, tzinfo=_timezone.utc)
# The standard library's rule lookups only work within years 1-9999.
# A year of margin keeps the conversion clear of its edges.
_RULES_MIN_MS = _ymd_to_days_unchecked(2, 1, 1) * _MS_PER_DAY
_RULES_MAX_MS = _ymd_to_days_unchecked(9998, 12, 31) * _MS_PER_DAY

Duration.ZERO = Duration()
LocalDate.MIN = LocalDate._from_days_unchecked(_MIN_DAYS)
LocalDate.MAX = LocalDate._from_days_unchecked(_MAX_DAYS)
LocalTime.MIDNIGHT = LocalTime._from_ms_unchecked(0)
LocalDateTime.MIN = LocalDateTime._from_ms_unchecked(_MIN_MS)
LocalDateTime.MAX = LocalDateTime._from_ms_unchecked(_MAX_MS)
_UTC_OFFSET = Offset()
_UTC_ZONE = TimeZone.from_tzinfo(_timezone.utc, "UTC")
