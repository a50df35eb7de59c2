import pickle

import pytest

from civiltime import (
    MONDAY,
    SUNDAY,
    DateFieldError,
    DatePiece,
    Duration,
    LocalDateTime,
    Month,
    Offset,
    OffsetDateTime,
    OutOfRange,
    SignMismatch,
    TimePiece,
    TimeZone,
    ZonedDateTime,
)

from .common import AlwaysEqual, NeverEqual

_FIELDS = (
    "year",
    "month",
    "day",
    "yearday",
    "weekday",
    "hour",
    "minute",
    "second",
    "millisecond",
)


def fields(d):
    return tuple(getattr(d, f) for f in _FIELDS)


class TestOfSeconds:

    def test_fixed_seconds(self):
        assert Offset.of_seconds(1234).seconds == 1234

    def test_too_large(self):
        with pytest.raises(OutOfRange):
            Offset.of_seconds(100_000)

    @pytest.mark.parametrize("seconds", [86_400, -86_400, 0, 1, -1, 19_800])
    def test_within_bounds(self, seconds):
        assert Offset.of_seconds(seconds).seconds == seconds

    @pytest.mark.parametrize("seconds", [86_401, -86_401, 10**9])
    def test_beyond_bounds(self, seconds):
        with pytest.raises(OutOfRange) as exc_info:
            Offset.of_seconds(seconds)
        assert exc_info.value.field == "offset seconds"

    def test_sweep(self):
        for seconds in range(-90_000, 90_001, 17):
            if -86_400 <= seconds <= 86_400:
                Offset.of_seconds(seconds)
            else:
                with pytest.raises(OutOfRange):
                    Offset.of_seconds(seconds)


class TestOfHoursAndMinutes:

    def test_fixed_hm(self):
        assert Offset.of_hours_and_minutes(5, 30).seconds == 19_800

    def test_fixed_hm_negative(self):
        assert Offset.of_hours_and_minutes(-3, -45).seconds == -13_500

    def test_fixed_hm_err(self):
        with pytest.raises(OutOfRange) as exc_info:
            Offset.of_hours_and_minutes(8, 60)
        assert exc_info.value.field == "minutes"

    def test_fixed_hm_signs(self):
        with pytest.raises(SignMismatch):
            Offset.of_hours_and_minutes(-4, 30)
        with pytest.raises(SignMismatch):
            Offset.of_hours_and_minutes(4, -30)

    def test_fixed_hm_signs_zero(self):
        assert Offset.of_hours_and_minutes(4, 0).seconds == 14_400
        assert Offset.of_hours_and_minutes(0, -30).seconds == -1_800
        assert Offset.of_hours_and_minutes(-4, 0).seconds == -14_400

    @pytest.mark.parametrize(
        "hours, minutes, field",
        [
            (24, 0, "hours"),
            (-24, 0, "hours"),
            (0, 60, "minutes"),
            (0, -60, "minutes"),
        ],
    )
    def test_out_of_range(self, hours, minutes, field):
        with pytest.raises(OutOfRange) as exc_info:
            Offset.of_hours_and_minutes(hours, minutes)
        assert exc_info.value.field == field

    def test_sign_checked_before_range(self):
        with pytest.raises(SignMismatch):
            Offset.of_hours_and_minutes(30, -90)

    def test_extremes(self):
        assert Offset.of_hours_and_minutes(23, 59).seconds == 86_340
        assert Offset.of_hours_and_minutes(-23, -59).seconds == -86_340


class TestOffset:

    def test_utc(self):
        utc = Offset.utc()
        assert utc.is_utc()
        assert utc.seconds is None
        assert utc is Offset.utc()
        assert not Offset.of_seconds(0).is_utc()

    def test_equality(self):
        assert Offset.of_seconds(3600) == Offset.of_hours_and_minutes(1, 0)
        assert hash(Offset.of_seconds(3600)) == hash(
            Offset.of_hours_and_minutes(1, 0)
        )
        assert Offset.of_seconds(3600) != Offset.of_seconds(3601)
        assert Offset.utc() != Offset.of_seconds(0)
        assert Offset.utc() == AlwaysEqual()
        assert Offset.utc() != NeverEqual()

    @pytest.mark.parametrize(
        "offset, expected",
        [
            (Offset.utc(), "Z"),
            (Offset.of_seconds(0), "+00:00"),
            (Offset.of_hours_and_minutes(5, 30), "+05:30"),
            (Offset.of_hours_and_minutes(-3, -45), "-03:45"),
            (Offset.of_seconds(-30), "-00:00:30"),
            (Offset.of_seconds(86_400), "+24:00"),
        ],
    )
    def test_canonical_format(self, offset, expected):
        assert offset.canonical_format() == expected
        assert repr(offset) == f"Offset({expected})"

    def test_pickle(self):
        for offset in (Offset.utc(), Offset.of_seconds(-19_800)):
            assert pickle.loads(pickle.dumps(offset)) == offset


class TestTransformDate:

    def test_fields_are_shifted(self):
        local = LocalDateTime(2020, 8, 15, hour=23, minute=30)
        d = Offset.of_hours_and_minutes(1, 0).transform_date(local)
        assert isinstance(d, OffsetDateTime)
        assert isinstance(d, DatePiece)
        assert isinstance(d, TimePiece)
        assert (d.year, d.month, d.day) == (2020, Month.AUGUST, 16)
        assert (d.hour, d.minute) == (0, 30)
        assert d.weekday is SUNDAY
        assert d.yearday == 229

    def test_negative_offset_crosses_year(self):
        local = LocalDateTime(2024, 1, 1, 2)
        d = Offset.of_hours_and_minutes(-5, 0).transform_date(local)
        assert (d.year, d.month, d.day, d.hour) == (2023, 12, 31, 21)
        assert d.yearday == 365

    def test_leaves_local_unchanged(self):
        local = LocalDateTime(2020, 2, 28, 23, 59, 59, 999)
        before = fields(local)
        d = Offset.of_seconds(86_400).transform_date(local)
        fields(d)
        assert fields(local) == before
        assert d.local is local
        assert d.local == LocalDateTime(2020, 2, 28, 23, 59, 59, 999)

    def test_utc_is_no_shift(self):
        local = LocalDateTime(2020, 2, 29, 12, 1, 2, 3)
        d = Offset.utc().transform_date(local)
        assert fields(d) == fields(local)
        assert d.projected() == local

    @pytest.mark.parametrize(
        "seconds", [-86_400, -19_800, -1, 0, 1, 3_600, 45_296, 86_400]
    )
    def test_fields_match_duration_shift(self, seconds):
        offset = Offset.of_seconds(seconds)
        start = LocalDateTime(1999, 12, 31, 12)
        for hours in range(0, 24 * 800, 37):
            t = start + Duration(hours=hours, milliseconds=hours)
            d = offset.transform_date(t)
            assert fields(d) == fields(t + Duration.of(seconds))
            assert d.projected() == t + Duration.of(seconds)

    def test_repeated_reads_are_idempotent(self):
        d = Offset.of_hours_and_minutes(-3, -45).transform_fields(
            2000, 3, 1, 1, 2, 3, 4
        )
        first = fields(d)
        for _ in range(5):
            assert fields(d) == first
        assert d.local == LocalDateTime(2000, 3, 1, 1, 2, 3, 4)
        assert first[:3] == (2000, 2, 29)

    def test_fields_past_the_edge(self):
        d = Offset.of_seconds(3_600).transform_date(LocalDateTime.MAX)
        assert (d.year, d.month, d.day) == (1_000_000, Month.JANUARY, 1)
        assert (d.hour, d.minute, d.second, d.millisecond) == (0, 59, 59, 999)
        assert str(d) == "+1000000-01-01T00:59:59.999+01:00"

        d = Offset.of_seconds(-1).transform_date(LocalDateTime.MIN)
        assert (d.year, d.month, d.day) == (-1_000_000, Month.DECEMBER, 31)
        assert (d.hour, d.minute, d.second) == (23, 59, 59)
        assert repr(d).startswith("OffsetDateTime(-1000000-12-31T23:59:59")


class TestTransformFields:

    def test_valid(self):
        d = Offset.of_hours_and_minutes(-6, 0).transform_fields(
            2023, 4, 21, hour=15
        )
        assert d.hour == 9
        assert d.local == LocalDateTime(2023, 4, 21, 15)

    @pytest.mark.parametrize(
        "args, field",
        [
            ((2023, 2, 29), "day"),
            ((2024, 2, 0), "day"),
            ((2024, 2, -1), "day"),
            ((2023, 13, 1), "month"),
            ((2023, 13, 0), "month"),
            ((2023, 1, 1, 24), "hour"),
            ((2023, 1, 1, 0, 0, 0, 1000), "millisecond"),
        ],
    )
    def test_invalid_field(self, args, field):
        with pytest.raises(DateFieldError) as exc_info:
            Offset.utc().transform_fields(*args)
        cause = exc_info.value.__cause__
        assert isinstance(cause, OutOfRange)
        assert cause.field == field


class TestOffsetDateTime:

    def test_offset_and_instant(self):
        local = LocalDateTime(2020, 8, 15, 12)
        offset = Offset.of_seconds(7_200)
        d = offset.transform_date(local)
        assert d.offset is offset
        assert d.to_instant() == local.to_instant()

    def test_equality_by_moment(self):
        local = LocalDateTime(2020, 8, 15, 12)
        a = Offset.of_seconds(3_600).transform_date(local)
        b = Offset.of_seconds(7_200).transform_date(local)
        assert a == b
        assert hash(a) == hash(b)
        assert not a.exact_eq(b)
        assert a.exact_eq(Offset.of_seconds(3_600).transform_date(local))
        assert a != Offset.utc().transform_date(local + Duration.of(1))
        assert not a == local

    def test_equality_with_zoned(self):
        local = LocalDateTime(2020, 8, 15, 12)
        a = Offset.utc().transform_date(local)
        z = TimeZone("Europe/Amsterdam").transform_date(local)
        assert a == z
        assert not a.exact_eq(z)

    def test_comparison(self):
        local = LocalDateTime(2020, 8, 15, 12)
        # the later moment may well have an earlier reading
        a = Offset.of_seconds(7_200).transform_date(local)
        b = Offset.of_seconds(-7_200).transform_date(local + Duration.of(1))
        assert b.hour < a.hour
        assert a < b
        assert a <= b
        assert b > a
        assert b >= a

    def test_with_offset(self):
        d = Offset.of_seconds(3_600).transform_fields(2020, 8, 15, 23)
        moved = d.with_offset(Offset.of_hours_and_minutes(-4, 0))
        assert moved == d
        assert moved.hour == 19
        assert d.hour == 0
        # re-projection doesn't accumulate anything
        again = moved.with_offset(Offset.of_seconds(3_600))
        assert again.exact_eq(d)

    def test_in_zone(self):
        d = Offset.utc().transform_fields(2024, 7, 1, 12)
        z = d.in_zone(TimeZone("Europe/Amsterdam"))
        assert isinstance(z, ZonedDateTime)
        assert z.hour == 14
        assert z == d

    def test_arithmetic(self):
        offset = Offset.of_hours_and_minutes(5, 30)
        d = offset.transform_fields(2024, 2, 28, 18)
        later = d + Duration(hours=1)
        assert later.offset is offset
        assert (later.month, later.day, later.hour, later.minute) == (
            2,
            29,
            0,
            30,
        )
        assert later - d == Duration(hours=1)
        assert later - Duration(hours=1) == d
        assert later - Duration(hours=1) is not d

        with pytest.raises(TypeError, match="unsupported operand"):
            d + 1  # type: ignore[operator]

        with pytest.raises(TypeError, match="unsupported operand"):
            d - 1  # type: ignore[operator]

    def test_weekday_periodic(self):
        d = Offset.of_hours_and_minutes(-9, -30).transform_fields(2000, 1, 1)
        week = Duration(days=7)
        for _ in range(500):
            assert (d + week).weekday is d.weekday
            d += Duration(hours=29)

    def test_weekday(self):
        d = Offset.of_seconds(-1).transform_fields(2024, 1, 2)
        assert d.weekday is MONDAY

    def test_canonical_format(self):
        d = Offset.of_hours_and_minutes(5, 30).transform_fields(
            2020, 8, 15, 12, 8, 30
        )
        assert str(d) == "2020-08-15T17:38:30+05:30"
        assert d.canonical_format(" ") == "2020-08-15 17:38:30+05:30"
        assert repr(d) == "OffsetDateTime(2020-08-15T17:38:30+05:30)"
        assert str(Offset.utc().transform_fields(2020, 8, 15, 12)) == (
            "2020-08-15T12:00:00Z"
        )

    def test_pickle(self):
        for offset in (Offset.utc(), Offset.of_seconds(-19_800)):
            d = offset.transform_fields(2020, 8, 15, 12, 8, 30, 5)
            unpickled = pickle.loads(pickle.dumps(d))
            assert unpickled.exact_eq(d)
