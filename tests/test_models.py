"""Tests für das Kernmodell: Uhrzeit, Wochentag, Slot-Schlüssel und Wochenplan."""

import dataclasses
import json

import pytest

from models.activity import EMPTY_ACTIVITY, is_empty
from models.clock_time import ClockTime
from models.errors import (
    AlreadyBookedError,
    GridOverflowError,
    InvalidSlotError,
    NotBookedError,
    SlotParseError,
    TimeParseError,
    TimeParseReason,
    WeekdayParseError,
    WeekPlanError,
)
from models.slot import SlotKey
from models.week_plan import PlanTable, WeekPlan
from models.weekday import Weekday


def _t(hour: int, minute: int) -> ClockTime:
    return ClockTime(hour, minute)


@pytest.fixture
def plan() -> WeekPlan:
    """Standard-Raster: 08:30, 90 min, 7 Slots (Ende 19:00)."""
    return WeekPlan.create(_t(8, 30), 90, 7)


# ─── UHRZEIT ──────────────────────────────────────────────────────────────────

class TestClockTime:
    def test_create_all_valid_values(self):
        """Jede Kombination 0–23 / 0–59 ist konstruierbar."""
        for hour in range(24):
            for minute in range(60):
                t = ClockTime.create(hour, minute)
                assert t is not None
                assert t.to_minutes() == hour * 60 + minute

    @pytest.mark.parametrize("hour,minute", [(24, 0), (0, 60), (99, 99), (-1, 0), (0, -1)])
    def test_create_invalid_returns_none(self, hour, minute):
        assert ClockTime.create(hour, minute) is None

    def test_direct_construction_rejects_invalid(self):
        """Ungültige Werte sind nicht darstellbar."""
        with pytest.raises(ValueError):
            ClockTime(24, 0)
        with pytest.raises(ValueError):
            ClockTime(12, 60)
        with pytest.raises(TypeError):
            ClockTime(True, 0)

    def test_immutable(self):
        t = _t(8, 30)
        with pytest.raises(dataclasses.FrozenInstanceError):
            t.hour = 9

    def test_add_minutes_carries_hour(self):
        assert _t(8, 30).add_minutes(90) == _t(10, 0)
        assert _t(8, 30).add_minutes(0) == _t(8, 30)
        assert _t(23, 0).add_minutes(59) == _t(23, 59)
        assert _t(0, 0).add_minutes(24 * 60 - 1) == _t(23, 59)

    def test_add_minutes_overflow_is_none(self):
        """Kein Umbruch auf den Folgetag."""
        assert _t(23, 59).add_minutes(1) is None
        assert _t(20, 0).add_minutes(270) is None
        assert _t(8, 30).add_minutes(-1) is None

    def test_add_minutes_consistent_with_to_minutes(self):
        for start in (_t(0, 0), _t(7, 45), _t(12, 59), _t(23, 30)):
            for d in (0, 1, 15, 59, 60, 61, 90, 600, 1439):
                result = start.add_minutes(d)
                if result is not None:
                    assert result.to_minutes() == start.to_minutes() + d
                    assert result.hour < 24
                else:
                    assert start.to_minutes() + d >= 24 * 60

    def test_ordering_hour_major(self):
        assert _t(8, 59) < _t(9, 0)
        assert _t(9, 0) < _t(9, 1)
        assert sorted([_t(14, 0), _t(8, 30), _t(8, 5)]) == [_t(8, 5), _t(8, 30), _t(14, 0)]

    def test_str_zero_padded(self):
        assert str(_t(8, 5)) == "08:05"
        assert str(_t(23, 59)) == "23:59"

    def test_parse_valid(self):
        assert ClockTime.parse("08:30") == _t(8, 30)
        assert ClockTime.parse("8:30") == _t(8, 30)
        assert ClockTime.parse(" 08 : 30 ") == _t(8, 30)
        assert ClockTime.parse("00:00") == _t(0, 0)

    def test_parse_accepts_plus_sign(self):
        """Vorzeichen '+' wie bei Ganzzahlen ohne Vorzeichen erlaubt."""
        assert ClockTime.parse("+8:30") == _t(8, 30)
        assert ClockTime.parse("08:+05") == _t(8, 5)

    @pytest.mark.parametrize("text,reason", [
        ("0830", TimeParseReason.BAD_FORMAT),
        ("08:30:00", TimeParseReason.BAD_FORMAT),
        ("", TimeParseReason.BAD_FORMAT),
        ("ab:30", TimeParseReason.INVALID_HOUR),
        ("-1:30", TimeParseReason.INVALID_HOUR),
        ("+:30", TimeParseReason.INVALID_HOUR),
        ("++8:30", TimeParseReason.INVALID_HOUR),
        ("08:xx", TimeParseReason.INVALID_MINUTE),
        ("08:", TimeParseReason.INVALID_MINUTE),
        ("24:00", TimeParseReason.BREAKS_INVARIANT),
        ("08:60", TimeParseReason.BREAKS_INVARIANT),
    ])
    def test_parse_errors_are_distinguishable(self, text, reason):
        with pytest.raises(TimeParseError) as exc:
            ClockTime.parse(text)
        assert exc.value.reason == reason
        assert exc.value.value == text
        assert isinstance(exc.value, ValueError)


# ─── WOCHENTAG ────────────────────────────────────────────────────────────────

class TestWeekday:
    def test_ordered_monday_first(self):
        days = Weekday.ordered()
        assert len(days) == 7
        assert days[0] is Weekday.MONDAY
        assert days[-1] is Weekday.SUNDAY
        assert [d.index for d in days] == list(range(7))

    def test_parse_exact_name(self):
        assert Weekday.parse("Monday") is Weekday.MONDAY
        assert Weekday.parse("Sunday") is Weekday.SUNDAY

    @pytest.mark.parametrize("name", ["monday", "MONDAY", "Mo", "Funday", ""])
    def test_parse_rejects_other_spellings(self, name):
        with pytest.raises(WeekdayParseError) as exc:
            Weekday.parse(name)
        assert exc.value.value == name

    def test_json_form_is_plain_name(self):
        assert json.dumps(Weekday.MONDAY) == '"Monday"'
        assert Weekday(json.loads('"Friday"')) is Weekday.FRIDAY


# ─── AKTIVITÄT / SLOT ─────────────────────────────────────────────────────────

class TestActivityAndSlotKey:
    def test_empty_activity(self):
        assert is_empty(EMPTY_ACTIVITY)
        assert not is_empty("Analysis")

    def test_slot_key_text_form(self):
        key = SlotKey(Weekday.MONDAY, _t(8, 30))
        assert str(key) == "Monday 08:30"
        assert SlotKey.parse("Monday 08:30") == key
        assert hash(SlotKey.parse("Monday 08:30")) == hash(key)

    def test_slot_key_sort_key(self):
        keys = [
            SlotKey(Weekday.TUESDAY, _t(8, 30)),
            SlotKey(Weekday.MONDAY, _t(11, 30)),
            SlotKey(Weekday.MONDAY, _t(10, 0)),
        ]
        ordered = sorted(keys, key=lambda k: k.sort_key)
        assert [str(k) for k in ordered] == ["Monday 10:00", "Monday 11:30", "Tuesday 08:30"]

    @pytest.mark.parametrize("text,fragment", [
        ("", "Wochentag fehlt"),
        ("Monday", "Uhrzeit fehlt"),
        ("Monday 08:30 extra", "zu viele"),
        ("Funday 08:30", "Funday"),
        ("Monday 25:00", "25:00"),
    ])
    def test_slot_key_parse_errors(self, text, fragment):
        with pytest.raises(SlotParseError) as exc:
            SlotKey.parse(text)
        assert fragment in str(exc.value)
        assert exc.value.value == text


# ─── WOCHENPLAN: KONSTRUKTION ─────────────────────────────────────────────────

class TestWeekPlanConstruction:
    def test_create_default_grid(self, plan):
        assert plan is not None
        assert plan.start == _t(8, 30)
        assert plan.slot_duration == 90
        assert plan.slots == 7
        assert plan.end_time() == _t(19, 0)
        assert len(plan) == 0

    def test_create_fails_when_grid_overflows_day(self):
        """20:00 + 3 × 90 min = 00:30 am Folgetag."""
        assert WeekPlan.create(_t(20, 0), 90, 3) is None

    @pytest.mark.parametrize("start,duration,max_slots", [
        ((8, 30), 90, 10),   # 08:30 + 10 × 90 = 23:30
        ((0, 0), 60, 23),    # Ende 23:00; 24 Slots würden 24:00 erreichen
        ((23, 0), 59, 1),    # Ende 23:59
        ((0, 0), 1, 255),    # Byte-Grenze
    ])
    def test_boundary_is_end_of_last_slot(self, start, duration, max_slots):
        """Geprüft wird der Zeitpunkt NACH dem letzten Slot."""
        assert WeekPlan.create(_t(*start), duration, max_slots) is not None
        if max_slots < 255:
            assert WeekPlan.create(_t(*start), duration, max_slots + 1) is None

    @pytest.mark.parametrize("duration,slots", [(0, 3), (-30, 3), (30, 256), (30, -1)])
    def test_create_rejects_bad_parameters(self, duration, slots):
        assert WeekPlan.create(_t(8, 0), duration, slots) is None

    def test_zero_slots_allowed(self):
        empty = WeekPlan.create(_t(8, 0), 30, 0)
        assert empty is not None
        assert empty.slot_times() == []
        assert not empty.is_valid_slot(_t(8, 0))

    def test_direct_construction_raises(self):
        with pytest.raises(GridOverflowError):
            WeekPlan(_t(20, 0), 90, 3)


# ─── WOCHENPLAN: RASTER ───────────────────────────────────────────────────────

class TestIsValidSlot:
    def test_reference_scenario(self, plan):
        assert plan.is_valid_slot(_t(14, 30))      # 360 = 4 × 90
        assert not plan.is_valid_slot(_t(14, 0))   # 330 nicht durch 90 teilbar

    def test_before_start_and_after_last_slot(self, plan):
        assert not plan.is_valid_slot(_t(8, 0))
        assert plan.is_valid_slot(_t(8, 30))
        assert plan.is_valid_slot(_t(17, 30))      # k = 6, letzter Slot
        assert not plan.is_valid_slot(_t(19, 0))   # k = 7

    def test_matches_arithmetic_grid(self, plan):
        grid = {plan.start.add_minutes(k * 90) for k in range(7)}
        for hour in range(24):
            for minute in range(60):
                t = _t(hour, minute)
                assert plan.is_valid_slot(t) == (t in grid)

    def test_slot_times_ascending(self, plan):
        times = plan.slot_times()
        assert times == sorted(times)
        assert [str(t) for t in times] == [
            "08:30", "10:00", "11:30", "13:00", "14:30", "16:00", "17:30",
        ]


# ─── WOCHENPLAN: BUCHEN ───────────────────────────────────────────────────────

class TestInsert:
    def test_insert_then_get(self, plan):
        plan.insert(Weekday.MONDAY, _t(10, 0), "Analysis")
        assert plan.get(Weekday.MONDAY, _t(10, 0)) == "Analysis"
        assert plan.is_booked(Weekday.MONDAY, _t(10, 0))
        assert plan.get(Weekday.TUESDAY, _t(10, 0)) is None
        assert len(plan) == 1

    def test_insert_twice_already_booked(self, plan):
        plan.insert(Weekday.MONDAY, _t(10, 0), "Analysis")
        with pytest.raises(AlreadyBookedError) as exc:
            plan.insert(Weekday.MONDAY, _t(10, 0), "Sport")
        assert plan.get(Weekday.MONDAY, _t(10, 0)) == "Analysis"
        assert exc.value.activity == "Analysis"
        assert exc.value.slot_label == "Monday 10:00"

    def test_insert_invalid_slot(self, plan):
        with pytest.raises(InvalidSlotError) as exc:
            plan.insert(Weekday.MONDAY, _t(14, 0), "Analysis")
        assert isinstance(exc.value, WeekPlanError)
        assert exc.value.weekday is Weekday.MONDAY
        assert len(plan) == 0

    def test_insert_is_chainable(self, plan):
        result = (
            plan.insert(Weekday.MONDAY, _t(8, 30), "A")
                .insert(Weekday.MONDAY, _t(10, 0), "B")
        )
        assert result is plan
        assert len(plan) == 2

    def test_insert_requires_text(self, plan):
        with pytest.raises(TypeError):
            plan.insert(Weekday.MONDAY, _t(8, 30), 42)

    def test_same_time_different_days(self, plan):
        plan.insert(Weekday.MONDAY, _t(8, 30), "A")
        plan.insert(Weekday.SUNDAY, _t(8, 30), "A")
        assert len(plan) == 2


class TestInsertRange:
    def test_books_consecutive_slots(self, plan):
        plan.insert_range(Weekday.MONDAY, _t(10, 0), 2, "X")
        assert plan.get(Weekday.MONDAY, _t(10, 0)) == "X"
        assert plan.get(Weekday.MONDAY, _t(11, 30)) == "X"
        assert plan.get(Weekday.MONDAY, _t(13, 0)) is None
        assert len(plan) == 2

    def test_partial_commit_on_conflict(self, plan):
        """Kein Rollback: Slots vor dem Konflikt bleiben gebucht."""
        plan.insert(Weekday.MONDAY, _t(13, 0), "Belegt")
        with pytest.raises(AlreadyBookedError):
            plan.insert_range(Weekday.MONDAY, _t(10, 0), 3, "X")
        assert plan.get(Weekday.MONDAY, _t(10, 0)) == "X"
        assert plan.get(Weekday.MONDAY, _t(11, 30)) == "X"
        assert plan.get(Weekday.MONDAY, _t(13, 0)) == "Belegt"

    def test_partial_commit_past_grid_end(self, plan):
        with pytest.raises(InvalidSlotError):
            plan.insert_range(Weekday.FRIDAY, _t(16, 0), 3, "X")
        assert plan.get(Weekday.FRIDAY, _t(16, 0)) == "X"
        assert plan.get(Weekday.FRIDAY, _t(17, 30)) == "X"
        assert len(plan) == 2

    def test_misaligned_start_books_nothing(self, plan):
        with pytest.raises(InvalidSlotError):
            plan.insert_range(Weekday.MONDAY, _t(9, 0), 2, "X")
        assert len(plan) == 0

    def test_zero_length_is_noop(self, plan):
        assert plan.insert_range(Weekday.MONDAY, _t(10, 0), 0, "X") is plan
        assert len(plan) == 0

    def test_negative_length_rejected(self, plan):
        with pytest.raises(ValueError):
            plan.insert_range(Weekday.MONDAY, _t(10, 0), -1, "X")


class TestRemove:
    def test_remove_returns_activity(self, plan):
        plan.insert(Weekday.MONDAY, _t(10, 0), "Analysis")
        assert plan.remove(Weekday.MONDAY, _t(10, 0)) == "Analysis"
        assert not plan.is_booked(Weekday.MONDAY, _t(10, 0))

    def test_remove_free_slot(self, plan):
        with pytest.raises(NotBookedError) as exc:
            plan.remove(Weekday.MONDAY, _t(10, 0))
        assert isinstance(exc.value, KeyError)
        assert str(exc.value) == "Nicht belegt: Monday 10:00"

    def test_remove_off_grid(self, plan):
        with pytest.raises(InvalidSlotError):
            plan.remove(Weekday.MONDAY, _t(10, 15))


# ─── WOCHENPLAN: ABFRAGEN / TABELLE ───────────────────────────────────────────

class TestQueriesAndTable:
    def test_bookings_canonical_order_and_copy(self, plan):
        plan.insert(Weekday.TUESDAY, _t(8, 30), "C")
        plan.insert(Weekday.MONDAY, _t(11, 30), "B")
        plan.insert(Weekday.MONDAY, _t(10, 0), "A")
        bookings = plan.bookings()
        assert [str(k) for k in bookings] == ["Monday 10:00", "Monday 11:30", "Tuesday 08:30"]
        bookings.clear()
        assert len(plan) == 3

    def test_equality(self, plan):
        other = WeekPlan.create(_t(8, 30), 90, 7)
        assert plan == other
        plan.insert(Weekday.MONDAY, _t(10, 0), "A")
        assert plan != other
        other.insert(Weekday.MONDAY, _t(10, 0), "A")
        assert plan == other
        assert plan != WeekPlan.create(_t(8, 30), 90, 6)

    def test_to_table_shape(self, plan):
        plan.insert_range(Weekday.MONDAY, _t(10, 0), 2, "X")
        table = plan.to_table()
        assert isinstance(table, PlanTable)
        assert table.weekdays == tuple(Weekday.ordered())
        assert table.times == tuple(plan.slot_times())
        assert len(table.cells) == 7 * 7
        assert table.cell(Weekday.MONDAY, _t(10, 0)) == "X"
        assert table.cell(Weekday.MONDAY, _t(8, 30)) == EMPTY_ACTIVITY
        # Tageweise abgeflacht: Montag belegt Index 1 und 2
        assert table.cells[:3] == ("", "X", "X")

    def test_to_table_rows_time_major(self, plan):
        plan.insert(Weekday.TUESDAY, _t(8, 30), "Y")
        time, cells = next(plan.to_table().rows())
        assert time == _t(8, 30)
        assert cells == ["", "Y", "", "", "", "", ""]

    def test_to_table_independent_of_insertion_order(self):
        a = WeekPlan.create(_t(8, 30), 90, 7)
        b = WeekPlan.create(_t(8, 30), 90, 7)
        a.insert(Weekday.SUNDAY, _t(17, 30), "S").insert(Weekday.MONDAY, _t(8, 30), "M")
        b.insert(Weekday.MONDAY, _t(8, 30), "M").insert(Weekday.SUNDAY, _t(17, 30), "S")
        assert a.to_table() == b.to_table()

    def test_to_table_is_pure(self, plan):
        plan.insert(Weekday.MONDAY, _t(10, 0), "X")
        assert plan.to_table() == plan.to_table()
        assert len(plan) == 1
