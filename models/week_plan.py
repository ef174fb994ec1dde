"""WeekPlan: wiederkehrender Wochenplan aus gleich langen Zeitslots.

Das Raster ist für alle Wochentage gleich: ``slots`` Slots à ``slot_duration``
Minuten ab ``start``. Buchungen sind nur auf Rasterzeiten erlaubt und werden
nie überschrieben.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from models.activity import EMPTY_ACTIVITY, Activity, check_activity
from models.clock_time import ClockTime
from models.errors import (
    AlreadyBookedError,
    GridOverflowError,
    InvalidSlotError,
    NotBookedError,
)
from models.slot import SlotKey
from models.weekday import Weekday

# Slot-Anzahl pro Tag passt in ein Byte
MAX_SLOTS = 255


@dataclass(frozen=True)
class PlanTable:
    """Tabellen-Projektion eines Wochenplans.

    cells ist tageweise abgeflacht: Index = day_index * len(times) + time_index.
    Freie Slots enthalten EMPTY_ACTIVITY.
    """

    weekdays: tuple[Weekday, ...]
    times: tuple[ClockTime, ...]
    cells: tuple[Activity, ...]

    def cell(self, weekday: Weekday, time: ClockTime) -> Activity:
        day_idx = self.weekdays.index(weekday)
        time_idx = self.times.index(time)
        return self.cells[day_idx * len(self.times) + time_idx]

    def rows(self) -> Iterator[tuple[ClockTime, list[Activity]]]:
        """Zeilenweise (eine Zeile pro Uhrzeit, eine Spalte pro Tag)."""
        n_times = len(self.times)
        for time_idx, time in enumerate(self.times):
            yield time, [
                self.cells[day_idx * n_times + time_idx]
                for day_idx in range(len(self.weekdays))
            ]


class WeekPlan:
    """Wochenplan mit festem Zeitraster und eindeutigen Buchungen.

    Nicht thread-sicher: Einfügen braucht exklusiven Zugriff.
    """

    def __init__(self, start: ClockTime, slot_duration: int, slots: int) -> None:
        if not isinstance(slot_duration, int) or slot_duration <= 0:
            raise GridOverflowError(
                f"Slot-Dauer muss positiv sein, nicht {slot_duration!r}")
        if not isinstance(slots, int) or not 0 <= slots <= MAX_SLOTS:
            raise GridOverflowError(
                f"Slot-Anzahl muss zwischen 0 und {MAX_SLOTS} liegen, nicht {slots!r}")
        # Geprüft wird das Ende des letzten Slots, nicht sein Beginn
        if start.add_minutes(slots * slot_duration) is None:
            raise GridOverflowError(
                f"Raster {start} + {slots} × {slot_duration} min passt nicht in einen Tag")

        self._start = start
        self._slot_duration = slot_duration
        self._slots = slots
        self._plan: dict[SlotKey, Activity] = {}

    @classmethod
    def create(cls, start: ClockTime, slot_duration: int,
               slots: int) -> Optional["WeekPlan"]:
        """Wie der Konstruktor, gibt aber None statt einer Exception zurück."""
        try:
            return cls(start, slot_duration, slots)
        except GridOverflowError:
            return None

    # ─── Raster ───

    @property
    def start(self) -> ClockTime:
        return self._start

    @property
    def slot_duration(self) -> int:
        return self._slot_duration

    @property
    def slots(self) -> int:
        return self._slots

    def slot_times(self) -> list[ClockTime]:
        """Alle Rasterzeiten eines Tages, aufsteigend."""
        return [
            self._start.add_minutes(i * self._slot_duration)
            for i in range(self._slots)
        ]

    def end_time(self) -> ClockTime:
        """Ende des letzten Slots (bei 0 Slots: der Start)."""
        return self._start.add_minutes(self._slots * self._slot_duration)

    def is_valid_slot(self, time: ClockTime) -> bool:
        """True wenn time = start + k × slot_duration mit 0 ≤ k < slots."""
        distance = time.to_minutes() - self._start.to_minutes()
        if distance < 0:
            return False
        index, remainder = divmod(distance, self._slot_duration)
        return remainder == 0 and index < self._slots

    # ─── Buchen ───

    def insert(self, weekday: Weekday, time: ClockTime,
               activity: Activity) -> "WeekPlan":
        """Bucht einen einzelnen Slot. Gibt self zurück (verkettbar).

        Raises:
            InvalidSlotError: time liegt nicht im Raster.
            AlreadyBookedError: Slot ist schon belegt.
        """
        activity = check_activity(activity)
        if not self.is_valid_slot(time):
            raise InvalidSlotError(weekday, time)

        key = SlotKey(weekday, time)
        if key in self._plan:
            raise AlreadyBookedError(weekday, time, self._plan[key])

        self._plan[key] = activity
        return self

    def insert_range(self, weekday: Weekday, start_time: ClockTime, length: int,
                     activity: Activity) -> "WeekPlan":
        """Bucht ``length`` aufeinanderfolgende Slots ab start_time.

        Bricht beim ersten Fehler ab. Bereits gebuchte Slots der Serie bleiben
        gebucht (kein Rollback).
        """
        if length < 0:
            raise ValueError(f"Länge muss ≥ 0 sein, nicht {length}")

        for i in range(length):
            time = start_time.add_minutes(i * self._slot_duration)
            if time is None:
                raise InvalidSlotError(
                    weekday, start_time,
                    f"Ungültiger Slot: {i + 1}. Slot ab {weekday.value} "
                    f"{start_time} liegt nach 23:59",
                )
            self.insert(weekday, time, activity)
        return self

    def remove(self, weekday: Weekday, time: ClockTime) -> Activity:
        """Gibt einen Slot wieder frei und liefert die entfernte Aktivität."""
        if not self.is_valid_slot(time):
            raise InvalidSlotError(weekday, time)
        try:
            return self._plan.pop(SlotKey(weekday, time))
        except KeyError:
            raise NotBookedError(weekday, time) from None

    # ─── Abfragen ───

    def get(self, weekday: Weekday, time: ClockTime) -> Optional[Activity]:
        return self._plan.get(SlotKey(weekday, time))

    def is_booked(self, weekday: Weekday, time: ClockTime) -> bool:
        return SlotKey(weekday, time) in self._plan

    def bookings(self) -> dict[SlotKey, Activity]:
        """Kopie aller Buchungen in kanonischer Reihenfolge (Tag, Uhrzeit)."""
        return {
            key: self._plan[key]
            for key in sorted(self._plan, key=lambda k: k.sort_key)
        }

    def __len__(self) -> int:
        return len(self._plan)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeekPlan):
            return NotImplemented
        return (
            self._start == other._start
            and self._slot_duration == other._slot_duration
            and self._slots == other._slots
            and self._plan == other._plan
        )

    def __repr__(self) -> str:
        return (
            f"WeekPlan(start={self._start}, slot_duration={self._slot_duration}, "
            f"slots={self._slots}, bookings={len(self._plan)})"
        )

    # ─── Darstellung ───

    def to_table(self) -> PlanTable:
        """Projektion Mo→So × Rasterzeiten; freie Slots als leere Aktivität."""
        weekdays = tuple(Weekday.ordered())
        times = tuple(self.slot_times())
        cells = tuple(
            self._plan.get(SlotKey(day, time), EMPTY_ACTIVITY)
            for day in weekdays
            for time in times
        )
        return PlanTable(weekdays=weekdays, times=times, cells=cells)

    def render_html(self) -> str:
        """HTML-Tabelle (siehe export.html_export)."""
        from export.html_export import render_html
        return render_html(self.to_table())

    def render_text_table(self) -> str:
        """Klartext-Tabelle für das Terminal (siehe export.tui_renderer)."""
        from export.tui_renderer import render_text_table
        return render_text_table(self.to_table())
