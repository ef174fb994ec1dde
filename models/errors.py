"""Fehlerklassen des Wochenplan-Modells.

Konstruktionsfehler des Rasters werden über ``WeekPlan.create`` als ``None``
gemeldet. Alles, was pro Buchung schiefgehen kann, ist eine ``WeekPlanError``.
Parse-Fehler erben von ``ValueError`` und tragen den fehlerhaften Wert mit.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from models.clock_time import ClockTime
    from models.weekday import Weekday


# ─── Buchungsfehler ───

class WeekPlanError(Exception):
    """Basisklasse aller Laufzeitfehler beim Buchen."""

    def __init__(self, message: str, weekday: "Weekday", time: "ClockTime"):
        super().__init__(message)
        self.weekday = weekday
        self.time = time

    @property
    def slot_label(self) -> str:
        return f"{self.weekday.value} {self.time}"


class InvalidSlotError(WeekPlanError):
    """Zeit liegt nicht im Raster (vor dem Start, nicht ausgerichtet, zu spät)."""

    def __init__(self, weekday: "Weekday", time: "ClockTime",
                 message: Optional[str] = None):
        super().__init__(
            message
            or f"Ungültiger Slot: {weekday.value} {time} liegt nicht im Zeitraster",
            weekday, time,
        )


class AlreadyBookedError(WeekPlanError):
    """Slot ist bereits belegt."""

    def __init__(self, weekday: "Weekday", time: "ClockTime", activity: str):
        super().__init__(
            f"Bereits belegt: {weekday.value} {time} ('{activity}')",
            weekday, time,
        )
        self.activity = activity


class NotBookedError(WeekPlanError, KeyError):
    """Slot ist frei, es gibt nichts zu entfernen."""

    def __init__(self, weekday: "Weekday", time: "ClockTime"):
        super().__init__(f"Nicht belegt: {weekday.value} {time}", weekday, time)

    def __str__(self) -> str:
        # KeyError würde die Meldung sonst in Anführungszeichen setzen
        return self.args[0]


class GridOverflowError(ValueError):
    """Das Raster passt nicht in einen Tag."""


# ─── Parse-Fehler ───

class TimeParseReason(str, Enum):
    BAD_FORMAT = "bad_format"
    INVALID_HOUR = "invalid_hour"
    INVALID_MINUTE = "invalid_minute"
    BREAKS_INVARIANT = "breaks_invariant"


_REASON_TEXT = {
    TimeParseReason.BAD_FORMAT: "Format muss HH:MM sein",
    TimeParseReason.INVALID_HOUR: "Stunde ist keine Zahl",
    TimeParseReason.INVALID_MINUTE: "Minute ist keine Zahl",
    TimeParseReason.BREAKS_INVARIANT: "Stunde muss < 24 und Minute < 60 sein",
}


class TimeParseError(ValueError):
    """Uhrzeit-Text ist nicht als HH:MM lesbar."""

    def __init__(self, value: str, reason: TimeParseReason):
        super().__init__(f"Ungültige Uhrzeit '{value}': {_REASON_TEXT[reason]}")
        self.value = value
        self.reason = reason


class WeekdayParseError(ValueError):
    """Unbekannter Wochentag (Groß-/Kleinschreibung zählt)."""

    def __init__(self, value: str):
        super().__init__(
            f"Ungültiger Wochentag '{value}' (erwartet z.B. 'Monday')"
        )
        self.value = value


class SlotParseError(ValueError):
    """Slot-Text ist nicht als '<Wochentag> <HH:MM>' lesbar."""

    def __init__(self, value: str, detail: str):
        super().__init__(f"Ungültiger Slot '{value}': {detail}")
        self.value = value
        self.detail = detail


class PlanLoadError(Exception):
    """Gespeicherter Wochenplan konnte nicht wiederhergestellt werden."""

    def __init__(self, message: str, slot: Optional[str] = None):
        super().__init__(message)
        self.slot = slot
