"""Datenmodell für eine Uhrzeit im Tagesraster (Stunde + Minute)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from models.errors import TimeParseError, TimeParseReason

HOURS_PER_DAY = 24
MINUTES_PER_HOUR = 60


def _is_number(text: str) -> bool:
    # Ein führendes "+" ist erlaubt ("+8"), ein "-" nicht
    digits = text[1:] if text.startswith("+") else text
    return digits.isascii() and digits.isdigit()


@dataclass(frozen=True, order=True)
class ClockTime:
    """Validierte Uhrzeit ohne Datum.

    Immutable (frozen=True) damit sie als Dict-Key nutzbar ist.
    Sortierung: erst Stunde, dann Minute (Reihenfolge der Felder).
    Werte außerhalb von 0–23 / 0–59 sind nicht darstellbar.
    """

    hour: int
    minute: int

    def __post_init__(self) -> None:
        for name in ("hour", "minute"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name} muss eine Ganzzahl sein, nicht {value!r}")
        if not 0 <= self.hour < HOURS_PER_DAY:
            raise ValueError(f"Stunde {self.hour} außerhalb 0–23")
        if not 0 <= self.minute < MINUTES_PER_HOUR:
            raise ValueError(f"Minute {self.minute} außerhalb 0–59")

    # ─── Konstruktion ───

    @classmethod
    def create(cls, hour: int, minute: int) -> Optional["ClockTime"]:
        """Gibt None zurück wenn hour ≥ 24 oder minute ≥ 60 (bzw. negativ)."""
        if not (0 <= hour < HOURS_PER_DAY and 0 <= minute < MINUTES_PER_HOUR):
            return None
        return cls(hour, minute)

    @classmethod
    def parse(cls, text: str) -> "ClockTime":
        """Liest "HH:MM" (Leerzeichen um die Teile werden ignoriert).

        Raises:
            TimeParseError: mit reason BAD_FORMAT, INVALID_HOUR,
                INVALID_MINUTE oder BREAKS_INVARIANT.
        """
        parts = [p.strip() for p in text.split(":")]
        if len(parts) != 2:
            raise TimeParseError(text, TimeParseReason.BAD_FORMAT)
        hour_text, minute_text = parts
        if not _is_number(hour_text):
            raise TimeParseError(text, TimeParseReason.INVALID_HOUR)
        if not _is_number(minute_text):
            raise TimeParseError(text, TimeParseReason.INVALID_MINUTE)

        result = cls.create(int(hour_text), int(minute_text))
        if result is None:
            raise TimeParseError(text, TimeParseReason.BREAKS_INVARIANT)
        return result

    # ─── Arithmetik ───

    def to_minutes(self) -> int:
        """Minuten seit Mitternacht."""
        return self.hour * MINUTES_PER_HOUR + self.minute

    def add_minutes(self, duration: int) -> Optional["ClockTime"]:
        """Addiert eine Dauer; None wenn das Ergebnis über 23:59 hinausgeht.

        Es gibt keinen Folgetag, ein Überlauf wird also nie umgebrochen.
        """
        if duration < 0:
            return None
        total_minutes = self.minute + duration
        return ClockTime.create(
            self.hour + total_minutes // MINUTES_PER_HOUR,
            total_minutes % MINUTES_PER_HOUR,
        )

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"
