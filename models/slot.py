"""Datenmodell für einen Slot-Schlüssel im Wochenraster."""

from dataclasses import dataclass

from models.clock_time import ClockTime
from models.errors import SlotParseError, TimeParseError, WeekdayParseError
from models.weekday import Weekday


@dataclass(frozen=True)
class SlotKey:
    """Kombination aus Wochentag und Uhrzeit.

    Immutable (frozen=True) damit es als Dict-Key nutzbar ist.
    Textform im JSON-Dokument: "Monday 08:30".
    """

    weekday: Weekday
    time: ClockTime

    @classmethod
    def parse(cls, text: str) -> "SlotKey":
        """Liest "<Wochentag> <HH:MM>"."""
        parts = text.split()
        if not parts:
            raise SlotParseError(text, "Wochentag fehlt")
        if len(parts) == 1:
            raise SlotParseError(text, "Uhrzeit fehlt")
        if len(parts) > 2:
            raise SlotParseError(text, "zu viele Bestandteile")

        try:
            weekday = Weekday.parse(parts[0])
        except WeekdayParseError as e:
            raise SlotParseError(text, str(e)) from e
        try:
            time = ClockTime.parse(parts[1])
        except TimeParseError as e:
            raise SlotParseError(text, str(e)) from e
        return cls(weekday, time)

    @property
    def sort_key(self) -> tuple[int, ClockTime]:
        """Kanonische Reihenfolge: Tag (Mo zuerst), dann Uhrzeit."""
        return (self.weekday.index, self.time)

    def __repr__(self) -> str:
        return f"SlotKey({self.weekday.value}, {self.time})"

    def __str__(self) -> str:
        return f"{self.weekday.value} {self.time}"
