"""Wochentage als geschlossene Aufzählung."""

from enum import Enum

from models.errors import WeekdayParseError


class Weekday(str, Enum):
    """Die sieben Wochentage, Montag zuerst.

    Der Wert ist zugleich die kanonische Schreibweise im JSON-Dokument.
    """

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def ordered(cls) -> list["Weekday"]:
        """Alle Tage in fester Reihenfolge Montag → Sonntag."""
        return list(cls)

    @classmethod
    def parse(cls, name: str) -> "Weekday":
        """Exakter Namensvergleich, z.B. "Monday" (nicht "monday")."""
        try:
            return cls(name)
        except ValueError:
            raise WeekdayParseError(name) from None

    @property
    def index(self) -> int:
        """0=Montag … 6=Sonntag."""
        return Weekday.ordered().index(self)

    def __str__(self) -> str:
        return self.value
