from pydantic import BaseModel, Field, field_validator, model_validator

from models.clock_time import ClockTime
from models.week_plan import MAX_SLOTS, WeekPlan


# ─── ZEITRASTER ───

class GridConfig(BaseModel):
    """Zeitraster für neue Wochenpläne.

    Das Raster gilt für alle sieben Tage gleich:
    ``slots`` Slots à ``slot_duration`` Minuten ab ``start_time``.
    """
    # Beginn des ersten Slots im Format "HH:MM"
    start_time: str = Field("08:30",
        description="Beginn des ersten Slots (HH:MM)")
    # Länge eines Slots in Minuten
    slot_duration: int = Field(90, ge=1, le=1440,
        description="Slot-Dauer in Minuten")
    # Anzahl Slots pro Tag
    slots: int = Field(7, ge=0, le=MAX_SLOTS,
        description="Slots pro Tag")

    @field_validator("start_time")
    @classmethod
    def _check_start_time(cls, v: str) -> str:
        # TimeParseError ist ein ValueError → wird zum ValidationError
        return str(ClockTime.parse(v))

    @model_validator(mode='after')
    def _check_fits_in_day(self):
        """Das Ende des letzten Slots muss spätestens 23:59 sein."""
        if WeekPlan.create(self.start, self.slot_duration, self.slots) is None:
            raise ValueError(
                f"Raster {self.start_time} + {self.slots} × {self.slot_duration} min "
                f"passt nicht in einen Tag"
            )
        return self

    @property
    def start(self) -> ClockTime:
        return ClockTime.parse(self.start_time)

    def new_plan(self) -> WeekPlan:
        """Leerer Wochenplan mit diesem Raster."""
        return WeekPlan(self.start, self.slot_duration, self.slots)


# ─── DARSTELLUNG ───

class DisplayConfig(BaseModel):
    """Einstellungen für Tabellen, HTML, Excel und PDF."""
    # Überschrift der Ausgaben
    title: str = Field("Wochenplan", description="Titel der Ausgaben")
    # Spaltenköpfe Montag → Sonntag
    day_labels: list[str] = Field(
        default=["Mo", "Di", "Mi", "Do", "Fr", "Sa", "So"],
        description="Spaltenköpfe Montag bis Sonntag")
    # Text für freie Slots (leer = leere Zelle)
    empty_cell: str = Field("", description="Text für freie Slots")
    # Samstag/Sonntag auch anzeigen wenn dort nichts gebucht ist
    show_weekend: bool = Field(True,
        description="Leere Wochenend-Spalten anzeigen")

    @field_validator("day_labels")
    @classmethod
    def _seven_labels(cls, v: list[str]) -> list[str]:
        if len(v) != 7:
            raise ValueError(f"Genau 7 Tagesnamen erwartet, nicht {len(v)}")
        return v


# ─── DATEIPFADE ───

class PathConfig(BaseModel):
    """Ein- und Ausgabepfade (relativ zum Arbeitsverzeichnis)."""
    plan_json: str = Field("output/plan.json", description="Gespeicherter Wochenplan")
    html: str = Field("output/wochenplan.html", description="HTML-Ausgabe")
    xlsx: str = Field("output/wochenplan.xlsx", description="Excel-Ausgabe")
    pdf: str = Field("output/wochenplan.pdf", description="PDF-Ausgabe")


# ─── LOGGING ───

class LoggingConfig(BaseModel):
    """Log-Ausgabe der Kommandozeile."""
    level: str = Field("WARNING", description="DEBUG, INFO, WARNING oder ERROR")

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unbekanntes Log-Level: {v}")
        return level


# ─── GESAMT-CONFIG ───

class PlannerConfig(BaseModel):
    """Gesamtkonfiguration des Wochenplaners."""
    grid: GridConfig = Field(default_factory=GridConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    paths: PathConfig = Field(default_factory=PathConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
