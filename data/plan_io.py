"""JSON-Persistenz für den Wochenplan.

Dokumentformat::

    {
      "plan": {"Monday 10:00": "Rechnerarchitektur", ...},
      "start": {"hour": 8, "minute": 30},
      "slot_duration": 90,
      "slots": 7
    }

Beim Laden wird der Plan NICHT aus dem Dokument übernommen, sondern über
WeekPlan.create neu aufgebaut und jede Buchung über insert() neu geprüft.
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ValidationError

from models.clock_time import ClockTime
from models.errors import PlanLoadError, SlotParseError, WeekPlanError
from models.slot import SlotKey
from models.week_plan import WeekPlan

logger = logging.getLogger(__name__)


class StartTime(BaseModel):
    hour: int
    minute: int


class PlanDocument(BaseModel):
    """Austauschformat eines Wochenplans (Form, nicht Inhalt, wird geprüft)."""

    plan: dict[str, str]
    start: StartTime
    slot_duration: int
    slots: int


# ─── Plan → Dokument ───

def plan_to_document(plan: WeekPlan) -> PlanDocument:
    """Buchungen in kanonischer Reihenfolge (Mo→So, früh→spät)."""
    return PlanDocument(
        plan={str(key): activity for key, activity in plan.bookings().items()},
        start=StartTime(hour=plan.start.hour, minute=plan.start.minute),
        slot_duration=plan.slot_duration,
        slots=plan.slots,
    )


def dump_plan_json(plan: WeekPlan) -> str:
    data = plan_to_document(plan).model_dump()
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


# ─── Dokument → Plan ───

def plan_from_document(doc: PlanDocument) -> WeekPlan:
    """Baut den Plan über die normalen Prüfungen wieder auf.

    Raises:
        PlanLoadError: Raster ungültig oder eine Buchung besteht die Prüfung
            nicht; die Meldung nennt den betroffenen Slot.
    """
    start = ClockTime.create(doc.start.hour, doc.start.minute)
    if start is None:
        raise PlanLoadError(
            f"Ungültige Startzeit: {doc.start.hour}:{doc.start.minute:02d}"
        )

    plan = WeekPlan.create(start, doc.slot_duration, doc.slots)
    if plan is None:
        raise PlanLoadError(
            f"Ungültiges Raster: {start} + {doc.slots} × {doc.slot_duration} min "
            f"passt nicht in einen Tag"
        )

    for slot_text, activity in doc.plan.items():
        try:
            key = SlotKey.parse(slot_text)
            plan.insert(key.weekday, key.time, activity)
        except (SlotParseError, WeekPlanError) as e:
            raise PlanLoadError(
                f"Buchung '{slot_text}' abgelehnt: {e}", slot=slot_text
            ) from e

    logger.debug(f"Plan wiederhergestellt: {plan!r}")
    return plan


def load_plan_json(text: str) -> WeekPlan:
    try:
        doc = PlanDocument.model_validate_json(text)
    except ValidationError as e:
        raise PlanLoadError(f"Plan-Dokument ungültig:\n{e}") from e
    return plan_from_document(doc)


# ─── Dateien ───

def save_plan(plan: WeekPlan, path: Path) -> Path:
    """Speichert den Plan als JSON-Datei (Verzeichnisse werden angelegt)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(dump_plan_json(plan))
    logger.info(f"Wochenplan gespeichert: {path} ({len(plan)} Buchungen)")
    return path


def load_plan(path: Path) -> WeekPlan:
    """Lädt einen Plan aus einer JSON-Datei."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Plan-Datei nicht gefunden: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise PlanLoadError(f"Plan-Datei ist kein gültiges UTF-8: {path}") from e
    plan = load_plan_json(text)
    logger.info(f"Wochenplan geladen: {path} ({len(plan)} Buchungen)")
    return plan
