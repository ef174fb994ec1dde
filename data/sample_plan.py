"""Beispiel- und Zufallspläne für Demo und Tests.

build_example_plan() erzeugt immer denselben kleinen Plan.
RandomPlanGenerator füllt ein Raster reproduzierbar (Seed) mit
Doppel- und Einzelblöcken.
"""

import logging
import random
from typing import Optional

from config.schema import GridConfig
from models.clock_time import ClockTime
from models.errors import WeekPlanError
from models.week_plan import WeekPlan
from models.weekday import Weekday

logger = logging.getLogger(__name__)

# ─── Veranstaltungen ──────────────────────────────────────────────────────────

_ACTIVITIES: list[str] = [
    "Rechnerarchitektur",
    "Analysis I",
    "Lineare Algebra",
    "Programmierung",
    "Datenbanken",
    "Betriebssysteme",
    "Theoretische Informatik",
    "Englisch",
    "Sport",
    "Tutorium",
]

# Samstag/Sonntag bekommen im Zufallsplan nur selten etwas
_WEEKEND_WEIGHT = 0.15


def build_example_plan(grid: Optional[GridConfig] = None) -> WeekPlan:
    """Beispielplan: Rechnerarchitektur Mo ab 10:00 und Di ab 08:30, je 2 Blöcke.

    Passt ins Default-Raster (08:30, 90 min, 7 Slots). Bei anderen Rastern
    werden stattdessen die ersten Slots von Mo und Di belegt.
    """
    grid = grid or GridConfig()
    plan = grid.new_plan()
    times = plan.slot_times()
    if not times:
        return plan

    monday_start = ClockTime(10, 0)
    if not plan.is_valid_slot(monday_start):
        monday_start = times[0]
    monday_len = min(2, len(times) - times.index(monday_start))

    plan.insert_range(
        Weekday.MONDAY, monday_start, monday_len, "Rechnerarchitektur",
    ).insert_range(
        Weekday.TUESDAY, times[0], min(2, len(times)), "Rechnerarchitektur",
    )
    return plan


class RandomPlanGenerator:
    """Erzeugt zufällige, aber reproduzierbare Wochenpläne."""

    def __init__(self, grid: GridConfig, seed: Optional[int] = None,
                 fill_ratio: float = 0.5) -> None:
        if not 0.0 <= fill_ratio <= 1.0:
            raise ValueError(f"fill_ratio muss zwischen 0 und 1 liegen, nicht {fill_ratio}")
        self.grid = grid
        self.rng = random.Random(seed)
        self.fill_ratio = fill_ratio

    def _target_bookings(self, plan: WeekPlan) -> int:
        return round(plan.slots * len(Weekday.ordered()) * self.fill_ratio)

    def _pick_day(self) -> Weekday:
        days = Weekday.ordered()
        weights = [1.0] * 5 + [_WEEKEND_WEIGHT] * 2
        return self.rng.choices(days, weights=weights, k=1)[0]

    def generate(self) -> WeekPlan:
        plan = self.grid.new_plan()
        times = plan.slot_times()
        if not times:
            return plan

        target = self._target_bookings(plan)
        # Obergrenze gegen Endlosschleifen bei fast vollem Raster
        attempts = target * 10
        while len(plan) < target and attempts > 0:
            attempts -= 1
            day = self._pick_day()
            start = self.rng.choice(times)
            length = self.rng.choice([1, 2, 2])
            activity = self.rng.choice(_ACTIVITIES)
            try:
                plan.insert_range(day, start, min(length, target - len(plan)), activity)
            except WeekPlanError as e:
                # Konflikt ist hier Routine: Teilbuchungen bleiben stehen
                logger.debug(f"Zufallsbuchung übersprungen: {e}")

        logger.info(f"Zufallsplan erzeugt: {len(plan)}/{target} Buchungen")
        return plan
