"""Konfigurationsmanager: Laden, Speichern und Validieren.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.defaults import default_planner_config
from config.schema import PlannerConfig

logger = logging.getLogger(__name__)

yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Wochenplaner — Konfiguration
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "grid": (
        "Zeitraster",
        "Gilt für alle Wochentage. Das Ende des letzten Slots muss vor 24:00 liegen.",
    ),
    "display": (
        "Darstellung",
        None,
    ),
    "paths": (
        "Dateipfade",
        None,
    ),
    "logging": (
        "Logging",
        "Level: DEBUG, INFO, WARNING oder ERROR.",
    ),
}


class ConfigManager:
    DEFAULT_CONFIG = Path("config") / "planner_config.yaml"

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else self.DEFAULT_CONFIG

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.path.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> PlannerConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = Path(path) if path is not None else self.path
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py init' aus, um eine anzulegen."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            config = PlannerConfig.model_validate(dict(raw or {}))
        except ValidationError as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e
        logger.debug(f"Konfiguration geladen: {target}")
        return config

    def load_or_default(self) -> PlannerConfig:
        """Wie load(), fällt aber ohne Datei auf die Default-Config zurück."""
        if self.first_run_check():
            logger.info(f"Keine Konfiguration unter {self.path} – nutze Defaults")
            return default_planner_config()
        return self.load()

    # ─── Speichern ───

    def save(self, config: PlannerConfig, path: Optional[Path] = None) -> Path:
        """Speichere Config als YAML mit deutschen Kommentaren."""
        target = Path(path) if path is not None else self.path
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        logger.info(f"Konfiguration gespeichert: {target}")
        return target

    def _build_commented_yaml(self, config: PlannerConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        grid_map = CommentedMap(cm["grid"])
        grid_map.yaml_add_eol_comment("HH:MM", "start_time")
        grid_map.yaml_add_eol_comment("Minuten", "slot_duration")
        cm["grid"] = grid_map

        return cm
