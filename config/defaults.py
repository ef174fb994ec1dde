from config.schema import (
    DisplayConfig,
    GridConfig,
    LoggingConfig,
    PathConfig,
    PlannerConfig,
)


def default_grid() -> GridConfig:
    """Standard-Raster: 7 Blöcke à 90 Minuten ab 08:30.

    Rasterzeiten:
    1. Block  08:30 - 10:00
    2. Block  10:00 - 11:30
    3. Block  11:30 - 13:00
    4. Block  13:00 - 14:30
    5. Block  14:30 - 16:00
    6. Block  16:00 - 17:30
    7. Block  17:30 - 19:00
    """
    return GridConfig(start_time="08:30", slot_duration=90, slots=7)


def default_display() -> DisplayConfig:
    return DisplayConfig(
        title="Wochenplan",
        day_labels=["Mo", "Di", "Mi", "Do", "Fr", "Sa", "So"],
        empty_cell="",
        show_weekend=True,
    )


def default_planner_config() -> PlannerConfig:
    """Vollständige Default-Konfiguration."""
    return PlannerConfig(
        grid=default_grid(),
        display=default_display(),
        paths=PathConfig(),
        logging=LoggingConfig(),
    )
