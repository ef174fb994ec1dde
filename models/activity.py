"""Aktivität: Anzeigetext eines belegten Slots."""

Activity = str

# Platzhalter für freie Slots in der Tabellenansicht
EMPTY_ACTIVITY: Activity = ""


def is_empty(activity: Activity) -> bool:
    return activity == EMPTY_ACTIVITY


def check_activity(activity: object) -> Activity:
    """Stellt sicher, dass nur Text als Aktivität gebucht wird."""
    if not isinstance(activity, str):
        raise TypeError(f"Aktivität muss Text sein, nicht {type(activity).__name__}")
    return activity
