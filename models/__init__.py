from models.activity import EMPTY_ACTIVITY, Activity, is_empty
from models.clock_time import ClockTime
from models.errors import (
    AlreadyBookedError,
    GridOverflowError,
    InvalidSlotError,
    NotBookedError,
    PlanLoadError,
    SlotParseError,
    TimeParseError,
    TimeParseReason,
    WeekdayParseError,
    WeekPlanError,
)
from models.slot import SlotKey
from models.week_plan import PlanTable, WeekPlan
from models.weekday import Weekday

__all__ = [
    "Activity",
    "EMPTY_ACTIVITY",
    "is_empty",
    "ClockTime",
    "Weekday",
    "SlotKey",
    "WeekPlan",
    "PlanTable",
    "WeekPlanError",
    "InvalidSlotError",
    "AlreadyBookedError",
    "NotBookedError",
    "GridOverflowError",
    "TimeParseError",
    "TimeParseReason",
    "WeekdayParseError",
    "SlotParseError",
    "PlanLoadError",
]
