"""
Pure domain computations over workout sessions.

- statistics: period aggregation, streaks, month grouping
- personal_records: per-exercise bests
- warmup: warmup ramp calculator
- energy: active energy estimate for the health store
"""

from domain.services.energy import estimate_active_energy
from domain.services.personal_records import (
    TopLift,
    check_for_new_record,
    detect_personal_records,
    recent_personal_records,
    top_lifts_by_weight,
)
from domain.services.statistics import (
    calculate_streaks,
    compute_statistics,
    group_by_month,
    local_day,
)
from domain.services.warmup import (
    WarmupSet,
    WarmupStrategy,
    calculate_warmup_sets,
    recommended_strategy,
    recommended_warmup_set_count,
)

__all__ = [
    "estimate_active_energy",
    "TopLift",
    "check_for_new_record",
    "detect_personal_records",
    "recent_personal_records",
    "top_lifts_by_weight",
    "calculate_streaks",
    "compute_statistics",
    "group_by_month",
    "local_day",
    "WarmupSet",
    "WarmupStrategy",
    "calculate_warmup_sets",
    "recommended_strategy",
    "recommended_warmup_set_count",
]
