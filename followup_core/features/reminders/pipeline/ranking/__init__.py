from .service import (
    SCENARIO_BOOSTS,
    boost_for_scenario,
    filter_by_minimum_priority,
    group_by_level,
    priority_level,
    sort_by_priority,
    top_n,
)

__all__ = [
    "SCENARIO_BOOSTS",
    "boost_for_scenario",
    "filter_by_minimum_priority",
    "group_by_level",
    "priority_level",
    "sort_by_priority",
    "top_n",
]
