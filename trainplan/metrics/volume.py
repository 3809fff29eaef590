"""Prescribed volume aggregation by activity group.

Volume is total prescribed repetitions: the sum of reps over every set of a
lift activity. Cardio, benchmark and other activities contribute zero.
Activities whose template has no group are left out of every bucket.

Aggregation is additive across levels: a block's group volume equals the sum
over its weeks, which equals the sum over their days.
"""

from collections.abc import Iterable

from trainplan.metrics.catalog import TemplateSource, as_catalog
from trainplan.programs.types import Activity, Block, Day, LiftActivity, Week


def activity_volume(activity: Activity) -> int:
    if isinstance(activity, LiftActivity):
        return sum(s.reps for s in activity.sets)
    return 0


def calculate_volume(activities: Iterable[Activity]) -> int:
    """Total volume (reps across all sets) of the given activities."""
    return sum(activity_volume(activity) for activity in activities)


def calculate_group_volume(activities: Iterable[Activity], activity_group_id: str, templates: TemplateSource) -> int:
    """Volume of the activities whose template belongs to activity_group_id."""
    catalog = as_catalog(templates)
    return calculate_volume(a for a in activities if catalog.group_of(a.activity_template_id) == activity_group_id)


def _merge(into: dict[str, int], volumes: dict[str, int]) -> dict[str, int]:
    for group_id, volume in volumes.items():
        into[group_id] = into.get(group_id, 0) + volume
    return into


def calculate_day_group_volumes(day: Day, templates: TemplateSource) -> dict[str, int]:
    """Volume per activity group for one day.

    Args:
        day: Day to aggregate
        templates: Template catalog used to find each activity's group

    Returns:
        Mapping of activity_group_id to volume; a group with only non-lift
        activities appears with volume 0
    """
    catalog = as_catalog(templates)
    volumes: dict[str, int] = {}
    for activity in day.activities:
        group_id = catalog.group_of(activity.activity_template_id)
        if group_id:
            volumes[group_id] = volumes.get(group_id, 0) + activity_volume(activity)
    return volumes


def calculate_week_group_volumes(week: Week, templates: TemplateSource) -> dict[str, int]:
    catalog = as_catalog(templates)
    volumes: dict[str, int] = {}
    for day in week.days:
        _merge(volumes, calculate_day_group_volumes(day, catalog))
    return volumes


def calculate_block_group_volumes(block: Block, templates: TemplateSource) -> dict[str, int]:
    catalog = as_catalog(templates)
    volumes: dict[str, int] = {}
    for week in block.weeks:
        _merge(volumes, calculate_week_group_volumes(week, catalog))
    return volumes
