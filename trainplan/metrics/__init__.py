"""Volume metrics - read-only projections over the program tree."""

from trainplan.metrics.catalog import ActivityTemplateRef, TemplateCatalog, as_catalog
from trainplan.metrics.status import (
    ProgramVolumeReport,
    VolumeStatus,
    calculate_volume_status,
    get_block_volume_statuses,
    get_program_volume_report,
    get_week_volume_statuses,
)
from trainplan.metrics.volume import (
    activity_volume,
    calculate_block_group_volumes,
    calculate_day_group_volumes,
    calculate_group_volume,
    calculate_volume,
    calculate_week_group_volumes,
)

__all__ = [
    "ActivityTemplateRef",
    "ProgramVolumeReport",
    "TemplateCatalog",
    "VolumeStatus",
    "activity_volume",
    "as_catalog",
    "calculate_block_group_volumes",
    "calculate_day_group_volumes",
    "calculate_group_volume",
    "calculate_volume",
    "calculate_volume_status",
    "calculate_week_group_volumes",
    "get_block_volume_statuses",
    "get_program_volume_report",
    "get_week_volume_statuses",
]
