"""Target attainment - actual group volume against declared targets.

For each target on a week or block:
    target_volume = target_percentage / 100 * total_volume
    percentage    = actual / target_volume * 100  (0 when target_volume is 0)

total_volume is the sum over every grouped activity at that level, including
groups without a target.

Status tiers: red below 90%, yellow from 90% up to 100%, green at 100% or more.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict

from trainplan.metrics.catalog import TemplateSource, as_catalog
from trainplan.metrics.volume import calculate_block_group_volumes, calculate_week_group_volumes
from trainplan.programs.types import ActivityGroupTarget, Block, Program, Week

YELLOW_THRESHOLD_PCT = 90.0
GREEN_THRESHOLD_PCT = 100.0

VolumeStatusTier = Literal["red", "yellow", "green"]


class VolumeStatus(BaseModel):
    """Attainment of one activity group against its target.

    Attributes:
        percentage: Actual volume as a percentage of target volume
        status: red, yellow or green
        actual: Actual group volume
        target: Target volume derived from the target percentage
    """

    model_config = ConfigDict(frozen=True)

    percentage: float
    status: VolumeStatusTier
    actual: float
    target: float


class ProgramVolumeReport(BaseModel):
    """Volume statuses for every block and week, keyed by node id then activity group id."""

    model_config = ConfigDict(frozen=True)

    blocks: dict[str, dict[str, VolumeStatus]] = {}
    weeks: dict[str, dict[str, VolumeStatus]] = {}


def calculate_volume_status(actual_volume: float, target_percentage: float, total_volume: float) -> VolumeStatus:
    """Compare a group's actual volume with its share of total volume.

    Args:
        actual_volume: Volume of the group
        target_percentage: Declared share of total volume (0-100)
        total_volume: Volume of all groups at the same level

    Returns:
        VolumeStatus; a zero target volume yields percentage 0 (red)
    """
    target_volume = target_percentage / 100 * total_volume
    percentage = actual_volume / target_volume * 100 if target_volume > 0 else 0.0

    status: VolumeStatusTier = "green"
    if percentage < YELLOW_THRESHOLD_PCT:
        status = "red"
    elif percentage < GREEN_THRESHOLD_PCT:
        status = "yellow"

    return VolumeStatus(percentage=percentage, status=status, actual=actual_volume, target=target_volume)


def _statuses(targets: tuple[ActivityGroupTarget, ...], volumes: dict[str, int]) -> dict[str, VolumeStatus]:
    total_volume = sum(volumes.values())
    return {
        target.activity_group_id: calculate_volume_status(
            volumes.get(target.activity_group_id, 0), target.target_percentage, total_volume
        )
        for target in targets
    }


def get_week_volume_statuses(week: Week, templates: TemplateSource) -> dict[str, VolumeStatus]:
    """Status per activity group for every target declared on the week."""
    return _statuses(week.activity_group_targets, calculate_week_group_volumes(week, templates))


def get_block_volume_statuses(block: Block, templates: TemplateSource) -> dict[str, VolumeStatus]:
    """Status per activity group for every target declared on the block."""
    return _statuses(block.activity_group_targets, calculate_block_group_volumes(block, templates))


def get_program_volume_report(program: Program, templates: TemplateSource) -> ProgramVolumeReport:
    """Statuses for every block and week that declares at least one target."""
    catalog = as_catalog(templates)
    blocks: dict[str, dict[str, VolumeStatus]] = {}
    weeks: dict[str, dict[str, VolumeStatus]] = {}
    for block in program.blocks:
        if block.activity_group_targets:
            blocks[block.id] = get_block_volume_statuses(block, catalog)
        for week in block.weeks:
            if week.activity_group_targets:
                weeks[week.id] = get_week_volume_statuses(week, catalog)
    return ProgramVolumeReport(blocks=blocks, weeks=weeks)
