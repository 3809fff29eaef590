"""Activity group targets on blocks and weeks.

This is the editing boundary for targets: a block or week holds at most one
target per activity group. Target ids are part of the program's id space.
"""

from collections.abc import Iterable

from loguru import logger

from trainplan.programs.errors import DuplicateTargetError
from trainplan.programs.ids import IdGenerator, default_id_generator
from trainplan.programs.locator import find_block, find_week
from trainplan.programs.results import EditResult, applied, not_found
from trainplan.programs.tree import Path, replace_at
from trainplan.programs.types import ActivityGroupTarget, Block, Program, Week


def ensure_unique_target_groups(node_id: str, activity_group_ids: Iterable[str | None]) -> None:
    """Raise DuplicateTargetError if any activity group appears twice."""
    seen: set[str | None] = set()
    for group_id in activity_group_ids:
        if group_id in seen:
            raise DuplicateTargetError(node_id, str(group_id))
        seen.add(group_id)


def _warn_if_overallocated(node: Block | Week) -> None:
    total = sum(t.target_percentage for t in node.activity_group_targets)
    if total > 100:
        logger.warning(f"Targets on {node.id} sum to {total}%, more than total volume")


def _replace_targets(program: Program, path: Path, targets: tuple[ActivityGroupTarget, ...]) -> Program:
    def _swap(node: Block | Week) -> Block | Week:
        updated = node.model_copy(update={"activity_group_targets": targets})
        _warn_if_overallocated(updated)
        return updated

    return replace_at(program, path, _swap)


def _locate(program: Program, level: str, node_id: str):
    return find_week(program, node_id) if level == "week" else find_block(program, node_id)


def _add_target(
    program: Program,
    level: str,
    node_id: str,
    activity_group_id: str,
    target_percentage: float,
    id_generator: IdGenerator | None,
) -> EditResult:
    operation = f"add_{level}_target"
    location = _locate(program, level, node_id)
    if location is None:
        return not_found(program, node_id, operation)

    node = location.week if level == "week" else location.block
    existing = node.activity_group_targets
    ensure_unique_target_groups(node_id, [*(t.activity_group_id for t in existing), activity_group_id])

    target = ActivityGroupTarget(
        id=(id_generator or default_id_generator()).next_id(),
        activity_group_id=activity_group_id,
        target_percentage=target_percentage,
    )
    updated = _replace_targets(program, location.path, (*existing, target))
    return applied(updated, target.id, operation)


def _update_target(program: Program, level: str, node_id: str, target_id: str, target_percentage: float) -> EditResult:
    operation = f"update_{level}_target"
    location = _locate(program, level, node_id)
    if location is None:
        return not_found(program, node_id, operation)

    node = location.week if level == "week" else location.block
    if not any(t.id == target_id for t in node.activity_group_targets):
        return not_found(program, target_id, operation)

    targets = tuple(
        ActivityGroupTarget(id=t.id, activity_group_id=t.activity_group_id, target_percentage=target_percentage)
        if t.id == target_id
        else t
        for t in node.activity_group_targets
    )
    return applied(_replace_targets(program, location.path, targets), target_id, operation)


def _remove_target(program: Program, level: str, node_id: str, target_id: str) -> EditResult:
    operation = f"remove_{level}_target"
    location = _locate(program, level, node_id)
    if location is None:
        return not_found(program, node_id, operation)

    node = location.week if level == "week" else location.block
    targets = tuple(t for t in node.activity_group_targets if t.id != target_id)
    if len(targets) == len(node.activity_group_targets):
        return not_found(program, target_id, operation)
    return applied(_replace_targets(program, location.path, targets), target_id, operation)


def add_week_target(
    program: Program,
    week_id: str,
    activity_group_id: str,
    target_percentage: float,
    *,
    id_generator: IdGenerator | None = None,
) -> EditResult:
    """Declare a volume target for an activity group on a week.

    Args:
        program: Program to edit
        week_id: Week receiving the target
        activity_group_id: External activity group reference
        target_percentage: Expected share of the week's total volume (0-100)
        id_generator: Source of the target id

    Returns:
        EditResult whose node_id is the new target id

    Raises:
        DuplicateTargetError: If the group already has a target on this week
        pydantic.ValidationError: If target_percentage is outside 0-100
    """
    return _add_target(program, "week", week_id, activity_group_id, target_percentage, id_generator)


def add_block_target(
    program: Program,
    block_id: str,
    activity_group_id: str,
    target_percentage: float,
    *,
    id_generator: IdGenerator | None = None,
) -> EditResult:
    return _add_target(program, "block", block_id, activity_group_id, target_percentage, id_generator)


def update_week_target(program: Program, week_id: str, target_id: str, target_percentage: float) -> EditResult:
    return _update_target(program, "week", week_id, target_id, target_percentage)


def update_block_target(program: Program, block_id: str, target_id: str, target_percentage: float) -> EditResult:
    return _update_target(program, "block", block_id, target_id, target_percentage)


def remove_week_target(program: Program, week_id: str, target_id: str) -> EditResult:
    return _remove_target(program, "week", week_id, target_id)


def remove_block_target(program: Program, block_id: str, target_id: str) -> EditResult:
    return _remove_target(program, "block", block_id, target_id)
