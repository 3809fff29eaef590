"""Sibling Reorderer - apply a caller-supplied ordering to a sibling list.

The desired ordering must be a permutation of the current sibling ids.
Anything else (missing, extra or repeated ids) is rejected with status
"invalid_order" and the program is returned untouched. `order` is always
recomputed from the new list position.
"""

from collections.abc import Sequence

from trainplan.programs.locator import find_block, find_container, find_day, find_week
from trainplan.programs.results import EditResult, applied, invalid_order, not_found
from trainplan.programs.tree import Path, children_of, node_at, renumber, replace_children
from trainplan.programs.types import Program


def _permutation_error(current_ids: list[str], desired_ids: Sequence[str]) -> str | None:
    if len(desired_ids) != len(current_ids):
        return f"expected {len(current_ids)} ids, got {len(desired_ids)}"
    if len(set(desired_ids)) != len(desired_ids):
        return "ids repeated"
    if set(desired_ids) != set(current_ids):
        return "ids do not match current children"
    return None


def _reorder(program: Program, container_path: Path, container_id: str, desired_ids: Sequence[str], operation: str) -> EditResult:
    children = children_of(node_at(program, container_path), len(container_path))
    current_ids = [child.id for child in children]

    reason = _permutation_error(current_ids, desired_ids)
    if reason:
        return invalid_order(program, container_id, operation, reason)

    by_id = {child.id: child for child in children}
    updated = replace_children(program, container_path, lambda _: renumber(by_id[i] for i in desired_ids))
    return applied(updated, container_id, operation)


def reorder_blocks(program: Program, desired_ids: Sequence[str]) -> EditResult:
    return _reorder(program, (), program.id, desired_ids, "reorder_blocks")


def reorder_weeks(program: Program, block_id: str, desired_ids: Sequence[str]) -> EditResult:
    location = find_block(program, block_id)
    if location is None:
        return not_found(program, block_id, "reorder_weeks")
    return _reorder(program, location.path, block_id, desired_ids, "reorder_weeks")


def reorder_days(program: Program, week_id: str, desired_ids: Sequence[str]) -> EditResult:
    location = find_week(program, week_id)
    if location is None:
        return not_found(program, week_id, "reorder_days")
    return _reorder(program, location.path, week_id, desired_ids, "reorder_days")


def reorder_activities(program: Program, day_id: str, desired_ids: Sequence[str]) -> EditResult:
    location = find_day(program, day_id)
    if location is None:
        return not_found(program, day_id, "reorder_activities")
    return _reorder(program, location.path, day_id, desired_ids, "reorder_activities")


def reorder_siblings(program: Program, parent_id: str, desired_ids: Sequence[str]) -> EditResult:
    """Reorder the children of any container.

    Args:
        program: Program to edit
        parent_id: Program id (blocks), block id (weeks), week id (days) or day id (activities)
        desired_ids: Every current child id, in the desired order

    Returns:
        EditResult with status "not_found" for an unknown parent and
        "invalid_order" when desired_ids is not a permutation of the children
    """
    container_path = find_container(program, parent_id)
    if container_path is None:
        return not_found(program, parent_id, "reorder_siblings")
    return _reorder(program, container_path, parent_id, desired_ids, "reorder_siblings")


def move_sibling(program: Program, parent_id: str, old_index: int, new_index: int) -> EditResult:
    """Move one child from old_index to new_index, as a drag gesture does."""
    container_path = find_container(program, parent_id)
    if container_path is None:
        return not_found(program, parent_id, "move_sibling")

    ids = [child.id for child in children_of(node_at(program, container_path), len(container_path))]
    if not (0 <= old_index < len(ids) and 0 <= new_index < len(ids)):
        return invalid_order(program, parent_id, "move_sibling", f"index out of range for {len(ids)} children")

    ids.insert(new_index, ids.pop(old_index))
    return _reorder(program, container_path, parent_id, ids, "move_sibling")
