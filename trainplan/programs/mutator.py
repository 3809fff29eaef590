"""Structural Mutator - update, add and delete nodes.

Every operation returns an EditResult carrying a complete new Program; the
input is never modified. Sibling orders stay dense: new nodes take
order = number of existing siblings, and deletes renumber the survivors.

Callers can only edit content fields. `id`, `order`, activity group targets
and child collections change exclusively through the structural operations
(and trainplan.programs.targets for targets).
"""

from collections.abc import Callable, Mapping
from typing import Any

from loguru import logger
from pydantic.alias_generators import to_snake

from trainplan.programs.errors import ProtectedFieldError
from trainplan.programs.ids import IdGenerator, default_id_generator
from trainplan.programs.locator import find_activity, find_block, find_day, find_week
from trainplan.programs.results import EditResult, applied, not_found
from trainplan.programs.targets import ensure_unique_target_groups
from trainplan.programs.tree import (
    CHILD_FIELDS,
    LEVELS,
    Level,
    Path,
    child_field,
    children_of,
    count_ids,
    level_depth,
    node_at,
    renumber,
    replace_at,
    replace_children,
)
from trainplan.programs.types import ACTIVITY_VARIANTS, Block, Day, Node, Program, Week, activity_adapter

# Partial field record, or a function from the node's content view to the fields to set
Changes = Mapping[str, Any] | Callable[[dict[str, Any]], Mapping[str, Any]]

STRUCTURAL_FIELDS = frozenset({"id", "order"})
PROTECTED_FIELDS = STRUCTURAL_FIELDS | {"activity_group_targets", *CHILD_FIELDS}

_NODE_MODELS = {"block": Block, "week": Week, "day": Day}

_ACTIVITY_MODELS = {model.model_fields["type"].default: model for model in ACTIVITY_VARIANTS}

_FINDERS = {
    "block": find_block,
    "week": find_week,
    "day": find_day,
    "activity": find_activity,
}


def _normalize_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    """Accept camelCase keys from UI/storage records alongside field names."""
    return {to_snake(key): value for key, value in data.items()}


def _validate_node(level: Level, data: dict[str, Any]) -> Node:
    if level == "activity":
        return activity_adapter.validate_python(data)
    return _NODE_MODELS[level].model_validate(data)


def _content_fields(level: Level, node: Node, updates: Mapping[str, Any]) -> set[str]:
    """Content fields of the node as it will be after the update.

    For activities this is the variant named by the updated `type`, so a
    field that only exists on another variant is rejected instead of dropped.
    """
    if level == "activity":
        model = _ACTIVITY_MODELS.get(updates.get("type", node.type))
        # An unknown type is left for the union to reject
        models = (model,) if model else ACTIVITY_VARIANTS
    else:
        models = (_NODE_MODELS[level],)
    return {name for model in models for name in model.model_fields} - PROTECTED_FIELDS


def _apply_changes(node: Node, level: Level, changes: Changes) -> Node:
    view = node.model_dump(exclude=set(PROTECTED_FIELDS))
    updates = _normalize_keys(changes(dict(view)) if callable(changes) else changes)

    protected = PROTECTED_FIELDS & updates.keys()
    if protected:
        raise ProtectedFieldError(protected)
    # Values carried over unchanged from the view are allowed to fall away on a type switch
    unknown = {
        key
        for key in updates.keys() - _content_fields(level, node, updates)
        if key not in view or updates[key] != view[key]
    }
    if unknown:
        raise ValueError(f"Unknown {level} fields: {', '.join(sorted(unknown))}")

    data = node.model_dump()
    data.update(updates)
    # Activities re-discriminate here, so an update may switch `type`
    return _validate_node(level, data)


def _materialize(level: Level, content: Mapping[str, Any], order: int, id_generator: IdGenerator) -> dict[str, Any]:
    """Turn caller content into node data with fresh ids and dense orders, recursively."""
    data = _normalize_keys(content)
    protected = STRUCTURAL_FIELDS & data.keys()
    if protected:
        raise ProtectedFieldError(protected)

    data["id"] = id_generator.next_id()
    data["order"] = order

    if "activity_group_targets" in data:
        targets = []
        for target in data["activity_group_targets"]:
            target = _normalize_keys(target)
            if "id" in target:
                raise ProtectedFieldError({"id"})
            targets.append({**target, "id": id_generator.next_id()})
        ensure_unique_target_groups(data["id"], [t.get("activity_group_id") for t in targets])
        data["activity_group_targets"] = targets

    depth = level_depth(level)
    field = child_field(depth)
    if field and field in data:
        child_level = LEVELS[depth]
        data[field] = [
            _materialize(child_level, child, i, id_generator) for i, child in enumerate(data[field])
        ]
    return data


def _update(program: Program, level: Level, node_id: str, changes: Changes) -> EditResult:
    operation = f"update_{level}"
    location = _FINDERS[level](program, node_id)
    if location is None:
        return not_found(program, node_id, operation)
    updated = replace_at(program, location.path, lambda node: _apply_changes(node, level, changes))
    return applied(updated, node_id, operation)


def _add(
    program: Program,
    level: Level,
    parent_path: Path,
    content: Mapping[str, Any],
    id_generator: IdGenerator | None,
) -> EditResult:
    siblings = children_of(node_at(program, parent_path), len(parent_path))
    data = _materialize(level, content, len(siblings), id_generator or default_id_generator())
    node = _validate_node(level, data)
    updated = replace_children(program, parent_path, lambda children: (*children, node))
    return applied(updated, node.id, f"add_{level}")


def _delete(program: Program, level: Level, node_id: str) -> EditResult:
    operation = f"delete_{level}"
    location = _FINDERS[level](program, node_id)
    if location is None:
        return not_found(program, node_id, operation)

    index = location.path[-1]
    removed = count_ids(node_at(program, location.path), len(location.path))
    updated = replace_children(
        program,
        location.path[:-1],
        lambda children: renumber(children[:index] + children[index + 1 :], start=index),
    )
    logger.debug(f"{operation}: removed {removed} ids with {node_id}")
    return applied(updated, node_id, operation)


def update_block(program: Program, block_id: str, changes: Changes) -> EditResult:
    """Replace a block's content fields (name).

    Args:
        program: Program to edit
        block_id: Block to update
        changes: Field record, or a function from the block's content view to fields to set

    Returns:
        EditResult; status "not_found" leaves the program untouched

    Raises:
        ProtectedFieldError: If changes touch id, order, targets or weeks
        ValueError: If changes name an unknown field
        pydantic.ValidationError: If the updated block is invalid
    """
    return _update(program, "block", block_id, changes)


def update_week(program: Program, week_id: str, changes: Changes) -> EditResult:
    return _update(program, "week", week_id, changes)


def update_day(program: Program, day_id: str, changes: Changes) -> EditResult:
    return _update(program, "day", day_id, changes)


def update_activity(program: Program, activity_id: str, changes: Changes) -> EditResult:
    """Replace an activity's content fields; `type` may change the activity variant."""
    return _update(program, "activity", activity_id, changes)


def add_block(program: Program, content: Mapping[str, Any], *, id_generator: IdGenerator | None = None) -> EditResult:
    """Append a new block to the program.

    Args:
        program: Program to edit
        content: Block content (name, optional targets and weeks) without id/order
        id_generator: Source of fresh ids (temporary ids by default)

    Returns:
        EditResult whose node_id is the new block id
    """
    return _add(program, "block", (), content, id_generator)


def add_week(
    program: Program, block_id: str, content: Mapping[str, Any], *, id_generator: IdGenerator | None = None
) -> EditResult:
    location = find_block(program, block_id)
    if location is None:
        return not_found(program, block_id, "add_week")
    return _add(program, "week", location.path, content, id_generator)


def add_day(
    program: Program, week_id: str, content: Mapping[str, Any], *, id_generator: IdGenerator | None = None
) -> EditResult:
    location = find_week(program, week_id)
    if location is None:
        return not_found(program, week_id, "add_day")
    return _add(program, "day", location.path, content, id_generator)


def add_activity(
    program: Program, day_id: str, content: Mapping[str, Any], *, id_generator: IdGenerator | None = None
) -> EditResult:
    location = find_day(program, day_id)
    if location is None:
        return not_found(program, day_id, "add_activity")
    return _add(program, "activity", location.path, content, id_generator)


def delete_block(program: Program, block_id: str) -> EditResult:
    """Remove a block and everything under it, renumbering the remaining blocks."""
    return _delete(program, "block", block_id)


def delete_week(program: Program, week_id: str) -> EditResult:
    return _delete(program, "week", week_id)


def delete_day(program: Program, day_id: str) -> EditResult:
    return _delete(program, "day", day_id)


def delete_activity(program: Program, activity_id: str) -> EditResult:
    return _delete(program, "activity", activity_id)
