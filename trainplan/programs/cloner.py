"""Subtree Cloner - duplicate a block, week, day or activity.

The copy is a deep copy of the source with a fresh id on itself and on every
descendant (weeks, days, activities and activity group targets). It is
spliced in directly after the source and every later sibling shifts down by
one. Block and day copies get a visible name suffix.

A copy that kept any source id would make later lookups ambiguous, so every
copy is checked with assert_fresh_ids before it is returned.
"""

from collections.abc import Callable

from pydantic import TypeAdapter

from trainplan.config.settings import settings
from trainplan.programs.ids import IdGenerator, default_id_generator
from trainplan.programs.invariants import assert_fresh_ids
from trainplan.programs.locator import find_activity, find_block, find_day, find_week
from trainplan.programs.results import EditResult, applied, not_found
from trainplan.programs.tree import Level, child_field, children_of, node_at, renumber, replace_children
from trainplan.programs.types import NAME_MAX_LENGTH, Node, NodeName, Program

_FINDERS: dict[Level, Callable] = {
    "block": find_block,
    "week": find_week,
    "day": find_day,
    "activity": find_activity,
}

_SUFFIXED_LEVELS = {"block", "day"}

_node_name: TypeAdapter[str] = TypeAdapter(NodeName)


def copy_name(name: str, suffix: str) -> str:
    """Name for a copy: the source name shortened so that name + suffix fits a NodeName.

    Copying a copy therefore never grows the name past the limit.

    Raises:
        pydantic.ValidationError: If the suffix alone does not fit
    """
    base = name[: max(NAME_MAX_LENGTH - len(suffix), 0)].rstrip()
    return _node_name.validate_python(f"{base}{suffix}")


def regenerate_ids(node: Node, depth: int, id_generator: IdGenerator) -> Node:
    """Return node with a fresh id on itself and every descendant.

    Args:
        node: Subtree root
        depth: Path length of node (block=1 ... activity=4)
        id_generator: Source of fresh ids
    """
    update: dict = {"id": id_generator.next_id()}
    if hasattr(node, "activity_group_targets"):
        update["activity_group_targets"] = tuple(
            target.model_copy(update={"id": id_generator.next_id()}) for target in node.activity_group_targets
        )
    field = child_field(depth)
    if field:
        update[field] = tuple(regenerate_ids(child, depth + 1, id_generator) for child in children_of(node, depth))
    return node.model_copy(update=update)


def _copy(program: Program, level: Level, node_id: str, id_generator: IdGenerator | None) -> EditResult:
    operation = f"copy_{level}"
    location = _FINDERS[level](program, node_id)
    if location is None:
        return not_found(program, node_id, operation)

    path = location.path
    index = path[-1]
    source = node_at(program, path)

    clone = regenerate_ids(source.model_copy(deep=True), len(path), id_generator or default_id_generator())
    update: dict = {"order": index + 1}
    if level in _SUFFIXED_LEVELS:
        update["name"] = copy_name(source.name, settings.copy_name_suffix)
    clone = clone.model_copy(update=update)

    def _splice(children: tuple) -> tuple:
        spliced = children[: index + 1] + (clone,) + children[index + 1 :]
        return renumber(spliced, start=index + 2)

    updated = replace_children(program, path[:-1], _splice)
    assert_fresh_ids(program, updated, clone, len(path))
    return applied(updated, clone.id, operation)


def copy_block(program: Program, block_id: str, *, id_generator: IdGenerator | None = None) -> EditResult:
    """Duplicate a block with all its weeks, days and activities.

    Args:
        program: Program to edit
        block_id: Source block
        id_generator: Source of fresh ids for the copy

    Returns:
        EditResult whose node_id is the copy's id; the copy sits at the
        source's index + 1 and is named "<name> (Copy)"
    """
    return _copy(program, "block", block_id, id_generator)


def copy_week(program: Program, week_id: str, *, id_generator: IdGenerator | None = None) -> EditResult:
    return _copy(program, "week", week_id, id_generator)


def copy_day(program: Program, day_id: str, *, id_generator: IdGenerator | None = None) -> EditResult:
    return _copy(program, "day", day_id, id_generator)


def copy_activity(program: Program, activity_id: str, *, id_generator: IdGenerator | None = None) -> EditResult:
    return _copy(program, "activity", activity_id, id_generator)
