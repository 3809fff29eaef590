"""Path-based primitives shared by the tree operations.

A path is a tuple of list indices from the Program down to a node:
(block,) for a Block, (block, week) for a Week, (block, week, day) for a Day
and (block, week, day, activity) for an Activity. The empty path is the
Program itself. The length of a container's path selects which child
collection it owns.
"""

from collections.abc import Callable, Iterable, Iterator
from typing import Literal, TypeVar

from pydantic import BaseModel

Level = Literal["block", "week", "day", "activity"]

LEVELS: tuple[Level, ...] = ("block", "week", "day", "activity")

# CHILD_FIELDS[len(path)] is the child collection of the container at `path`
CHILD_FIELDS: tuple[str, ...] = ("blocks", "weeks", "days", "activities")

Path = tuple[int, ...]

T = TypeVar("T", bound=BaseModel)


def level_depth(level: Level) -> int:
    """Path length of a node at `level` (block=1 ... activity=4)."""
    return LEVELS.index(level) + 1


def child_field(depth: int) -> str | None:
    """Child collection name for a container whose path has length `depth`."""
    return CHILD_FIELDS[depth] if depth < len(CHILD_FIELDS) else None


def children_of(container: BaseModel, depth: int) -> tuple:
    field = child_field(depth)
    return getattr(container, field) if field else ()


def replace_at(root: T, path: Path, fn: Callable[[BaseModel], BaseModel], depth: int = 0) -> T:
    """Return a copy of root with the node at `path` replaced by fn(node).

    Only the nodes along the path are copied; untouched siblings are shared
    with the input, which is safe because every node is frozen.
    """
    if not path:
        return fn(root)
    field = CHILD_FIELDS[depth]
    children = list(getattr(root, field))
    children[path[0]] = replace_at(children[path[0]], path[1:], fn, depth + 1)
    return root.model_copy(update={field: tuple(children)})


def replace_children(root: T, container_path: Path, fn: Callable[[tuple], Iterable]) -> T:
    """Return a copy of root with the container's child collection replaced by fn(children)."""
    field = CHILD_FIELDS[len(container_path)]

    def _swap(container: BaseModel) -> BaseModel:
        return container.model_copy(update={field: tuple(fn(getattr(container, field)))})

    return replace_at(root, container_path, _swap)


def renumber(children: Iterable[T], start: int = 0) -> tuple[T, ...]:
    """Set `order` to list position for every child at or after `start`."""
    result = []
    for i, child in enumerate(children):
        if i >= start and child.order != i:
            child = child.model_copy(update={"order": i})
        result.append(child)
    return tuple(result)


def iter_ids(node: BaseModel, depth: int = 0) -> Iterator[str]:
    """Yield every id in the subtree rooted at node, targets included.

    `depth` is the path length of `node` (0 for a Program).
    """
    yield node.id
    for target in getattr(node, "activity_group_targets", ()):
        yield target.id
    for child in children_of(node, depth):
        yield from iter_ids(child, depth + 1)


def count_ids(node: BaseModel, depth: int = 0) -> int:
    return sum(1 for _ in iter_ids(node, depth))


def node_at(root: BaseModel, path: Path) -> BaseModel:
    node = root
    for depth, index in enumerate(path):
        node = getattr(node, CHILD_FIELDS[depth])[index]
    return node
