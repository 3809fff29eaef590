"""Tree Locator - read-only lookups by id.

Each lookup is a depth-first scan over one level of the tree and returns the
node together with its ancestors and its path. A missing id returns None:
after a concurrent delete a stale id is an expected outcome, not an error.
"""

from collections.abc import Iterator
from dataclasses import dataclass

from trainplan.programs.tree import LEVELS, Level, Path, children_of, level_depth
from trainplan.programs.types import Activity, Block, Day, Program, Week


@dataclass(frozen=True)
class BlockLocation:
    block: Block
    path: Path

    @property
    def index(self) -> int:
        return self.path[-1]


@dataclass(frozen=True)
class WeekLocation:
    block: Block
    week: Week
    path: Path

    @property
    def index(self) -> int:
        return self.path[-1]


@dataclass(frozen=True)
class DayLocation:
    block: Block
    week: Week
    day: Day
    path: Path

    @property
    def index(self) -> int:
        return self.path[-1]


@dataclass(frozen=True)
class ActivityLocation:
    block: Block
    week: Week
    day: Day
    activity: Activity
    path: Path

    @property
    def index(self) -> int:
        return self.path[-1]


@dataclass(frozen=True)
class NodeLocation:
    """Level-agnostic lookup result.

    Attributes:
        level: Level of the node found
        chain: Ancestors from the Block down, ending with the node itself
        path: Index path of the node
    """

    level: Level
    chain: tuple
    path: Path

    @property
    def node(self):
        return self.chain[-1]


def _walk(node, depth: int, target_depth: int, path: Path, chain: tuple) -> Iterator[tuple[Path, tuple]]:
    for i, child in enumerate(children_of(node, depth)):
        child_path = path + (i,)
        child_chain = chain + (child,)
        if depth + 1 == target_depth:
            yield child_path, child_chain
        else:
            yield from _walk(child, depth + 1, target_depth, child_path, child_chain)


def _find(program: Program, node_id: str, level: Level) -> tuple[Path, tuple] | None:
    for path, chain in _walk(program, 0, level_depth(level), (), ()):
        if chain[-1].id == node_id:
            return path, chain
    return None


def find_block(program: Program, block_id: str) -> BlockLocation | None:
    found = _find(program, block_id, "block")
    if found is None:
        return None
    path, (block,) = found
    return BlockLocation(block=block, path=path)


def find_week(program: Program, week_id: str) -> WeekLocation | None:
    """Find a week and its owning block."""
    found = _find(program, week_id, "week")
    if found is None:
        return None
    path, (block, week) = found
    return WeekLocation(block=block, week=week, path=path)


def find_day(program: Program, day_id: str) -> DayLocation | None:
    """Find a day and its owning block and week."""
    found = _find(program, day_id, "day")
    if found is None:
        return None
    path, (block, week, day) = found
    return DayLocation(block=block, week=week, day=day, path=path)


def find_activity(program: Program, activity_id: str) -> ActivityLocation | None:
    """Find an activity and its full ancestor chain."""
    found = _find(program, activity_id, "activity")
    if found is None:
        return None
    path, (block, week, day, activity) = found
    return ActivityLocation(block=block, week=week, day=day, activity=activity, path=path)


def find_node(program: Program, node_id: str) -> NodeLocation | None:
    """Find a node at any level, scanning blocks first, then weeks, days and activities."""
    for level in LEVELS:
        found = _find(program, node_id, level)
        if found is not None:
            path, chain = found
            return NodeLocation(level=level, chain=chain, path=path)
    return None


def find_container(program: Program, container_id: str) -> Path | None:
    """Path of the node owning a child collection: the program, a block, a week or a day."""
    if container_id == program.id:
        return ()
    location = find_node(program, container_id)
    if location is None or location.level == "activity":
        return None
    return location.path
