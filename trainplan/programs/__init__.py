"""Program tree - model and structural edits.

This module provides:
- The Program → Block → Week → Day → Activity → Set model
- Lookups by id (locator)
- Update/add/delete (mutator), subtree copies (cloner), reordering
- Activity group target edits
- Storage document mapping

Every edit returns an EditResult with a new Program; inputs are never mutated.
"""

from trainplan.programs.cloner import copy_activity, copy_block, copy_day, copy_week
from trainplan.programs.errors import (
    DuplicateTargetError,
    InvalidOrderError,
    NodeNotFoundError,
    ProgramInvariantError,
    ProtectedFieldError,
)
from trainplan.programs.ids import IdGenerator, SequentialIdGenerator, TempIdGenerator, is_temp_id
from trainplan.programs.invariants import check_order_contiguity, find_duplicate_ids, validate_program
from trainplan.programs.locator import find_activity, find_block, find_day, find_node, find_week
from trainplan.programs.mutator import (
    add_activity,
    add_block,
    add_day,
    add_week,
    delete_activity,
    delete_block,
    delete_day,
    delete_week,
    update_activity,
    update_block,
    update_day,
    update_week,
)
from trainplan.programs.reorder import (
    move_sibling,
    reorder_activities,
    reorder_blocks,
    reorder_days,
    reorder_siblings,
    reorder_weeks,
)
from trainplan.programs.results import EditResult, EditStatus
from trainplan.programs.serializers import collect_temp_ids, program_from_document, to_storage_document
from trainplan.programs.targets import (
    add_block_target,
    add_week_target,
    remove_block_target,
    remove_week_target,
    update_block_target,
    update_week_target,
)
from trainplan.programs.types import (
    Activity,
    ActivityGroupTarget,
    BenchmarkActivity,
    BenchmarkCardio,
    Block,
    CardioActivity,
    Day,
    DistanceUnit,
    LiftActivity,
    OtherActivity,
    Program,
    ProgramProgress,
    Set,
    StaticCardio,
    Week,
)

__all__ = [
    "Activity",
    "ActivityGroupTarget",
    "BenchmarkActivity",
    "BenchmarkCardio",
    "Block",
    "CardioActivity",
    "Day",
    "DistanceUnit",
    "DuplicateTargetError",
    "EditResult",
    "EditStatus",
    "IdGenerator",
    "InvalidOrderError",
    "LiftActivity",
    "NodeNotFoundError",
    "OtherActivity",
    "Program",
    "ProgramInvariantError",
    "ProgramProgress",
    "ProtectedFieldError",
    "SequentialIdGenerator",
    "Set",
    "StaticCardio",
    "TempIdGenerator",
    "Week",
    "add_activity",
    "add_block",
    "add_block_target",
    "add_day",
    "add_week",
    "add_week_target",
    "check_order_contiguity",
    "collect_temp_ids",
    "copy_activity",
    "copy_block",
    "copy_day",
    "copy_week",
    "delete_activity",
    "delete_block",
    "delete_day",
    "delete_week",
    "find_activity",
    "find_block",
    "find_day",
    "find_duplicate_ids",
    "find_node",
    "find_week",
    "is_temp_id",
    "move_sibling",
    "program_from_document",
    "remove_block_target",
    "remove_week_target",
    "reorder_activities",
    "reorder_blocks",
    "reorder_days",
    "reorder_siblings",
    "reorder_weeks",
    "to_storage_document",
    "update_activity",
    "update_block",
    "update_block_target",
    "update_day",
    "update_week",
    "update_week_target",
    "validate_program",
]
