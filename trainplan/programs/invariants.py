"""Program tree invariants.

1. Sibling `order` values are the dense sequence 0..n-1 in list order.
2. Every id (programs, blocks, weeks, days, activities, targets) is unique
   within the program.
3. A cloned subtree never contains an id that existed before the clone.

These must never fail if the edit operations are correct. They are checked
after every edit (see settings.strict_invariants) and in property tests.
"""

from collections import Counter
from collections.abc import Iterable

from loguru import logger
from pydantic import BaseModel

from trainplan.programs.errors import ProgramInvariantError
from trainplan.programs.tree import children_of, child_field, iter_ids
from trainplan.programs.types import Program


def log_invariant_failure(err: ProgramInvariantError, context: dict[str, str | int | None]) -> None:
    """Log an invariant failure with context before it is raised."""
    logger.error(
        "PROGRAM_INVARIANT_FAILED",
        extra={
            "code": err.code,
            "details": err.details,
            **context,
        },
    )


def _order_violations(node: BaseModel, depth: int) -> Iterable[str]:
    children = children_of(node, depth)
    orders = [child.order for child in children]
    if orders != list(range(len(children))):
        yield f"NON_CONTIGUOUS_ORDER: {child_field(depth)} of {node.id} have orders {orders}"
    for child in children:
        yield from _order_violations(child, depth + 1)


def check_order_contiguity(program: Program) -> list[str]:
    """Return one detail string per sibling list whose orders are not 0..n-1."""
    return list(_order_violations(program, 0))


def find_duplicate_ids(program: Program) -> list[str]:
    counts = Counter(iter_ids(program))
    return sorted(node_id for node_id, n in counts.items() if n > 1)


def validate_program(program: Program, *, operation: str | None = None) -> None:
    """Check order contiguity and id uniqueness across the whole program.

    Args:
        program: Program to check
        operation: Name of the edit that produced it (for logging)

    Raises:
        ProgramInvariantError: With code INVALID_PROGRAM if any check fails
    """
    details = check_order_contiguity(program)
    details.extend(f"DUPLICATE_ID: {node_id}" for node_id in find_duplicate_ids(program))
    if details:
        err = ProgramInvariantError("INVALID_PROGRAM", details)
        log_invariant_failure(err, {"program_id": program.id, "operation": operation})
        raise err


def assert_fresh_ids(before: Program, after: Program, subtree: BaseModel, depth: int) -> None:
    """Verify a cloned subtree only introduced ids that did not exist before.

    Args:
        before: Program before the clone
        after: Program after the clone was spliced in
        subtree: The cloned node
        depth: Path length of the cloned node

    Raises:
        ProgramInvariantError: With code REUSED_ID
    """
    before_ids = set(iter_ids(before))
    subtree_ids = list(iter_ids(subtree, depth))
    details = [f"REUSED_ID: {node_id}" for node_id in subtree_ids if node_id in before_ids]
    if len(set(subtree_ids)) != len(subtree_ids):
        details.append(f"DUPLICATE_ID: clone {subtree.id} repeats ids internally")
    after_ids = set(iter_ids(after))
    added = after_ids - before_ids
    if not before_ids <= after_ids or len(added) != len(subtree_ids):
        details.append(f"UNEXPECTED_ID_DELTA: expected {len(subtree_ids)} new ids, got {len(added)}")
    if details:
        err = ProgramInvariantError("REUSED_ID", details)
        log_invariant_failure(err, {"program_id": after.id, "clone_id": subtree.id})
        raise err
