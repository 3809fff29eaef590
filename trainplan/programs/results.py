"""Outcome of a structural edit."""

from dataclasses import dataclass
from typing import Literal

from loguru import logger

from trainplan.config.settings import settings
from trainplan.programs.errors import InvalidOrderError, NodeNotFoundError
from trainplan.programs.invariants import validate_program
from trainplan.programs.types import Program

EditStatus = Literal["applied", "not_found", "invalid_order"]


@dataclass(frozen=True)
class EditResult:
    """Program produced by an edit plus what happened.

    When status is not "applied", `program` is the unmodified input object.

    Attributes:
        program: Resulting program
        status: applied, not_found or invalid_order
        node_id: Created node id (add/copy) or the edit target id
    """

    program: Program
    status: EditStatus = "applied"
    node_id: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "applied"

    def unwrap(self) -> Program:
        """Return the program, raising if the edit did not apply."""
        if self.status == "not_found":
            raise NodeNotFoundError(f"Node {self.node_id} not found in program {self.program.id}")
        if self.status == "invalid_order":
            raise InvalidOrderError(f"Requested order for {self.node_id} does not match its current children")
        return self.program


def applied(program: Program, node_id: str | None, operation: str) -> EditResult:
    """Build an applied result, checking tree invariants when strict mode is on."""
    if settings.strict_invariants:
        validate_program(program, operation=operation)
    logger.debug(f"{operation}: applied to {node_id} in program {program.id}")
    return EditResult(program=program, status="applied", node_id=node_id)


def not_found(program: Program, node_id: str, operation: str) -> EditResult:
    logger.warning(f"{operation}: node {node_id} not found in program {program.id}, tree unchanged")
    return EditResult(program=program, status="not_found", node_id=node_id)


def invalid_order(program: Program, node_id: str, operation: str, reason: str) -> EditResult:
    logger.warning(f"{operation}: rejected reorder of {node_id} in program {program.id}: {reason}")
    return EditResult(program=program, status="invalid_order", node_id=node_id)
