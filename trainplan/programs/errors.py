"""Program tree error types.

Absence of a node is not an error here: operations report it through
EditResult.status. Exceptions are reserved for programming errors and
invariant violations.

Invariant codes:
- NON_CONTIGUOUS_ORDER: sibling order values are not 0..n-1 in list order
- DUPLICATE_ID: an id appears more than once in a program
- REUSED_ID: a cloned subtree contains an id from the source tree
"""


class ProgramInvariantError(RuntimeError):
    """Raised when a program tree invariant is violated.

    Attributes:
        code: Error code (e.g., "INVALID_PROGRAM", "REUSED_ID")
        details: List of error detail strings
    """

    def __init__(self, code: str, details: list[str]):
        self.code = code
        self.details = details
        super().__init__(f"{code}: {details}")


class ProtectedFieldError(ValueError):
    """Raised when an edit tries to set id, order or child collections directly."""

    def __init__(self, fields: set[str] | list[str]):
        self.fields = sorted(fields)
        super().__init__(f"Fields cannot be set directly: {', '.join(self.fields)}")


class DuplicateTargetError(ValueError):
    """Raised when an activity group already has a target on the same block or week."""

    def __init__(self, node_id: str, activity_group_id: str):
        self.node_id = node_id
        self.activity_group_id = activity_group_id
        super().__init__(f"Activity group {activity_group_id} already has a target on {node_id}")


class NodeNotFoundError(LookupError):
    """Raised by EditResult.unwrap() when the edit target did not exist."""


class InvalidOrderError(ValueError):
    """Raised by EditResult.unwrap() when a reorder request was not a permutation."""
