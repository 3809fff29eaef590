"""Identifier generation for newly created and cloned nodes.

Fresh nodes carry a temporary id until the persistence layer assigns a
permanent one. Generators are injected into every operation that creates
nodes so tests and replays can supply deterministic ids.
"""

import itertools
import secrets
import string
import time
from typing import Protocol

from trainplan.config.settings import settings

_BASE36 = string.digits + string.ascii_lowercase


class IdGenerator(Protocol):
    """Source of fresh node identifiers."""

    def next_id(self) -> str: ...


class TempIdGenerator:
    """Temporary ids of the form ``<prefix><epoch-ms>_<9 base36 chars>``."""

    def __init__(self, prefix: str | None = None) -> None:
        self.prefix = prefix if prefix is not None else settings.temp_id_prefix

    def next_id(self) -> str:
        suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
        return f"{self.prefix}{int(time.time() * 1000)}_{suffix}"


class SequentialIdGenerator:
    """Deterministic ids ``<prefix>1``, ``<prefix>2``, ..."""

    def __init__(self, prefix: str | None = None, start: int = 1) -> None:
        self.prefix = prefix if prefix is not None else settings.temp_id_prefix
        self._counter = itertools.count(start)

    def next_id(self) -> str:
        return f"{self.prefix}{next(self._counter)}"


def default_id_generator() -> IdGenerator:
    return TempIdGenerator()


def is_temp_id(node_id: str, prefix: str | None = None) -> bool:
    """Return True if node_id has not yet been assigned a permanent id."""
    return node_id.startswith(prefix if prefix is not None else settings.temp_id_prefix)
