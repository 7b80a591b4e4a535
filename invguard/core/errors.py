"""
Error taxonomy.

The ownership predicates never raise; these exist for the orchestrator around them.
UnknownInventoryPolicy means configuration is wrong and nothing should run.
UnreadableAnnotations is caught by the matcher, which treats the object as foreign-owned.
OwnershipConflict means a single object was refused and the caller should skip or abort it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from invguard.authz.policy import OwnershipDecision


class InventoryGuardError(Exception):
    """Base class for all inventory guard exceptions."""


class UnknownInventoryPolicy(InventoryGuardError, ValueError):
    """Raised when a policy name cannot be parsed."""


class OwnershipConflict(InventoryGuardError):
    """Raised by the require_* helpers when the ownership decision denies the operation."""

    def __init__(self, decision: "OwnershipDecision") -> None:
        self.decision = decision
        super().__init__("; ".join(decision.reasons) or f"{decision.operation} denied")


class UnreadableAnnotations(InventoryGuardError):
    """Raised when an object carries annotations in a shape that can't be read as a mapping."""
