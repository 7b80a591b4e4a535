"""Inventory ownership guard.

Keeps one inventory from silently applying over or pruning objects that belong to another
inventory (or to none), according to an adoption policy.
"""

from invguard.authz.policy import (
    ADOPT_ALL,
    ADOPT_IF_NO_INVENTORY,
    MUST_MATCH,
    InventoryPolicy,
    OwnershipDecision,
    can_apply,
    can_prune,
    evaluate_apply,
    evaluate_prune,
    load_inventory_policy,
    parse_inventory_policy,
    require_apply,
    require_prune,
)
from invguard.core.errors import InventoryGuardError, OwnershipConflict, UnknownInventoryPolicy, UnreadableAnnotations
from invguard.core.models import AnnotatedObject, InventoryInfo, InventoryLike, LiveObject, annotations_of
from invguard.core.ownership import EMPTY, MATCH, OWNING_INVENTORY_KEY, UNMATCH, MatchStatus, match_inventory_id

__all__ = [
    "ADOPT_ALL",
    "ADOPT_IF_NO_INVENTORY",
    "AnnotatedObject",
    "EMPTY",
    "InventoryGuardError",
    "InventoryInfo",
    "InventoryLike",
    "InventoryPolicy",
    "LiveObject",
    "MATCH",
    "MUST_MATCH",
    "MatchStatus",
    "OWNING_INVENTORY_KEY",
    "OwnershipConflict",
    "OwnershipDecision",
    "UNMATCH",
    "UnknownInventoryPolicy",
    "UnreadableAnnotations",
    "annotations_of",
    "can_apply",
    "can_prune",
    "evaluate_apply",
    "evaluate_prune",
    "load_inventory_policy",
    "match_inventory_id",
    "parse_inventory_policy",
    "require_apply",
    "require_prune",
]
