from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Tuple

from invguard.core.errors import OwnershipConflict, UnknownInventoryPolicy, UnreadableAnnotations
from invguard.core.models import InventoryLike, describe_object
from invguard.core.ownership import EMPTY, MATCH, UNMATCH, MatchStatus, match_inventory_id, owning_inventory

logger = logging.getLogger(__name__)

InventoryPolicy = Literal["must_match", "adopt_if_no_inventory", "adopt_all"]

# must_match
# The inventory may only touch objects it already owns or that don't exist yet.
# Apply goes through when the object is absent from the cluster, or its owning-inventory
# annotation matches this inventory. Unowned and foreign objects are refused.
MUST_MATCH: InventoryPolicy = "must_match"

# adopt_if_no_inventory
# Like must_match, but apply may also take over live objects that carry no owning-inventory
# annotation at all. Objects owned by another inventory are still refused.
ADOPT_IF_NO_INVENTORY: InventoryPolicy = "adopt_if_no_inventory"

# adopt_all
# Apply goes through for any object, including ones owned by another inventory.
ADOPT_ALL: InventoryPolicy = "adopt_all"

# Prune goes through only on an exact match under every policy above.

INVENTORY_POLICIES = (MUST_MATCH, ADOPT_IF_NO_INVENTORY, ADOPT_ALL)

_APPLY_TABLE: Dict[MatchStatus, Dict[InventoryPolicy, bool]] = {
    EMPTY: {MUST_MATCH: False, ADOPT_IF_NO_INVENTORY: True, ADOPT_ALL: True},
    MATCH: {MUST_MATCH: True, ADOPT_IF_NO_INVENTORY: True, ADOPT_ALL: True},
    UNMATCH: {MUST_MATCH: False, ADOPT_IF_NO_INVENTORY: False, ADOPT_ALL: True},
}

_PRUNE_TABLE: Dict[MatchStatus, bool] = {
    EMPTY: False,
    MATCH: True,
    UNMATCH: False,
}

_POLICY_ALIASES: Dict[str, InventoryPolicy] = {
    "must_match": MUST_MATCH,
    "mustmatch": MUST_MATCH,
    "strict": MUST_MATCH,
    "adopt_if_no_inventory": ADOPT_IF_NO_INVENTORY,
    "adoptifnoinventory": ADOPT_IF_NO_INVENTORY,
    "adopt_all": ADOPT_ALL,
    "adoptall": ADOPT_ALL,
}


@dataclass(frozen=True)
class OwnershipDecision:
    """
    Outcome of an apply or prune ownership check.

    status is None when the object does not exist live (nothing to match against).
    reasons are human readable and safe to surface in events or reports.
    """

    allowed: bool
    operation: Literal["apply", "prune"]
    policy: str
    status: Optional[MatchStatus] = None
    reasons: Tuple[str, ...] = ()


def parse_inventory_policy(value: str) -> InventoryPolicy:
    """
    Parse a policy name.

    Accepts the canonical values plus the usual flag/enum spellings:
    - strict, MustMatch, must-match -> must_match
    - adopt-if-no-inventory, AdoptIfNoInventory -> adopt_if_no_inventory
    - adopt-all, AdoptAll -> adopt_all
    """
    key = (value or "").strip().lower().replace("-", "_")
    policy = _POLICY_ALIASES.get(key)
    if policy is None:
        raise UnknownInventoryPolicy(
            f"unknown inventory policy {value!r}; expected one of {', '.join(INVENTORY_POLICIES)}"
        )
    return policy


def load_inventory_policy() -> InventoryPolicy:
    """
    Load the default inventory policy from env (ConfigMap/Secret friendly).

    Recommended vars:
    - INVENTORY_POLICY=strict|adopt-if-no-inventory|adopt-all

    An unparseable value falls back to must_match: a typo must never widen permissions.
    """
    raw = (os.getenv("INVENTORY_POLICY") or "").strip()
    if not raw:
        return MUST_MATCH
    try:
        return parse_inventory_policy(raw)
    except UnknownInventoryPolicy:
        logger.warning("Unrecognized INVENTORY_POLICY=%r, falling back to %s", raw, MUST_MATCH)
        return MUST_MATCH


def _owner_reason(obj: Any, status: MatchStatus) -> str:
    label = describe_object(obj)
    if status == EMPTY:
        return f"{label} has no owning inventory"
    if status == MATCH:
        return f"{label} is owned by this inventory"
    try:
        owner = owning_inventory(obj)
    except UnreadableAnnotations:
        return f"{label} has unreadable annotations and may be owned by another inventory"
    return f"{label} is owned by inventory {owner!r}"


def evaluate_apply(inventory: InventoryLike, obj: Any, policy: str) -> OwnershipDecision:
    if obj is None:
        return OwnershipDecision(
            allowed=True, operation="apply", policy=policy, reasons=("object does not exist in the cluster",)
        )

    status = match_inventory_id(inventory, obj)
    # Unknown status or policy values deny.
    row = _APPLY_TABLE.get(status) or {}
    allowed = row.get(policy, False) if isinstance(policy, str) else False
    reasons = [_owner_reason(obj, status)]
    if not allowed:
        if policy not in INVENTORY_POLICIES:
            reasons.append(f"unknown inventory policy {policy!r}")
        else:
            reasons.append(f"apply is not permitted under policy {policy}")
        logger.debug("Apply denied for %s: %s", describe_object(obj), "; ".join(reasons))
    return OwnershipDecision(allowed=allowed, operation="apply", policy=policy, status=status, reasons=tuple(reasons))


def evaluate_prune(inventory: InventoryLike, obj: Any, policy: str) -> OwnershipDecision:
    """
    Decide whether `obj` may be deleted.

    Pruning is destructive, so only an exact ownership match allows it, whatever the policy.
    An unannotated object may belong to something outside any inventory, and a foreign object
    is never pruned even under adopt_all.
    """
    if obj is None:
        return OwnershipDecision(
            allowed=False, operation="prune", policy=policy, reasons=("object does not exist in the cluster",)
        )

    status = match_inventory_id(inventory, obj)
    allowed = _PRUNE_TABLE.get(status, False)
    reasons = [_owner_reason(obj, status)]
    if not allowed:
        reasons.append("prune requires an owning-inventory match")
        logger.debug("Prune denied for %s: %s", describe_object(obj), "; ".join(reasons))
    return OwnershipDecision(allowed=allowed, operation="prune", policy=policy, status=status, reasons=tuple(reasons))


def can_apply(inventory: InventoryLike, obj: Any, policy: str) -> bool:
    """True when `obj` (None if it doesn't exist live yet) may be applied by `inventory`."""
    return evaluate_apply(inventory, obj, policy).allowed


def can_prune(inventory: InventoryLike, obj: Any, policy: str) -> bool:
    """True when `obj` (None if it doesn't exist live) may be pruned by `inventory`."""
    return evaluate_prune(inventory, obj, policy).allowed


def require_apply(inventory: InventoryLike, obj: Any, policy: str) -> OwnershipDecision:
    decision = evaluate_apply(inventory, obj, policy)
    if not decision.allowed:
        raise OwnershipConflict(decision)
    return decision


def require_prune(inventory: InventoryLike, obj: Any, policy: str) -> OwnershipDecision:
    decision = evaluate_prune(inventory, obj, policy)
    if not decision.allowed:
        raise OwnershipConflict(decision)
    return decision
