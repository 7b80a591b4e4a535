"""Ownership matching between an inventory and a live object.

Live objects record which inventory last claimed them in the owning-inventory annotation.
Comparing that value with the current inventory's identifier yields one of three statuses:

- empty: the annotation is absent (nobody claimed the object)
- match: the annotation equals the inventory identifier
- unmatch: the annotation is present but names another inventory

Objects whose annotations can't be read are classified unmatch: we can't prove nobody owns them.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Optional

from invguard.core.errors import UnreadableAnnotations
from invguard.core.models import InventoryLike, annotations_of, describe_object

logger = logging.getLogger(__name__)

# Must stay verbatim; existing inventory-annotated resources use it.
OWNING_INVENTORY_KEY = "config.kubernetes.io/owning-inventory"

MatchStatus = Literal["empty", "match", "unmatch"]

EMPTY: MatchStatus = "empty"
MATCH: MatchStatus = "match"
UNMATCH: MatchStatus = "unmatch"


def owning_inventory(obj: Any) -> Optional[str]:
    """
    Return the owning-inventory annotation value, or None when the key is absent.

    Raises UnreadableAnnotations when the object's annotations can't be read.
    """
    annotations = annotations_of(obj)
    if OWNING_INVENTORY_KEY not in annotations:
        return None
    return annotations[OWNING_INVENTORY_KEY]


def match_inventory_id(inventory: InventoryLike, obj: Any) -> MatchStatus:
    """
    Classify `obj` relative to `inventory`.

    `inventory` must not be None. `obj` must be a live object; callers handle the
    "does not exist yet" case before calling this.
    """
    try:
        value = owning_inventory(obj)
    except UnreadableAnnotations as e:
        logger.warning("Treating %s as owned by another inventory: %s", describe_object(obj), e)
        return UNMATCH
    if value is None:
        return EMPTY
    if value == inventory.identifier():
        return MATCH
    return UNMATCH
