"""
Pytest config.

Pin the repo root on sys.path so `import invguard` works whether or not the package was
installed (e.g. when invoking a global `pytest` entrypoint).
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()


@pytest.fixture
def inventory():
    from invguard.core.models import InventoryInfo

    return InventoryInfo(name="inventory-abc", namespace="default", id="abc")


@pytest.fixture
def make_obj():
    """Factory for live objects with an optional owning-inventory annotation."""
    from invguard.core.models import LiveObject
    from invguard.core.ownership import OWNING_INVENTORY_KEY

    def _make(owner: str | None = None, **extra_annotations: str) -> LiveObject:
        annotations = dict(extra_annotations)
        if owner is not None:
            annotations[OWNING_INVENTORY_KEY] = owner
        return LiveObject(api_version="v1", kind="ConfigMap", name="cm", namespace="default", annotations=annotations)

    return _make
