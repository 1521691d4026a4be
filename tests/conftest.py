from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
for candidate in (
    ROOT / "apps" / "cli" / "src",
    ROOT / "libs" / "adapters" / "signature" / "src",
    ROOT / "libs" / "core" / "src",
):
    candidate_str = str(candidate)
    if candidate_str not in sys.path:
        sys.path.insert(0, candidate_str)

from sigkit import Registry  # noqa: E402
import sigkit_signature  # noqa: E402


@pytest.fixture
def registry() -> Registry:
    reg = Registry()
    sigkit_signature.register(reg)
    return reg


