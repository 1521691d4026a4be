from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

"""Key containers passed between keyset handles, the registry and managers.

Key material is opaque bytes here; each key manager owns the encoding of the
`value` fields it produces and consumes.
"""


class KeyMaterialType(Enum):
    SYMMETRIC = "SYMMETRIC"
    ASYMMETRIC_PRIVATE = "ASYMMETRIC_PRIVATE"
    ASYMMETRIC_PUBLIC = "ASYMMETRIC_PUBLIC"
    REMOTE = "REMOTE"


class OutputPrefixType(Enum):
    TINK = "TINK"
    LEGACY = "LEGACY"
    RAW = "RAW"
    CRUNCHY = "CRUNCHY"


class KeyStatus(Enum):
    ENABLED = "ENABLED"
    DISABLED = "DISABLED"
    DESTROYED = "DESTROYED"


@dataclass(frozen=True)
class KeyData:
    type_url: str
    value: bytes
    key_material_type: KeyMaterialType


@dataclass(frozen=True)
class KeyTemplate:
    """Recipe for a new key: which manager, which serialized key format."""

    type_url: str
    value: bytes
    output_prefix_type: OutputPrefixType = OutputPrefixType.TINK


@dataclass(frozen=True)
class KeysetKey:
    key_data: KeyData
    status: KeyStatus
    key_id: int
    output_prefix_type: OutputPrefixType


@dataclass(frozen=True)
class KeyInfo:
    type_url: str
    status: KeyStatus
    key_id: int
    output_prefix_type: OutputPrefixType


@dataclass(frozen=True)
class Keyset:
    primary_key_id: int
    keys: Tuple[KeysetKey, ...] = field(default_factory=tuple)

    def info(self) -> List[KeyInfo]:
        return [
            KeyInfo(k.key_data.type_url, k.status, k.key_id, k.output_prefix_type)
            for k in self.keys
        ]

    def find(self, key_id: int) -> KeysetKey | None:
        for key in self.keys:
            if key.key_id == key_id:
                return key
        return None
