from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from . import crypto_format
from .errors import SecurityError
from .keys import KeysetKey, KeyStatus, OutputPrefixType


@dataclass(frozen=True)
class Entry:
    primitive: Any
    identifier: bytes
    status: KeyStatus
    output_prefix_type: OutputPrefixType
    key_id: int


class PrimitiveSet:
    """Primitives of one keyset, grouped by output prefix.

    Wrappers use the set to pick the primary for producing output and to find
    candidate primitives for an incoming prefix.
    """

    def __init__(self, primitive_class: Type[Any]) -> None:
        self._primitive_class = primitive_class
        self._primitives: Dict[bytes, List[Entry]] = {}
        self._primary: Optional[Entry] = None

    @property
    def primitive_class(self) -> Type[Any]:
        return self._primitive_class

    def add_primitive(self, primitive: Any, key: KeysetKey) -> Entry:
        entry = Entry(
            primitive=primitive,
            identifier=crypto_format.output_prefix(key),
            status=key.status,
            output_prefix_type=key.output_prefix_type,
            key_id=key.key_id,
        )
        self._primitives.setdefault(entry.identifier, []).append(entry)
        return entry

    def set_primary(self, entry: Entry) -> None:
        if entry.status != KeyStatus.ENABLED:
            raise SecurityError("the primary key must be enabled")
        if entry not in self._primitives.get(entry.identifier, []):
            raise SecurityError("the primary entry must be part of the set")
        self._primary = entry

    def primary(self) -> Optional[Entry]:
        return self._primary

    def primitive_from_identifier(self, identifier: bytes) -> List[Entry]:
        return list(self._primitives.get(identifier, []))

    def raw_primitives(self) -> List[Entry]:
        return self.primitive_from_identifier(crypto_format.RAW_PREFIX)

    def all(self) -> List[List[Entry]]:
        return [list(v) for v in self._primitives.values()]
