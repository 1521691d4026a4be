from __future__ import annotations
import secrets
from typing import Any, List, Optional, Type

from .errors import SecurityError
from .keys import (
    KeyInfo,
    KeyMaterialType,
    KeyStatus,
    Keyset,
    KeysetKey,
    KeyTemplate,
)
from .primitive_set import PrimitiveSet
from .registry import Registry, default_registry


def _new_key_id(taken: set[int]) -> int:
    while True:
        key_id = secrets.randbits(32)
        if key_id != 0 and key_id not in taken:
            return key_id


class KeysetHandle:
    """Immutable view over a Keyset; every mutation returns a new handle."""

    def __init__(self, keyset: Keyset) -> None:
        if not keyset.keys:
            raise SecurityError("keyset must contain at least one key")
        self._keyset = keyset

    @property
    def keyset(self) -> Keyset:
        return self._keyset

    @classmethod
    def generate_new(cls, template: KeyTemplate, registry: Optional[Registry] = None) -> "KeysetHandle":
        registry = registry or default_registry()
        key_id = _new_key_id(set())
        key = KeysetKey(
            key_data=registry.new_key_data(template),
            status=KeyStatus.ENABLED,
            key_id=key_id,
            output_prefix_type=template.output_prefix_type,
        )
        return cls(Keyset(primary_key_id=key_id, keys=(key,)))

    def add_new_key(
        self,
        template: KeyTemplate,
        registry: Optional[Registry] = None,
        as_primary: bool = False,
    ) -> "KeysetHandle":
        registry = registry or default_registry()
        key_id = _new_key_id({k.key_id for k in self._keyset.keys})
        key = KeysetKey(
            key_data=registry.new_key_data(template),
            status=KeyStatus.ENABLED,
            key_id=key_id,
            output_prefix_type=template.output_prefix_type,
        )
        primary = key_id if as_primary else self._keyset.primary_key_id
        return KeysetHandle(Keyset(primary_key_id=primary, keys=self._keyset.keys + (key,)))

    def public_keyset_handle(self, registry: Optional[Registry] = None) -> "KeysetHandle":
        registry = registry or default_registry()
        public_keys = []
        for key in self._keyset.keys:
            if key.key_data.key_material_type != KeyMaterialType.ASYMMETRIC_PRIVATE:
                raise SecurityError("keyset contains a non-private key")
            public_keys.append(
                KeysetKey(
                    key_data=registry.public_key_data(key.key_data),
                    status=key.status,
                    key_id=key.key_id,
                    output_prefix_type=key.output_prefix_type,
                )
            )
        return KeysetHandle(Keyset(primary_key_id=self._keyset.primary_key_id, keys=tuple(public_keys)))

    def keyset_info(self) -> List[KeyInfo]:
        return self._keyset.info()

    def primitive(self, primitive_class: Type[Any], registry: Optional[Registry] = None) -> Any:
        registry = registry or default_registry()
        primary = self._keyset.find(self._keyset.primary_key_id)
        if primary is None or primary.status != KeyStatus.ENABLED:
            raise SecurityError("keyset has no enabled primary key")
        pset = PrimitiveSet(primitive_class)
        for key in self._keyset.keys:
            if key.status != KeyStatus.ENABLED:
                continue
            entry = pset.add_primitive(registry.primitive(key.key_data, primitive_class), key)
            if key.key_id == self._keyset.primary_key_id:
                pset.set_primary(entry)
        return registry.wrap(pset)
