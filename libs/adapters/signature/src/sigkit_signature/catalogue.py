from __future__ import annotations
from typing import Dict, Sequence, Type

from sigkit.errors import RegistryError
from sigkit.interfaces import KeyManager


class SignatureCatalogue:
    """Resolves config entries of one primitive to fresh key manager instances."""

    def __init__(self, primitive_name: str, managers: Sequence[Type[KeyManager]]) -> None:
        self.primitive_name = primitive_name
        self._managers: Dict[str, Type[KeyManager]] = {m.key_type: m for m in managers}

    def get_key_manager(self, type_url: str, primitive_name: str, min_version: int) -> KeyManager:
        if primitive_name.lower() != self.primitive_name.lower():
            raise RegistryError(
                f"primitive '{primitive_name}' is not supported by the {self.primitive_name} catalogue"
            )
        manager_cls = self._managers.get(type_url)
        if manager_cls is None:
            raise RegistryError(f"no key manager for type '{type_url}' in the {self.primitive_name} catalogue")
        manager = manager_cls()
        if manager.version < min_version:
            raise RegistryError(
                f"key manager for '{type_url}' has version {manager.version}, need at least {min_version}"
            )
        return manager
