from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

from .registry import Registry

"""Declarative registry configuration.

A RegistryConfig lists which key types a subsystem supports. Tooling can read
it without touching a registry, or replay it into one via `register_config`
provided the named catalogues have been added.
"""

TYPE_URL_PREFIX = "type.sigkit.dev/sigkit."


@dataclass(frozen=True)
class KeyTypeEntry:
    catalogue_name: str
    primitive_name: str
    type_url: str
    key_manager_version: int = 0
    new_key_allowed: bool = True

    def __post_init__(self) -> None:
        if self.key_manager_version < 0:
            raise ValueError("key_manager_version must be non-negative")


@dataclass(frozen=True)
class RegistryConfig:
    config_name: str
    entries: Tuple[KeyTypeEntry, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", tuple(self.entries))
        seen: set[str] = set()
        for entry in self.entries:
            if entry.type_url in seen:
                raise ValueError(f"duplicate type_url in config '{self.config_name}': {entry.type_url}")
            seen.add(entry.type_url)


def create_key_type_entry(
    catalogue_name: str,
    primitive_name: str,
    key_proto_name: str,
    key_manager_version: int,
    new_key_allowed: bool,
) -> KeyTypeEntry:
    return KeyTypeEntry(
        catalogue_name=catalogue_name,
        primitive_name=primitive_name,
        type_url=TYPE_URL_PREFIX + key_proto_name,
        key_manager_version=key_manager_version,
        new_key_allowed=new_key_allowed,
    )


def register_config(registry: Registry, config: RegistryConfig) -> None:
    """Register a manager for every entry, in order; stops at the first error."""
    for entry in config.entries:
        catalogue = registry.catalogue(entry.catalogue_name)
        manager = catalogue.get_key_manager(
            entry.type_url, entry.primitive_name, entry.key_manager_version
        )
        registry.register_key_manager(manager, entry.new_key_allowed)
