from __future__ import annotations
from typing import Any, Protocol, Type, runtime_checkable

from .keys import KeyData

"""Contracts for primitives, key managers, wrappers and catalogues.

Subsystems implement these Protocols and submit instances to a Registry.
Callers only ever see the primitive interfaces, never the concrete algorithm
behind a key.
"""


class PublicKeySign(Protocol):
    """Digital signature creation."""
    def sign(self, data: bytes) -> bytes: ...


class PublicKeyVerify(Protocol):
    """Digital signature verification; raises SecurityError when invalid."""
    def verify(self, signature: bytes, data: bytes) -> None: ...


class KeyManager(Protocol):
    """Understands keys of exactly one type URL and builds primitives for them."""
    key_type: str
    version: int

    def primitive_class(self) -> Type[Any]: ...
    def primitive(self, key_data: KeyData) -> Any: ...
    def does_support(self, type_url: str) -> bool: ...
    def new_key_data(self, serialized_key_format: bytes) -> KeyData: ...


@runtime_checkable
class PrivateKeyManager(KeyManager, Protocol):
    def public_key_data(self, key_data: KeyData) -> KeyData: ...


class PrimitiveWrapper(Protocol):
    """Combines the primitives of a PrimitiveSet into a single primitive."""
    def primitive_class(self) -> Type[Any]: ...
    def wrap(self, primitive_set: Any) -> Any: ...


class Catalogue(Protocol):
    """Resolves declarative config entries to key manager instances."""
    def get_key_manager(self, type_url: str, primitive_name: str, min_version: int) -> KeyManager: ...
