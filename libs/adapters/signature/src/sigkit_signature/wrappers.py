from __future__ import annotations

from sigkit import crypto_format
from sigkit.errors import SecurityError
from sigkit.interfaces import PublicKeySign, PublicKeyVerify
from sigkit.keys import OutputPrefixType
from sigkit.primitive_set import PrimitiveSet

"""Primitive wrappers for the signature subsystem.

The sign wrapper always uses the primary key and prepends its output prefix.
The verify wrapper routes by that prefix, then falls back to RAW keys.
LEGACY keys sign `data || 0x00`.
"""

_LEGACY_SUFFIX = b"\x00"


class _WrappedPublicKeySign(PublicKeySign):
    def __init__(self, primitive_set: PrimitiveSet) -> None:
        self._pset = primitive_set

    def sign(self, data: bytes) -> bytes:
        primary = self._pset.primary()
        if primary is None:
            raise SecurityError("no primary key set")
        if primary.output_prefix_type == OutputPrefixType.LEGACY:
            data = data + _LEGACY_SUFFIX
        return primary.identifier + primary.primitive.sign(data)


class _WrappedPublicKeyVerify(PublicKeyVerify):
    def __init__(self, primitive_set: PrimitiveSet) -> None:
        self._pset = primitive_set

    def verify(self, signature: bytes, data: bytes) -> None:
        if len(signature) >= crypto_format.NON_RAW_PREFIX_SIZE:
            prefix = signature[: crypto_format.NON_RAW_PREFIX_SIZE]
            raw_signature = signature[crypto_format.NON_RAW_PREFIX_SIZE :]
            for entry in self._pset.primitive_from_identifier(prefix):
                signed = data + _LEGACY_SUFFIX if entry.output_prefix_type == OutputPrefixType.LEGACY else data
                try:
                    entry.primitive.verify(raw_signature, signed)
                    return
                except SecurityError:
                    continue
        for entry in self._pset.raw_primitives():
            try:
                entry.primitive.verify(signature, data)
                return
            except SecurityError:
                continue
        raise SecurityError("invalid signature")


class PublicKeySignWrapper:
    def primitive_class(self) -> type:
        return PublicKeySign

    def wrap(self, primitive_set: PrimitiveSet) -> PublicKeySign:
        return _WrappedPublicKeySign(primitive_set)


class PublicKeyVerifyWrapper:
    def primitive_class(self) -> type:
        return PublicKeyVerify

    def wrap(self, primitive_set: PrimitiveSet) -> PublicKeyVerify:
        return _WrappedPublicKeyVerify(primitive_set)
