from __future__ import annotations

from .errors import SecurityError
from .keys import KeysetKey, OutputPrefixType

NON_RAW_PREFIX_SIZE = 5
TINK_START_BYTE = b"\x01"
LEGACY_START_BYTE = b"\x00"
RAW_PREFIX = b""


def output_prefix(key: KeysetKey) -> bytes:
    """Return the identifier prepended to ciphertexts/signatures made with `key`."""
    kind = key.output_prefix_type
    if kind == OutputPrefixType.TINK:
        return TINK_START_BYTE + key.key_id.to_bytes(4, "big")
    if kind in (OutputPrefixType.LEGACY, OutputPrefixType.CRUNCHY):
        return LEGACY_START_BYTE + key.key_id.to_bytes(4, "big")
    if kind == OutputPrefixType.RAW:
        return RAW_PREFIX
    raise SecurityError(f"unknown output prefix type: {kind}")
