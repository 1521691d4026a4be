from __future__ import annotations
from typing import Any, Dict

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ed25519

from sigkit.config import TYPE_URL_PREFIX
from sigkit.errors import SecurityError
from sigkit.interfaces import PublicKeySign, PublicKeyVerify

from ._util import PrivateKeyManagerBase, PublicKeyManagerBase


def _validate(params: Dict[str, Any]) -> None:
    if params:
        raise SecurityError("Ed25519 keys take no parameters")


class Ed25519Signer(PublicKeySign):
    def __init__(self, sk: ed25519.Ed25519PrivateKey) -> None:
        self._sk = sk

    def sign(self, data: bytes) -> bytes:
        return self._sk.sign(data)


class Ed25519Verifier(PublicKeyVerify):
    def __init__(self, pk: ed25519.Ed25519PublicKey) -> None:
        self._pk = pk

    def verify(self, signature: bytes, data: bytes) -> None:
        try:
            self._pk.verify(signature, data)
        except (InvalidSignature, ValueError) as exc:
            raise SecurityError("invalid signature") from exc


class Ed25519VerifyKeyManager(PublicKeyManagerBase):
    key_name = "Ed25519PublicKey"
    key_type = TYPE_URL_PREFIX + key_name

    def primitive_class(self) -> type:
        return PublicKeyVerify

    def validate_params(self, params: Dict[str, Any]) -> None:
        _validate(params)

    def check_key(self, pk: Any, params: Dict[str, Any]) -> None:
        if not isinstance(pk, ed25519.Ed25519PublicKey):
            raise SecurityError("not an Ed25519 public key")

    def make_verifier(self, pk: Any, params: Dict[str, Any]) -> Ed25519Verifier:
        return Ed25519Verifier(pk)


class Ed25519SignKeyManager(PrivateKeyManagerBase):
    key_name = "Ed25519PrivateKey"
    key_type = TYPE_URL_PREFIX + key_name
    public_key_manager = Ed25519VerifyKeyManager

    def primitive_class(self) -> type:
        return PublicKeySign

    def validate_params(self, params: Dict[str, Any]) -> None:
        _validate(params)

    def check_key(self, sk: Any, params: Dict[str, Any]) -> None:
        if not isinstance(sk, ed25519.Ed25519PrivateKey):
            raise SecurityError("not an Ed25519 private key")

    def generate(self, params: Dict[str, Any]) -> ed25519.Ed25519PrivateKey:
        return ed25519.Ed25519PrivateKey.generate()

    def make_signer(self, sk: Any, params: Dict[str, Any]) -> Ed25519Signer:
        return Ed25519Signer(sk)
