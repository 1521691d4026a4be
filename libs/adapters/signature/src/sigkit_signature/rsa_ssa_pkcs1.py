from __future__ import annotations
from typing import Any, Dict

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from sigkit.config import TYPE_URL_PREFIX
from sigkit.errors import SecurityError
from sigkit.interfaces import PublicKeySign, PublicKeyVerify

from . import _rsa
from ._util import HASHES, PrivateKeyManagerBase, PublicKeyManagerBase, hash_for


def validate_params(params: Dict[str, Any]) -> None:
    if params.get("hash") not in HASHES:
        raise SecurityError(f"unsupported RSA-SSA-PKCS1 hash: {params.get('hash')}")
    _rsa.validate_shape(params)


class RsaSsaPkcs1Signer(PublicKeySign):
    def __init__(self, sk: rsa.RSAPrivateKey, hash_name: str) -> None:
        self._sk = sk
        self._hash_name = hash_name

    def sign(self, data: bytes) -> bytes:
        return self._sk.sign(data, padding.PKCS1v15(), hash_for(self._hash_name))


class RsaSsaPkcs1Verifier(PublicKeyVerify):
    def __init__(self, pk: rsa.RSAPublicKey, hash_name: str) -> None:
        self._pk = pk
        self._hash_name = hash_name

    def verify(self, signature: bytes, data: bytes) -> None:
        try:
            self._pk.verify(signature, data, padding.PKCS1v15(), hash_for(self._hash_name))
        except (InvalidSignature, ValueError) as exc:
            raise SecurityError("invalid signature") from exc


class RsaSsaPkcs1VerifyKeyManager(PublicKeyManagerBase):
    key_name = "RsaSsaPkcs1PublicKey"
    key_type = TYPE_URL_PREFIX + key_name

    def primitive_class(self) -> type:
        return PublicKeyVerify

    def validate_params(self, params: Dict[str, Any]) -> None:
        validate_params(params)

    def check_key(self, pk: Any, params: Dict[str, Any]) -> None:
        _rsa.check_key(pk)

    def make_verifier(self, pk: Any, params: Dict[str, Any]) -> RsaSsaPkcs1Verifier:
        return RsaSsaPkcs1Verifier(pk, params["hash"])


class RsaSsaPkcs1SignKeyManager(PrivateKeyManagerBase):
    key_name = "RsaSsaPkcs1PrivateKey"
    key_type = TYPE_URL_PREFIX + key_name
    public_key_manager = RsaSsaPkcs1VerifyKeyManager

    def primitive_class(self) -> type:
        return PublicKeySign

    def validate_params(self, params: Dict[str, Any]) -> None:
        validate_params(params)

    def key_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return _rsa.strip_shape(params)

    def check_key(self, sk: Any, params: Dict[str, Any]) -> None:
        _rsa.check_key(sk)

    def generate(self, params: Dict[str, Any]) -> rsa.RSAPrivateKey:
        if "modulus_size_in_bits" not in params:
            raise SecurityError("RSA key format must set modulus_size_in_bits")
        return _rsa.generate(params)

    def make_signer(self, sk: Any, params: Dict[str, Any]) -> RsaSsaPkcs1Signer:
        return RsaSsaPkcs1Signer(sk, params["hash"])
