from __future__ import annotations
from typing import Any, Dict

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from sigkit.config import TYPE_URL_PREFIX
from sigkit.errors import SecurityError
from sigkit.interfaces import PublicKeySign, PublicKeyVerify

from . import _rsa
from ._util import PrivateKeyManagerBase, PublicKeyManagerBase, hash_for

_PSS_HASHES = ("SHA256", "SHA512")


def max_salt_length(modulus_bits: int, hash_name: str) -> int:
    """Largest salt EMSA-PSS can encode for this modulus and hash."""
    em_len = (modulus_bits - 1 + 7) // 8
    return em_len - hash_for(hash_name).digest_size - 2


def validate_params(params: Dict[str, Any]) -> None:
    sig_hash = params.get("sig_hash")
    mgf1_hash = params.get("mgf1_hash")
    salt_length = params.get("salt_length")
    if sig_hash not in _PSS_HASHES:
        raise SecurityError(f"unsupported RSA-SSA-PSS hash: {sig_hash}")
    if mgf1_hash != sig_hash:
        raise SecurityError("sig_hash and mgf1_hash must be the same")
    if not isinstance(salt_length, int) or salt_length < 0:
        raise SecurityError(f"invalid salt length: {salt_length}")
    _rsa.validate_shape(params)
    bits = params.get("modulus_size_in_bits")
    if isinstance(bits, int) and salt_length > max_salt_length(bits, sig_hash):
        raise SecurityError(f"salt length {salt_length} is too long for a {bits}-bit modulus")


def _check_salt(key: Any, params: Dict[str, Any]) -> None:
    if params["salt_length"] > max_salt_length(key.key_size, params["sig_hash"]):
        raise SecurityError(f"salt length {params['salt_length']} is too long for a {key.key_size}-bit modulus")


def _pss(params: Dict[str, Any]) -> padding.PSS:
    return padding.PSS(mgf=padding.MGF1(hash_for(params["mgf1_hash"])), salt_length=params["salt_length"])


class RsaSsaPssSigner(PublicKeySign):
    def __init__(self, sk: rsa.RSAPrivateKey, params: Dict[str, Any]) -> None:
        self._sk = sk
        self._params = dict(params)

    def sign(self, data: bytes) -> bytes:
        try:
            return self._sk.sign(data, _pss(self._params), hash_for(self._params["sig_hash"]))
        except ValueError as exc:
            raise SecurityError(f"RSA-SSA-PSS signing failed: {exc}") from exc


class RsaSsaPssVerifier(PublicKeyVerify):
    def __init__(self, pk: rsa.RSAPublicKey, params: Dict[str, Any]) -> None:
        self._pk = pk
        self._params = dict(params)

    def verify(self, signature: bytes, data: bytes) -> None:
        try:
            self._pk.verify(signature, data, _pss(self._params), hash_for(self._params["sig_hash"]))
        except (InvalidSignature, ValueError) as exc:
            raise SecurityError("invalid signature") from exc


class RsaSsaPssVerifyKeyManager(PublicKeyManagerBase):
    key_name = "RsaSsaPssPublicKey"
    key_type = TYPE_URL_PREFIX + key_name

    def primitive_class(self) -> type:
        return PublicKeyVerify

    def validate_params(self, params: Dict[str, Any]) -> None:
        validate_params(params)

    def check_key(self, pk: Any, params: Dict[str, Any]) -> None:
        _rsa.check_key(pk)
        _check_salt(pk, params)

    def make_verifier(self, pk: Any, params: Dict[str, Any]) -> RsaSsaPssVerifier:
        return RsaSsaPssVerifier(pk, params)


class RsaSsaPssSignKeyManager(PrivateKeyManagerBase):
    key_name = "RsaSsaPssPrivateKey"
    key_type = TYPE_URL_PREFIX + key_name
    public_key_manager = RsaSsaPssVerifyKeyManager

    def primitive_class(self) -> type:
        return PublicKeySign

    def validate_params(self, params: Dict[str, Any]) -> None:
        validate_params(params)

    def key_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return _rsa.strip_shape(params)

    def check_key(self, sk: Any, params: Dict[str, Any]) -> None:
        _rsa.check_key(sk)
        _check_salt(sk, params)

    def generate(self, params: Dict[str, Any]) -> rsa.RSAPrivateKey:
        if "modulus_size_in_bits" not in params:
            raise SecurityError("RSA key format must set modulus_size_in_bits")
        return _rsa.generate(params)

    def make_signer(self, sk: Any, params: Dict[str, Any]) -> RsaSsaPssSigner:
        return RsaSsaPssSigner(sk, params)
