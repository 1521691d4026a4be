from __future__ import annotations
from typing import Any, Dict

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from sigkit.config import TYPE_URL_PREFIX
from sigkit.errors import SecurityError
from sigkit.interfaces import PublicKeySign, PublicKeyVerify

from ._util import PrivateKeyManagerBase, PublicKeyManagerBase, hash_for

# curve name -> (cryptography curve class, field size in bytes)
CURVES = {
    "NIST_P256": (ec.SECP256R1, 32),
    "NIST_P384": (ec.SECP384R1, 48),
    "NIST_P521": (ec.SECP521R1, 66),
}
ENCODINGS = ("DER", "IEEE_P1363")

# minimum hash strength accepted per curve
_ALLOWED_HASHES = {
    "NIST_P256": ("SHA256", "SHA384", "SHA512"),
    "NIST_P384": ("SHA384", "SHA512"),
    "NIST_P521": ("SHA512",),
}


def validate_params(params: Dict[str, Any]) -> None:
    curve = params.get("curve")
    hash_name = params.get("hash")
    encoding = params.get("encoding")
    if curve not in CURVES:
        raise SecurityError(f"unsupported ECDSA curve: {curve}")
    if hash_name not in _ALLOWED_HASHES[curve]:
        raise SecurityError(f"hash {hash_name} is not allowed with curve {curve}")
    if encoding not in ENCODINGS:
        raise SecurityError(f"unsupported ECDSA signature encoding: {encoding}")


def _check_curve(key: Any, params: Dict[str, Any]) -> None:
    expected = CURVES[params["curve"]][0].name
    if not hasattr(key, "curve") or key.curve.name != expected:
        raise SecurityError(f"key is not on curve {params['curve']}")


class EcdsaSigner(PublicKeySign):
    def __init__(self, sk: ec.EllipticCurvePrivateKey, hash_name: str, encoding: str, field_size: int) -> None:
        self._sk = sk
        self._hash_name = hash_name
        self._encoding = encoding
        self._field_size = field_size

    def sign(self, data: bytes) -> bytes:
        der = self._sk.sign(data, ec.ECDSA(hash_for(self._hash_name)))
        if self._encoding == "DER":
            return der
        r, s = decode_dss_signature(der)
        return r.to_bytes(self._field_size, "big") + s.to_bytes(self._field_size, "big")


class EcdsaVerifier(PublicKeyVerify):
    def __init__(self, pk: ec.EllipticCurvePublicKey, hash_name: str, encoding: str, field_size: int) -> None:
        self._pk = pk
        self._hash_name = hash_name
        self._encoding = encoding
        self._field_size = field_size

    def verify(self, signature: bytes, data: bytes) -> None:
        if self._encoding == "IEEE_P1363":
            if len(signature) != 2 * self._field_size:
                raise SecurityError("invalid signature")
            r = int.from_bytes(signature[: self._field_size], "big")
            s = int.from_bytes(signature[self._field_size :], "big")
            signature = encode_dss_signature(r, s)
        try:
            self._pk.verify(signature, data, ec.ECDSA(hash_for(self._hash_name)))
        except (InvalidSignature, ValueError) as exc:
            raise SecurityError("invalid signature") from exc


class EcdsaVerifyKeyManager(PublicKeyManagerBase):
    key_name = "EcdsaPublicKey"
    key_type = TYPE_URL_PREFIX + key_name

    def primitive_class(self) -> type:
        return PublicKeyVerify

    def validate_params(self, params: Dict[str, Any]) -> None:
        validate_params(params)

    def check_key(self, pk: Any, params: Dict[str, Any]) -> None:
        _check_curve(pk, params)

    def make_verifier(self, pk: Any, params: Dict[str, Any]) -> EcdsaVerifier:
        return EcdsaVerifier(pk, params["hash"], params["encoding"], CURVES[params["curve"]][1])


class EcdsaSignKeyManager(PrivateKeyManagerBase):
    key_name = "EcdsaPrivateKey"
    key_type = TYPE_URL_PREFIX + key_name
    public_key_manager = EcdsaVerifyKeyManager

    def primitive_class(self) -> type:
        return PublicKeySign

    def validate_params(self, params: Dict[str, Any]) -> None:
        validate_params(params)

    def check_key(self, sk: Any, params: Dict[str, Any]) -> None:
        _check_curve(sk, params)

    def generate(self, params: Dict[str, Any]) -> ec.EllipticCurvePrivateKey:
        return ec.generate_private_key(CURVES[params["curve"]][0]())

    def make_signer(self, sk: Any, params: Dict[str, Any]) -> EcdsaSigner:
        return EcdsaSigner(sk, params["hash"], params["encoding"], CURVES[params["curve"]][1])
