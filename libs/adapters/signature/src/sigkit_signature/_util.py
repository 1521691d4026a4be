from __future__ import annotations
import base64
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from cryptography.hazmat.primitives import hashes, serialization

from sigkit.errors import SecurityError
from sigkit.keys import KeyData, KeyMaterialType

HASHES: Dict[str, type[hashes.HashAlgorithm]] = {
    "SHA256": hashes.SHA256,
    "SHA384": hashes.SHA384,
    "SHA512": hashes.SHA512,
}


def hash_for(name: str) -> hashes.HashAlgorithm:
    try:
        return HASHES[name]()
    except KeyError:
        raise SecurityError(f"unsupported hash: {name}") from None


@dataclass(frozen=True)
class DecodedKey:
    version: int
    params: Dict[str, Any]
    der: bytes
    public_der: Optional[bytes] = None


def encode_key(version: int, params: Dict[str, Any], der: bytes, public_der: Optional[bytes] = None) -> bytes:
    doc: Dict[str, Any] = {
        "version": version,
        "params": params,
        "key": base64.b64encode(der).decode("ascii"),
    }
    if public_der is not None:
        doc["public_key"] = base64.b64encode(public_der).decode("ascii")
    return json.dumps(doc, sort_keys=True, separators=(",", ":")).encode("utf-8")


def decode_key(value: bytes) -> DecodedKey:
    try:
        doc = json.loads(value.decode("utf-8"))
        public_b64 = doc.get("public_key")
        return DecodedKey(
            version=int(doc["version"]),
            params=dict(doc.get("params") or {}),
            der=base64.b64decode(doc["key"], validate=True),
            public_der=base64.b64decode(public_b64, validate=True) if public_b64 else None,
        )
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        raise SecurityError(f"malformed key: {exc}") from exc


def encode_key_format(params: Dict[str, Any]) -> bytes:
    return json.dumps({"params": params}, sort_keys=True, separators=(",", ":")).encode("utf-8")


def decode_key_format(value: bytes) -> Dict[str, Any]:
    try:
        doc = json.loads(value.decode("utf-8"))
        return dict(doc.get("params") or {})
    except (ValueError, TypeError, AttributeError) as exc:
        raise SecurityError(f"malformed key format: {exc}") from exc


def private_der(sk: Any) -> bytes:
    return sk.private_bytes(
        serialization.Encoding.DER,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )


def public_der(pk: Any) -> bytes:
    return pk.public_bytes(
        serialization.Encoding.DER,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def load_private_key(der: bytes) -> Any:
    try:
        return serialization.load_der_private_key(der, password=None)
    except (ValueError, TypeError) as exc:
        raise SecurityError(f"invalid private key material: {exc}") from exc


def load_public_key(der: bytes) -> Any:
    try:
        return serialization.load_der_public_key(der)
    except (ValueError, TypeError) as exc:
        raise SecurityError(f"invalid public key material: {exc}") from exc


class _ManagerBase:
    key_name: str = ""
    key_type: str = ""
    version: int = 0
    material_type: KeyMaterialType

    def does_support(self, type_url: str) -> bool:
        return type_url == self.key_type

    def _decode(self, key_data: KeyData) -> DecodedKey:
        if key_data.type_url != self.key_type:
            raise SecurityError(f"key type '{key_data.type_url}' not supported by {type(self).__name__}")
        if key_data.key_material_type != self.material_type:
            raise SecurityError(f"expected {self.material_type.value} key material")
        decoded = decode_key(key_data.value)
        if decoded.version < 0 or decoded.version > self.version:
            raise SecurityError(f"key version {decoded.version} is not supported (max {self.version})")
        self.validate_params(decoded.params)
        return decoded

    def validate_params(self, params: Dict[str, Any]) -> None:
        raise NotImplementedError


class PrivateKeyManagerBase(_ManagerBase):
    """Shared plumbing for managers of private (signing) keys."""

    material_type = KeyMaterialType.ASYMMETRIC_PRIVATE
    public_key_manager: type

    def primitive(self, key_data: KeyData) -> Any:
        decoded = self._decode(key_data)
        sk = load_private_key(decoded.der)
        self.check_key(sk, decoded.params)
        return self.make_signer(sk, decoded.params)

    def new_key_data(self, serialized_key_format: bytes) -> KeyData:
        params = decode_key_format(serialized_key_format)
        self.validate_params(params)
        try:
            sk = self.generate(params)
        except ValueError as exc:
            raise SecurityError(f"key generation failed: {exc}") from exc
        value = encode_key(self.version, self.key_params(params), private_der(sk), public_der(sk.public_key()))
        return KeyData(self.key_type, value, KeyMaterialType.ASYMMETRIC_PRIVATE)

    def public_key_data(self, key_data: KeyData) -> KeyData:
        decoded = self._decode(key_data)
        pub = public_der(load_private_key(decoded.der).public_key())
        if decoded.public_der is not None and decoded.public_der != pub:
            raise SecurityError("embedded public key does not match the private key")
        value = encode_key(decoded.version, decoded.params, pub)
        return KeyData(self.public_key_manager.key_type, value, KeyMaterialType.ASYMMETRIC_PUBLIC)

    def key_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Parameters stored with the key (the format may carry more)."""
        return params

    def check_key(self, sk: Any, params: Dict[str, Any]) -> None:
        pass

    def generate(self, params: Dict[str, Any]) -> Any:
        raise NotImplementedError

    def make_signer(self, sk: Any, params: Dict[str, Any]) -> Any:
        raise NotImplementedError


class PublicKeyManagerBase(_ManagerBase):
    """Shared plumbing for managers of public (verification) keys."""

    material_type = KeyMaterialType.ASYMMETRIC_PUBLIC

    def primitive(self, key_data: KeyData) -> Any:
        decoded = self._decode(key_data)
        pk = load_public_key(decoded.der)
        self.check_key(pk, decoded.params)
        return self.make_verifier(pk, decoded.params)

    def new_key_data(self, serialized_key_format: bytes) -> KeyData:
        raise SecurityError(f"{type(self).__name__} does not generate keys; derive them from a private key")

    def check_key(self, pk: Any, params: Dict[str, Any]) -> None:
        pass

    def make_verifier(self, pk: Any, params: Dict[str, Any]) -> Any:
        raise NotImplementedError
