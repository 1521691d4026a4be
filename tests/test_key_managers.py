from __future__ import annotations

import json

import pytest

from sigkit import Registry, SecurityError
from sigkit.keys import KeyData
from sigkit_signature import key_templates
from sigkit_signature._util import encode_key_format
from sigkit_signature.ecdsa import EcdsaSignKeyManager, EcdsaVerifyKeyManager
from sigkit_signature.ed25519 import Ed25519SignKeyManager, Ed25519VerifyKeyManager
from sigkit_signature.rsa_ssa_pkcs1 import RsaSsaPkcs1SignKeyManager
from sigkit_signature.rsa_ssa_pss import RsaSsaPssSignKeyManager

RSA_PSS_2048 = key_templates.create_rsa_ssa_pss_key_template("SHA256", "SHA256", 32, 2048)
RSA_PKCS1_2048 = key_templates.create_rsa_ssa_pkcs1_key_template("SHA256", 2048)


def _sign_and_verify(registry: Registry, template) -> None:
    private = registry.new_key_data(template)
    public = registry.public_key_data(private)
    signature = registry.primitive(private).sign(b"message")
    registry.primitive(public).verify(signature, b"message")
    with pytest.raises(SecurityError):
        registry.primitive(public).verify(signature, b"other message")
    tampered = bytes([signature[0] ^ 0x01]) + signature[1:]
    with pytest.raises(SecurityError):
        registry.primitive(public).verify(tampered, b"message")


@pytest.mark.parametrize(
    "template",
    [
        key_templates.ECDSA_P256,
        key_templates.ECDSA_P384,
        key_templates.ECDSA_P256_IEEE_P1363,
        key_templates.ED25519,
        RSA_PSS_2048,
        RSA_PKCS1_2048,
    ],
    ids=["ecdsa-p256", "ecdsa-p384", "ecdsa-ieee", "ed25519", "rsa-pss", "rsa-pkcs1"],
)
def test_sign_verify(registry: Registry, template):
    _sign_and_verify(registry, template)


def test_ieee_p1363_signature_is_fixed_width(registry: Registry):
    private = registry.new_key_data(key_templates.ECDSA_P256_IEEE_P1363)
    assert len(registry.primitive(private).sign(b"x")) == 64
    verifier = registry.primitive(registry.public_key_data(private))
    with pytest.raises(SecurityError):
        verifier.verify(b"\x00" * 63, b"x")


@pytest.mark.parametrize(
    "params",
    [
        {"hash": "SHA256", "curve": "NIST_P384", "encoding": "DER"},
        {"hash": "SHA384", "curve": "NIST_P521", "encoding": "DER"},
        {"hash": "SHA1", "curve": "NIST_P256", "encoding": "DER"},
        {"hash": "SHA256", "curve": "CURVE25519", "encoding": "DER"},
        {"hash": "SHA256", "curve": "NIST_P256", "encoding": "BER"},
    ],
)
def test_ecdsa_rejects_bad_params(params):
    with pytest.raises(SecurityError):
        EcdsaSignKeyManager().new_key_data(encode_key_format(params))


@pytest.mark.parametrize(
    "params",
    [
        {"sig_hash": "SHA256", "mgf1_hash": "SHA512", "salt_length": 32, "modulus_size_in_bits": 2048},
        {"sig_hash": "SHA384", "mgf1_hash": "SHA384", "salt_length": 32, "modulus_size_in_bits": 2048},
        {"sig_hash": "SHA256", "mgf1_hash": "SHA256", "salt_length": -1, "modulus_size_in_bits": 2048},
        {"sig_hash": "SHA256", "mgf1_hash": "SHA256", "salt_length": 32, "modulus_size_in_bits": 1024},
        {
            "sig_hash": "SHA256",
            "mgf1_hash": "SHA256",
            "salt_length": 32,
            "modulus_size_in_bits": 2048,
            "public_exponent": 3,
        },
    ],
)
def test_rsa_pss_rejects_bad_params(params):
    with pytest.raises(SecurityError):
        RsaSsaPssSignKeyManager().new_key_data(encode_key_format(params))


def test_rsa_pkcs1_rejects_small_modulus():
    fmt = encode_key_format({"hash": "SHA256", "modulus_size_in_bits": 1024, "public_exponent": 65537})
    with pytest.raises(SecurityError):
        RsaSsaPkcs1SignKeyManager().new_key_data(fmt)


def test_ed25519_rejects_params():
    with pytest.raises(SecurityError):
        Ed25519SignKeyManager().new_key_data(encode_key_format({"hash": "SHA256"}))


def test_public_manager_cannot_generate():
    with pytest.raises(SecurityError, match="does not generate keys"):
        Ed25519VerifyKeyManager().new_key_data(encode_key_format({}))


def test_newer_key_version_rejected():
    manager = Ed25519SignKeyManager()
    key_data = manager.new_key_data(encode_key_format({}))
    doc = json.loads(key_data.value)
    doc["version"] = manager.version + 1
    newer = KeyData(key_data.type_url, json.dumps(doc).encode(), key_data.key_material_type)
    with pytest.raises(SecurityError, match="version"):
        manager.primitive(newer)


def test_wrong_type_url_rejected():
    key_data = Ed25519SignKeyManager().new_key_data(encode_key_format({}))
    with pytest.raises(SecurityError):
        EcdsaSignKeyManager().primitive(
            KeyData(EcdsaSignKeyManager.key_type, key_data.value, key_data.key_material_type)
        )


def test_public_key_material_rejected_by_sign_manager():
    manager = EcdsaSignKeyManager()
    private = manager.new_key_data(key_templates.ECDSA_P256.value)
    public = manager.public_key_data(private)
    assert EcdsaVerifyKeyManager().does_support(public.type_url)
    with pytest.raises(SecurityError):
        manager.primitive(KeyData(manager.key_type, public.value, private.key_material_type))


def test_malformed_key_value():
    with pytest.raises(SecurityError, match="malformed"):
        Ed25519SignKeyManager().primitive(
            KeyData(Ed25519SignKeyManager.key_type, b"not json", Ed25519SignKeyManager.material_type)
        )


def test_rsa_pss_rejects_salt_too_long_for_modulus():
    # 2048-bit modulus with SHA256 leaves room for at most 256 - 32 - 2 salt bytes
    fits = key_templates.create_rsa_ssa_pss_key_template("SHA256", "SHA256", 222, 2048)
    too_long = key_templates.create_rsa_ssa_pss_key_template("SHA256", "SHA256", 300, 2048)
    manager = RsaSsaPssSignKeyManager()
    with pytest.raises(SecurityError, match="too long"):
        manager.new_key_data(too_long.value)
    manager.new_key_data(fits.value)


def test_rsa_pss_key_with_oversized_salt_fails_as_security_error(registry: Registry):
    private = registry.new_key_data(RSA_PSS_2048)
    doc = json.loads(private.value)
    doc["params"]["salt_length"] = 300
    widened = KeyData(private.type_url, json.dumps(doc).encode(), private.key_material_type)
    with pytest.raises(SecurityError, match="too long"):
        registry.primitive(widened)


def test_public_key_data_rejects_mismatched_embedded_public_key(registry: Registry):
    first = json.loads(registry.new_key_data(key_templates.ECDSA_P256).value)
    second = json.loads(registry.new_key_data(key_templates.ECDSA_P256).value)
    first["public_key"] = second["public_key"]
    mixed = KeyData(EcdsaSignKeyManager.key_type, json.dumps(first).encode(), EcdsaSignKeyManager.material_type)
    with pytest.raises(SecurityError, match="does not match"):
        registry.public_key_data(mixed)


def test_public_key_data_without_embedded_public_key(registry: Registry):
    doc = json.loads(registry.new_key_data(key_templates.ED25519).value)
    del doc["public_key"]
    bare = KeyData(Ed25519SignKeyManager.key_type, json.dumps(doc).encode(), Ed25519SignKeyManager.material_type)
    signature = registry.primitive(bare).sign(b"m")
    registry.primitive(registry.public_key_data(bare)).verify(signature, b"m")


def test_ecdsa_p521(registry: Registry):
    _sign_and_verify(registry, key_templates.ECDSA_P521)
