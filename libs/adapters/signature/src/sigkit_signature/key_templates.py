from __future__ import annotations
import os
from typing import Dict

from sigkit.keys import KeyTemplate, OutputPrefixType

from ._util import encode_key_format
from ._rsa import DEFAULT_PUBLIC_EXPONENT
from .ecdsa import EcdsaSignKeyManager
from .ed25519 import Ed25519SignKeyManager
from .rsa_ssa_pkcs1 import RsaSsaPkcs1SignKeyManager
from .rsa_ssa_pss import RsaSsaPssSignKeyManager

"""Pre-generated key templates for the signature key types."""


def create_ecdsa_key_template(
    hash_name: str,
    curve: str,
    encoding: str = "DER",
    output_prefix_type: OutputPrefixType = OutputPrefixType.TINK,
) -> KeyTemplate:
    params = {"hash": hash_name, "curve": curve, "encoding": encoding}
    return KeyTemplate(EcdsaSignKeyManager.key_type, encode_key_format(params), output_prefix_type)


def create_ed25519_key_template(output_prefix_type: OutputPrefixType = OutputPrefixType.TINK) -> KeyTemplate:
    return KeyTemplate(Ed25519SignKeyManager.key_type, encode_key_format({}), output_prefix_type)


def create_rsa_ssa_pkcs1_key_template(
    hash_name: str,
    modulus_size: int,
    public_exponent: int = DEFAULT_PUBLIC_EXPONENT,
    output_prefix_type: OutputPrefixType = OutputPrefixType.TINK,
) -> KeyTemplate:
    params = {
        "hash": hash_name,
        "modulus_size_in_bits": modulus_size,
        "public_exponent": public_exponent,
    }
    return KeyTemplate(RsaSsaPkcs1SignKeyManager.key_type, encode_key_format(params), output_prefix_type)


def create_rsa_ssa_pss_key_template(
    sig_hash: str,
    mgf1_hash: str,
    salt_length: int,
    modulus_size: int,
    public_exponent: int = DEFAULT_PUBLIC_EXPONENT,
    output_prefix_type: OutputPrefixType = OutputPrefixType.TINK,
) -> KeyTemplate:
    params = {
        "sig_hash": sig_hash,
        "mgf1_hash": mgf1_hash,
        "salt_length": salt_length,
        "modulus_size_in_bits": modulus_size,
        "public_exponent": public_exponent,
    }
    return KeyTemplate(RsaSsaPssSignKeyManager.key_type, encode_key_format(params), output_prefix_type)


ECDSA_P256 = create_ecdsa_key_template("SHA256", "NIST_P256")
ECDSA_P384 = create_ecdsa_key_template("SHA512", "NIST_P384")
ECDSA_P521 = create_ecdsa_key_template("SHA512", "NIST_P521")
ECDSA_P256_IEEE_P1363 = create_ecdsa_key_template("SHA256", "NIST_P256", "IEEE_P1363")
ED25519 = create_ed25519_key_template()
RSA_SSA_PKCS1_3072_SHA256_F4 = create_rsa_ssa_pkcs1_key_template("SHA256", 3072)
RSA_SSA_PKCS1_4096_SHA512_F4 = create_rsa_ssa_pkcs1_key_template("SHA512", 4096)
RSA_SSA_PSS_3072_SHA256_SHA256_32_F4 = create_rsa_ssa_pss_key_template("SHA256", "SHA256", 32, 3072)
RSA_SSA_PSS_4096_SHA512_SHA512_64_F4 = create_rsa_ssa_pss_key_template("SHA512", "SHA512", 64, 4096)


def rsa_bits() -> int:
    override = os.getenv("SIGKIT_RSA_BITS")
    if override:
        try:
            return int(override)
        except ValueError as exc:
            raise ValueError("SIGKIT_RSA_BITS must be an integer") from exc
    return 3072


def named_templates() -> Dict[str, KeyTemplate]:
    """Templates addressable by name from the CLI; RSA sizes honour SIGKIT_RSA_BITS."""
    bits = rsa_bits()
    return {
        "ecdsa-p256": ECDSA_P256,
        "ecdsa-p384": ECDSA_P384,
        "ecdsa-p521": ECDSA_P521,
        "ecdsa-p256-ieee": ECDSA_P256_IEEE_P1363,
        "ed25519": ED25519,
        "ed25519-raw": create_ed25519_key_template(OutputPrefixType.RAW),
        "rsa-pss": create_rsa_ssa_pss_key_template("SHA256", "SHA256", 32, bits),
        "rsa-pkcs1": create_rsa_ssa_pkcs1_key_template("SHA256", bits),
    }
