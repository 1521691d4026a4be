from __future__ import annotations
from typing import Any, Dict

from cryptography.hazmat.primitives.asymmetric import rsa

from sigkit.errors import SecurityError

MIN_MODULUS_SIZE = 2048
DEFAULT_PUBLIC_EXPONENT = 65537

_SHAPE_FIELDS = ("modulus_size_in_bits", "public_exponent")


def validate_shape(params: Dict[str, Any]) -> None:
    """Check modulus size and exponent when a key format carries them."""
    if "modulus_size_in_bits" in params:
        bits = params["modulus_size_in_bits"]
        if not isinstance(bits, int) or bits < MIN_MODULUS_SIZE:
            raise SecurityError(f"RSA modulus must be at least {MIN_MODULUS_SIZE} bits, got {bits}")
    if "public_exponent" in params:
        _validate_exponent(params["public_exponent"])


def _validate_exponent(e: Any) -> None:
    if not isinstance(e, int) or e <= 65536 or e % 2 == 0:
        raise SecurityError(f"invalid RSA public exponent: {e}")


def check_key(key: Any) -> None:
    if isinstance(key, rsa.RSAPrivateKey):
        key = key.public_key()
    if not isinstance(key, rsa.RSAPublicKey):
        raise SecurityError("not an RSA key")
    if key.key_size < MIN_MODULUS_SIZE:
        raise SecurityError(f"RSA modulus must be at least {MIN_MODULUS_SIZE} bits, got {key.key_size}")
    _validate_exponent(key.public_numbers().e)


def strip_shape(params: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in params.items() if k not in _SHAPE_FIELDS}


def generate(params: Dict[str, Any]) -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(
        public_exponent=params.get("public_exponent", DEFAULT_PUBLIC_EXPONENT),
        key_size=params["modulus_size_in_bits"],
    )
