"""Signature key managers, wrappers and their registry configuration.

Nothing is registered on import; call `register(registry)` during startup.
"""

from . import key_templates
from .signature_config import (
    CONFIG_NAME,
    PUBLIC_KEY_SIGN_CATALOGUE_NAME,
    PUBLIC_KEY_SIGN_PRIMITIVE_NAME,
    PUBLIC_KEY_VERIFY_CATALOGUE_NAME,
    PUBLIC_KEY_VERIFY_PRIMITIVE_NAME,
    latest,
    register,
    register_catalogues,
)
from .wrappers import PublicKeySignWrapper, PublicKeyVerifyWrapper

__all__ = [
    "key_templates",
    "CONFIG_NAME",
    "PUBLIC_KEY_SIGN_CATALOGUE_NAME",
    "PUBLIC_KEY_SIGN_PRIMITIVE_NAME",
    "PUBLIC_KEY_VERIFY_CATALOGUE_NAME",
    "PUBLIC_KEY_VERIFY_PRIMITIVE_NAME",
    "latest",
    "register",
    "register_catalogues",
    "PublicKeySignWrapper",
    "PublicKeyVerifyWrapper",
]
