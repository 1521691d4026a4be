from __future__ import annotations
import threading
from typing import Optional, Tuple, Type

from sigkit.config import RegistryConfig, create_key_type_entry
from sigkit.registry import Registry, default_registry

from .catalogue import SignatureCatalogue
from .ecdsa import EcdsaSignKeyManager, EcdsaVerifyKeyManager
from .ed25519 import Ed25519SignKeyManager, Ed25519VerifyKeyManager
from .rsa_ssa_pkcs1 import RsaSsaPkcs1SignKeyManager, RsaSsaPkcs1VerifyKeyManager
from .rsa_ssa_pss import RsaSsaPssSignKeyManager, RsaSsaPssVerifyKeyManager
from .wrappers import PublicKeySignWrapper, PublicKeyVerifyWrapper

"""Declares and registers the signature key types.

`latest()` describes what is supported; `register()` binds it. Both walk the
same `_FAMILIES` table so the descriptor order and the submission order are
always the same. The table order is part of the public contract: tooling
enumerating the descriptor may rely on it.
"""

CONFIG_NAME = "SIGNATURE"
PUBLIC_KEY_SIGN_CATALOGUE_NAME = "SigkitPublicKeySign"
PUBLIC_KEY_VERIFY_CATALOGUE_NAME = "SigkitPublicKeyVerify"
PUBLIC_KEY_SIGN_PRIMITIVE_NAME = "PublicKeySign"
PUBLIC_KEY_VERIFY_PRIMITIVE_NAME = "PublicKeyVerify"

# (sign manager, verify manager) per family
_FAMILIES: Tuple[Tuple[Type, Type], ...] = (
    (EcdsaSignKeyManager, EcdsaVerifyKeyManager),
    (Ed25519SignKeyManager, Ed25519VerifyKeyManager),
    (RsaSsaPssSignKeyManager, RsaSsaPssVerifyKeyManager),
    (RsaSsaPkcs1SignKeyManager, RsaSsaPkcs1VerifyKeyManager),
)


def _generate_registry_config() -> RegistryConfig:
    entries = []
    for sign_cls, verify_cls in _FAMILIES:
        entries.append(
            create_key_type_entry(
                PUBLIC_KEY_SIGN_CATALOGUE_NAME,
                PUBLIC_KEY_SIGN_PRIMITIVE_NAME,
                sign_cls.key_name,
                0,
                True,
            )
        )
        entries.append(
            create_key_type_entry(
                PUBLIC_KEY_VERIFY_CATALOGUE_NAME,
                PUBLIC_KEY_VERIFY_PRIMITIVE_NAME,
                verify_cls.key_name,
                0,
                True,
            )
        )
    return RegistryConfig(config_name=CONFIG_NAME, entries=tuple(entries))


_latest: Optional[RegistryConfig] = None
_latest_lock = threading.Lock()


def latest() -> RegistryConfig:
    """The signature RegistryConfig; built once per process."""
    global _latest
    if _latest is None:
        with _latest_lock:
            if _latest is None:
                _latest = _generate_registry_config()
    return _latest


def register(registry: Optional[Registry] = None) -> None:
    """Bind every signature key manager, then the sign and verify wrappers.

    Stops at the first failing submission and re-raises it; earlier bindings
    stay in place. Safe to call repeatedly against the same registry.
    """
    if registry is None:
        registry = default_registry()
    for sign_cls, verify_cls in _FAMILIES:
        registry.register_key_manager(sign_cls(), True)
        registry.register_key_manager(verify_cls(), True)
    registry.register_primitive_wrapper(PublicKeySignWrapper())
    registry.register_primitive_wrapper(PublicKeyVerifyWrapper())


def register_catalogues(registry: Optional[Registry] = None) -> None:
    """Add the catalogues `sigkit.config.register_config` needs for `latest()`."""
    if registry is None:
        registry = default_registry()
    registry.add_catalogue(
        PUBLIC_KEY_SIGN_CATALOGUE_NAME,
        SignatureCatalogue(PUBLIC_KEY_SIGN_PRIMITIVE_NAME, [sign for sign, _ in _FAMILIES]),
    )
    registry.add_catalogue(
        PUBLIC_KEY_VERIFY_CATALOGUE_NAME,
        SignatureCatalogue(PUBLIC_KEY_VERIFY_PRIMITIVE_NAME, [verify for _, verify in _FAMILIES]),
    )
