
from .errors import ConflictingRegistrationError, RegistryError, SecurityError, SigkitError
from .interfaces import PublicKeySign, PublicKeyVerify
from .registry import Registry, default_registry
from .config import KeyTypeEntry, RegistryConfig, register_config
from .keyset_handle import KeysetHandle
from .keys import KeyData, KeyTemplate, Keyset, KeysetKey, OutputPrefixType, KeyStatus

__all__ = [
    "ConflictingRegistrationError",
    "RegistryError",
    "SecurityError",
    "SigkitError",
    "PublicKeySign",
    "PublicKeyVerify",
    "Registry",
    "default_registry",
    "KeyTypeEntry",
    "RegistryConfig",
    "register_config",
    "KeysetHandle",
    "KeyData",
    "KeyTemplate",
    "Keyset",
    "KeysetKey",
    "OutputPrefixType",
    "KeyStatus",
]
