from __future__ import annotations

"""Exception hierarchy shared by the registry, key managers and wrappers."""


class SigkitError(Exception):
    """Base error for sigkit."""


class RegistryError(SigkitError):
    """Lookup or policy failure inside a Registry."""


class ConflictingRegistrationError(RegistryError):
    """A type URL, primitive or catalogue is already bound to something else."""


class SecurityError(SigkitError):
    """Invalid key material, unsupported parameters or a failed verification."""
