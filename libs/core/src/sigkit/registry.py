from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from .errors import ConflictingRegistrationError, RegistryError
from .interfaces import Catalogue, KeyManager, PrimitiveWrapper, PrivateKeyManager
from .keys import KeyData, KeyTemplate
from .primitive_set import PrimitiveSet

logger = logging.getLogger(__name__)


@dataclass
class _KeyManagerBinding:
    manager: KeyManager
    new_key_allowed: bool


class Registry:
    """Maps type URLs to key managers and primitive classes to wrappers.

    A registry is an ordinary object: the process entry point builds one and
    hands it to every subsystem's `register()`. Each submission is atomic;
    a sequence of submissions is not.

    Rebinding rules: submitting a manager for an already bound type URL is a
    no-op when the bound manager has the same class and the same
    `new_key_allowed` flag, and raises ConflictingRegistrationError otherwise.
    Wrappers and catalogues are compared by class alone.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._key_managers: Dict[str, _KeyManagerBinding] = {}
        self._wrappers: Dict[Type[Any], PrimitiveWrapper] = {}
        self._catalogues: Dict[str, Catalogue] = {}

    # -- submissions -------------------------------------------------------

    def register_key_manager(self, manager: KeyManager, new_key_allowed: bool = True) -> None:
        type_url = manager.key_type
        with self._lock:
            existing = self._key_managers.get(type_url)
            if existing is None:
                self._key_managers[type_url] = _KeyManagerBinding(manager, new_key_allowed)
                logger.debug("bound key manager %s for %s", type(manager).__name__, type_url)
                return
            if type(existing.manager) is not type(manager):
                raise ConflictingRegistrationError(
                    f"a manager for type '{type_url}' is already registered "
                    f"({type(existing.manager).__name__}), refusing {type(manager).__name__}"
                )
            if existing.new_key_allowed != new_key_allowed:
                raise ConflictingRegistrationError(
                    f"a manager for type '{type_url}' is already registered with "
                    f"new_key_allowed={existing.new_key_allowed}"
                )
            logger.debug("key manager for %s already registered; keeping existing binding", type_url)

    def register_primitive_wrapper(self, wrapper: PrimitiveWrapper) -> None:
        primitive_class = wrapper.primitive_class()
        with self._lock:
            existing = self._wrappers.get(primitive_class)
            if existing is None:
                self._wrappers[primitive_class] = wrapper
                logger.debug("bound wrapper %s for %s", type(wrapper).__name__, primitive_class.__name__)
                return
            if type(existing) is not type(wrapper):
                raise ConflictingRegistrationError(
                    f"a wrapper for primitive '{primitive_class.__name__}' is already registered "
                    f"({type(existing).__name__}), refusing {type(wrapper).__name__}"
                )
            logger.debug("wrapper for %s already registered; keeping existing binding", primitive_class.__name__)

    def add_catalogue(self, name: str, catalogue: Catalogue) -> None:
        with self._lock:
            existing = self._catalogues.get(name)
            if existing is None:
                self._catalogues[name] = catalogue
                logger.debug("bound catalogue %s", name)
                return
            if type(existing) is not type(catalogue):
                raise ConflictingRegistrationError(f"a catalogue named '{name}' is already registered")

    # -- lookups -----------------------------------------------------------

    def _binding(self, type_url: str) -> _KeyManagerBinding:
        with self._lock:
            binding = self._key_managers.get(type_url)
        if binding is None:
            raise RegistryError(f"no manager for type '{type_url}' has been registered")
        return binding

    def key_manager(self, type_url: str) -> KeyManager:
        return self._binding(type_url).manager

    def new_key_allowed(self, type_url: str) -> bool:
        return self._binding(type_url).new_key_allowed

    def key_types(self) -> List[str]:
        with self._lock:
            return list(self._key_managers)

    def catalogue(self, name: str) -> Catalogue:
        with self._lock:
            catalogue = self._catalogues.get(name)
        if catalogue is None:
            raise RegistryError(f"no catalogue named '{name}' has been added")
        return catalogue

    def primitive_wrapper(self, primitive_class: Type[Any]) -> PrimitiveWrapper:
        with self._lock:
            wrapper = self._wrappers.get(primitive_class)
        if wrapper is None:
            raise RegistryError(f"no wrapper registered for primitive '{primitive_class.__name__}'")
        return wrapper

    # -- operations --------------------------------------------------------

    def new_key_data(self, template: KeyTemplate) -> KeyData:
        binding = self._binding(template.type_url)
        if not binding.new_key_allowed:
            raise RegistryError(f"new key generation is not allowed for type '{template.type_url}'")
        return binding.manager.new_key_data(template.value)

    def primitive(self, key_data: KeyData, primitive_class: Optional[Type[Any]] = None) -> Any:
        manager = self.key_manager(key_data.type_url)
        if primitive_class is not None and manager.primitive_class() is not primitive_class:
            raise RegistryError(
                f"manager for '{key_data.type_url}' produces {manager.primitive_class().__name__}, "
                f"not {primitive_class.__name__}"
            )
        return manager.primitive(key_data)

    def public_key_data(self, private_key_data: KeyData) -> KeyData:
        manager = self.key_manager(private_key_data.type_url)
        if not isinstance(manager, PrivateKeyManager):
            raise RegistryError(f"manager for '{private_key_data.type_url}' is not a private key manager")
        return manager.public_key_data(private_key_data)

    def wrap(self, primitive_set: PrimitiveSet) -> Any:
        return self.primitive_wrapper(primitive_set.primitive_class).wrap(primitive_set)

    def reset(self) -> None:
        with self._lock:
            self._key_managers.clear()
            self._wrappers.clear()
            self._catalogues.clear()


_default: Optional[Registry] = None
_default_lock = threading.Lock()


def default_registry() -> Registry:
    """Process-wide registry, created on first use."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = Registry()
    return _default
