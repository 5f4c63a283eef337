"""Manage the s3dispatch registry scopes.

Methods are registered in a MethodRegistry. Most programs use a single
process-wide registry, but tests and embedding applications may need to
register methods temporarily without disturbing the global state.

This module allows the Python interpreter to track a global stack of
registries. The registry at the top of the stack is used by the module-level
s3dispatch functions and by GenericFunction objects created without an
explicit registry.

The stack is shared by all threads. Pushes and pops are serialized, but scopes
must still be strictly nested, so scopes should be opened and finalized from a
single thread. Threads that need their own methods should pass an explicit
registry to Resolver or GenericFunction instead.
"""

__all__ = ['RegistryScope', 'get_registry']

import logging
import threading
import warnings

from s3dispatch.exceptions import ProtocolError
from s3dispatch.registry import MethodRegistry

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))


class RegistryScope:
    """Make a registry current until the scope is finalized.

    If no *registry* is provided, the scope starts with an empty registry.

    Example:
        with RegistryScope() as registry:
            registry.register('print', 'data.frame', print_data_frame)
            ...
    """
    def __init__(self, registry: MethodRegistry = None):
        if registry is None:
            registry = MethodRegistry()
        self.registry = registry
        with _lock:
            _registries.append(self.registry)
            depth = len(_registries)
        logger.debug('Entered registry scope {} (depth {})'.format(repr(self.registry), depth))
        self.__active = True

    @property
    def active(self) -> bool:
        return self.__active

    def finalize(self):
        with _lock:
            if not self.__active:
                raise ProtocolError('RegistryScope.finalize has been called more than once.')
            if _registries[-1] is not self.registry:
                raise ProtocolError('Bad finalizer protocol: RegistryScope is active, but not current.')
            _registries.pop()
            self.__active = False
            depth = len(_registries)
        logger.debug('Left registry scope {} (depth {})'.format(repr(self.registry), depth))

    def _discard(self):
        # Remove the most recent entry for this registry, wherever it is in the stack.
        with _lock:
            for index in range(len(_registries) - 1, 0, -1):
                if _registries[index] is self.registry:
                    del _registries[index]
                    break
            self.__active = False

    def __del__(self):
        # Scopes that fail during __init__ have no state to clean up.
        if getattr(self, '_RegistryScope__active', False):
            warnings.warn('RegistryScope was not explicitly finalized.')
            self._discard()

    def __enter__(self) -> MethodRegistry:
        assert get_registry() is self.registry
        return self.registry

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.finalize()
        # Return False to indicate we have not handled any exceptions.
        return False


_lock = threading.RLock()
_registries = [MethodRegistry()]


def get_registry() -> MethodRegistry:
    return _registries[-1]
