"""Maintain the mapping of (generic, class tag) pairs to method implementations.

The registry performs exact-match look-ups only. Resolution along a class tag
vector is the job of s3dispatch.dispatch.

Registration is expected to happen while the program is being set up, and
look-up is expected to dominate afterwards. All mutation is serialized with a
single lock. Mutation replaces the internal mappings rather than updating them
in place, so readers see a consistent snapshot without acquiring the lock.
"""

__all__ = ['Method', 'MethodRegistry']

import logging
import threading
import typing

from s3dispatch.datamodel import class_tags

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))

Method = typing.Callable[..., typing.Any]
"""Method implementation.

Called as ``impl(state, value, *args, **kwargs)``, where *state* is the
s3dispatch.dispatch.DispatchState for the call.
"""

MethodKey = typing.Tuple[str, str]


def _check_generic(generic: str) -> str:
    if not isinstance(generic, str):
        raise TypeError('Generic names must be strings. Got {}'.format(repr(generic)))
    if not generic:
        raise ValueError('Generic names must not be empty.')
    return generic


def _check_tag(class_tag: str) -> str:
    if not isinstance(class_tag, str):
        raise TypeError('Expected a single class tag. Got {}'.format(repr(class_tag)))
    (tag,) = class_tags(class_tag)
    return tag


def _check_impl(impl) -> Method:
    if not callable(impl):
        raise TypeError('Method implementations must be callable. Got {}'.format(repr(impl)))
    return impl


class MethodRegistry:
    """Registered methods and default methods, keyed by generic name.

    Re-registering a key replaces the previous implementation (last writer wins).
    """
    def __init__(self):
        self._lock = threading.Lock()
        self._methods: typing.Mapping[MethodKey, Method] = {}
        self._defaults: typing.Mapping[str, Method] = {}
        self._internal: typing.FrozenSet[str] = frozenset()

    def register(self, generic: str, class_tag: str, impl: Method):
        key = (_check_generic(generic), _check_tag(class_tag))
        _check_impl(impl)
        with self._lock:
            if key in self._methods:
                logger.debug('Replacing method {}.{}'.format(*key))
            methods = dict(self._methods)
            methods[key] = impl
            self._methods = methods
        logger.debug('Registered method {}.{}: {}'.format(generic, class_tag, repr(impl)))

    def register_default(self, generic: str, impl: Method):
        generic = _check_generic(generic)
        _check_impl(impl)
        with self._lock:
            if generic in self._defaults:
                logger.debug('Replacing default method for {}'.format(generic))
            defaults = dict(self._defaults)
            defaults[generic] = impl
            self._defaults = defaults
        logger.debug('Registered default method for {}: {}'.format(generic, repr(impl)))

    def unregister(self, generic: str, class_tag: str):
        """Remove a method.

        Raises:
            KeyError if no method is registered for the pair.
        """
        key = (_check_generic(generic), _check_tag(class_tag))
        with self._lock:
            methods = dict(self._methods)
            del methods[key]
            self._methods = methods
        logger.debug('Unregistered method {}.{}'.format(*key))

    def unregister_default(self, generic: str):
        generic = _check_generic(generic)
        with self._lock:
            defaults = dict(self._defaults)
            del defaults[generic]
            self._defaults = defaults
        logger.debug('Unregistered default method for {}'.format(generic))

    def declare(self, generic: str, *, internal: bool = False):
        """Set the dispatch style of a generic.

        Internal-style generics additionally consult a method keyed by the
        payload mode after the class tags are exhausted.
        """
        generic = _check_generic(generic)
        with self._lock:
            if internal:
                self._internal = self._internal | {generic}
            else:
                self._internal = self._internal - {generic}

    def is_internal(self, generic: str) -> bool:
        return generic in self._internal

    def lookup(self, generic: str, class_tag: str) -> typing.Optional[Method]:
        return self._methods.get((generic, class_tag))

    def lookup_default(self, generic: str) -> typing.Optional[Method]:
        return self._defaults.get(generic)

    def methods(self, generic: str = None) -> typing.List[MethodKey]:
        """List the registered (generic, class tag) keys, optionally for one generic."""
        keys = self._methods.keys()
        if generic is not None:
            keys = [key for key in keys if key[0] == generic]
        return sorted(keys)

    def classes(self, generic: str) -> typing.List[str]:
        return [tag for _, tag in self.methods(generic)]

    def clear(self):
        with self._lock:
            self._methods = {}
            self._defaults = {}
            self._internal = frozenset()

    def __contains__(self, key: MethodKey) -> bool:
        return key in self._methods

    def __repr__(self):
        return '<{} with {} methods, {} defaults>'.format(
            self.__class__.__name__, len(self._methods), len(self._defaults))
