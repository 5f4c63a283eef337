"""Generic function objects.

A GenericFunction binds a generic name to a registry and provides decorators
for registering methods, in the manner of functools.singledispatch, but keyed
by class tags instead of Python types.

Example:
    @generic
    def summary(state, value, *args):
        return 'an object'

    @summary.method('lm')
    def _(state, value, *args):
        return 'a linear model, ' + next_method()

    summary(structure(fit, 'lm'))
"""

__all__ = ['GenericFunction', 'generic']

import functools
import logging
import typing

from s3dispatch.dispatch import Resolver
from s3dispatch.exceptions import NoApplicableMethod
from s3dispatch.registry import Method
from s3dispatch.registry import MethodRegistry

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))


class GenericFunction:
    """A callable dispatch point.

    If *registry* is None, the registry of the current scope is used for every
    registration and every call. (See s3dispatch.context.)
    """
    def __init__(self, name: str, *, internal: bool = False, registry: MethodRegistry = None):
        self.name = name
        self.internal = internal
        self._resolver = Resolver(registry)
        if internal:
            self.registry.declare(name, internal=True)

    @property
    def registry(self) -> MethodRegistry:
        return self._resolver.registry

    def method(self, *class_tags: str) -> typing.Callable[[Method], Method]:
        """Get a decorator registering a method for each of *class_tags*."""
        if not class_tags:
            raise TypeError('At least one class tag is required.')

        def decorator(impl: Method) -> Method:
            for tag in class_tags:
                self.registry.register(self.name, tag, impl)
            return impl
        return decorator

    def default(self, impl: Method) -> Method:
        self.registry.register_default(self.name, impl)
        return impl

    def methods(self) -> typing.List[str]:
        return self.registry.classes(self.name)

    def get_method(self, class_tag: str) -> Method:
        impl = self.registry.lookup(self.name, class_tag)
        if impl is None:
            raise NoApplicableMethod(self.name, (class_tag,))
        return impl

    def __call__(self, value, *args, **kwargs):
        if self.internal and not self.registry.is_internal(self.name):
            # The current scope may not have seen this generic yet.
            self.registry.declare(self.name, internal=True)
        return self._resolver.dispatch(self.name, value, *args, **kwargs)

    def __repr__(self):
        return '<{} {}>'.format(self.__class__.__name__, self.name)


def generic(func: Method = None, *, name: str = None, internal: bool = False, registry: MethodRegistry = None):
    """Create a GenericFunction using the decorated function as its default method.

    The generic is named after the function unless *name* is given.
    Can be used with or without arguments.
    """
    def decorator(impl: Method) -> GenericFunction:
        generic_function = GenericFunction(name or impl.__name__, internal=internal, registry=registry)
        generic_function.default(impl)
        functools.update_wrapper(generic_function, impl)
        return generic_function

    if func is None:
        return decorator
    return decorator(func)
