"""Resolve generic calls to method implementations.

Resolution rule:
    1. Scan the class tags of the value from left to right. The first tag with a
       method registered for the generic selects that method.
    2. For internal-style generics, try a method registered for the payload mode.
       The mode is only determined once the tags are exhausted. It is skipped if
       the payload has no mode, or if the mode is one of the tags already scanned.
    3. Use the default method of the generic, if any.
    4. Raise NoApplicableMethod.

Every method is called with a DispatchState, which records where the scan
stopped. Passing the state to resume_dispatch continues the scan immediately
after the matched tag ("next method"). The class tags are captured when dispatch
begins, so a method that re-tags its value does not change which method runs
next.

While a method runs, its state is also available through current_state() and
next_method(), for methods that do not want to thread the state through
helper functions.
"""
from __future__ import annotations

__all__ = ['DispatchState', 'Resolver', 'current_state', 'dispatch', 'next_method', 'resume_dispatch']

import contextvars
import logging
import typing
from dataclasses import dataclass
from dataclasses import field
from dataclasses import replace

from s3dispatch.context import get_registry
from s3dispatch.datamodel import ClassTags
from s3dispatch.datamodel import mode_of
from s3dispatch.datamodel import payload_of
from s3dispatch.datamodel import tags_of
from s3dispatch.exceptions import NoApplicableMethod
from s3dispatch.exceptions import NoNextMethod
from s3dispatch.registry import Method
from s3dispatch.registry import MethodRegistry

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))


@dataclass(frozen=True)
class DispatchState:
    """Captured position of a scan along the dispatch chain.

    Attributes:
        generic: name of the generic being resolved.
        value: the object being dispatched on.
        tags: the class tags captured when dispatch began.
        internal: whether the payload mode is consulted after the tags.
        position: where a continuation resumes. Positions below ``len(tags)``
            index *tags*. ``len(tags)`` is the mode step, ``len(tags) + 1`` the
            default. Larger values mean nothing remains.
        args: positional arguments of the original call, excluding *value*.
        kwargs: keyword arguments of the original call.
        registry: the registry in which the scan looks up methods.
    """
    generic: typing.Optional[str]
    value: typing.Any
    tags: ClassTags
    internal: bool = False
    position: int = 0
    args: tuple = ()
    kwargs: typing.Mapping[str, typing.Any] = field(default_factory=dict)
    registry: typing.Optional[MethodRegistry] = None

    def advance(self, position: int) -> 'DispatchState':
        return replace(self, position=position)


_current_state: contextvars.ContextVar[typing.Optional[DispatchState]] = contextvars.ContextVar(
    's3dispatch_current_state', default=None)


def current_state() -> typing.Optional[DispatchState]:
    """Get the dispatch state of the method that is currently running, if any."""
    return _current_state.get()


class Resolver:
    """Dispatch generic calls through a MethodRegistry.

    If *registry* is None, the registry of the current scope is used at the time
    of each call. (See s3dispatch.context.)
    """
    def __init__(self, registry: MethodRegistry = None):
        self._registry = registry

    @property
    def registry(self) -> MethodRegistry:
        if self._registry is None:
            return get_registry()
        return self._registry

    def start(self, generic: str, value, *args, **kwargs) -> DispatchState:
        """Capture the initial dispatch state for a call."""
        registry = self.registry
        return DispatchState(generic=generic,
                             value=value,
                             tags=tags_of(value),
                             internal=registry.is_internal(generic),
                             position=0,
                             args=args,
                             kwargs=kwargs,
                             registry=registry)

    @staticmethod
    def find(state: DispatchState) -> typing.Tuple[Method, DispatchState]:
        """Find the next implementation at or after the position of *state*.

        Returns:
            The implementation and the state to call it with.

        Raises:
            NoApplicableMethod if the tags, the mode and the default are exhausted.
        """
        registry = state.registry
        if registry is None:
            registry = get_registry()
        tags = state.tags
        for position in range(state.position, len(tags)):
            impl = registry.lookup(state.generic, tags[position])
            if impl is not None:
                logger.debug('Resolved {}.{} at position {}'.format(state.generic, tags[position], position))
                return impl, state.advance(position + 1)
        mode_position = len(tags)
        if state.internal and state.position <= mode_position:
            mode = _mode(state.value)
            if mode is not None and mode not in tags:
                impl = registry.lookup(state.generic, mode)
                if impl is not None:
                    logger.debug('Resolved {}.{} by payload mode'.format(state.generic, mode))
                    return impl, state.advance(mode_position + 1)
        if state.position <= mode_position + 1:
            impl = registry.lookup_default(state.generic)
            if impl is not None:
                logger.debug('Resolved default method for {}'.format(state.generic))
                return impl, state.advance(mode_position + 2)
        raise NoApplicableMethod(state.generic, state.tags)

    def resolve(self, generic: str, value) -> typing.Tuple[Method, DispatchState]:
        """Get the implementation that dispatch() would call, without calling it."""
        return self.find(self.start(generic, value))

    def dispatch(self, generic: str, value, *args, **kwargs):
        impl, state = self.find(self.start(generic, value, *args, **kwargs))
        return _invoke(impl, state, state.args, state.kwargs)

    def resume_dispatch(self, state: typing.Optional[DispatchState], *args, **kwargs):
        """Call the next method after the one that produced *state*.

        If no arguments are given, the arguments of the original call are reused.
        The value is always the one captured when dispatch began.

        Raises:
            NoNextMethod if *state* is None or does not belong to a generic.
            NoApplicableMethod if nothing remains after the current method.
        """
        if state is None:
            raise NoNextMethod('No active dispatch to continue.')
        if not isinstance(state, DispatchState):
            raise TypeError('Expected a DispatchState. Got {}'.format(repr(state)))
        if not state.generic:
            raise NoNextMethod('Dispatch state does not belong to a generic.')
        impl, next_state = self.find(state)
        if args or kwargs:
            # Methods further along the chain see the replacement arguments.
            next_state = replace(next_state, args=args, kwargs=kwargs)
        return _invoke(impl, next_state, next_state.args, next_state.kwargs)


def _invoke(impl: Method, state: DispatchState, args, kwargs):
    token = _current_state.set(state)
    try:
        return impl(state, state.value, *args, **kwargs)
    finally:
        _current_state.reset(token)


_resolver = Resolver()


def dispatch(generic: str, value, *args, **kwargs):
    """Call the method of *generic* selected by the class tags of *value*.

    Uses the registry of the current scope.
    """
    return _resolver.dispatch(generic, value, *args, **kwargs)


def resume_dispatch(state: typing.Optional[DispatchState], *args, **kwargs):
    return _resolver.resume_dispatch(state, *args, **kwargs)


def next_method(*args, **kwargs):
    """Call the next method for the method that is currently running.

    Raises:
        NoNextMethod if no method is running.
    """
    return _resolver.resume_dispatch(current_state(), *args, **kwargs)


def _mode(value) -> typing.Optional[str]:
    """Get the payload mode of *value*, or None if the payload has none."""
    try:
        return mode_of(payload_of(value))
    except TypeError:
        logger.debug('No payload mode for {}'.format(repr(value)))
        return None
