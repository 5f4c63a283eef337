"""Core s3dispatch exceptions."""

__all__ = ['DispatchError', 'NoApplicableMethod', 'NoNextMethod', 'ProtocolError']

import typing


class DispatchError(Exception):
    """Base exception for s3dispatch package errors.

    Users should be able to use this base class to catch errors
    emitted by s3dispatch.
    """


class NoApplicableMethod(DispatchError, LookupError):
    """No method, mode method, or default could be found for a generic.

    Attributes:
        generic: name of the generic that failed to dispatch.
        tags: class tags of the value being dispatched, in priority order.
    """
    def __init__(self, generic: str, tags: typing.Sequence[str] = ()):
        self.generic = generic
        self.tags = tuple(tags)
        super().__init__(
            'no applicable method for {} applied to an object of class {}'.format(
                repr(generic), repr(list(self.tags))))


class NoNextMethod(DispatchError):
    """Continuation was requested without an active dispatch state."""


class ProtocolError(DispatchError):
    """Registry scopes or dispatch states were used out of order."""
