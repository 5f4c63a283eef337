"""s3dispatch data model.

Values are opaque payloads carrying an ordered vector of class tags:
    * the leftmost tag has the highest dispatch priority
    * the vector may be empty (untagged) and may repeat tags
    * the vector may be replaced at any time; resolution already in progress
      is not affected (see s3dispatch.dispatch)

Independently of its class tags, every payload has a *mode*, the intrinsic
category of its representation. Mode is consulted only by internal-style
generics, after the class tags are exhausted.

Notes on modes:
    Python scalars map onto the familiar categories directly. numpy arrays and
    numpy scalars are classified by ``dtype.kind``, so that an array of
    integers and a Python int share the "numeric" mode.
"""

__all__ = ['ClassTags', 'Value', 'class_tags', 'inherits', 'mode_of', 'payload_of', 'structure', 'tags_of', 'unclass']

import collections.abc
import functools
import logging
import typing

import numpy

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))

ClassTags = typing.Tuple[str, ...]

TagsRepr = typing.Union[None, str, typing.Iterable[str]]
"""Representations accepted for a class tag vector.

A bare string is a vector of one tag. None is the empty vector.
"""


def class_tags(tags: TagsRepr) -> ClassTags:
    """Normalize a class tag vector.

    Raises:
        TypeError if *tags* is not a string or an iterable of strings.
        ValueError if a tag is the empty string.
    """
    if tags is None:
        return ()
    if isinstance(tags, str):
        tags = (tags,)
    if not isinstance(tags, collections.abc.Iterable):
        raise TypeError('Class tags must be a string or an iterable of strings. Got {}'.format(repr(tags)))
    normalized = tuple(tags)
    for tag in normalized:
        if not isinstance(tag, str):
            raise TypeError('Class tags must be strings. Got {}'.format(repr(tag)))
        if not tag:
            raise ValueError('Class tags must not be empty strings.')
    return normalized


class Value:
    """A payload with an ordered vector of class tags.

    The payload is never inspected for dispatching, except to determine its mode.
    """
    def __init__(self, payload=None, tags: TagsRepr = ()):
        self.payload = payload
        self.tags = tags

    @property
    def tags(self) -> ClassTags:
        return self._tags

    @tags.setter
    def tags(self, tags: TagsRepr):
        self._tags = class_tags(tags)

    @property
    def mode(self) -> str:
        return mode_of(self.payload)

    def __repr__(self):
        return '{}({}, tags={})'.format(self.__class__.__name__, repr(self.payload), repr(list(self._tags)))


def tags_of(obj) -> ClassTags:
    """Get the class tag vector of an object.

    Objects that are not Value instances are untagged.
    """
    if isinstance(obj, Value):
        return obj.tags
    return ()


def payload_of(obj):
    if isinstance(obj, Value):
        return obj.payload
    return obj


def structure(payload, *tags: str) -> Value:
    """Attach class tags to a payload."""
    return Value(payload, tags)


def unclass(obj) -> Value:
    """Get an untagged Value with the same payload."""
    return Value(payload_of(obj), ())


def inherits(obj, what: TagsRepr, which: bool = False) -> typing.Union[bool, typing.Tuple[int, ...]]:
    """Check whether *obj* carries any of the class tags in *what*.

    With *which*, return the 1-based position of each entry of *what* in the
    class tag vector of *obj*, or 0 for entries that are absent.
    """
    tags = tags_of(obj)
    what = class_tags(what)
    if which:
        return tuple(tags.index(tag) + 1 if tag in tags else 0 for tag in what)
    return any(tag in tags for tag in what)


_kind_modes = {
    'b': 'logical',
    'i': 'numeric',
    'u': 'numeric',
    'f': 'numeric',
    'c': 'complex',
    'U': 'character',
    'S': 'character',
}


@functools.singledispatch
def mode_of(payload) -> str:
    """Get the intrinsic representation category of a payload.

    Raises:
        TypeError if the payload has no recognizable mode.
    """
    if callable(payload):
        return 'function'
    if isinstance(payload, (collections.abc.Sequence, collections.abc.Mapping, collections.abc.Set)):
        return 'list'
    raise TypeError('No mode for {}'.format(repr(payload)))


@mode_of.register(type(None))
def _(payload) -> str:
    return 'NULL'


@mode_of.register(bool)
def _(payload) -> str:
    return 'logical'


@mode_of.register(int)
@mode_of.register(float)
def _(payload) -> str:
    return 'numeric'


@mode_of.register(complex)
def _(payload) -> str:
    return 'complex'


@mode_of.register(str)
@mode_of.register(bytes)
def _(payload) -> str:
    return 'character'


@mode_of.register(Value)
def _(payload: Value) -> str:
    return mode_of(payload.payload)


@mode_of.register(numpy.ndarray)
@mode_of.register(numpy.generic)
def _(payload) -> str:
    # Object arrays, structured arrays and datetimes hold heterogeneous elements.
    return _kind_modes.get(payload.dtype.kind, 'list')
