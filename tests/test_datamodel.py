"""Test the s3dispatch data model helpers."""

import logging

import numpy
import pytest
from s3dispatch.datamodel import Value
from s3dispatch.datamodel import class_tags
from s3dispatch.datamodel import inherits
from s3dispatch.datamodel import mode_of
from s3dispatch.datamodel import structure
from s3dispatch.datamodel import tags_of
from s3dispatch.datamodel import unclass

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))


def test_class_tags():
    assert class_tags(None) == ()
    assert class_tags('lm') == ('lm',)
    assert class_tags(['glm', 'lm']) == ('glm', 'lm')
    # Duplicates are kept, in order.
    assert class_tags(('a', 'b', 'a')) == ('a', 'b', 'a')

    with pytest.raises(TypeError):
        class_tags(1)
    with pytest.raises(TypeError):
        class_tags(['lm', 2])
    with pytest.raises(ValueError):
        class_tags(['lm', ''])


def test_value():
    value = Value([1, 2, 3], ['glm', 'lm'])
    assert value.tags == ('glm', 'lm')
    assert value.mode == 'list'

    value.tags = 'anova'
    assert value.tags == ('anova',)
    value.tags = None
    assert value.tags == ()

    with pytest.raises(TypeError):
        value.tags = [1]
    assert value.tags == ()

    assert 'anova' not in repr(value)
    assert repr(Value(1, 'x')) == "Value(1, tags=['x'])"


def test_tags_of():
    assert tags_of(Value(None, 'a')) == ('a',)
    assert tags_of(42) == ()


def test_structure_and_unclass():
    value = structure({'coef': 1.0}, 'glm', 'lm')
    assert isinstance(value, Value)
    assert value.tags == ('glm', 'lm')

    bare = unclass(value)
    assert bare is not value
    assert bare.tags == ()
    assert bare.payload is value.payload
    assert value.tags == ('glm', 'lm')

    assert unclass(3).payload == 3


def test_inherits():
    value = structure(None, 'glm', 'lm')
    assert inherits(value, 'lm')
    assert inherits(value, ['data.frame', 'glm'])
    assert not inherits(value, 'data.frame')
    assert not inherits(3, 'numeric')
    assert inherits(value, ['lm', 'data.frame', 'glm'], which=True) == (2, 0, 1)


def test_python_modes():
    assert mode_of(None) == 'NULL'
    assert mode_of(True) == 'logical'
    assert mode_of(1) == 'numeric'
    assert mode_of(1.5) == 'numeric'
    assert mode_of(1j) == 'complex'
    assert mode_of('a') == 'character'
    assert mode_of(b'a') == 'character'
    assert mode_of([1, 'a']) == 'list'
    assert mode_of((1,)) == 'list'
    assert mode_of({'a': 1}) == 'list'
    assert mode_of(len) == 'function'
    assert mode_of(lambda: None) == 'function'
    assert mode_of(Value(1.5, 'x')) == 'numeric'

    with pytest.raises(TypeError):
        mode_of(object())


def test_numpy_modes():
    assert mode_of(numpy.array([True, False])) == 'logical'
    assert mode_of(numpy.arange(3)) == 'numeric'
    assert mode_of(numpy.arange(3, dtype=numpy.uint8)) == 'numeric'
    assert mode_of(numpy.linspace(0, 1, 5)) == 'numeric'
    assert mode_of(numpy.array([1j])) == 'complex'
    assert mode_of(numpy.array(['a', 'b'])) == 'character'
    assert mode_of(numpy.array([b'a'])) == 'character'
    assert mode_of(numpy.array([1, 'a', None], dtype=object)) == 'list'

    assert mode_of(numpy.float64(1.0)) == 'numeric'
    assert mode_of(numpy.int32(1)) == 'numeric'
    assert mode_of(numpy.bool_(True)) == 'logical'
    assert mode_of(numpy.str_('a')) == 'character'
