"""Test GenericFunction objects and the generic decorator."""

import logging

import numpy
import pytest
from s3dispatch import Value
from s3dispatch import next_method
from s3dispatch import resume_dispatch
from s3dispatch import structure
from s3dispatch.exceptions import NoApplicableMethod
from s3dispatch.generic import GenericFunction
from s3dispatch.generic import generic
from s3dispatch.registry import MethodRegistry

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))


def test_generic_function(registry):
    describe = GenericFunction('describe')

    @describe.method('glm')
    def describe_glm(state, value):
        return 'generalized ' + resume_dispatch(state)

    @describe.method('lm')
    def describe_lm(state, value):
        return 'linear model'

    assert describe(structure(None, 'glm', 'lm')) == 'generalized linear model'
    assert describe(structure(None, 'lm')) == 'linear model'
    with pytest.raises(NoApplicableMethod):
        describe(structure(None, 'anova'))

    assert describe.methods() == ['glm', 'lm']
    assert describe.get_method('lm') is describe_lm
    with pytest.raises(NoApplicableMethod):
        describe.get_method('anova')
    assert registry.lookup('describe', 'glm') is describe_glm
    assert repr(describe) == '<GenericFunction describe>'


def test_method_for_several_tags(registry):
    size = GenericFunction('size')

    @size.method('matrix', 'array')
    def _(state, value):
        return value.payload.size

    assert size(structure(numpy.zeros((2, 3)), 'matrix')) == 6
    assert size(structure(numpy.zeros(4), 'array')) == 4
    with pytest.raises(TypeError):
        size.method()


def test_generic_decorator(registry):
    @generic
    def summary(state, value, digits=3):
        """Summarize an object."""
        return 'object({})'.format(digits)

    @summary.method('lm')
    def _(state, value, digits=3):
        return 'lm/' + next_method()

    assert isinstance(summary, GenericFunction)
    assert summary.name == 'summary'
    assert summary.__doc__ == 'Summarize an object.'
    assert summary(Value(None, 'lm'), digits=2) == 'lm/object(2)'
    assert summary(Value(None)) == 'object(3)'


def test_generic_decorator_arguments():
    own = MethodRegistry()

    @generic(name='length', internal=True, registry=own)
    def length_default(state, value):
        return 1

    @length_default.method('list')
    def _(state, value):
        return len(value.payload)

    assert length_default.name == 'length'
    assert own.is_internal('length')
    assert length_default(Value([1, 2, 3], 'stack')) == 3
    assert length_default(Value(2.5)) == 1


def test_internal_generic_in_new_scope():
    from s3dispatch.context import RegistryScope

    length = GenericFunction('length', internal=True)
    with RegistryScope() as registry:
        length.default(lambda state, value: 'default')
        length.method('character')(lambda state, value: len(value.payload))
        assert length(Value('four')) == 4
        assert registry.is_internal('length')
