"""Generic-function dispatch on class tag vectors.

Values carry an ordered vector of class tags. A generic call selects the method
registered for the leftmost tag that has one, falls back to a default method,
and lets each method continue the search with the next tag.
"""

from s3dispatch.context import RegistryScope
from s3dispatch.context import get_registry
from s3dispatch.datamodel import Value
from s3dispatch.datamodel import class_tags
from s3dispatch.datamodel import inherits
from s3dispatch.datamodel import mode_of
from s3dispatch.datamodel import structure
from s3dispatch.datamodel import unclass
from s3dispatch.dispatch import DispatchState
from s3dispatch.dispatch import Resolver
from s3dispatch.dispatch import current_state
from s3dispatch.dispatch import dispatch
from s3dispatch.dispatch import next_method
from s3dispatch.dispatch import resume_dispatch
from s3dispatch.exceptions import DispatchError
from s3dispatch.exceptions import NoApplicableMethod
from s3dispatch.exceptions import NoNextMethod
from s3dispatch.exceptions import ProtocolError
from s3dispatch.generic import GenericFunction
from s3dispatch.generic import generic
from s3dispatch.registry import MethodRegistry


def register(generic: str, class_tag: str, impl):
    """Register a method in the registry of the current scope."""
    get_registry().register(generic, class_tag, impl)


def register_default(generic: str, impl):
    get_registry().register_default(generic, impl)


def lookup(generic: str, class_tag: str):
    return get_registry().lookup(generic, class_tag)
