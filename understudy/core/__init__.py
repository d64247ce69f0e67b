"""Core engine of the Understudy test-double framework.

This package contains zero external dependencies and holds the whole
matching, resolution and verification engine. Configuration and test
runner integration live outside it.
"""

from .captor import Captor
from .comparable import Comparable, is_comparable, placeholder_for, register_comparable
from .errors import (
    DeclarationError,
    MissingStubError,
    UnderstudyError,
    VerificationError,
)
from .matchers import Arg, ArgumentMatcher
from .mock import DelegatingMock, ExpectationHandle, MockInstance, StubHandle
from .models import Call, Registration, RegistrationKind, Resolution
from .ports import MockPort
from .verifier import ExpectationFailure, VerificationReport

__all__ = [
    "Arg",
    "ArgumentMatcher",
    "Call",
    "Captor",
    "Comparable",
    "DeclarationError",
    "DelegatingMock",
    "ExpectationFailure",
    "ExpectationHandle",
    "MissingStubError",
    "MockInstance",
    "MockPort",
    "Registration",
    "RegistrationKind",
    "Resolution",
    "StubHandle",
    "UnderstudyError",
    "VerificationError",
    "VerificationReport",
    "is_comparable",
    "placeholder_for",
    "register_comparable",
]
