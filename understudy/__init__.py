"""Understudy: argument-matching test doubles with stubs, captors and verification."""

from .core import (
    Arg,
    ArgumentMatcher,
    Call,
    Captor,
    Comparable,
    DeclarationError,
    DelegatingMock,
    ExpectationFailure,
    ExpectationHandle,
    MissingStubError,
    MockInstance,
    MockPort,
    Registration,
    RegistrationKind,
    Resolution,
    StubHandle,
    UnderstudyError,
    VerificationError,
    VerificationReport,
    is_comparable,
    placeholder_for,
    register_comparable,
)

__version__ = "0.1.0"

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
