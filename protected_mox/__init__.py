"""Mock classes and configure their non-public members by name.

:class:`Mock` intercepts every method and property of a class.
:meth:`Mock.protected` returns a :class:`ProtectedMock`, which resolves a
member name and an argument list (literal values or :class:`ItExpr` matchers)
to the same call descriptor the lambda-based :meth:`Mock.setup` records.
"""

from __future__ import annotations

from .analog import ProtectedAsMock
from .comparators import Any, Contains, IsA, IsIn, IsNone, Predicate, Regex, StartsWith
from .descriptors import (
    UNSET,
    CallDescriptor,
    CallRecord,
    Invocation,
    PropertyRead,
    PropertyWrite,
)
from .errors import (
    AmbiguousMemberError,
    CantSetReturnValueForVoidError,
    EmptyNameError,
    MemberMissingError,
    MemberResolutionError,
    MethodIsPublicError,
    MethodMissingError,
    NullArgumentMisuseError,
    PropertyNotReadableError,
    PropertyNotWritableError,
    ProtectedMoxError,
    UnexpectedCallError,
    UnexpectedPublicPropertyError,
    UnsupportedMatcherMemberError,
    VerificationError,
)
from .expressions import Constant, Deferred, Lambda
from .matchers import ItExpr
from .mock import Mock, MockBehavior, MockRepository
from .protected import ProtectedMock
from .reflection import Ref
from .setups import SequenceSetup, Setup
from .times import Times

__all__ = [
    "UNSET",
    "AmbiguousMemberError",
    "Any",
    "CallDescriptor",
    "CallRecord",
    "CantSetReturnValueForVoidError",
    "Constant",
    "Contains",
    "Deferred",
    "EmptyNameError",
    "Invocation",
    "IsA",
    "IsIn",
    "IsNone",
    "ItExpr",
    "Lambda",
    "MemberMissingError",
    "MemberResolutionError",
    "MethodIsPublicError",
    "MethodMissingError",
    "Mock",
    "MockBehavior",
    "MockRepository",
    "NullArgumentMisuseError",
    "Predicate",
    "PropertyNotReadableError",
    "PropertyNotWritableError",
    "PropertyRead",
    "PropertyWrite",
    "ProtectedAsMock",
    "ProtectedMock",
    "ProtectedMoxError",
    "Ref",
    "Regex",
    "SequenceSetup",
    "Setup",
    "StartsWith",
    "Times",
    "UnexpectedCallError",
    "UnexpectedPublicPropertyError",
    "UnsupportedMatcherMemberError",
    "VerificationError",
]
