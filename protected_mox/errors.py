"""Exception hierarchy for protected-mox."""

from __future__ import annotations


class ProtectedMoxError(Exception):
    """Base class for every error raised by protected-mox."""


class MemberResolutionError(ProtectedMoxError, ValueError):
    """A member could not be resolved from the supplied name and arguments."""


class EmptyNameError(MemberResolutionError):
    """A member name was ``None``, empty or only whitespace."""


class NullArgumentMisuseError(MemberResolutionError):
    """A literal ``None`` argument was passed instead of a matcher."""

    DEFAULT_MESSAGE = (
        "Use ItExpr.is_null(T) or ItExpr.is_any(T) rather than a literal None "
        "argument value"
    )


class MemberMissingError(MemberResolutionError):
    """No method or property exists with the requested name."""


class MethodMissingError(MemberResolutionError):
    """No method matches the requested name and argument shapes."""


class AmbiguousMemberError(MemberResolutionError):
    """More than one method signature matches the requested shapes."""


class MethodIsPublicError(MemberResolutionError):
    """The resolved method is public and must be configured directly."""


class UnexpectedPublicPropertyError(MemberResolutionError):
    """The resolved property accessor is public."""


class PropertyNotReadableError(MemberResolutionError):
    """The resolved property has no getter."""


class PropertyNotWritableError(MemberResolutionError):
    """The resolved property has no setter."""


class CantSetReturnValueForVoidError(MemberResolutionError):
    """A result was requested for a method that returns ``None``."""

    DEFAULT_MESSAGE = "Invalid setup on a method that returns None: no result"


class UnsupportedMatcherMemberError(ProtectedMoxError, TypeError):
    """A matcher refers to a member kind that cannot imply a type."""


class VerificationError(ProtectedMoxError, AssertionError):
    """Recorded calls did not satisfy a verification."""


class UnexpectedCallError(VerificationError):
    """A strict mock received a call that no setup handles."""


__all__ = [
    "AmbiguousMemberError",
    "CantSetReturnValueForVoidError",
    "EmptyNameError",
    "MemberMissingError",
    "MemberResolutionError",
    "MethodIsPublicError",
    "MethodMissingError",
    "NullArgumentMisuseError",
    "PropertyNotReadableError",
    "PropertyNotWritableError",
    "ProtectedMoxError",
    "UnexpectedCallError",
    "UnexpectedPublicPropertyError",
    "UnsupportedMatcherMemberError",
    "VerificationError",
]
