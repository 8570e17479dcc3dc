"""Unit tests for by-name setup and verification of non-public members."""

from __future__ import annotations

import logging

import pytest

from protected_mox import (
    AmbiguousMemberError,
    CantSetReturnValueForVoidError,
    Constant,
    Deferred,
    EmptyNameError,
    Invocation,
    ItExpr,
    Lambda,
    MemberMissingError,
    MethodIsPublicError,
    MethodMissingError,
    Mock,
    NullArgumentMisuseError,
    PropertyNotReadableError,
    PropertyNotWritableError,
    PropertyRead,
    PropertyWrite,
    Ref,
    Times,
    UnexpectedPublicPropertyError,
    VerificationError,
)
from protected_mox.reflection import registry_for
from protected_mox.unittests._targets import Formatter, Store


@pytest.fixture
def mock() -> Mock[Formatter]:
    """Return a loose mock of :class:`Formatter`."""
    return Mock(Formatter)


def test_setup_builds_invocation_from_literal(mock: Mock[Formatter]) -> None:
    """A literal argument is bound as a constant of the parameter type."""
    setup = mock.protected().setup("_format", 5)
    (method,) = registry_for(Formatter).find_methods("_format")
    assert setup.descriptor == Invocation(method, (Constant(5, int),))


def test_verify_counts_matching_calls(mock: Mock[Formatter]) -> None:
    """One call of ``_format(5)`` verifies once for 5 and never for 6."""
    mock.protected().setup("_format", 5, result_type=str).returns("five")

    assert mock.object._format(5) == "five"

    mock.protected().verify("_format", Times.once(), 5)
    with pytest.raises(VerificationError, match="Unexpected invocation count"):
        mock.protected().verify("_format", Times.once(), 6)


def test_verify_failure_lists_invocations(mock: Mock[Formatter]) -> None:
    """The failure message shows what was expected and what happened."""
    mock.object._format(1)
    with pytest.raises(VerificationError) as excinfo:
        mock.protected().verify("_format", 2, ItExpr.is_any(int))
    message = str(excinfo.value)
    assert "obj._format(ItExpr.is_any(int))" in message
    assert "expected calls: exactly 2 time(s)" in message
    assert "1. obj._format(1)" in message


def test_setup_get_on_read_only_property(mock: Mock[Formatter]) -> None:
    """Reads of a getter-only property can be configured, writes cannot."""
    with pytest.raises(PropertyNotWritableError, match="_count"):
        mock.protected().setup_set("_count", 1)

    setup = mock.protected().setup_get("_count", int).returns(7)

    assert isinstance(setup.descriptor, PropertyRead)
    assert mock.object._count == 7


def test_setup_set_matches_assigned_value(mock: Mock[Formatter]) -> None:
    """Setter setups match the supplied value, or any value when omitted."""
    seen: list[object] = []
    mock.protected().setup_set("_level", 3).callback(seen.append)

    mock.object._level = 3
    mock.object._level = 4

    assert seen == [3]
    mock.protected().verify_set("_level", Times.once(), 3)
    mock.protected().verify_set("_level", 2)


def test_setup_set_descriptor_uses_declared_type(mock: Mock[Formatter]) -> None:
    """A wildcard setter matches values of the property type."""
    setup = mock.protected().setup_set("_level")
    assert isinstance(setup.descriptor, PropertyWrite)
    assert str(setup.descriptor) == "obj._level = ItExpr.is_any(int)"


def test_setup_set_rejects_none(mock: Mock[Formatter]) -> None:
    """Literal ``None`` values are rejected for setters too."""
    with pytest.raises(NullArgumentMisuseError):
        mock.protected().setup_set("_level", None)


@pytest.mark.parametrize("name", ["", "   ", None])
def test_blank_names_are_rejected(mock: Mock[Formatter], name: str | None) -> None:
    """Every operation refuses an empty member name before lookup."""
    protected = mock.protected()
    with pytest.raises(EmptyNameError, match="method_name"):
        protected.setup(name, 5)  # type: ignore[arg-type]
    with pytest.raises(EmptyNameError, match="property_name"):
        protected.setup_get(name)  # type: ignore[arg-type]
    with pytest.raises(EmptyNameError, match="method_or_property_name"):
        protected.setup_sequence(name)  # type: ignore[arg-type]
    with pytest.raises(EmptyNameError, match="property_name"):
        protected.verify_set(name, 1)  # type: ignore[arg-type]


def test_null_argument_is_reported_before_lookup(mock: Mock[Formatter]) -> None:
    """A literal ``None`` fails even for an unknown member."""
    with pytest.raises(NullArgumentMisuseError):
        mock.protected().setup("missing", None)


def test_null_matcher_resolves(mock: Mock[Formatter]) -> None:
    """``ItExpr.is_null`` stands in for a ``None`` argument."""
    mock.protected().setup(
        "_lookup", ItExpr.is_null(str), result_type=list[str]
    ).returns(["none"])

    assert mock.object._lookup(None) == ["none"]
    assert mock.object._lookup("key") == []


def test_public_method_is_rejected(mock: Mock[Formatter]) -> None:
    """Public methods belong to the strongly-typed API."""
    with pytest.raises(MethodIsPublicError, match=r"Formatter\.format"):
        mock.protected().setup("format", 5)
    with pytest.raises(MethodIsPublicError):
        mock.protected().verify("format", 1, 5)


def test_public_property_is_rejected(mock: Mock[Formatter]) -> None:
    """Properties with a public accessor belong to the strongly-typed API."""
    with pytest.raises(UnexpectedPublicPropertyError):
        mock.protected().setup_get("level")
    with pytest.raises(UnexpectedPublicPropertyError):
        mock.protected().setup_set("level", 1)
    with pytest.raises(UnexpectedPublicPropertyError):
        mock.protected().setup("level", result_type=int)


def test_protected_setter_of_public_property(mock: Mock[Formatter]) -> None:
    """The setter is configurable when its function is protected."""
    mock.protected().setup_set("volume", 5).verifiable()
    with pytest.raises(UnexpectedPublicPropertyError):
        mock.protected().setup_get("volume")

    mock.object.volume = 5

    mock.verify_all(only_verifiable=True)


def test_public_accessors_are_rejected_by_verification(
    mock: Mock[Formatter],
) -> None:
    """Verification refuses public getters and setters like setup does."""
    with pytest.raises(UnexpectedPublicPropertyError, match=r"Formatter\.level"):
        mock.protected().verify_get("level", 1)
    with pytest.raises(UnexpectedPublicPropertyError):
        mock.protected().verify_set("level", 1)
    with pytest.raises(UnexpectedPublicPropertyError):
        mock.protected().verify("level", 1, result_type=int)
    with pytest.raises(UnexpectedPublicPropertyError):
        mock.protected().setup_sequence("level", result_type=int)


def test_write_only_property_is_not_readable(mock: Mock[Formatter]) -> None:
    """A property without a getter only accepts write configuration."""
    protected = mock.protected()
    with pytest.raises(PropertyNotReadableError, match=r"Formatter\._secret"):
        protected.setup_get("_secret")
    with pytest.raises(PropertyNotReadableError):
        protected.verify_get("_secret", 1)
    with pytest.raises(PropertyNotReadableError):
        protected.setup("_secret", result_type=str)
    with pytest.raises(PropertyNotReadableError):
        protected.setup_sequence("_secret", result_type=str)
    with pytest.raises(PropertyNotReadableError):
        protected.verify("_secret", 1, result_type=str)

    protected.setup_set("_secret", "key").verifiable()
    mock.object._secret = "key"
    protected.verify_set("_secret", Times.once(), "key")


def test_property_guard_order(mock: Mock[Formatter]) -> None:
    """Presence is checked first, then accessibility, then the accessor."""
    with pytest.raises(MemberMissingError):
        mock.protected().verify_get("missing", 1)
    with pytest.raises(MemberMissingError):
        mock.protected().verify_set("missing", 1)
    with pytest.raises(PropertyNotWritableError):
        mock.protected().verify_set("_count", 1)
    with pytest.raises(UnexpectedPublicPropertyError):
        mock.protected().setup_get("volume")


def test_property_type_must_match_declaration(mock: Mock[Formatter]) -> None:
    """A requested property type must accept the declared type."""
    _ = mock.object._count

    mock.protected().verify_get("_count", 1, int)
    mock.protected().verify_get("_count", 1, object)
    with pytest.raises(TypeError, match="declared as int, not str"):
        mock.protected().verify_get("_count", 1, str)
    with pytest.raises(TypeError, match="declared as int, not str"):
        mock.protected().setup_get("_count", str)


def test_unknown_members(mock: Mock[Formatter]) -> None:
    """Unknown names and shapes fail with distinct errors."""
    with pytest.raises(MethodMissingError, match=r"taking arguments \(str\)"):
        mock.protected().setup("_format", "five")
    with pytest.raises(MemberMissingError):
        mock.protected().setup_get("missing")
    with pytest.raises(MemberMissingError):
        mock.protected().setup_sequence("missing")


def test_deferred_none_cannot_resolve(mock: Mock[Formatter]) -> None:
    """An argument without a type matches no parameter."""
    with pytest.raises(MethodMissingError, match=r"\(\?\)"):
        mock.protected().setup("_format", Deferred(lambda: None))


def test_void_method_cannot_return(mock: Mock[Formatter]) -> None:
    """Asking for a result from a ``None``-returning method fails."""
    with pytest.raises(CantSetReturnValueForVoidError):
        mock.protected().setup("_reset", result_type=int)
    with pytest.raises(CantSetReturnValueForVoidError):
        mock.protected().setup("_reset").returns(1)


def test_void_method_can_be_configured(mock: Mock[Formatter]) -> None:
    """Void methods accept callbacks and raised errors."""
    mock.protected().setup("_reset").raises(RuntimeError("boom"))
    with pytest.raises(RuntimeError, match="boom"):
        mock.object._reset()


def test_result_type_is_checked(mock: Mock[Formatter]) -> None:
    """``returns`` rejects values of the wrong type."""
    setup = mock.protected().setup("_format", 5, result_type=str)
    with pytest.raises(TypeError, match="not a valid result"):
        setup.returns(5)


def test_property_read_through_setup(mock: Mock[Formatter]) -> None:
    """``setup`` with a result type resolves properties first."""
    setup = mock.protected().setup("_count", result_type=int).returns(9)
    assert isinstance(setup.descriptor, PropertyRead)
    assert mock.object._count == 9
    mock.protected().verify("_count", 1, result_type=int)
    mock.protected().verify_get("_count", Times.once())


def test_identical_overload_is_preferred(mock: Mock[Formatter]) -> None:
    """An int fits two overloads; the one declared for int is chosen."""
    setup = mock.protected().setup("_scale", 2, result_type=int).returns(40)
    assert isinstance(setup.descriptor, Invocation)
    assert setup.descriptor.member.parameter_types == (int,)
    mock.protected().setup("_scale", 2.5, result_type=float).returns(0.5)

    assert mock.object._scale(2) == 40
    assert mock.object._scale(2.5) == 0.5


def test_ambiguous_call_is_rejected(mock: Mock[Formatter]) -> None:
    """Several compatible overloads with no identical one are ambiguous."""
    with pytest.raises(AmbiguousMemberError, match="2 signatures"):
        mock.protected().setup("_measure", True)
    with pytest.raises(MethodMissingError):
        mock.protected().setup("_measure", True, exact_parameter_match=True)

    mock.protected().setup("_measure", ItExpr.is_any(int), result_type=int).returns(7)
    assert mock.object._measure(3) == 7


def test_overload_selected_by_matcher_type(mock: Mock[Formatter]) -> None:
    """Matchers take part in overload resolution like literals."""
    mock.protected().setup("_render", ItExpr.is_any(str), result_type=str).returns(
        "text"
    )
    mock.protected().setup("_render", ItExpr.is_any(int), result_type=str).returns(
        "number"
    )

    assert mock.object._render("a") == "text"
    assert mock.object._render(1) == "number"


def test_int_literal_matches_float_parameter(mock: Mock[Formatter]) -> None:
    """An int literal is promoted for a float parameter."""
    setup = mock.protected().setup("_ratio", 2, result_type=float).returns(1.0)
    (method,) = registry_for(Formatter).find_methods("_ratio")
    assert setup.descriptor == Invocation(method, (Constant(2.0, float),))
    assert mock.object._ratio(2.0) == 1.0


def test_lambda_argument_is_unwrapped(mock: Mock[Formatter]) -> None:
    """A lambda around a matcher builds the same descriptor as the matcher."""
    wrapped = mock.protected().setup("_format", Lambda(ItExpr.is_any(int), ("n",)))
    bare = mock.protected().setup("_format", ItExpr.is_any(int))
    assert wrapped.descriptor == bare.descriptor


def test_by_ref_wildcard(mock: Mock[Formatter]) -> None:
    """``ItExpr.ref(T).is_any`` matches any ``Ref`` cell."""

    def fill(_text: str, result: Ref[int]) -> None:
        result.value = 42

    mock.protected().setup(
        "_try_parse", "42", ItExpr.ref(int).is_any, result_type=bool
    ).callback(fill).returns(True)

    cell: Ref[int] = Ref()
    assert mock.object._try_parse("42", cell) is True
    assert cell.value == 42
    with pytest.raises(MethodMissingError):
        mock.protected().setup("_try_parse", "42", Ref())


def test_private_method_through_public_caller() -> None:
    """Private members are configured by their source name."""
    mock = Mock(Formatter, call_base=True)
    mock.protected().setup("__checksum", b"abc", result_type=int).returns(99)

    assert mock.object.checksum(b"abc") == 99
    mock.protected().verify("__checksum", Times.once(), ItExpr.is_any(bytes))


def test_sequence_appends_steps(mock: Mock[Formatter]) -> None:
    """Repeated sequence setups extend a single script."""
    first = mock.protected().setup_sequence("_format", 1, result_type=str)
    first.returns("a")
    second = mock.protected().setup_sequence("_format", 1, result_type=str)
    second.returns("b").raises(ValueError("done"))

    assert first is second
    assert mock.object._format(1) == "a"
    assert mock.object._format(1) == "b"
    with pytest.raises(ValueError, match="done"):
        mock.object._format(1)
    assert mock.object._format(1) == ""


def test_sequence_on_property(mock: Mock[Formatter]) -> None:
    """Sequences with a result type may script property reads."""
    mock.protected().setup_sequence("_count", result_type=int).returns(1).returns(2)

    assert [mock.object._count, mock.object._count, mock.object._count] == [1, 2, 0]


def test_sequence_on_void_method_requires_no_result(mock: Mock[Formatter]) -> None:
    """Void methods can only be scripted without a result type."""
    with pytest.raises(CantSetReturnValueForVoidError):
        mock.protected().setup_sequence("_reset", result_type=int)
    mock.protected().setup_sequence("_reset").passes().raises(RuntimeError)

    mock.object._reset()
    with pytest.raises(RuntimeError):
        mock.object._reset()


def test_abstract_members_are_mocked() -> None:
    """Abstract hooks are intercepted like any other method."""
    mock = Mock(Store, call_base=True)
    mock.protected().setup("_load", ItExpr.starts_with("k"), result_type=bytes).returns(
        b"data"
    )

    assert mock.object.fetch("key") == b"data"
    mock.protected().verify("_load", Times.once(), "key")


def test_resolution_is_logged(
    mock: Mock[Formatter], caplog: pytest.LogCaptureFixture
) -> None:
    """Resolutions are reported at debug level."""
    with caplog.at_level(logging.DEBUG, logger="protected_mox"):
        mock.protected().setup("_format", 5)
    assert "setup('_format') on Formatter" in caplog.text
