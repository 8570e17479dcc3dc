"""Unit tests for verification failure messages."""

from __future__ import annotations

import pytest

from protected_mox import Times, VerificationError
from protected_mox.descriptors import CallKind, CallRecord, property_read
from protected_mox.reflection import registry_for
from protected_mox.setups import Setup
from protected_mox.unittests._targets import Formatter
from protected_mox.verifiers import CountVerifier, SetupVerifier


@pytest.fixture
def count_read() -> Setup:
    """Return an unmatched setup reading ``_count``."""
    prop = registry_for(Formatter).find_property("_count")
    assert prop is not None
    return Setup(property_read(prop))


def test_count_verifier_returns_matches(count_read: Setup) -> None:
    """Matching counts are returned to the caller."""
    journal = [CallRecord(CallKind.GET, "_count", "_count")] * 2
    assert CountVerifier().verify(count_read.descriptor, Times.exactly(2), journal) == 2


def test_count_verifier_message(count_read: Setup) -> None:
    """The message has one section per part of the mismatch."""
    with pytest.raises(VerificationError) as excinfo:
        CountVerifier().verify(count_read.descriptor, Times.once(), [])
    assert str(excinfo.value) == (
        "Unexpected invocation count.\n"
        "\n"
        "Expected:\n"
        "  obj._count\n"
        "  expected calls: exactly 1 time(s)\n"
        "\n"
        "Observed calls:\n"
        "  0\n"
        "\n"
        "Performed invocations:\n"
        "  (none)"
    )


def test_setup_verifier_skips_non_verifiable(count_read: Setup) -> None:
    """Only verifiable setups are checked when requested."""
    SetupVerifier().verify([count_read], [], only_verifiable=True)
    with pytest.raises(VerificationError, match="1. obj._count"):
        SetupVerifier().verify([count_read], [])
