"""Pytest plugin providing the ``mock_repository`` fixture."""

from __future__ import annotations

import logging
import typing as t

import pytest

from .mock import MockBehavior, MockRepository

logger = logging.getLogger(__name__)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("protected_mox")
    group.addoption(
        "--protected-mox-verify-on-teardown",
        action="store_true",
        dest="protected_mox_verify_on_teardown",
        default=None,
        help=(
            "Verify the verifiable setups of every mock created through the "
            "mock_repository fixture during teardown. Overrides the ini setting."
        ),
    )
    group.addoption(
        "--no-protected-mox-verify-on-teardown",
        action="store_false",
        dest="protected_mox_verify_on_teardown",
        default=None,
        help="Skip teardown verification. Overrides the ini setting.",
    )
    parser.addini(
        "protected_mox_verify_on_teardown",
        "Verify verifiable setups of mock_repository mocks during teardown.",
        type="bool",
        default=True,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "protected_mox(verify_on_teardown: bool = True, strict: bool = False): "
            "override mock_repository behaviour for a single test."
        ),
    )


def _verify_on_teardown(request: pytest.FixtureRequest) -> bool:
    """Return whether the fixture verifies its mocks during teardown."""
    # Priority order: marker > CLI option > INI setting
    marker = request.node.get_closest_marker("protected_mox")
    if marker is not None and "verify_on_teardown" in marker.kwargs:
        return bool(marker.kwargs["verify_on_teardown"])

    config = request.config
    cli_value = config.getoption("protected_mox_verify_on_teardown")
    if cli_value is not None:
        return bool(cli_value)

    return bool(config.getini("protected_mox_verify_on_teardown"))


def _behavior(request: pytest.FixtureRequest) -> MockBehavior:
    marker = request.node.get_closest_marker("protected_mox")
    if marker is not None and marker.kwargs.get("strict", False):
        return MockBehavior.STRICT
    return MockBehavior.LOOSE


@pytest.fixture
def mock_repository(
    request: pytest.FixtureRequest,
) -> t.Generator[MockRepository, None, None]:
    """Provide a :class:`MockRepository` verified when the test ends."""
    repository = MockRepository(behavior=_behavior(request))
    yield repository
    if not _verify_on_teardown(request):
        return
    if _call_stage_failed(request.node):
        return
    try:
        repository.verify()
    except Exception as err:
        logger.exception("Error during protected_mox teardown verification")
        pytest.fail(f"{type(err).__name__}: {err}")


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item, call: pytest.CallInfo[t.Any]
) -> t.Generator[None, None, None]:
    """Attach each phase's report to the item so teardown can inspect it."""
    del call
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


def _call_stage_failed(item: pytest.Item) -> bool:
    """Return ``True`` when the test body has already failed."""
    rep_call = getattr(item, "rep_call", None)
    return bool(rep_call and rep_call.failed)
