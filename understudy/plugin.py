"""pytest integration for Understudy.

This module is the only place that wires configuration, logging and mock
instances together. Enable it from a top-level conftest.py::

    pytest_plugins = ["understudy.plugin"]

It provides:
- ``understudy_settings``: the loaded Settings (session scoped)
- ``mock_registry``: creates configured mocks and verifies every tracked
  mock when the test finishes
"""

import logging
import sys
from collections.abc import Iterator

import pytest

from understudy.config import Settings, load_settings
from understudy.core.errors import VerificationError
from understudy.core.mock import MockInstance
from understudy.core.ports import MockPort
from understudy.core.verifier import VerificationReport

logger = logging.getLogger(__name__)

_HANDLER_NAME = "understudy"

_call_failed = pytest.StashKey[bool]()
_settings_key = pytest.StashKey[Settings]()


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure the understudy logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.WARNING)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    package_logger = logging.getLogger("understudy")
    package_logger.setLevel(level)

    handler = next(
        (h for h in package_logger.handlers if h.get_name() == _HANDLER_NAME), None
    )
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        package_logger.addHandler(handler)
    handler.setFormatter(logging.Formatter(format_str))


class MockRegistry:
    """Mocks created or tracked during one test."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._tracked: list[MockPort] = []

    def new_mock(self) -> MockInstance:
        """Create a MockInstance configured from settings and track it."""
        return self.track(
            MockInstance(
                any_matches_none=self.settings.any_matches_none,
                max_reported_calls=self.settings.max_reported_calls,
            )
        )

    def track(self, mock: MockPort) -> MockPort:
        """Track a substitute so it is verified at teardown."""
        self._tracked.append(mock)
        return mock

    @property
    def tracked(self) -> tuple[MockPort, ...]:
        return tuple(self._tracked)

    def verify_all(self) -> list[VerificationReport]:
        """Verify every tracked mock, raising one error for all failures.

        Raises:
            VerificationError: Carrying the failures of every mock.
        """
        reports = [mock.verification_report() for mock in self._tracked]
        failures = tuple(f for report in reports for f in report.failures)
        if failures:
            raise VerificationError(
                VerificationReport(
                    failures=failures,
                    checked=sum(report.checked for report in reports),
                )
            )
        return reports


def pytest_configure(config: pytest.Config) -> None:
    settings = load_settings()
    config.stash[_settings_key] = settings
    configure_logging(settings.log_level, settings.log_format)
    logger.debug(f"Understudy configured: {settings.model_dump()}")


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo) -> Iterator[None]:
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        item.stash[_call_failed] = report.failed


@pytest.fixture(scope="session")
def understudy_settings(pytestconfig: pytest.Config) -> Settings:
    """Settings loaded once, when the plugin was configured."""
    return pytestconfig.stash[_settings_key]


@pytest.fixture
def mock_registry(
    request: pytest.FixtureRequest, understudy_settings: Settings
) -> Iterator[MockRegistry]:
    """Registry of mocks verified automatically when the test passes."""
    registry = MockRegistry(understudy_settings)
    yield registry
    if not understudy_settings.verify_on_teardown:
        return
    if request.node.stash.get(_call_failed, False):
        logger.debug(f"Skipping teardown verification of failed test {request.node.nodeid}")
        return
    registry.verify_all()
