"""Tests for expectation verification."""

import pytest

from understudy.core.errors import VerificationError
from understudy.core.matchers import Arg
from understudy.core.models import RegistrationKind
from understudy.tests.fakes import InboxMock


@pytest.fixture
def mock() -> InboxMock:
    return InboxMock()


# ============================================================================
# Counting
# ============================================================================


def test_expectation_met_after_required_calls(mock: InboxMock) -> None:
    """One call of two leaves one failure; the second call satisfies it."""
    mock.expect().call(mock.bar(Arg.eq("x"), Arg.any(int)), times=2)

    mock.bar("x", 1)
    report = mock.verification_report()
    assert len(report.failures) == 1
    failure = report.failures[0]
    assert failure.expected_count == 2
    assert failure.actual_count == 1
    assert failure.operation == "bar"
    assert failure.pattern == "bar(eq('x'), any<int>)"

    mock.bar("x", 2)
    assert mock.verification_report().passed
    mock.verify()


def test_default_expected_count_is_one(mock: InboxMock) -> None:
    """Without times=, exactly one call is expected."""
    mock.expect().call(mock.bar(Arg.eq("x"), Arg.any(int)))

    mock.bar("x", 1)
    mock.verify()

    mock.bar("x", 1)
    with pytest.raises(VerificationError, match="1 time but it was called 2 times"):
        mock.verify()


def test_at_least_once(mock: InboxMock) -> None:
    """times=None accepts any positive count."""
    mock.expect().call(mock.bar(Arg.any(str), Arg.any(int)), times=None)

    with pytest.raises(VerificationError, match="at least once"):
        mock.verify()

    for _ in range(3):
        mock.bar("x", 1)
    mock.verify()


def test_times_zero_expects_no_call(mock: InboxMock) -> None:
    """times=0 fails as soon as the call happens."""
    mock.expect().call(mock.bar(Arg.any(str), Arg.any(int)), times=0)
    mock.verify()

    mock.bar("x", 1)
    with pytest.raises(VerificationError):
        mock.verify()


def test_non_matching_calls_do_not_count(mock: InboxMock) -> None:
    """Only calls accepted by every matcher count."""
    mock.expect().call(mock.bar(Arg.eq("x"), Arg.eq(1)))

    mock.bar("x", 2)
    mock.bar("y", 1)

    report = mock.verification_report()
    assert report.failures[0].actual_count == 0


# ============================================================================
# Rejections
# ============================================================================


def test_rejection_passes_when_never_called(mock: InboxMock) -> None:
    """A rejected call that never happens verifies."""
    mock.reject().call(mock.bar(Arg.eq("forbidden"), Arg.any(int)))
    mock.bar("allowed", 1)

    mock.verify()


def test_rejection_fails_when_called(mock: InboxMock) -> None:
    """A rejected call that happens is reported."""
    mock.reject().call(mock.bar(Arg.eq("forbidden"), Arg.any(int)))
    mock.bar("forbidden", 1)

    report = mock.verification_report()
    assert len(report.failures) == 1
    assert report.failures[0].kind is RegistrationKind.REJECTION
    assert "Rejected call bar(eq('forbidden'), any<int>) was called 1 time" in str(report)


# ============================================================================
# Reports
# ============================================================================


def test_report_collects_every_failure_in_declaration_order(mock: InboxMock) -> None:
    """All failing expectations are reported, not only the first."""
    mock.expect().call(mock.bar(Arg.eq("a"), Arg.any(int)))
    mock.expect().call(mock.title(Arg.eq(7)))
    mock.expect().call(mock.bar(Arg.eq("c"), Arg.any(int)))
    mock.bar("c", 1)

    with pytest.raises(VerificationError) as exc_info:
        mock.verify()

    report = exc_info.value.report
    assert report.checked == 3
    assert [f.pattern for f in report.failures] == [
        "bar(eq('a'), any<int>)",
        "title(eq(7))",
    ]


def test_report_lists_received_calls(mock: InboxMock) -> None:
    """Failures show what the operation actually received."""
    mock.expect().call(mock.bar(Arg.eq("x"), Arg.eq(1)))
    mock.bar("y", 2)

    text = str(mock.verification_report())

    assert "1 of 1 expectation(s) not met:" in text
    assert "Expected call bar(eq('x'), eq(1)) 1 time but it was called 0 times" in text
    assert "received calls to bar:" in text
    assert "bar('y', 2)" in text


def test_report_without_received_calls(mock: InboxMock) -> None:
    """Failures say when the operation was never called."""
    mock.expect().call(mock.title(Arg.any(int)))

    assert "no calls to title were received" in str(mock.verification_report())


def test_received_calls_are_capped() -> None:
    """Only max_reported_calls received calls are listed."""
    mock = InboxMock(max_reported_calls=2)
    mock.expect().call(mock.bar(Arg.eq("never"), Arg.any(int)))
    for number in range(5):
        mock.bar("other", number)

    failure = mock.verification_report().failures[0]

    assert failure.received == ("bar('other', 0)", "bar('other', 1)")


def test_passing_report_text(mock: InboxMock) -> None:
    """A passing report says so."""
    mock.expect().call(mock.bar(Arg.any(str), Arg.any(int)))
    mock.bar("x", 1)

    assert str(mock.verify()) == "All 1 expectation(s) met"


def test_verify_is_idempotent(mock: InboxMock) -> None:
    """Repeated verification without new calls yields the same report."""
    mock.expect().call(mock.bar(Arg.eq("x"), Arg.any(int)), times=2)
    mock.bar("x", 1)

    first = mock.verification_report()
    second = mock.verification_report()
    with pytest.raises(VerificationError) as exc_info:
        mock.verify()

    assert first == second == exc_info.value.report


def test_verification_error_is_assertion_error(mock: InboxMock) -> None:
    """Test runners treat verification failures as test failures."""
    mock.expect().call(mock.title(Arg.any(int)))

    with pytest.raises(AssertionError):
        mock.verify()


def test_stubs_are_not_verified(mock: InboxMock) -> None:
    """Unused stubs never fail verification."""
    mock.stub().call(mock.bar(Arg.any(str), Arg.any(int))).and_return(True)

    report = mock.verify()

    assert report.checked == 0


def test_single_expectation_verify(mock: InboxMock) -> None:
    """An expectation handle verifies just itself."""
    met = mock.expect().call(mock.bar(Arg.eq("a"), Arg.any(int)))
    unmet = mock.expect().call(mock.bar(Arg.eq("b"), Arg.any(int)))
    mock.bar("a", 1)

    assert met.matched_count == 1
    assert met.verify().passed
    with pytest.raises(VerificationError) as exc_info:
        unmet.verify()
    assert exc_info.value.report.checked == 1
