from decimal import Decimal

import pytest

from swaglabs_e2e.ui_testing.framework import soft_assert
from swaglabs_e2e.ui_testing.framework.errors import SoftAssertionError
from swaglabs_e2e.ui_testing.framework.soft_assert import AssertionBatch


@pytest.fixture
def attachments(monkeypatch):
    attached = []
    monkeypatch.setattr(soft_assert, "attach_json", lambda data, name: attached.append((name, data)))
    return attached


def test_all_checks_pass(attachments):
    batch = AssertionBatch("ok")
    assert batch.check(True, "truthy")
    assert batch.equal(2, 2, "equal")
    assert batch.contains(["a", "b"], "a", "contains")
    assert batch.approx(Decimal("43.18"), Decimal("43.179"), message="approx")

    batch.assert_all()

    assert batch.all_passed()
    assert attachments[0][1]["total"] == 4
    assert attachments[0][1]["failed"] == 0


def test_every_failure_is_reported_once(attachments):
    batch = AssertionBatch("cart")
    batch.equal(1, 2, "item count")
    batch.check(True, "badge visible")
    batch.contains("Sauce Labs Backpack", "Onesie", "name")

    with pytest.raises(SoftAssertionError) as exc:
        batch.assert_all()

    message = str(exc.value)
    assert "2 of 3 checks failed" in message
    assert "item count: expected 2, actual 1" in message
    assert "name" in message
    assert "badge visible" not in message
    assert len(exc.value.failures) == 2
    assert len(attachments) == 1


def test_checks_after_a_failure_still_run(attachments):
    batch = AssertionBatch()
    batch.check(False, "first")
    assert batch.equal("x", "x", "second")
    assert len(batch.results) == 2


def test_context_manager_raises_on_exit(attachments):
    with pytest.raises(SoftAssertionError):
        with AssertionBatch("block") as batch:
            batch.check(False, "nope")


def test_context_manager_keeps_body_exception(attachments):
    with pytest.raises(KeyError):
        with AssertionBatch("block") as batch:
            batch.check(False, "nope")
            raise KeyError("boom")
    assert attachments[0][1]["failed"] == 1


def test_approx_tolerance_and_bad_input(attachments):
    batch = AssertionBatch()
    assert not batch.approx(Decimal("1.00"), Decimal("1.02"))
    assert batch.approx(1.0, 1.02, tolerance="0.05")
    assert not batch.approx("n/a", 1)


def test_contains_with_unsupported_container(attachments):
    batch = AssertionBatch()
    assert not batch.contains(5, 1, "int is no container")
