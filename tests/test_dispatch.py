from __future__ import annotations

import logging

import pytest

from cryptokat import Dispatcher, FaultPolicy, Outcome, run_conformance_test
from cryptokat.errors import OperationFailedError, RunInterruptedError, VectorMismatchError
from cryptokat.registry import Registry, RegistryEntry
from cryptokat.runners import RunContext
from cryptokat.vectors.schema import HashSuite, HashVector


class Recorder:
    def __init__(self) -> None:
        self.calls = []
        self.fail = set()
        self.interrupt = set()

    def __call__(self, ctx, entry, driver, flags) -> None:
        self.calls.append((entry.name, driver))
        if entry.name in self.interrupt:
            raise RunInterruptedError("stop")
        if entry.name in self.fail:
            raise VectorMismatchError("bad", algorithm=entry.name, index=0)


_ONE = HashSuite((HashVector(plaintext=b"abc", digest=bytes(20)),))


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def dispatcher(provider, recorder: Recorder) -> Dispatcher:
    table = Registry(
        [
            RegistryEntry("alg", "hash", _ONE, recorder),
            RegistryEntry("drv", "hash", _ONE, recorder),
            RegistryEntry("empty", "hash", HashSuite(), recorder),
        ]
    )
    return Dispatcher(RunContext(provider=provider), table)


def test_driver_and_algorithm_both_run(dispatcher: Dispatcher, recorder: Recorder) -> None:
    report = dispatcher.run_test("drv", "alg")
    assert recorder.calls == [("alg", "drv"), ("drv", "drv")]
    assert report.outcome is Outcome.PASSED


def test_same_entry_runs_twice(dispatcher: Dispatcher, recorder: Recorder) -> None:
    dispatcher.run_test("alg", "alg")
    assert recorder.calls == [("alg", "alg"), ("alg", "alg")]


def test_only_one_name_resolves(dispatcher: Dispatcher, recorder: Recorder) -> None:
    report = dispatcher.run_test("unknown-driver", "alg")
    assert recorder.calls == [("alg", "unknown-driver")]
    assert report.outcome is Outcome.PASSED


def test_no_test_is_not_a_failure(
    dispatcher: Dispatcher, recorder: Recorder, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO, logger="cryptokat.dispatch")
    report = dispatcher.run_test("nothing", "nada")
    assert report.outcome is Outcome.NO_TEST
    assert report.outcome.ok
    assert recorder.calls == []
    assert "No test for nada (nothing)" in caplog.text


def test_failures_are_or_ed(
    dispatcher: Dispatcher, recorder: Recorder, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO, logger="cryptokat.dispatch")
    recorder.fail.add("alg")
    report = dispatcher.run_test("drv", "alg")
    # the driver entry still ran after the algorithm entry failed
    assert recorder.calls == [("alg", "drv"), ("drv", "drv")]
    assert report.outcome is Outcome.FAILED
    assert report.outcome.exit_code == 1
    assert [r.passed for r in report.entries] == [False, True]
    assert isinstance(report.errors[0], VectorMismatchError)
    verdicts = [r for r in caplog.records if "NOT passed" in r.getMessage()]
    assert [r.levelno for r in verdicts] == [logging.ERROR]
    assert "self-tests for drv (alg) NOT passed" in caplog.text


def test_interruption_propagates(dispatcher: Dispatcher, recorder: Recorder) -> None:
    recorder.interrupt.add("alg")
    with pytest.raises(RunInterruptedError):
        dispatcher.run_test("drv", "alg")
    assert recorder.calls == [("alg", "drv")]


def test_empty_table_passes_without_running(dispatcher: Dispatcher, recorder: Recorder) -> None:
    report = dispatcher.run_test("empty")
    assert report.outcome is Outcome.PASSED
    assert recorder.calls == []


def test_run_all_covers_every_entry(dispatcher: Dispatcher, recorder: Recorder) -> None:
    reports = dispatcher.run_all()
    assert [r.driver for r in reports] == ["alg", "drv", "empty"]
    assert recorder.calls == [("alg", "alg"), ("drv", "drv")]


def test_run_conformance_test_end_to_end(provider, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="cryptokat.dispatch")
    assert run_conformance_test("sha1-pyca", "sha1", provider=provider) is Outcome.PASSED
    assert "self-tests for sha1-pyca (sha1) passed" in caplog.text
    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]


def test_run_conformance_test_with_faults(provider) -> None:
    outcome = run_conformance_test(
        "cbc-aes-pyca", "cbc(aes)", provider=provider, faults=FaultPolicy.parse("cbc-aes-pyca:256")
    )
    assert outcome is Outcome.FAILED


def test_run_conformance_test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRYPTOKAT_FAULT_INJECT", "hmac-sha1")
    monkeypatch.setenv("CRYPTOKAT_ASYNC", "1")
    assert run_conformance_test("hmac-sha1-pyca", "hmac(sha1)") is Outcome.FAILED
    assert run_conformance_test("sha1-pyca", "sha1") is Outcome.PASSED


def test_unknown_names_report_no_test(provider) -> None:
    assert run_conformance_test("md5-pyca", "md5", provider=provider) is Outcome.NO_TEST


def test_error_outside_an_operation_is_recorded(wrapped, caplog: pytest.LogCaptureFixture) -> None:
    def _broken(handle):
        raise RuntimeError("digest size unavailable")

    wrapped.after["digest_size"] = _broken
    caplog.set_level(logging.INFO, logger="cryptokat.dispatch")
    report = Dispatcher(RunContext(provider=wrapped)).run_test("sha256-pyca", "sha256")
    assert report.outcome is Outcome.FAILED
    assert [r.entry for r in report.entries] == ["sha256", "sha256-pyca"]
    for err in report.errors:
        assert isinstance(err, OperationFailedError)
        assert isinstance(err.__cause__, RuntimeError)
    assert wrapped.allocated == wrapped.freed == 2
