"""Tests for the procsignal command line."""

import argparse
import errno
import logging
import signal

import pytest

from procsignal import main as cli
from procsignal.core import signal_dispatcher
from procsignal.core.models import SignalDeliveryError


@pytest.fixture
def sent(monkeypatch):
    """Record deliveries instead of signaling real processes."""
    deliveries: list[tuple[int, int]] = []

    def fake_send(self, pid: int, signal_number: int) -> None:
        deliveries.append((pid, signal_number))

    monkeypatch.setattr(signal_dispatcher.SignalDispatcher, "send_signal", fake_send)
    return deliveries


class TestParseSignal:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("15", 15), ("9", 9), ("TERM", signal.SIGTERM), ("sigkill", signal.SIGKILL), ("Cont", signal.SIGCONT)],
    )
    def test_accepted(self, value: str, expected: int) -> None:
        assert cli.parse_signal(value) == expected

    def test_unknown_name(self) -> None:
        with pytest.raises(argparse.ArgumentTypeError, match="unknown signal"):
            cli.parse_signal("NOPE")


class TestMain:
    """Exit codes: 0 success, 1 failure, 2 usage."""

    def test_signals_matching_process(self, proc_tree, sent) -> None:
        proc_tree.add(31, "helper")
        proc_tree.add(32, "bystander")
        assert cli.main(["helper", "TERM", "--proc-root", str(proc_tree.root)]) == 0
        assert sent == [(31, signal.SIGTERM)]

    def test_no_match_is_success(self, proc_tree, sent) -> None:
        assert cli.main(["helper", "9", "--proc-root", str(proc_tree.root)]) == 0
        assert sent == []

    def test_proc_root_from_environment(self, monkeypatch, proc_tree, sent) -> None:
        proc_tree.add(31, "helper")
        monkeypatch.setenv("HOST_PROC", str(proc_tree.root))
        assert cli.main(["helper", "STOP"]) == 0
        assert sent == [(31, signal.SIGSTOP)]

    def test_enumeration_failure_exits_1(self, tmp_path, sent) -> None:
        assert cli.main(["helper", "TERM", "--proc-root", str(tmp_path / "missing")]) == 1

    def test_config_file(self, tmp_path, proc_tree, sent) -> None:
        proc_tree.add(31, "helper")
        (proc_tree.root / "40").mkdir()
        config = tmp_path / "procsignal.yaml"
        config.write_text(f"proc_root: {proc_tree.root}\nignore_vanished: true\n")
        assert cli.main(["helper", "TERM", "--config", str(config)]) == 0
        assert sent == [(31, signal.SIGTERM)]

    def test_flag_overrides_config(self, tmp_path, proc_tree, sent) -> None:
        proc_tree.add(31, "helper")
        config = tmp_path / "procsignal.yaml"
        config.write_text(f"proc_root: {tmp_path / 'missing'}\n")
        args = ["helper", "TERM", "--config", str(config), "--proc-root", str(proc_tree.root)]
        assert cli.main(args) == 0
        assert sent == [(31, signal.SIGTERM)]

    def test_bad_config_is_usage_error(self, tmp_path, sent) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["helper", "TERM", "--config", str(tmp_path / "missing.yaml")])
        assert exc_info.value.code == 2

    def test_non_string_proc_root_is_usage_error(self, tmp_path, sent) -> None:
        config = tmp_path / "procsignal.yaml"
        config.write_text("proc_root: [a, b]\n")
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["helper", "TERM", "--config", str(config)])
        assert exc_info.value.code == 2
        assert sent == []

    def test_bad_signal_is_usage_error(self, sent) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["helper", "LOUDLY"])
        assert exc_info.value.code == 2


class TestFailureReporting:
    """A failure is reported once, by the command line."""

    def _error_records(self, caplog) -> list:
        return [r for r in caplog.records if r.levelno >= logging.ERROR]

    def test_delivery_failure_logged_once(self, monkeypatch, proc_tree, caplog) -> None:
        def refuse(self, pid: int, signal_number: int) -> None:
            raise SignalDeliveryError(pid, signal_number, "access denied", errno.EPERM)

        monkeypatch.setattr(signal_dispatcher.SignalDispatcher, "send_signal", refuse)
        proc_tree.add(31, "helper")
        with caplog.at_level(logging.DEBUG, logger="procsignal"):
            assert cli.main(["helper", "TERM", "--proc-root", str(proc_tree.root)]) == 1
        errors = self._error_records(caplog)
        assert len(errors) == 1
        assert "PID 31" in errors[0].getMessage()

    def test_enumeration_failure_logged_once(self, tmp_path, sent, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="procsignal"):
            assert cli.main(["helper", "TERM", "--proc-root", str(tmp_path / "missing")]) == 1
        assert len(self._error_records(caplog)) == 1
