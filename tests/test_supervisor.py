import sys
import time

from procwarden.config import Mode, ProcessSettings
from procwarden.supervisor import ManagedProcess, ProcessManager


def _python(code):
    return (sys.executable, "-c", code)


def _wait_until(predicate, timeout=10.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.02)
    return predicate()


def test_autostart_runs_once(tmp_path):
    out = tmp_path / "out.txt"
    code = f"open({str(out)!r}, 'a').write('x')"
    managed = ManagedProcess(ProcessSettings(args=_python(code), delay=0))
    assert managed.start() is True
    assert managed.wait(20) is True
    assert out.read_text() == "x"
    assert managed.process is None


def test_start_twice_is_refused(tmp_path):
    managed = ManagedProcess(ProcessSettings(args=_python("pass"), delay=0))
    assert managed.start() is True
    assert managed.start() is False
    assert managed.wait(20) is True


def test_respawn_restarts_until_stopped(tmp_path):
    out = tmp_path / "out.txt"
    code = f"open({str(out)!r}, 'a').write('x')"
    managed = ManagedProcess(
        ProcessSettings(args=_python(code), mode=Mode.RESPAWN, delay=10)
    )
    managed.start()
    assert _wait_until(lambda: out.exists() and len(out.read_text()) >= 3, 30)
    managed.stop()
    assert managed.wait(20) is True
    count = len(out.read_text())
    time.sleep(0.2)
    assert len(out.read_text()) == count


def test_stop_terminates_running_child():
    managed = ManagedProcess(
        ProcessSettings(args=_python("import time; time.sleep(60)"), delay=0)
    )
    managed.start()
    assert _wait_until(lambda: managed.process is not None)
    child = managed.process
    managed.stop()
    assert managed.wait(20) is True
    assert child.returncode is not None
    assert child.returncode != 0


def test_stop_during_delay_never_starts(tmp_path):
    out = tmp_path / "out.txt"
    code = f"open({str(out)!r}, 'a').write('x')"
    managed = ManagedProcess(ProcessSettings(args=_python(code), delay=60000))
    managed.start()
    managed.stop()
    assert managed.wait(10) is True
    assert not out.exists()


def test_invalid_settings_are_not_started():
    managed = ManagedProcess(ProcessSettings())
    assert managed.start() is False
    assert managed.running is False
    assert managed.wait(0) is True


def test_missing_program_does_not_raise():
    managed = ManagedProcess(
        ProcessSettings(args=("procwarden-no-such-program-xyz",), delay=0)
    )
    managed.start()
    assert managed.wait(10) is True
    assert managed.process is None


def test_manager_add_keeps_invalid_lines():
    manager = ProcessManager()
    managed = manager.add("autostart")
    assert len(manager) == 1
    assert managed.settings.valid is False
    manager.stop_all()
    assert len(manager) == 0


def test_manager_load_prepends(tmp_path):
    config = tmp_path / "app.cnf"
    config.write_text("autostart delay 60000 -- first\nautostart delay 60000 -- second\n")
    manager = ProcessManager()
    loaded = manager.load(config)
    assert [m.settings.args for m in loaded] == [("first",), ("second",)]
    assert [m.settings.args for m in manager] == [("second",), ("first",)]
    assert all(m.running for m in manager)
    manager.stop_all()
    assert len(manager) == 0
    assert not any(m.running for m in loaded)