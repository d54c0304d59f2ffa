"""Running and supervising configured processes."""

from __future__ import annotations

import subprocess
import sys
import threading
from pathlib import Path
from typing import Any, Iterator, Optional, Union

from procwarden.config import (
    Mode,
    ProcessSettings,
    parse_process_settings,
    read_config,
)


class ManagedProcess:
    """One configured process, run from its own supervising thread."""

    def __init__(self, settings: ProcessSettings) -> None:
        self.settings = settings
        self._stopping = threading.Event()
        self._lock = threading.Lock()
        self._process: Optional[subprocess.Popen] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def process(self) -> Optional[subprocess.Popen]:
        """The child process currently running, if any."""
        return self._process

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        """Start supervising; returns False for invalid or already started settings."""
        if not self.settings.valid or self._thread is not None:
            return False
        self._thread = threading.Thread(
            target=self._supervise,
            name=f"procwarden:{self.settings.args[0]}",
            daemon=True,
        )
        self._thread.start()
        return True

    def stop(self) -> None:
        """Stop supervising and terminate the running child, if any."""
        with self._lock:
            self._stopping.set()
            process = self._process
        if process is not None and process.poll() is None:
            try:
                process.terminate()
            except OSError:
                pass

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Wait for the supervising thread; returns True once it has finished."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _delay_seconds(self) -> float:
        return max(self.settings.delay, 0) / 1000.0

    def _supervise(self) -> None:
        if self.settings.mode is Mode.AUTOSTART:
            if not self._stopping.wait(self._delay_seconds()):
                self._run_once()
            return
        while not self._stopping.is_set():
            self._run_once()
            if self._stopping.wait(self._delay_seconds()):
                break

    def _popen_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {"cwd": self.settings.cwd}
        if sys.platform == "win32":
            options["creationflags"] = (
                subprocess.NORMAL_PRIORITY_CLASS | subprocess.CREATE_NO_WINDOW
            )
        return options

    def _run_once(self) -> None:
        with self._lock:
            if self._stopping.is_set():
                return
            try:
                process = subprocess.Popen(list(self.settings.args), **self._popen_options())
            except OSError:
                return
            self._process = process
        process.wait()
        with self._lock:
            self._process = None


class ProcessManager:
    """The set of supervised processes; the most recently added comes first."""

    def __init__(self) -> None:
        self._processes: list[ManagedProcess] = []

    def _add_settings(self, settings: ProcessSettings) -> ManagedProcess:
        managed = ManagedProcess(settings)
        managed.start()
        self._processes.insert(0, managed)
        return managed

    def add(self, line: str) -> ManagedProcess:
        """Parse a configuration line, start its process and keep it."""
        return self._add_settings(parse_process_settings(line))

    def load(self, path: Union[str, Path]) -> list[ManagedProcess]:
        """Add every process of a configuration file, in file order."""
        return [self._add_settings(settings) for settings in read_config(path)]

    def stop_all(self) -> None:
        """Stop every process and forget them all."""
        processes, self._processes = self._processes, []
        for managed in processes:
            managed.stop()
        for managed in processes:
            managed.wait()

    def __iter__(self) -> Iterator[ManagedProcess]:
        return iter(list(self._processes))

    def __len__(self) -> int:
        return len(self._processes)