"""Command-line entry point."""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Optional, Sequence, Union

from procwarden.config import config_path_for
from procwarden.supervisor import ProcessManager

PROGRAM_NAME = "procwarden"
SERVICE_COMMANDS = ("install", "uninstall", "run-service")


def usage() -> str:
    """Return the usage text."""
    return (
        "usage:\n"
        "  help - show this message\n"
        "  install - install service\n"
        "  install <user> <passwd> - same as install but run as given user\n"
        "  uninstall - uninstall service\n"
        "  run - run processes from configuration file\n"
    )


def run_processes(config_path: Optional[Union[str, Path]] = None) -> int:
    """Run the configured processes until interrupted, then stop them all."""
    path = config_path if config_path is not None else config_path_for(
        sys.argv[0] or PROGRAM_NAME
    )
    manager = ProcessManager()
    try:
        manager.load(path)
    except OSError:
        print("Can't read configuration file.", file=sys.stderr)
    try:
        while True:
            time.sleep(1.0)
    except KeyboardInterrupt:
        pass
    finally:
        manager.stop_all()
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(usage(), end="")
        return 0
    command = args[0]
    if command == "run":
        return run_processes(args[1] if len(args) > 1 else None)
    if command in SERVICE_COMMANDS:
        print(f"{command}: service management is not available.", file=sys.stderr)
        return 1
    print(usage(), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())