"""Configuration parsing: command-line splitting, process settings and config files."""

from __future__ import annotations

import enum
import locale
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

DEFAULT_DELAY_MS = 3000
CONFIG_SUFFIX = ".cnf"

_WHITESPACE = " \t"


class Mode(enum.IntEnum):
    """How a managed process is run."""

    AUTOSTART = 1
    RESPAWN = 2


@dataclass(frozen=True)
class ProcessSettings:
    """Settings of one configured process.

    ``delay`` is in milliseconds. Settings without ``args`` are invalid and
    never started.
    """

    args: tuple[str, ...] = ()
    mode: Mode = Mode.AUTOSTART
    delay: int = DEFAULT_DELAY_MS
    cwd: Optional[str] = None

    @property
    def valid(self) -> bool:
        return bool(self.args)

    @property
    def command(self) -> str:
        """The command line built from ``args``, each argument quoted."""
        return " ".join(escape_argument(arg) for arg in self.args)


def string_to_int(text: str) -> int:
    """Read an optionally negative decimal number from the start of ``text``.

    Reading stops at the first non-digit; no digits at all gives 0.
    """
    negative = text.startswith("-")
    digits = []
    for char in text[1:] if negative else text:
        if not "0" <= char <= "9":
            break
        digits.append(char)
    value = int("".join(digits)) if digits else 0
    return -value if negative else value


def _split_program_name(line: str) -> tuple[str, int]:
    if line.startswith('"'):
        end = line.find('"', 1)
        if end == -1:
            return line[1:], len(line)
        return line[1:end], end + 1
    end = len(line)
    for pos, char in enumerate(line):
        if char in _WHITESPACE:
            end = pos
            break
    return line[:end], end


def split_command_line(line: str) -> list[str]:
    """Split a command line into arguments using the Windows quoting rules.

    The first argument is the program name: it ends at the first whitespace,
    or at the closing quote when it starts with one, and backslashes in it
    are taken literally.
    """
    if not line:
        return []
    first, pos = _split_program_name(line)
    args = [first]
    length = len(line)
    while True:
        while pos < length and line[pos] in _WHITESPACE:
            pos += 1
        if pos >= length:
            break
        parts: list[str] = []
        in_quotes = False
        while pos < length:
            char = line[pos]
            if char in _WHITESPACE and not in_quotes:
                break
            if char == "\\":
                end = pos
                while end < length and line[end] == "\\":
                    end += 1
                count = end - pos
                if end < length and line[end] == '"':
                    parts.append("\\" * (count // 2))
                    if count % 2:
                        parts.append('"')
                        pos = end + 1
                    else:
                        pos = end
                else:
                    parts.append("\\" * count)
                    pos = end
                continue
            if char == '"':
                if in_quotes and pos + 1 < length and line[pos + 1] == '"':
                    parts.append('"')
                    pos += 2
                    continue
                in_quotes = not in_quotes
                pos += 1
                continue
            parts.append(char)
            pos += 1
        args.append("".join(parts))
    return args


def escape_argument(arg: str) -> str:
    """Quote ``arg``, putting a backslash before each quote and backslash."""
    escaped = "".join("\\" + char if char in '"\\' else char for char in arg)
    return f'"{escaped}"'


def parse_process_settings(line: str) -> ProcessSettings:
    """Parse one configuration line into process settings.

    Recognised words are ``respawn``, ``autostart``, ``delay <ms>``,
    ``cwd <dir>`` and ``--``, after which the rest is the command.
    """
    mode = Mode.AUTOSTART
    delay = DEFAULT_DELAY_MS
    cwd: Optional[str] = None
    command: tuple[str, ...] = ()

    words = iter(split_command_line(line))
    for word in words:
        if word == "respawn":
            mode = Mode.RESPAWN
        elif word == "autostart":
            mode = Mode.AUTOSTART
        elif word == "delay":
            value = next(words, None)
            if value is None:
                break
            delay = string_to_int(value)
        elif word == "cwd":
            value = next(words, None)
            if value is None:
                break
            cwd = value
        elif word == "--":
            command = tuple(words)
            break

    if not command:
        return ProcessSettings()
    return ProcessSettings(args=command, mode=mode, delay=delay, cwd=cwd)


def iter_config_lines(data: Union[bytes, str]) -> Iterator[str]:
    """Yield the non-empty lines of a configuration file.

    Carriage returns are dropped and ``#`` starts a comment running to the
    end of the line. Bytes are decoded with the locale's encoding.
    """
    if isinstance(data, bytes):
        data = data.decode(locale.getpreferredencoding(False), errors="replace")
    for raw in data.split("\n"):
        line = raw.replace("\r", "").split("#", 1)[0]
        if line:
            yield line


def config_path_for(executable: Union[str, Path]) -> Path:
    """Return the configuration file that belongs to ``executable``."""
    return Path(executable).with_suffix(CONFIG_SUFFIX)


def read_config(path: Union[str, Path]) -> list[ProcessSettings]:
    """Read a configuration file and parse every line of it."""
    with open(path, "rb") as handle:
        data = handle.read()
    return [parse_process_settings(line) for line in iter_config_lines(data)]