# procwarden

procwarden starts a set of commands that are listed in a configuration file
and supervises them. Each command either runs once after a delay
(`autostart`) or is started again each time it exits (`respawn`).

## Installation

```
pip install .
```

## Usage

```
procwarden run
procwarden run path/to/procwarden.cnf
procwarden help
```

`procwarden run` reads the configuration file and starts every valid process
it lists, each from its own supervising thread. It then keeps running until it
is interrupted (Ctrl+C); on interruption it terminates every child that is
still running and returns 0. If the configuration file cannot be read, it
prints `Can't read configuration file.` to standard error and still waits
until interrupted.

Without a path, the configuration file is the program's own path
(`sys.argv[0]`) with its suffix replaced by `.cnf`, or with `.cnf` added when
it has none; for an installed `procwarden` script that is `procwarden.cnf`
in the same directory.

`procwarden help`, any unknown argument, or no argument at all prints the
usage text and returns 0.

## What procwarden does not do

procwarden does not install, uninstall or run itself as an operating-system
service. The usage text lists `install` and `uninstall`, but `install`,
`uninstall` and `run-service` only print
`<command>: service management is not available.` to standard error and
return 1. To start procwarden at boot, use your system's own service manager
to run `procwarden run`.

## Configuration file

Each non-empty line describes one process. Carriage returns are ignored, and
a `#` starts a comment that runs to the end of the line. The file is decoded
with the locale's preferred encoding.

A line is split into words using the Windows command-line quoting rules
(double quotes group words, backslashes escape quotes). It is a list of
settings, followed by `--` and the command to run:

```
# run a backup once, ten seconds after start-up, in /srv/backup
autostart delay 10000 cwd /srv/backup -- backup-tool --full

# keep a worker alive, waiting five seconds before each restart
respawn delay 5000 -- worker --queue default
```

Settings:

- `autostart`: run the command once, after the delay. This is the default.
- `respawn`: run the command, and each time it exits, wait for the delay and
  run it again.
- `delay <milliseconds>`: the delay. The default is 3000. The leading
  (optionally negative) digits of the value are used; a value with no digits
  gives 0, and a negative delay is treated as 0.
- `cwd <directory>`: the working directory for the command.

Unknown words are ignored. A line with no command after `--` (or with no
`--` at all) is kept but never started.

## Library use

```python
from procwarden.config import parse_process_settings, read_config
from procwarden.supervisor import ProcessManager

settings = parse_process_settings("respawn delay 1000 -- worker --queue default")
print(settings.mode, settings.delay, settings.valid, settings.command)

manager = ProcessManager()
manager.load("procwarden.cnf")
try:
    for managed in manager:
        print(managed.settings.args, managed.running)
finally:
    manager.stop_all()
```

`procwarden.config` provides `Mode`, `ProcessSettings`, `string_to_int`,
`split_command_line`, `escape_argument`, `parse_process_settings`,
`iter_config_lines`, `config_path_for` and `read_config`.

`procwarden.supervisor` provides `ManagedProcess` (`start`, `stop`, `wait`,
and the `process` and `running` properties) and `ProcessManager` (`add` for
one configuration line, `load` for a file, `stop_all`, iteration and `len`).
The manager lists the most recently added process first.