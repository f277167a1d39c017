# pipex

`pipex` connects two commands with a pipe. The first command reads its
standard input from a file, and the second command's standard output goes to
another file. It behaves like the shell line

```
< infile cmd1 | cmd2 > outfile
```

It runs on POSIX systems.

## Installation

```
pip install .
```

## Usage

```
pipex infile "cmd1 args" "cmd2 args" outfile
```

The same entry point can also be run as `python -m pipex.cli`.

Exactly four arguments are expected:

1. `infile`: a readable file, fed to the first command's standard input.
2. `cmd1`: the first command and its arguments, separated by spaces.
3. `cmd2`: the second command and its arguments, separated by spaces.
4. `outfile`: truncated, or created with mode `0640`, and given the second
   command's standard output.

Example:

```
pipex notes.txt "grep a1" "wc -l" count.txt
```

Commands are looked up in the directories listed in `$PATH`, in order. A
command whose program starts with `.` or `/` is used as written, as long as
it is executable. Arguments are split on spaces only, and empty pieces are
dropped.

Progress messages are printed to standard output. They say where each
command was found and which process ids are being waited for.

Exit status:

- With the wrong number of arguments, `pipex` prints
  `Error : not enough arguments (got N, expected 4)` or
  `Error : too many arguments (got N, expected 4)`. It runs nothing and exits
  with status 0.
- If `infile` is not readable, it prints `file infile is not usable !`. It
  runs nothing and exits with status 0.
- If a command is empty or contains only spaces, it prints
  `Error : empty command` and exits with status 1.
- Otherwise it exits with status 0, whatever the two commands returned.

A command that cannot be found is not run. The other command still runs:

- If the first command is missing, the second command gets an empty input.
- If the second command is missing, `outfile` is still created, but nothing
  is written to it.

## Library use

The same pieces can be used from Python:

```python
from pipex.paths import find_executable, find_path_env, split_words
from pipex.pipeline import parse_argv

search = split_words(find_path_env(["PATH=/usr/bin:/bin"]), ":")
print(find_executable("wc -l", search))   # e.g. "/usr/bin/wc", or None

job = parse_argv(["pipex", "in.txt", "grep a1", "wc -l", "out.txt"],
                 ["PATH=/usr/bin:/bin"])
job.resolve()          # (path of cmd1 or None, path of cmd2 or None)
statuses = job.run()   # exit status of each command
```

`pipex.paths`:

- `split_words(text, sep)` splits on a single-character separator and drops
  the empty pieces.
- `find_path_env(env)` returns the value of the first entry starting with
  `PATH` in a mapping or in a list of `NAME=value` strings. It returns `None`
  if there is no such entry.
- `path_has_executable(directory, cmd)` tells whether `directory/cmd` exists
  and is executable.
- `search_relative(command)` returns `command` if that exact path is
  executable, and `None` otherwise.
- `find_executable(command, search_paths)` resolves a command line's program
  to the path of an executable. It returns `None` if nothing matches, and
  raises `ValueError` for an empty command.

`pipex.pipeline`:

- `parse_argv(argv, env)` builds a `Pipex` from
  `[name, infile, cmd1, cmd2, outfile]`. It raises `ValueError` if `argv` is
  shorter than that.
- `Pipex.resolve()` looks up both programs.
- `Pipex.run()` runs the pipeline and returns a list with both exit statuses.
  An unresolved command counts as status 1.

`pipex.formatting`:

- `format_message(template, *args)` expands `%c %s %p %d %i %u %x %X %%`.
  It raises `ValueError` when the template needs more arguments than it was
  given.
- `println(template, *args)` writes the formatted line to standard output.

## What it does not do

`pipex` always runs exactly two commands. It has:

- no quoting or escaping inside a command;
- no support for more than two commands;
- no here-document input;
- no append mode for the output file.

It does not pass the commands' exit statuses back as its own exit status.