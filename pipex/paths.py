"""Looking up commands: $PATH parsing and executable resolution."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping

from pipex.formatting import println


def split_words(text: str, sep: str) -> list[str]:
    """Split *text* on *sep*, dropping the empty pieces between separators."""
    if len(sep) != 1:
        raise ValueError("separator must be a single character")
    return [word for word in text.split(sep) if word]


def find_path_env(env: Mapping[str, str] | Iterable[str]) -> str | None:
    """Return the value of the first ``PATH...`` entry of *env*, or None.

    *env* is either a mapping or a sequence of ``NAME=value`` strings.
    Any entry whose text starts with ``PATH`` matches, and its first five
    characters are cut off.
    """
    entries = (
        (f"{name}={value}" for name, value in env.items())
        if isinstance(env, Mapping)
        else env
    )
    for entry in entries:
        if entry.startswith("PATH"):
            return entry[5:]
    return None


def path_has_executable(directory: str, cmd: str) -> bool:
    """Tell whether ``directory/cmd`` exists and may be executed."""
    return os.access(f"{directory}/{cmd}", os.X_OK)


def search_relative(command: str) -> str | None:
    """Return *command* if it names an executable file as written, else None."""
    println("searching rel/abs cmd in %s", command)
    if os.access(command, os.X_OK):
        return command
    return None


def find_executable(command: str, search_paths: Iterable[str]) -> str | None:
    """Resolve the program of *command* to the path of an executable.

    A program starting with ``.`` or ``/`` is checked as written; any other
    is looked for in *search_paths*, in order. Returns None when nothing
    matches; raises ValueError for a command with no words.
    """
    words = split_words(command, " ")
    if not words:
        raise ValueError("empty command")
    program = words[0]
    if program.startswith(".") or program.startswith("/"):
        return search_relative(command)
    for directory in search_paths:
        if path_has_executable(directory, program):
            found = f"{directory}/{program}"
            println("found command in %s", found)
            return found
    return None