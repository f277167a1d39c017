"""Two-command pipeline: ``infile | cmd1 | cmd2 > outfile``."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from pipex.formatting import println
from pipex.paths import find_executable, find_path_env, split_words

_OUTPUT_FLAGS = os.O_TRUNC | os.O_CREAT | os.O_RDWR
_OUTPUT_MODE = 0o640
_MISSING_COMMAND_STATUS = 1


def _env_to_dict(env: Mapping[str, str] | Iterable[str]) -> dict[str, str]:
    if isinstance(env, Mapping):
        return dict(env)
    result: dict[str, str] = {}
    for entry in env:
        name, _, value = entry.partition("=")
        result.setdefault(name, value)
    return result


def _close_quietly(fd: int | None) -> None:
    if fd is None:
        return
    try:
        os.close(fd)
    except OSError:
        pass


@dataclass
class Pipex:
    """The parsed command line of one pipeline run."""

    infile: str
    commands: tuple[str, str]
    outfile: str
    env: dict[str, str]
    search_paths: list[str]
    programs: tuple[str | None, str | None] | None = None

    def resolve(self) -> tuple[str | None, str | None]:
        """Look up the executable of both commands and remember the result."""
        first, second = (
            find_executable(command, self.search_paths) for command in self.commands
        )
        self.programs = (first, second)
        return self.programs

    def run(self) -> list[int]:
        """Run the pipeline and return the exit status of both commands.

        A command that could not be resolved counts as having exited with
        status 1 without reading or writing anything.
        """
        programs = self.programs if self.programs is not None else self.resolve()
        input_fd = self._open_input()
        read_end: int | None = None
        write_end: int | None = None
        output_fd: int | None = None
        try:
            read_end, write_end = os.pipe()
            output_fd = self._open_output()
            first = self._spawn(programs[0], 0, input_fd, write_end)
            second = self._spawn(programs[1], 1, read_end, output_fd)
            _close_quietly(read_end)
            _close_quietly(write_end)
            read_end = write_end = None
            pids = [proc.pid if isinstance(proc, subprocess.Popen) else 0
                    for proc in (first, second)]
            println("waiting for pids %d and %d", *pids)
            return [
                proc.wait() if isinstance(proc, subprocess.Popen) else proc
                for proc in (first, second)
            ]
        finally:
            for fd in (read_end, write_end, input_fd, output_fd):
                _close_quietly(fd)

    def _open_input(self) -> int | None:
        try:
            return os.open(self.infile, os.O_RDONLY)
        except OSError as exc:
            println(
                "Bob, the builder can we fix it ? NO IT'S FUCKED ! %d",
                exc.errno or 0,
            )
            return None

    def _open_output(self) -> int | None:
        try:
            return os.open(self.outfile, _OUTPUT_FLAGS, _OUTPUT_MODE)
        except OSError as exc:
            println(
                "Something went really fucking wrong ! errno : %d",
                exc.errno or 0,
            )
            return None

    def _spawn(
        self,
        program: str | None,
        index: int,
        stdin: int | None,
        stdout: int | None,
    ) -> subprocess.Popen | int:
        if program is None:
            return _MISSING_COMMAND_STATUS
        args = split_words(self.commands[index], " ")
        try:
            return subprocess.Popen(
                args,
                executable=program,
                stdin=stdin,
                stdout=stdout,
                env=self.env,
            )
        except OSError as exc:
            return exc.errno or _MISSING_COMMAND_STATUS


def parse_argv(
    argv: list[str], env: Mapping[str, str] | Iterable[str]
) -> Pipex:
    """Build a Pipex from ``[name, infile, cmd1, cmd2, outfile]`` and *env*."""
    if len(argv) < 5:
        raise ValueError("expected a program name, two files and two commands")
    environment = _env_to_dict(env)
    path_value = find_path_env(environment)
    search_paths = split_words(path_value, ":") if path_value is not None else []
    return Pipex(
        infile=argv[1],
        commands=(argv[2], argv[3]),
        outfile=argv[4],
        env=environment,
        search_paths=search_paths,
    )