import os
import stat

import pytest

from pipex.pipeline import Pipex, parse_argv


def _system_env():
    return {"PATH": os.environ.get("PATH", "/usr/bin:/bin")}


def _make_tool(directory, name):
    directory.mkdir(parents=True, exist_ok=True)
    tool = directory / name
    tool.write_text("#!/bin/sh\nexit 0\n")
    tool.chmod(0o755)
    return tool


def test_parse_argv_fields_from_list_env():
    pipex = parse_argv(
        ["pipex", "in.txt", "grep a1", "wc -l", "out.txt"],
        ["HOME=/home/x", "PATH=/a:/b::/c"],
    )
    assert pipex.infile == "in.txt"
    assert pipex.outfile == "out.txt"
    assert pipex.commands == ("grep a1", "wc -l")
    assert pipex.search_paths == ["/a", "/b", "/c"]
    assert pipex.env["HOME"] == "/home/x"
    assert pipex.programs is None


def test_parse_argv_mapping_env():
    pipex = parse_argv(["p", "i", "c1", "c2", "o"], {"PATH": "/x:/y"})
    assert pipex.search_paths == ["/x", "/y"]
    assert pipex.env == {"PATH": "/x:/y"}


def test_parse_argv_without_path():
    pipex = parse_argv(["p", "i", "c1", "c2", "o"], {"HOME": "/h"})
    assert pipex.search_paths == []


def test_parse_argv_too_short():
    with pytest.raises(ValueError):
        parse_argv(["p", "i", "c1"], {})


def test_resolve_finds_in_search_paths(tmp_path):
    tool = _make_tool(tmp_path / "bin", "mytool")
    pipex = parse_argv(
        ["p", "i", "mytool --flag", "nosuchtool", "o"],
        {"PATH": str(tmp_path / "bin")},
    )
    programs = pipex.resolve()
    assert programs == (str(tool), None)
    assert pipex.programs == programs


def test_resolve_absolute_command(tmp_path):
    tool = _make_tool(tmp_path / "bin", "abs")
    pipex = parse_argv(["p", "i", str(tool), "./missing", "o"], {"PATH": ""})
    assert pipex.resolve() == (str(tool), None)


def test_resolve_empty_command_raises():
    pipex = parse_argv(["p", "i", "", "cat", "o"], {"PATH": "/bin"})
    with pytest.raises(ValueError):
        pipex.resolve()


def test_run_pipes_data_through(tmp_path, capsys):
    infile = tmp_path / "in.txt"
    outfile = tmp_path / "out.txt"
    infile.write_text("hello\nworld\n")
    pipex = parse_argv(
        ["p", str(infile), "cat", "tr a-z A-Z", str(outfile)], _system_env()
    )
    statuses = pipex.run()
    assert statuses == [0, 0]
    assert outfile.read_text() == "HELLO\nWORLD\n"
    assert "waiting for pids" in capsys.readouterr().out


def test_run_truncates_existing_output(tmp_path):
    infile = tmp_path / "in.txt"
    outfile = tmp_path / "out.txt"
    infile.write_text("short\n")
    outfile.write_text("a much longer previous content\n" * 5)
    pipex = parse_argv(["p", str(infile), "cat", "cat", str(outfile)], _system_env())
    pipex.run()
    assert outfile.read_text() == infile.read_text()


def test_run_creates_output_with_mode(tmp_path):
    infile = tmp_path / "in.txt"
    outfile = tmp_path / "out.txt"
    infile.write_text("x\n")
    pipex = parse_argv(["p", str(infile), "cat", "cat", str(outfile)], _system_env())
    pipex.run()
    umask = os.umask(0)
    os.umask(umask)
    assert stat.S_IMODE(outfile.stat().st_mode) == 0o640 & ~umask


def test_run_missing_first_command(tmp_path):
    infile = tmp_path / "in.txt"
    outfile = tmp_path / "out.txt"
    infile.write_text("data\n")
    pipex = parse_argv(
        ["p", str(infile), "no_such_command_xyz", "cat", str(outfile)],
        _system_env(),
    )
    statuses = pipex.run()
    assert statuses == [1, 0]
    assert outfile.read_text() == ""