import importlib.metadata
import json
import os
import shlex
import sys

import pytest

from kicker.cmd.argument_parsing import KickerNamespace, create_argument_parser
from kicker.cmd.configuration import KickerConfig
from kicker.cmd.datastructures import (
    get_paths_to_watch,
    init_kicker_context,
    settings_from,
)
from kicker.cmd.dispatcher import is_watchable, kicker, run_command
from kicker.notification import DesktopNotifier, NullNotifier
from kicker.output.output import CLEAR_SCREEN

python = shlex.quote(sys.executable)


def parse(argv: list[str]) -> KickerNamespace:
    return KickerNamespace(**vars(create_argument_parser().parse_args(argv)))


@pytest.fixture
def in_tmp_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_run_command(in_tmp_path, capsys):
    assert kicker(["--no-notifications", "-q", "echo", "hello world"]) == 0
    out = capsys.readouterr().out
    assert out == "Executing: echo 'hello world'\n\nhello world\n\n\nSuccess\n"


def test_exit_code_is_passed_on(in_tmp_path, capsys):
    rc = kicker(["--no-notifications", f"{python} -c 'import sys; sys.exit(3)'"])
    assert rc == 3
    assert "Failed (3)" in capsys.readouterr().out


def test_no_command(in_tmp_path, capsys):
    assert kicker(["--no-notifications"]) == 1
    assert "No command given." in capsys.readouterr().out


def test_configuration_file_is_used(in_tmp_path, capsys):
    (in_tmp_path / "Kickerfile.toml").write_text(
        "quiet = true\nsilent = true\nnotifications = false\n"
    )
    assert kicker(["echo", "hello"]) == 0
    assert capsys.readouterr().out == "Executing: echo hello\nSuccess\n"


def test_invalid_configuration_file(in_tmp_path, capsys):
    (in_tmp_path / "Kickerfile.toml").write_text("loud = true\n")
    assert kicker(["echo", "hello"]) == 1
    assert "Invalid configuration" in capsys.readouterr().out


def test_directory(in_tmp_path, capsys):
    project = in_tmp_path / "project"
    project.mkdir()
    (project / "Kickerfile.toml").write_text("quiet = true\nnotifications = false\n")

    assert kicker(["-C", "project", "pwd"]) == 0
    out = capsys.readouterr().out
    assert "Entering directory 'project'" in out
    assert f"\n{os.path.realpath(project)}\n" in out
    assert os.path.realpath(os.getcwd()) == os.path.realpath(in_tmp_path)


def test_dump_schema(in_tmp_path, capsys):
    assert kicker(["--dump-schema"]) == 0
    assert "KickerConfig" in json.loads(capsys.readouterr().out)["$defs"]


def test_version(in_tmp_path, capsys):
    assert kicker(["--version"]) == 0
    out = capsys.readouterr().out
    assert out.strip().endswith(importlib.metadata.version("kicker"))


@pytest.mark.parametrize(
    "configuration, argv, expected",
    [
        (KickerConfig(), [], (False, False, False)),
        (KickerConfig(silent=True, quiet=True), [], (True, True, False)),
        (KickerConfig(silent=True), ["--no-silent"], (False, False, False)),
        (KickerConfig(), ["-s", "-q", "-c"], (True, True, True)),
        (KickerConfig(clear_console=True), ["--no-clear"], (False, False, False)),
    ],
    ids=["defaults", "from file", "flag overrides file", "flags", "no clear"],
)
def test_settings_from(configuration, argv, expected):
    settings = settings_from(configuration, parse(argv))
    assert (settings.silent, settings.quiet, settings.clear_console) == expected
    assert settings.should_clear_screen is True


def test_init_kicker_context():
    ctx = init_kicker_context(KickerConfig(shell=True), parse(["-w", "src"]))
    assert isinstance(ctx.executor.notifier, DesktopNotifier)
    assert ctx.executor.use_shell is True
    assert ctx.executor.settings is ctx.settings

    ctx = init_kicker_context(
        KickerConfig(notifications=True, watch=["lib"]),
        parse(["--no-notifications", "--no-shell", "-w", "src"]),
    )
    assert isinstance(ctx.executor.notifier, NullNotifier)
    assert ctx.executor.use_shell is False
    assert get_paths_to_watch(ctx) == {"lib", "src"}


def test_run_command_watch_loop(monkeypatch, capsys):
    ctx = init_kicker_context(
        KickerConfig(quiet=True, clear_console=True, notifications=False),
        parse(["-w", "src"]),
    )
    watch_calls = []

    def fake_do_watch(paths):
        watch_calls.append(paths)
        assert ctx.settings.should_clear_screen is False
        if len(watch_calls) == 2:
            raise KeyboardInterrupt()

    monkeypatch.setattr("kicker.cmd.watch.do_watch", fake_do_watch)

    with pytest.raises(KeyboardInterrupt):
        run_command(ctx, "echo hello")

    assert watch_calls == [{"src"}, {"src"}]
    out = capsys.readouterr().out
    assert out.count("Executing: echo hello") == 2
    assert out.count(CLEAR_SCREEN) == 2


@pytest.mark.parametrize(
    "path, expected",
    [
        pytest.param("", True, id="existing directory"),
        pytest.param("new_file.txt", True, id="file yet to be created"),
        pytest.param("missing/new_file.txt", False, id="missing parent directory"),
    ],
)
def test_is_watchable(in_tmp_path, path, expected):
    assert is_watchable(str(in_tmp_path / path)) is expected


def test_missing_watch_directory_is_reported(in_tmp_path, monkeypatch, capsys):
    ctx = init_kicker_context(
        KickerConfig(quiet=True, notifications=False),
        parse(["-w", "missing/dir"]),
    )

    def fail_do_watch(paths):
        raise AssertionError("should not watch")

    monkeypatch.setattr("kicker.cmd.watch.do_watch", fail_do_watch)

    assert run_command(ctx, "echo hello") == 1
    out = capsys.readouterr().out
    assert "Can't watch missing/dir" in out
    assert "Executing" not in out
