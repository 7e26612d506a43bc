"""
Tests for ExecutionEngine spawning and stats
"""
import errno
import os

import pytest

from cmd_lib.errors import SpawnFailed
from cmd_lib.execution_engine import ExecutionEngine


def test_spawn_pipes_stdout():
    engine = ExecutionEngine()
    process = engine.spawn("echo hi", ["echo", "hi"])
    stdout, _ = process.communicate()
    assert stdout == b"hi\n"
    assert engine.stats['spawned'] == 1


def test_missing_executable_raises_spawn_failed():
    engine = ExecutionEngine()
    with pytest.raises(SpawnFailed) as exc_info:
        engine.spawn("cmd-lib-no-such-program", ["cmd-lib-no-such-program"])
    assert exc_info.value.errno == errno.ENOENT
    assert exc_info.value.command == "cmd-lib-no-such-program"
    assert engine.stats['spawn_failed'] == 1


def test_non_executable_file_raises_spawn_failed(tmp_path):
    script = tmp_path / "not-executable.sh"
    script.write_text("#!/bin/sh\necho hi\n")
    os.chmod(script, 0o644)

    engine = ExecutionEngine()
    with pytest.raises(SpawnFailed) as exc_info:
        engine.spawn(str(script), [str(script)])
    assert exc_info.value.errno == errno.EACCES


def test_environment_inherited_when_no_overrides():
    assert ExecutionEngine().environment is None


def test_environment_overrides_layer_over_os_environ(monkeypatch):
    monkeypatch.setenv("CMD_LIB_BASE", "base")
    engine = ExecutionEngine(env={"CMD_LIB_EXTRA": "extra"})
    assert engine.environment["CMD_LIB_BASE"] == "base"
    assert engine.environment["CMD_LIB_EXTRA"] == "extra"


def test_working_dir_as_string(tmp_path):
    engine = ExecutionEngine(working_dir=str(tmp_path))
    assert engine.working_dir == tmp_path
