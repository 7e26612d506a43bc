"""
Tests for CommandToolExecutor report formatting
"""
from cmd_lib.cmd_tool_executor import CommandToolExecutor


def test_successful_command_report():
    tool = CommandToolExecutor()
    assert tool.execute({"command": "echo hi"}) == "Exit code: 0\n\nhi"


def test_failed_sequence_report_keeps_earlier_output():
    tool = CommandToolExecutor()
    report = tool.execute({"command": "echo one; sh -c 'exit 3'; echo two"})
    lines = report.split("\n")
    assert lines[0] == "Exit code: 3 (error)"
    assert "one" in lines
    assert "two" not in lines
    assert "--- error ---" in lines


def test_capture_with_variables():
    tool = CommandToolExecutor()
    report = tool.execute({
        "command": "echo ${greeting} | wc -w",
        "variables": {"greeting": "good morning"},
        "capture": True,
    })
    assert report.split("\n")[0] == "Exit code: 0"
    assert report.split("\n")[-1].strip() == "2"


def test_missing_command():
    tool = CommandToolExecutor()
    assert tool.execute({}) == "Error: command parameter is required"


def test_undefined_variable_is_reported():
    tool = CommandToolExecutor()
    report = tool.execute({"command": "echo ${x}", "variables": {}})
    assert report.startswith("Error: resolve x failed")


def test_spawn_failure_is_reported():
    tool = CommandToolExecutor()
    report = tool.execute({"command": "cmd-lib-no-such-program"})
    assert report.startswith('Error: failed to spawn "cmd-lib-no-such-program"')


def test_working_dir_is_forwarded(tmp_path):
    (tmp_path / "inside.txt").write_text("x")
    tool = CommandToolExecutor(working_dir=tmp_path)
    assert "inside.txt" in tool.execute({"command": "ls"})


def test_disabled_tool():
    tool = CommandToolExecutor(enabled=False)
    assert tool.execute({"command": "echo hi"}) == "Error: tool 'cmd_tool' is disabled"
    tool.enable()
    assert tool.execute({"command": "echo hi"}).startswith("Exit code: 0")


def test_disable_stops_running_commands(tmp_path):
    tool = CommandToolExecutor(working_dir=tmp_path)
    tool.disable()
    assert not tool.enabled
    assert tool.execute({"command": "touch created"}) == tool.disabled_report()
    assert not (tmp_path / "created").exists()


def test_definition_schema():
    definition = CommandToolExecutor().get_definition()
    assert definition["name"] == "cmd_tool"
    assert definition["input_schema"]["required"] == ["command"]
    assert set(definition["input_schema"]["properties"]) == {"command", "variables", "capture"}
