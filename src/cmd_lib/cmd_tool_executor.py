"""
Command Tool Executor - dict-in / report-out facade over CommandExecutor

ARCHITECTURE:
    CALLER (agent, RPC handler, ...)
       ↓  {"command": "...", "variables": {...}, "capture": false}
    CommandToolExecutor (this class) ← THIN ORCHESTRATOR
       ↓
    CommandExecutor.run() / run_capturing()

RESPONSIBILITIES:
1. Validate the input dict
2. Pick call style: capture=True → run_capturing, else run
3. Turn CmdLibError into an "Exit code: N (error)" / "Error: ..." report
4. Publish the input schema via get_definition()

NOT RESPONSIBLE FOR:
- Anything about parsing or processes (CommandExecutor and below)

API CONTRACT:
execute() returns a string formatted as:
    Exit code: N [\\n\\n output]
or, when nothing ran to completion:
    Error: <message>

In "command" style the output is collected through an in-memory stream,
so every completed segment shows up in the report even if a later one
failed.
"""
import io
from pathlib import Path
from typing import Dict, Optional, Union

from .command_executor import CommandExecutor
from .errors import CmdLibError, CommandFailed
from .tool_executor import ToolExecutor


class CommandToolExecutor(ToolExecutor):
    """
    Tool wrapper around CommandExecutor.

    Args:
        working_dir: Directory commands run in
        enabled: Tool enabled state
        **executor_options: Forwarded to CommandExecutor (env, strict, pipefail)
    """

    def __init__(self, working_dir: Optional[Union[str, Path]] = None,
                 enabled: bool = True, **executor_options):
        super().__init__('cmd_tool', enabled)
        self.working_dir = working_dir
        self.executor_options = executor_options
        self.logger.info("CommandToolExecutor initialized")

    def execute(self, tool_input: dict) -> str:
        """
        Run tool_input['command'] and format the result.

        Keys:
            command (required): Command text
            variables (optional): Mapping for ${name} substitution
            capture (optional): Single pipeline, return its output only
        """
        if not self.enabled:
            return self.disabled_report()

        command = tool_input.get('command', '')
        if not command:
            return "Error: command parameter is required"

        variables = tool_input.get('variables')
        capture = bool(tool_input.get('capture', False))

        self.logger.info(f"Executing: {command[:100]}")

        buffer = io.StringIO()
        executor = CommandExecutor(
            working_dir=self.working_dir,
            output=buffer,
            logger=self.logger,
            **self.executor_options
        )

        try:
            if capture:
                output = executor.run_capturing(command, variables)
            else:
                executor.run(command, variables)
                output = buffer.getvalue()
            return self._format_result(0, output)

        except CommandFailed as e:
            self.logger.warning(f"Command failed: {e}")
            return self._format_result(e.exit_code, buffer.getvalue(), str(e))

        except CmdLibError as e:
            self.logger.error(f"Execution error: {e}", exc_info=True)
            return f"Error: {str(e)}"

    def _format_result(self, exit_code: Optional[int], output: str, error: str = "") -> str:
        lines = []

        if exit_code == 0:
            lines.append(f"Exit code: {exit_code}")
        else:
            code = exit_code if exit_code is not None else "unknown"
            lines.append(f"Exit code: {code} (error)")

        if output:
            lines.append("")
            lines.append(output.rstrip())

        if error:
            lines.append("")
            lines.append("--- error ---")
            lines.append(error)

        return '\n'.join(lines)

    def get_definition(self) -> Dict:
        """Return cmd_tool definition"""
        return {
            "name": self.name,
            "description": "Run a command line (';' sequences and '|' pipelines, no shell)",
            "input_schema": {
                "type": "object",
                "properties": {
                    "command": {
                        "type": "string",
                        "description": "Command text to run"
                    },
                    "variables": {
                        "type": "object",
                        "description": "Values for ${name} references in command",
                        "additionalProperties": {"type": "string"}
                    },
                    "capture": {
                        "type": "boolean",
                        "description": "Run a single pipeline and return only its output"
                    }
                },
                "required": ["command"]
            }
        }
