"""
Tool base - a command runner exposed behind a dict-in / text-out call

ARCHITECTURE:
    tool_input dict ──→ ToolExecutor.execute() ──→ "Exit code: N ..." report
                              │
                              └─ CommandToolExecutor runs it through CommandExecutor

A tool is either accepting commands (enabled) or rejecting them. A
rejecting tool answers every call with disabled_report() and starts no
process.

RESPONSIBILITIES:
- Tool name, accept/reject switch and the ToolExecutor.<name> logger
- execute() and get_definition() hooks for concrete tools
- The report text for a rejected call

NOT RESPONSIBLE FOR:
- Parsing, variable resolution, pipelines (CommandExecutor and below)
- Report formatting for completed runs (concrete tools)
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict


class ToolExecutor(ABC):
    """
    Named command tool that can be switched off.

    Args:
        name: Tool name, also used in the input schema (e.g. 'cmd_tool')
        enabled: Accept commands from the start (default: True)
    """

    def __init__(self, name: str, enabled: bool = True):
        self.name = name
        self.enabled = enabled
        self.logger = logging.getLogger(f"ToolExecutor.{name}")

    @abstractmethod
    def execute(self, tool_input: Dict) -> str:
        """
        Run the command text carried by tool_input.

        Args:
            tool_input: Keys as declared by get_definition()

        Returns:
            Report text: exit code plus output, or "Error: ..." when
            nothing ran to completion
        """

    @abstractmethod
    def get_definition(self) -> Dict:
        """Tool name, description and JSON schema of tool_input"""

    def disabled_report(self) -> str:
        """Report returned instead of running anything while disabled"""
        self.logger.debug(f"Rejected call, '{self.name}' is disabled")
        return f"Error: tool '{self.name}' is disabled"

    def enable(self):
        self.enabled = True
        self.logger.info(f"'{self.name}' now accepting commands")

    def disable(self):
        self.enabled = False
        self.logger.info(f"'{self.name}' now rejecting commands")
