"""
cmd_lib - run shell-like command lines without a shell

Main components:
- CommandExecutor: run / run_capturing / resolve_template entry point
- Pipeline: builder-style stdout → stdin process chains
- CommandLexer: quote-aware tokenize and ';' / '|' splitting
- VariableResolver + SymbolTable: ${name} substitution
- ExecutionEngine: subprocess spawning
- CommandToolExecutor: dict-in / report-out tool facade
"""

from .command_executor import CommandExecutor, run, run_capturing, pipe
from .command_lexer import CommandLexer, tokenize, split_segments, parse_command_line
from .variable_resolver import VariableResolver, resolve_template
from .symbol_table import SymbolTable
from .pipeline import Pipeline, PipelineResult
from .execution_engine import ExecutionEngine
from .cmd_tool_executor import CommandToolExecutor
from .errors import (
    CmdLibError,
    SpawnFailed,
    CommandFailed,
    UndefinedVariable,
    MalformedReference,
    MalformedCommand,
    PipelineConsumedError,
)

__all__ = [
    'CommandExecutor',
    'run',
    'run_capturing',
    'pipe',
    'CommandLexer',
    'tokenize',
    'split_segments',
    'parse_command_line',
    'VariableResolver',
    'resolve_template',
    'SymbolTable',
    'Pipeline',
    'PipelineResult',
    'ExecutionEngine',
    'CommandToolExecutor',
    'CmdLibError',
    'SpawnFailed',
    'CommandFailed',
    'UndefinedVariable',
    'MalformedReference',
    'MalformedCommand',
    'PipelineConsumedError',
]
