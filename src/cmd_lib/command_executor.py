"""
Command Executor - Main entry point for running command text

ARCHITECTURE:
    run(text, variables)            run_capturing(text, variables)
        ↓                               ↓
    resolve_template() (only when variables are given)
        ↓                               ↓
    run_sequence(text)              capture_sequence(text)
        ├─ split on ';'                 ├─ split on ';' (must be ONE segment)
        └─ per segment:                 └─ split on '|'
             split on '|'                    ↓
             Pipeline.start/extend       Pipeline.start/extend
             wait_cmd_result → write     finalize → return output
             stop at first failure

RESPONSIBILITIES:
- Own the shared collaborators (lexer, resolver, engine, logger)
- Drive resolve → split → pipeline for each call style
- "Command" style: write captured output to the output stream
- "Function" style: return captured output as text

NOT RESPONSIBLE FOR:
- Spawning processes (ExecutionEngine)
- Stage wiring and exit status (Pipeline)
- Quote rules (QuoteState via CommandLexer/VariableResolver)

FAILURE POLICY:
A sequence stops at the first failing segment and the error propagates
unchanged. Output from earlier segments has already been written and is
NOT undone.

USAGE PATTERN:
    executor = CommandExecutor(working_dir=Path("/srv/app"))
    executor.run("date; ls -l | wc -l")
    version = executor.run_capturing("python3 --version").strip()
    executor.run("ls -l ${dir}", variables={"dir": "My Documents"})
"""
import logging
from pathlib import Path
from typing import Any, Dict, IO, Mapping, Optional, Union

from .command_lexer import CommandLexer
from .errors import MalformedCommand
from .execution_engine import ExecutionEngine
from .pipeline import Pipeline, PipelineResult
from .symbol_table import SymbolTable
from .variable_resolver import VariableResolver

Variables = Union[SymbolTable, Mapping[str, Any]]


class CommandExecutor:
    """
    Command execution coordinator.

    Args:
        working_dir: Directory commands run in (None → current directory)
        env: Environment overrides layered over os.environ
        output: Stream "command" style calls write to (default: sys.stdout
                at call time)
        logger: Logger instance shared with all collaborators
        strict: Reject unterminated quotes instead of ignoring them
        pipefail: Rightmost failing stage fails a pipeline, not only the last
    """

    def __init__(self, working_dir: Optional[Union[str, Path]] = None,
                 env: Optional[Dict[str, str]] = None,
                 output: Optional[IO[str]] = None,
                 logger: Optional[logging.Logger] = None,
                 strict: bool = False,
                 pipefail: bool = False):
        self.logger = logger or logging.getLogger('CommandExecutor')
        self.output = output
        self.pipefail = pipefail

        self.lexer = CommandLexer(strict=strict, logger=self.logger)
        self.resolver = VariableResolver(logger=self.logger)
        self.engine = ExecutionEngine(working_dir, env=env, logger=self.logger)

        self.logger.debug("CommandExecutor initialized")

    # ========================================================================
    # MAIN ENTRY POINTS
    # ========================================================================

    def run(self, command: str, variables: Optional[Variables] = None) -> None:
        """
        Run one or more ';'-separated, possibly piped, commands.

        Each segment's captured output is written to the output stream as
        soon as that segment finishes.

        Args:
            command: Command text
            variables: Symbol table for ${name}; None skips resolution

        Raises:
            CmdLibError subclass of the first failing segment
        """
        self.run_sequence(self._prepare(command, variables))

    def run_capturing(self, command: str, variables: Optional[Variables] = None) -> str:
        """
        Run a single (possibly piped) command and return its output.

        Args:
            command: Command text without ';' segments
            variables: Symbol table for ${name}; None skips resolution

        Returns:
            Captured stdout of the last stage, decoded
        """
        return self.capture_sequence(self._prepare(command, variables))

    def resolve_template(self, template: str, variables: Variables) -> str:
        """Expand ${name} references (see VariableResolver)"""
        return self.resolver.resolve(template, variables)

    def pipeline(self, first_stage: str) -> Pipeline:
        """
        Start a pipeline in builder style

        Example:
            executor.pipeline("du -ah .").extend("sort -hr").extend("head -n 5").finalize()
        """
        return Pipeline.start(first_stage, engine=self.engine, lexer=self.lexer,
                              logger=self.logger, pipefail=self.pipefail)

    # ========================================================================
    # SEQUENCE RUNNER
    # ========================================================================

    def run_sequence(self, text: str) -> None:
        """
        Run ';'-separated segments in order, stop at first failure.

        Args:
            text: Already-resolved command text
        """
        segments = self.lexer.split_commands(text)
        self.logger.debug(f"Sequence: {len(segments)} segment(s)")

        for segment in segments:
            self.build_pipeline(segment).wait_cmd_result(self.output)

    def capture_sequence(self, text: str) -> str:
        """
        Run a single segment and return its captured output.

        Raises:
            MalformedCommand: text is empty or has more than one ';' segment
        """
        segments = self.lexer.split_commands(text)
        if not segments:
            raise MalformedCommand(text, "empty command")
        if len(segments) > 1:
            raise MalformedCommand(text, "';' sequences cannot be captured, use run()")

        return self.run_pipeline(segments[0]).output

    def run_pipeline(self, segment: str) -> PipelineResult:
        """
        Build and finalize the pipeline for one segment.

        Raises:
            CommandFailed: the pipeline failed
            SpawnFailed: a stage could not be started
        """
        return self.build_pipeline(segment).finalize()

    def build_pipeline(self, segment: str) -> Pipeline:
        """
        Spawn every '|' stage of one segment, leaving the pipeline open.

        Raises:
            MalformedCommand: segment has no stages
            SpawnFailed: a stage could not be started
        """
        stages = self.lexer.split_pipes(segment)
        if not stages:
            raise MalformedCommand(segment, "empty command")

        self.logger.debug(f"Pipeline: {len(stages)} stage(s)")
        pipeline = self.pipeline(stages[0])
        for stage_command in stages[1:]:
            pipeline = pipeline.extend(stage_command)

        return pipeline

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _prepare(self, command: str, variables: Optional[Variables]) -> str:
        # Resolution must precede splitting: it can add quote characters
        if variables is None:
            return command
        return self.resolver.resolve(command, variables)


# ============================================================================
# MODULE-LEVEL HELPERS
# ============================================================================

_default_executor: Optional[CommandExecutor] = None


def get_default_executor() -> CommandExecutor:
    """Lazily created executor used by the module-level helpers"""
    global _default_executor
    if _default_executor is None:
        _default_executor = CommandExecutor()
    return _default_executor


def run(command: str, variables: Optional[Variables] = None) -> None:
    """Run command text, writing output to stdout"""
    get_default_executor().run(command, variables)


def run_capturing(command: str, variables: Optional[Variables] = None) -> str:
    """Run command text and return its captured output"""
    return get_default_executor().run_capturing(command, variables)


def pipe(first_stage: str) -> Pipeline:
    """Start a builder-style pipeline with the default executor"""
    return get_default_executor().pipeline(first_stage)
