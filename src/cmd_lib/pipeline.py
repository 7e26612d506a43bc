"""
Pipeline - live child processes wired stdout → stdin

ARCHITECTURE:
    Pipeline.start("du -ah .")      → Pipeline[du]
        .extend("sort -hr")         → Pipeline[du | sort]
        .extend("head -n 5")        → Pipeline[du | sort | head]
        .finalize()                 → PipelineResult / CommandFailed

Each extend()/finalize() CONSUMES the pipeline value it is called on:
the stage handles move into the returned value, and touching the old one
raises PipelineConsumedError. Exactly one pipeline is "open" at a time.

EXIT STATUS:
Only the LAST stage decides success (shell semantics without pipefail).
Upstream stages are reaped but their status is only recorded, unless the
pipeline was started with pipefail=True, in which case the rightmost
failing stage fails the whole pipeline.

RESOURCES:
- The parent closes its copy of each upstream stdout once the next stage
  holds it, so an upstream writer gets SIGPIPE when downstream exits
- Upstream stages are waited on in finalize(), AFTER the last stage's
  output is drained; waiting earlier can deadlock once a pipe buffer fills
- If a stage fails to spawn, already-running upstream stages are
  terminated and reaped before the error propagates
"""
import sys
import logging
import subprocess
from dataclasses import dataclass, field
from typing import IO, List, Optional, Tuple

from .command_lexer import CommandLexer
from .constants import PIPELINE_LABEL_JOINER, DEFAULT_ENCODING, DECODE_ERRORS
from .errors import CommandFailed, MalformedCommand, PipelineConsumedError, SpawnFailed
from .execution_engine import ExecutionEngine


@dataclass
class Stage:
    """One running process of a pipeline"""
    command: str                  # Stage text as written by the caller
    argv: List[str]               # Tokenized argument vector
    process: subprocess.Popen     # Live handle, stdout piped


@dataclass
class PipelineResult:
    """
    Outcome of a finalized pipeline.

    exit_code is None when the deciding stage was killed by a signal
    (signal then holds the signal number). stage_exit_codes holds one
    status per stage, upstream ones included, in raw Popen form: a
    negative value -N means that stage was killed by signal N.
    """
    label: str
    output: str
    exit_code: Optional[int]
    signal: Optional[int] = None
    stage_exit_codes: List[int] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    def __str__(self) -> str:
        status = self.exit_code if self.exit_code is not None else f"signal {self.signal}"
        return f"PipelineResult[{self.label} → {status}]"


def split_returncode(returncode: int) -> Tuple[Optional[int], Optional[int]]:
    """
    Popen return code → (exit_code, signal)

    Negative return codes mean the process was terminated by a signal.
    """
    if returncode < 0:
        return None, -returncode
    return returncode, None


class Pipeline:
    """
    Ordered chain of stage processes.

    Build with Pipeline.start(); do not call the constructor directly.
    """

    def __init__(self, stages: List[Stage], engine: ExecutionEngine, lexer: CommandLexer,
                 logger: logging.Logger, pipefail: bool = False):
        self._stages = stages
        self.engine = engine
        self.lexer = lexer
        self.logger = logger
        self.pipefail = pipefail
        self._consumed = False

    # ========================================================================
    # CONSTRUCTION
    # ========================================================================

    @classmethod
    def start(cls, stage_command: str,
              engine: Optional[ExecutionEngine] = None,
              lexer: Optional[CommandLexer] = None,
              logger: Optional[logging.Logger] = None,
              pipefail: bool = False) -> 'Pipeline':
        """
        Spawn the first stage.

        Args:
            stage_command: Command text of the first stage
            engine: ExecutionEngine to spawn with (default: fresh engine)
            lexer: CommandLexer to tokenize with (default: non-strict)
            logger: Logger instance
            pipefail: Fail on the rightmost failing stage, not just the last

        Returns:
            Open pipeline with one stage

        Raises:
            MalformedCommand: stage_command has no tokens
            SpawnFailed: executable could not be launched
        """
        logger = logger or logging.getLogger('Pipeline')
        engine = engine or ExecutionEngine(logger=logger)
        lexer = lexer or CommandLexer(logger=logger)

        stage = cls._spawn_stage(engine, lexer, stage_command, stdin=None)
        return cls([stage], engine, lexer, logger, pipefail)

    def extend(self, stage_command: str) -> 'Pipeline':
        """
        Spawn the next stage reading from the current last stage.

        Consumes this pipeline; use the returned one from now on.

        Args:
            stage_command: Command text of the new stage

        Returns:
            New open pipeline with one more stage

        Raises:
            PipelineConsumedError: this pipeline was already extended/finalized
            MalformedCommand: stage_command has no tokens
            SpawnFailed: executable could not be launched
        """
        self._consume()
        previous = self._stages[-1]

        try:
            stage = self._spawn_stage(self.engine, self.lexer, stage_command,
                                      stdin=previous.process.stdout)
        except (SpawnFailed, MalformedCommand):
            self._abort()
            raise

        # Allow previous stage to receive SIGPIPE if the new one exits
        previous.process.stdout.close()

        return Pipeline(self._stages + [stage], self.engine, self.lexer, self.logger, self.pipefail)

    @staticmethod
    def _spawn_stage(engine: ExecutionEngine, lexer: CommandLexer, stage_command: str, stdin) -> Stage:
        argv = lexer.tokenize(stage_command)
        if not argv:
            raise MalformedCommand(stage_command, "empty pipeline stage")
        process = engine.spawn(stage_command, argv, stdin=stdin)
        return Stage(command=stage_command.strip(), argv=argv, process=process)

    # ========================================================================
    # COMPLETION
    # ========================================================================

    def finalize(self, check: bool = True) -> PipelineResult:
        """
        Wait for the last stage and collect its output.

        Consumes this pipeline.

        Args:
            check: Raise CommandFailed on failure (False → return the
                   failed PipelineResult instead)

        Returns:
            PipelineResult with decoded output

        Raises:
            PipelineConsumedError: this pipeline was already extended/finalized
            CommandFailed: deciding stage exited non-zero or by signal
        """
        self._consume()
        last = self._stages[-1]

        self.logger.info(f"Running \"{self.label}\" ...")
        stdout, _ = last.process.communicate()

        for stage in self._stages[:-1]:
            stage.process.wait()

        returncodes = [stage.process.returncode for stage in self._stages]
        exit_code, signal = split_returncode(self._deciding_returncode(returncodes))

        result = PipelineResult(
            label=self.label,
            output=stdout.decode(DEFAULT_ENCODING, errors=DECODE_ERRORS),
            exit_code=exit_code,
            signal=signal,
            stage_exit_codes=returncodes,
        )
        self.logger.debug(f"{result} stages={returncodes}")

        if check and not result.success:
            raise CommandFailed(result.label, result.exit_code, result.signal)
        return result

    def wait_output(self) -> str:
        """Finalize and return captured output (raises on failure)"""
        return self.finalize().output

    def wait_cmd_result(self, output: Optional[IO[str]] = None) -> None:
        """
        Finalize and write captured output to a stream (raises on failure)

        Args:
            output: Destination stream (None → sys.stdout at call time)
        """
        text = self.finalize().output
        stream = output if output is not None else sys.stdout
        stream.write(text)
        stream.flush()

    def _deciding_returncode(self, returncodes: List[int]) -> int:
        if self.pipefail:
            for returncode in reversed(returncodes):
                if returncode != 0:
                    return returncode
        return returncodes[-1]

    # ========================================================================
    # OWNERSHIP
    # ========================================================================

    @property
    def label(self) -> str:
        """Stage commands joined with ' | '"""
        return PIPELINE_LABEL_JOINER.join(stage.command for stage in self._stages)

    @property
    def stages(self) -> List[Stage]:
        return list(self._stages)

    @property
    def consumed(self) -> bool:
        return self._consumed

    def _consume(self) -> None:
        if self._consumed:
            raise PipelineConsumedError(self.label)
        self._consumed = True

    def _abort(self) -> None:
        """Terminate and reap every running stage after a failed extend"""
        self.logger.debug(f"Aborting pipeline: {self.label}")
        for stage in self._stages:
            if stage.process.stdout is not None:
                stage.process.stdout.close()
            if stage.process.poll() is None:
                stage.process.terminate()
            stage.process.wait()

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else "open"
        return f"Pipeline({self.label!r}, {state})"
