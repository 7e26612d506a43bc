"""
Execution Engine - Single point for all subprocess spawning

ARCHITECTURE:
This is the SINGLE SUBPROCESS SPAWN POINT for cmd_lib.
No other module calls subprocess.Popen() directly.

Position in hierarchy:
    CommandExecutor
        ↓
    Pipeline (start / extend / finalize)
        ↓
    ExecutionEngine ← THIS CLASS (SINGLE POINT)
        ↓
    subprocess.Popen()

RESPONSIBILITIES:
1. Spawn one stage process from an argument vector
2. Apply working directory and environment overrides
3. Map OSError at spawn time to SpawnFailed
4. Logging: trace every spawn at debug level
5. Stats: count spawns and spawn failures

NOT RESPONSIBLE FOR:
- Tokenizing (CommandLexer)
- Wiring stages together or waiting (Pipeline)
- Deciding success/failure of commands (Pipeline.finalize)

SPAWN CONFIGURATION:
- stdin: inherited for the first stage, previous stage's stdout otherwise
- stdout: always a pipe (read by the next stage or by finalize)
- stderr: inherited, so diagnostics go straight to the host's stderr
- No shell: argv[0] is resolved through PATH by the OS
"""
import os
import subprocess
import logging
from pathlib import Path
from typing import Dict, IO, List, Optional, Union

from .errors import SpawnFailed


class ExecutionEngine:
    """
    The ONE place child processes are created.

    Pipeline asks for stages, the engine owns how they are launched:
    cwd, environment, stdio wiring and OSError translation.
    """

    def __init__(self, working_dir: Optional[Union[str, Path]] = None,
                 env: Optional[Dict[str, str]] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize execution engine.

        Args:
            working_dir: Directory stages run in (None → inherit caller's cwd)
            env: Extra environment variables layered over os.environ
                 (None → inherit environment unchanged)
            logger: Logger instance for spawn tracking
        """
        self.working_dir = Path(working_dir) if working_dir is not None else None
        self.logger = logger or logging.getLogger('ExecutionEngine')
        self.environment = self._setup_environment(env)

        # Execution statistics
        self.stats = {
            'spawned': 0,
            'spawn_failed': 0,
        }

    def _setup_environment(self, env: Optional[Dict[str, str]]) -> Optional[Dict[str, str]]:
        """
        Build the child environment

        Returns:
            None to inherit os.environ as-is, otherwise a full copy with
            overrides applied
        """
        if env is None:
            return None

        environment = os.environ.copy()
        environment.update(env)
        self.logger.debug(f"Environment overrides: {sorted(env)}")
        return environment

    def spawn(self, command: str, argv: List[str], stdin: Optional[IO[bytes]] = None) -> subprocess.Popen:
        """
        Spawn one pipeline stage.

        Args:
            command: Original stage text (for error messages)
            argv: Argument vector, argv[0] is the executable
            stdin: Previous stage's stdout, or None to inherit

        Returns:
            Running Popen with stdout piped

        Raises:
            SpawnFailed: Executable missing, not executable, or OS refused
        """
        self.logger.debug(f"Spawning: {argv}")

        try:
            process = subprocess.Popen(
                argv,
                stdin=stdin,
                stdout=subprocess.PIPE,
                cwd=str(self.working_dir) if self.working_dir is not None else None,
                env=self.environment,
            )
        except OSError as e:
            self.stats['spawn_failed'] += 1
            self.logger.error(f"Failed to spawn \"{command}\": {e}")
            raise SpawnFailed(command, argv, e.strerror or str(e), e.errno) from e

        self.stats['spawned'] += 1
        return process

    def __repr__(self) -> str:
        return f"ExecutionEngine(working_dir={self.working_dir}, stats={self.stats})"
