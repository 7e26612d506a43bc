"""
Command Lexer - quote-aware tokenizing and segment splitting

OBJECTIVE: Turn command text into the pieces the executor needs:
segments (';'), pipeline stages ('|') and argument vectors (whitespace).

============================================================================
USAGE
============================================================================

Argument vector for one stage:
    >>> tokenize('grep -r "TODO list" src')
    ['grep', '-r', 'TODO list', 'src']

Top-level segments:
    >>> split_segments('date; ls -l | wc -l', ';')
    ['date', 'ls -l | wc -l']
    >>> split_segments('echo "a|b" | cat', '|')
    ['echo "a|b"', 'cat']

Full structure of a command line:
    >>> parse_command_line('ls | wc -l; date')
    [['ls', 'wc -l'], ['date']]

============================================================================
RULES
============================================================================

TOKENIZE:
    - Outside quotes, whitespace AND quote characters are boundaries
    - Quote characters are stripped, never emitted as data
    - Empty/whitespace-only tokens are dropped ('""' yields nothing)
    - a"b c"d → ['a', 'b c', 'd']

SPLIT:
    - Only the separator (outside quotes) is a boundary
    - Quote characters are KEPT (the stage is tokenized again later)
    - Segments are stripped; empty ones are dropped

LIMITATIONS:
    - No escape character: a quote cannot appear inside its own kind
    - Unterminated quotes are accepted unless the lexer is strict
"""
import logging
from typing import List, Optional

from .constants import SEQUENCE_SEPARATOR, PIPE_SEPARATOR
from .errors import MalformedCommand
from .quote_scanner import QuoteState


class CommandLexer:
    """
    Lexer for cmd_lib command text.

    Handles:
    - Quotes (single, double) via QuoteState
    - Separators (';' and '|')
    - Whitespace separation

    Args:
        strict: Raise MalformedCommand on unterminated quotes instead of
                silently ending the scan
        logger: Logger instance
    """

    def __init__(self, strict: bool = False, logger: Optional[logging.Logger] = None):
        self.strict = strict
        self.logger = logger or logging.getLogger('CommandLexer')

    def tokenize(self, text: str) -> List[str]:
        """
        Split one command into its argument vector.

        Args:
            text: Single stage command text (no separators expected)

        Returns:
            List of tokens; first is the executable
        """
        state = QuoteState()
        tokens = []
        current = []

        for char in text:
            is_quote = state.feed(char)
            if is_quote or (not state.quoted and char.isspace()):
                self._flush(current, tokens)
                continue
            current.append(char)

        self._flush(current, tokens)
        self._check_terminated(state, text)

        self.logger.debug(f"Tokens: {tokens}")
        return tokens

    def split_segments(self, text: str, separator: str) -> List[str]:
        """
        Split text on separator, ignoring separators inside quotes.

        Args:
            text: Command text
            separator: Single separator character (';' or '|')

        Returns:
            Stripped, non-empty segments in original order
        """
        state = QuoteState()
        segments = []
        current = []

        for char in text:
            state.feed(char)
            if char == separator and not state.quoted:
                self._flush(current, segments)
                continue
            current.append(char)

        self._flush(current, segments)
        self._check_terminated(state, text)

        segments = [segment.strip() for segment in segments]
        self.logger.debug(f"Split on '{separator}': {segments}")
        return segments

    def split_commands(self, text: str) -> List[str]:
        """Independent ';'-separated commands"""
        return self.split_segments(text, SEQUENCE_SEPARATOR)

    def split_pipes(self, text: str) -> List[str]:
        """'|'-separated pipeline stages"""
        return self.split_segments(text, PIPE_SEPARATOR)

    def parse_command_line(self, text: str) -> List[List[str]]:
        """
        Full structure: one list of stage commands per ';' segment.

        Stages are NOT tokenized here; Pipeline tokenizes each stage
        right before spawning it.
        """
        return [self.split_pipes(segment) for segment in self.split_commands(text)]

    @staticmethod
    def _flush(current: List[str], out: List[str]) -> None:
        piece = ''.join(current)
        current.clear()
        if piece.strip():
            out.append(piece)

    def _check_terminated(self, state: QuoteState, text: str) -> None:
        if not state.unterminated:
            return
        kind = 'single' if state.in_single_quote else 'double'
        if self.strict:
            raise MalformedCommand(text, f"unterminated {kind} quote")
        self.logger.debug(f"Unterminated {kind} quote in: {text}")


# ============================================================================
# MODULE-LEVEL HELPERS
# ============================================================================

_default_lexer = CommandLexer()


def tokenize(text: str) -> List[str]:
    """Tokenize with a non-strict lexer"""
    return _default_lexer.tokenize(text)


def split_segments(text: str, separator: str) -> List[str]:
    """Split on separator with a non-strict lexer"""
    return _default_lexer.split_segments(text, separator)


def parse_command_line(text: str) -> List[List[str]]:
    """Segments → stages with a non-strict lexer"""
    return _default_lexer.parse_command_line(text)
