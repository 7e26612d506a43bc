"""
Quote Scanner - shared quote-state tracking

ARCHITECTURE:
    CommandLexer.tokenize()        ─┐
    CommandLexer.split_segments()  ─┼─→ QuoteState.feed(char)
    VariableResolver.resolve()     ─┘

All three text passes walk the command left to right and need the same
answer to "am I inside a quoted span right now?". Keeping the rule in one
place means tokenizing, splitting and resolving can never disagree about
where a quoted span starts or ends.

RULES:
- '"' toggles double-quote state only while NOT inside single quotes
- "'" toggles single-quote state only while NOT inside double quotes
- Quotes do not nest across kinds; there is no escape character

Example:
    >>> state = QuoteState()
    >>> [state.feed(c) for c in 'a"b\\'c"']
    [False, True, False, False, False, True]
    >>> state.quoted
    False
"""
from dataclasses import dataclass

from .constants import DOUBLE_QUOTE, SINGLE_QUOTE


@dataclass
class QuoteState:
    """Two-flag quote state machine"""

    in_single_quote: bool = False
    in_double_quote: bool = False

    def feed(self, char: str) -> bool:
        """
        Advance the state machine by one character.

        Args:
            char: Next character of the input

        Returns:
            True if char opened or closed a quoted span
        """
        if char == DOUBLE_QUOTE and not self.in_single_quote:
            self.in_double_quote = not self.in_double_quote
            return True
        if char == SINGLE_QUOTE and not self.in_double_quote:
            self.in_single_quote = not self.in_single_quote
            return True
        return False

    @property
    def quoted(self) -> bool:
        """Inside either kind of quoted span"""
        return self.in_single_quote or self.in_double_quote

    @property
    def unterminated(self) -> bool:
        # Only meaningful once the whole input has been fed
        return self.quoted

    def reset(self) -> None:
        self.in_single_quote = False
        self.in_double_quote = False
