"""
Tests for CommandLexer: tokenize, split_segments, parse_command_line
"""
import pytest

from cmd_lib.command_lexer import CommandLexer, tokenize, split_segments, parse_command_line
from cmd_lib.errors import MalformedCommand
from cmd_lib.quote_scanner import QuoteState


# ============================================================================
# TOKENIZE
# ============================================================================

def test_tokenize_plain_words():
    assert tokenize("a b c") == ["a", "b", "c"]


def test_tokenize_double_quoted_span_is_one_token():
    assert tokenize('a "b c" d') == ["a", "b c", "d"]


def test_tokenize_single_quoted_span_is_one_token():
    assert tokenize("a 'x y' z") == ["a", "x y", "z"]


def test_tokenize_whitespace_only():
    assert tokenize("   ") == []
    assert tokenize("") == []


def test_tokenize_collapses_runs_of_whitespace():
    assert tokenize("  ls\t-l \n  /tmp  ") == ["ls", "-l", "/tmp"]


def test_tokenize_empty_quotes_produce_nothing():
    assert tokenize('echo "" end') == ["echo", "end"]


def test_tokenize_quote_is_a_boundary():
    assert tokenize('a"b c"d') == ["a", "b c", "d"]


def test_tokenize_other_quote_kind_is_literal_inside_quotes():
    assert tokenize('echo "it\'s"') == ["echo", "it's"]
    assert tokenize("echo 'say \"hi\"'") == ["echo", 'say "hi"']


def test_tokenize_keeps_separators_inside_quotes():
    assert tokenize("grep 'a|b;c' file") == ["grep", "a|b;c", "file"]


def test_tokenize_unterminated_quote_is_benign_by_default():
    assert tokenize('echo "hello world') == ["echo", "hello world"]


def test_tokenize_strict_rejects_unterminated_quote():
    lexer = CommandLexer(strict=True)
    with pytest.raises(MalformedCommand, match="unterminated single quote"):
        lexer.tokenize("echo 'oops")


# ============================================================================
# SPLIT
# ============================================================================

def test_split_on_semicolon():
    assert split_segments("a;b;c", ";") == ["a", "b", "c"]


def test_split_ignores_separator_inside_quotes():
    assert split_segments('a;"b;c"', ";") == ["a", '"b;c"']


def test_split_keeps_quote_characters():
    assert split_segments("echo 'x | y' | cat", "|") == ["echo 'x | y'", "cat"]


def test_split_drops_empty_segments_and_strips():
    assert split_segments(" a ;; ; b ;", ";") == ["a", "b"]


def test_parse_command_line_structure():
    assert parse_command_line("ls -l | wc -l; date") == [["ls -l", "wc -l"], ["date"]]


def test_split_commands_and_pipes_helpers():
    lexer = CommandLexer()
    assert lexer.split_commands("x; y") == ["x", "y"]
    assert lexer.split_pipes("x | y | z") == ["x", "y", "z"]


# ============================================================================
# QUOTE STATE
# ============================================================================

def test_quote_state_does_not_nest_across_kinds():
    state = QuoteState()
    toggles = [state.feed(c) for c in "\"'\""]
    assert toggles == [True, False, True]
    assert not state.quoted


def test_quote_state_reports_unterminated():
    state = QuoteState()
    state.feed("'")
    assert state.in_single_quote
    assert state.unterminated
    state.reset()
    assert not state.unterminated
