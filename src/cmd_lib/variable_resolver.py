"""
Variable Resolver - ${name} substitution before tokenization

RESPONSIBILITIES:
- Expand ${name} references from a caller-supplied SymbolTable
- Keep multi-word values together as ONE token downstream
- Reject undefined names and unterminated references

NOT RESPONSIBLE FOR:
- Environment variables ($HOME, $PATH stay literal text)
- Default/suffix/prefix forms (${x:-y}, ${x%.txt}) - not supported
- Tokenizing or splitting (runs BEFORE both, since it can add quotes)

SUBSTITUTION POLICY:
    Context            Template              Value 'a b'     Result
    ---------------    ------------------    -----------     -------------------
    bare               ls ${f}               a b             ls "a b"
    double-quoted      echo "x ${f} y"       a b             echo "x a b y"
    single-quoted      echo '${f}'           (not looked up) echo '${f}'

A bare reference is wrapped in double quotes so a value with spaces
stays one argument; inside double quotes the value joins the
surrounding literal text.
"""
import logging
from typing import Any, Mapping, Optional, Union

from .constants import REFERENCE_OPEN, REFERENCE_CLOSE, REFERENCE_TERMINATORS, DOUBLE_QUOTE
from .errors import UndefinedVariable, MalformedReference
from .quote_scanner import QuoteState
from .symbol_table import SymbolTable


class VariableResolver:
    """
    Expands ${name} references against a symbol table.

    Both failure modes raise recoverable errors after logging them; the
    resolver never exits the process.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger('VariableResolver')

    def resolve(self, template: str, symbols: Union[SymbolTable, Mapping[str, Any]]) -> str:
        """
        Substitute every ${name} outside single quotes.

        Args:
            template: Command text containing ${name} references
            symbols: SymbolTable or plain mapping

        Returns:
            Command text with references replaced

        Raises:
            MalformedReference: '${' not closed before ';', newline or end
            UndefinedVariable: name missing from symbols
        """
        table = SymbolTable.from_mapping(symbols)
        state = QuoteState()
        output = []
        length = len(template)
        i = 0

        while i < length:
            char = template[i]
            state.feed(char)

            if not state.in_single_quote and template.startswith(REFERENCE_OPEN, i):
                name, i = self._read_name(template, i + len(REFERENCE_OPEN))
                output.append(self._lookup(name, table, template, state.in_double_quote))
                continue

            output.append(char)
            i += 1

        resolved = ''.join(output)
        self.logger.debug(f"Resolved: {template!r} → {resolved!r}")
        return resolved

    def _read_name(self, template: str, start: int):
        """Read up to the closing brace; returns (name, index after '}')"""
        i = start
        while i < len(template) and template[i] != REFERENCE_CLOSE:
            if template[i] in REFERENCE_TERMINATORS:
                break
            i += 1

        name = template[start:i]
        if i >= len(template) or template[i] != REFERENCE_CLOSE:
            self.logger.error(f"invalid name {name}\n{template}")
            raise MalformedReference(name, template)
        return name, i + 1

    def _lookup(self, name: str, table: SymbolTable, template: str, in_double_quote: bool) -> str:
        if name not in table:
            self.logger.error(f"resolve {name} failed\n{template}")
            raise UndefinedVariable(name, template)

        value = table.get(name)
        if in_double_quote:
            return value
        return f"{DOUBLE_QUOTE}{value}{DOUBLE_QUOTE}"


_default_resolver = VariableResolver()


def resolve_template(template: str, symbols: Union[SymbolTable, Mapping[str, Any]]) -> str:
    """Resolve ${name} references with the default resolver"""
    return _default_resolver.resolve(template, symbols)
