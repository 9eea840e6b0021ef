"""
Text notation parser for ChainLog.

Syntax:
    ?X                      variable
    Socrates, "two words"   constants (inside argument lists)
    human(Socrates)         predicate
    raining                 arity-0 predicate (at top level)
    human(?X) => mortal(?X) rule; antecedents are comma separated

A program is one fact or rule per line. Blank lines and '#' comments
are ignored and a trailing '.' is optional.

Inside an argument list a bare identifier is always a constant, so a
nested arity-0 predicate displays as `f(g)` but reads back as f applied
to the constant g. Write `f(g())` to keep it a predicate.
"""

import re
from typing import List, Optional, Tuple
from .terms import Term, Constant, Variable, Predicate
from .knowledge import Rule
from .errors import ParseError


_TOKEN_RE = re.compile(r"""
    (?P<WS>\s+)
  | (?P<COMMENT>\#.*)
  | (?P<ARROW>=>)
  | (?P<VAR>\?[A-Za-z_][A-Za-z0-9_]*)
  | (?P<STRING>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')
  | (?P<IDENT>[A-Za-z0-9_]+)
  | (?P<LPAREN>\()
  | (?P<RPAREN>\))
  | (?P<COMMA>,)
  | (?P<DOT>\.)
""", re.VERBOSE)

_SKIPPED = ("WS", "COMMENT")


def _tokenize(text: str) -> List[Tuple[str, str, int]]:
    """Split text into (kind, value, position) tokens."""
    tokens = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise ParseError(f"Unexpected character {text[pos]!r}", text, pos)
        kind = m.lastgroup
        if kind not in _SKIPPED:
            tokens.append((kind, m.group(), pos))
        pos = m.end()
    return tokens


def _unquote(literal: str) -> str:
    return re.sub(r"\\(.)", r"\1", literal[1:-1])


class _Parser:
    """Recursive descent over a token list"""

    def __init__(self, text: str):
        self.text = text
        self.tokens = _tokenize(text)
        self.index = 0

    def peek(self) -> Optional[Tuple[str, str, int]]:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def advance(self) -> Tuple[str, str, int]:
        token = self.peek()
        if token is None:
            raise ParseError("Unexpected end of input", self.text)
        self.index += 1
        return token

    def expect(self, kind: str) -> Tuple[str, str, int]:
        token = self.advance()
        if token[0] != kind:
            raise ParseError(f"Expected {kind}, got {token[1]!r}", self.text, token[2])
        return token

    def at(self, kind: str) -> bool:
        token = self.peek()
        return token is not None and token[0] == kind

    def finish(self) -> None:
        """Accept an optional trailing '.' and require end of input"""
        if self.at("DOT"):
            self.advance()
        token = self.peek()
        if token is not None:
            raise ParseError(f"Unexpected {token[1]!r}", self.text, token[2])

    def term(self) -> Term:
        kind, value, pos = self.advance()
        if kind == "VAR":
            return Variable(value[1:])
        if kind == "STRING":
            return Constant(_unquote(value))
        if kind == "IDENT":
            if self.at("LPAREN"):
                return Predicate(value, self.arguments())
            return Constant(value)
        raise ParseError(f"Expected a term, got {value!r}", self.text, pos)

    def arguments(self) -> List[Term]:
        self.expect("LPAREN")
        args: List[Term] = []
        if self.at("RPAREN"):
            self.advance()
            return args
        args.append(self.term())
        while self.at("COMMA"):
            self.advance()
            args.append(self.term())
        self.expect("RPAREN")
        return args

    def predicate(self) -> Predicate:
        token = self.peek()
        if token is None:
            raise ParseError("Expected a predicate", self.text)
        if token[0] != "IDENT":
            raise ParseError(f"Expected a predicate, got {token[1]!r}", self.text, token[2])
        self.advance()
        if self.at("LPAREN"):
            return Predicate(token[1], self.arguments())
        return Predicate(token[1], [])

    def rule(self) -> Rule:
        antecedents: List[Predicate] = []
        if not self.at("ARROW"):
            antecedents.append(self.predicate())
            while self.at("COMMA"):
                self.advance()
                antecedents.append(self.predicate())
        self.expect("ARROW")
        consequent = self.predicate()
        return Rule(antecedents, consequent)


def parse_term(text: str) -> Term:
    """
    Parse a single term.

    A bare identifier parses as a constant here; use ``parse_fact`` to
    read it as an arity-0 predicate.

    Examples:
        >>> parse_term("teacherOf(Socrates, ?Y)")
        Predicate(functor='teacherOf', args=(Constant(value='Socrates'), Variable(name='Y')))
    """
    parser = _Parser(text)
    term = parser.term()
    parser.finish()
    return term


def parse_fact(text: str) -> Predicate:
    """
    Parse a predicate such as ``human(Socrates)`` or ``raining``.

    Groundness is not checked here; the fact store rejects non-ground facts.
    """
    parser = _Parser(text)
    predicate = parser.predicate()
    parser.finish()
    return predicate


def parse_rule(text: str) -> Rule:
    """
    Parse a rule such as ``teacherOf(?X, ?Y) => studentOf(?Y, ?X)``.
    """
    parser = _Parser(text)
    rule = parser.rule()
    parser.finish()
    return rule


def parse_program(text: str) -> Tuple[List[Predicate], List[Rule]]:
    """
    Parse a multi-line program into facts and rules.

    Returns:
        (facts, rules) in the order they appear

    Raises:
        ParseError: naming the offending line
    """
    facts: List[Predicate] = []
    rules: List[Rule] = []

    for line_number, line in enumerate(text.splitlines(), 1):
        try:
            parser = _Parser(line)
            if not parser.tokens:
                continue
            if any(kind == "ARROW" for kind, _, _ in parser.tokens):
                rules.append(parser.rule())
            else:
                facts.append(parser.predicate())
            parser.finish()
        except ParseError as e:
            raise ParseError(f"Line {line_number}: {e}") from e

    return facts, rules
