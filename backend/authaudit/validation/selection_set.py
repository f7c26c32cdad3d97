"""
Minimal parser for the field sets carried by @requires and @fromContext.

Supports nested selections, inline fragments with or without a type
condition, aliases, and skips argument lists and directives. That covers
what composition accepts in those positions.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Union

_TOKEN = re.compile(r'"(?:[^"\\]|\\.)*"|\.\.\.|[{}():@$,=\[\]!]|[_A-Za-z][_0-9A-Za-z]*|-?\d+(?:\.\d+)?')


class SelectionSetParseError(ValueError):
    pass


@dataclass
class FieldSelection:
    name: str
    selections: List["Selection"] = field(default_factory=list)


@dataclass
class InlineFragment:
    type_condition: Optional[str]
    selections: List["Selection"] = field(default_factory=list)


Selection = Union[FieldSelection, InlineFragment]


def tokenize(source: str) -> List[str]:
    tokens = []
    pos = 0
    for match in _TOKEN.finditer(source):
        gap = source[pos:match.start()]
        if gap.strip(" \t\r\n,"):
            raise SelectionSetParseError(f"unexpected characters {gap.strip()!r} in selection set")
        if match.group() != ",":
            tokens.append(match.group())
        pos = match.end()
    if source[pos:].strip(" \t\r\n,"):
        raise SelectionSetParseError(f"unexpected characters {source[pos:].strip()!r} in selection set")
    return tokens


class _Parser:
    def __init__(self, tokens: List[str]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Optional[str]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def take(self, expected: Optional[str] = None) -> str:
        token = self.peek()
        if token is None:
            raise SelectionSetParseError("unexpected end of selection set")
        if expected is not None and token != expected:
            raise SelectionSetParseError(f"expected '{expected}' but found '{token}'")
        self.pos += 1
        return token

    def parse_document(self) -> List[Selection]:
        if self.peek() == "{":
            self.take("{")
            selections = self.parse_selections(closing="}")
            self.take("}")
        else:
            selections = self.parse_selections(closing=None)
        if self.peek() is not None:
            raise SelectionSetParseError(f"unexpected '{self.peek()}' after selection set")
        return selections

    def parse_selections(self, closing: Optional[str]) -> List[Selection]:
        selections: List[Selection] = []
        while self.peek() is not None and self.peek() != closing:
            selections.append(self.parse_selection())
        if not selections:
            raise SelectionSetParseError("empty selection set")
        return selections

    def parse_selection(self) -> Selection:
        if self.peek() == "...":
            self.take("...")
            type_condition = None
            if self.peek() == "on":
                self.take("on")
                type_condition = self.take_name()
            self.skip_directives()
            return InlineFragment(type_condition, self.parse_nested(required=True))

        name = self.take_name()
        if self.peek() == ":":
            self.take(":")
            name = self.take_name()
        if self.peek() == "(":
            self.skip_balanced("(", ")")
        self.skip_directives()
        return FieldSelection(name, self.parse_nested(required=False))

    def parse_nested(self, required: bool) -> List[Selection]:
        if self.peek() != "{":
            if required:
                raise SelectionSetParseError("inline fragment without selection set")
            return []
        self.take("{")
        selections = self.parse_selections(closing="}")
        self.take("}")
        return selections

    def take_name(self) -> str:
        token = self.take()
        if not re.match(r"[_A-Za-z]", token):
            raise SelectionSetParseError(f"expected a name but found '{token}'")
        return token

    def skip_directives(self):
        while self.peek() == "@":
            self.take("@")
            self.take_name()
            if self.peek() == "(":
                self.skip_balanced("(", ")")

    def skip_balanced(self, opening: str, closing: str):
        depth = 0
        while True:
            token = self.take()
            if token == opening:
                depth += 1
            elif token == closing:
                depth -= 1
                if depth == 0:
                    return


def parse_selection_set(source: str) -> List[Selection]:
    return _Parser(tokenize(source)).parse_document()
