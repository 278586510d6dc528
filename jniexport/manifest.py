"""Parser for export manifests.

Each statement is one export annotation in either form:

    export(class = "com.example.Test", name = "add", sig = "(II)I") -> test_add;
    export("com.example.Test.add", "(II)I") -> test_add;
"""

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional

from .errors import UsageError
from .request import resolve_request
from .types import ExportRequest

TOKEN_RE = re.compile(r'''
    (?P<string>"(?:[^"\\\n]|\\.)*")
  | (?P<comment>//[^\n]*|/\*[\s\S]*?\*/)
  | (?P<arrow>->)
  | (?P<ident>[A-Za-z_]\w*)
  | (?P<punct>[(),=;])
  | (?P<newline>\n)
  | (?P<space>[ \t\r]+)
  | (?P<other>.)
''', re.VERBOSE)


@dataclass
class ManifestEntry:
    """One export statement as written"""
    line: int
    positional: list[str] = field(default_factory=list)
    named: list[tuple[str, str]] = field(default_factory=list)
    target: Optional[str] = None

    def to_request(self) -> ExportRequest:
        fields = {}
        for key, value in self.named:
            if key in fields:
                raise UsageError(f"line {self.line}: duplicate field '{key}'", field=key)
            fields[key] = value
        return resolve_request(self.positional, fields, self.target)


class ManifestParser:
    """Parses an export manifest into entries"""

    def __init__(self, content: str):
        self.content = content

    def _tokens(self) -> Iterator[tuple[str, str, int]]:
        line = 1
        for m in TOKEN_RE.finditer(self.content):
            kind = m.lastgroup
            if kind == 'newline':
                line += 1
            elif kind == 'comment':
                line += m.group().count('\n')
            elif kind == 'space':
                continue
            elif kind == 'other':
                raise UsageError(f"line {line}: unexpected '{m.group()}'")
            else:
                yield kind, m.group(), line
        yield 'eof', '', line

    def _advance(self) -> tuple[str, str, int]:
        self.tok = next(self._stream)
        return self.tok

    def _expect(self, kind: str, value: str):
        tok_kind, tok_value, line = self.tok
        if tok_kind != kind or tok_value != value:
            got = tok_value or 'end of file'
            raise UsageError(f"line {line}: expected '{value}', got '{got}'")
        self._advance()

    def parse(self) -> list[ManifestEntry]:
        self._stream = self._tokens()
        self._advance()
        entries = []
        while self.tok[0] != 'eof':
            entries.append(self._parse_statement())
        return entries

    def requests(self) -> list[ExportRequest]:
        return [entry.to_request() for entry in self.parse()]

    def _parse_statement(self) -> ManifestEntry:
        kind, value, line = self.tok
        if (kind, value) != ('ident', 'export'):
            raise UsageError(f"line {line}: expected 'export', got '{value or 'end of file'}'")
        entry = ManifestEntry(line=line)
        self._advance()

        self._expect('punct', '(')
        if self.tok[1] != ')':
            self._parse_argument(entry)
            while self.tok[1] == ',':
                self._advance()
                self._parse_argument(entry)
        self._expect('punct', ')')
        self._expect('arrow', '->')

        kind, value, line = self.tok
        if kind != 'ident':
            raise UsageError(f"line {line}: expected function name after '->'", field='target')
        entry.target = value
        self._advance()
        self._expect('punct', ';')
        return entry

    def _parse_argument(self, entry: ManifestEntry):
        kind, value, line = self.tok
        if kind == 'string':
            entry.positional.append(self._unquote(value))
            self._advance()
        elif kind == 'ident':
            self._advance()
            self._expect('punct', '=')
            if self.tok[0] != 'string':
                raise UsageError(f"line {self.tok[2]}: value of '{value}' must be a string", field=value)
            entry.named.append((value, self._unquote(self.tok[1])))
            self._advance()
        else:
            raise UsageError(f"line {line}: unexpected '{value or 'end of file'}'")

    def _unquote(self, literal: str) -> str:
        return re.sub(r'\\(.)', r'\1', literal[1:-1])
