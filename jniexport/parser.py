"""JVM type descriptor parser"""

import logging
from typing import Optional, Union

from .errors import DescriptorError
from .types import ArrayType, ClassType, JavaType, MethodSignature, PrimitiveType

logger = logging.getLogger(__name__)

PRIMITIVE_CODES = frozenset(PrimitiveType.NAMES)


class DescriptorParser:
    """Recursive-descent parser for field and method descriptors.

    Grammar:
        type      ::= primitive | 'L' name ';' | '[' type
        primitive ::= Z | B | C | S | I | J | F | D
        method    ::= '(' type* ')' [type | 'V']
    """

    def __init__(self, descriptor: Union[str, bytes]):
        if isinstance(descriptor, bytes):
            try:
                descriptor = descriptor.decode('utf-8')
            except UnicodeDecodeError as e:
                raise DescriptorError(repr(descriptor), e.start, "Invalid UTF-8") from e
        self.descriptor = descriptor
        self.pos = 0

    def _peek(self) -> str:
        if self.pos >= len(self.descriptor):
            return ""
        return self.descriptor[self.pos]

    def _read(self) -> str:
        ch = self._peek()
        self.pos += 1
        return ch

    def _error(self, reason: str, pos: Optional[int] = None) -> DescriptorError:
        return DescriptorError(self.descriptor, self.pos if pos is None else pos, reason)

    def _expect(self, expected: str):
        ch = self._peek()
        if ch != expected:
            got = f"'{ch}'" if ch else "end of descriptor"
            raise self._error(f"Expected '{expected}', got {got}")
        self.pos += 1

    def _expect_end(self):
        if self.pos != len(self.descriptor):
            raise self._error(f"Unexpected trailing '{self.descriptor[self.pos:]}'")

    @property
    def remaining(self) -> str:
        return self.descriptor[self.pos:]

    def parse_type(self) -> JavaType:
        """Parse one type at the current position, leaving the rest unread"""
        start = self.pos
        depth = 0
        while self._peek() == '[':
            self.pos += 1
            depth += 1

        ch = self._peek()
        if ch in PRIMITIVE_CODES:
            self.pos += 1
            component = PrimitiveType(ch)
        elif ch == 'L':
            component = self._parse_class()
        elif not ch:
            raise self._error("Unexpected end of descriptor")
        else:
            raise self._error(f"Unexpected char '{ch}'")

        if depth == 0:
            return component
        # Peel one level; the rest stays a descriptor string
        return ArrayType(self.descriptor[start + 1:self.pos])

    def _parse_class(self) -> ClassType:
        start = self.pos
        self._expect('L')
        end = self.descriptor.find(';', self.pos)
        if end < 0:
            raise self._error("Unterminated class name", start)
        if end == self.pos:
            raise self._error("Empty class name", start)
        name = self.descriptor[self.pos:end]
        self.pos = end + 1
        return ClassType(name)

    def parse_field(self) -> JavaType:
        """Parse a descriptor that must hold exactly one type"""
        ty = self.parse_type()
        self._expect_end()
        return ty

    def parse_method(self) -> MethodSignature:
        """Parse a complete method descriptor"""
        self._expect('(')
        args = []
        while self._peek() != ')':
            if not self._peek():
                raise self._error("Unterminated argument list")
            args.append(self.parse_type())
        self._expect(')')

        ret = None
        if self._peek() == 'V':
            self.pos += 1
        elif self._peek():
            ret = self.parse_type()
        self._expect_end()

        signature = MethodSignature(args=tuple(args), ret=ret)
        logger.debug("Parsed %s -> %s", self.descriptor, signature)
        return signature


def parse_type(descriptor: Union[str, bytes]) -> tuple[JavaType, Union[str, bytes]]:
    """Parse a leading type; the remainder keeps the input's str/bytes type"""
    parser = DescriptorParser(descriptor)
    ty = parser.parse_type()
    remaining = parser.remaining
    if isinstance(descriptor, bytes):
        return ty, remaining.encode('utf-8')
    return ty, remaining


def parse_method(descriptor: Union[str, bytes]) -> MethodSignature:
    return DescriptorParser(descriptor).parse_method()
