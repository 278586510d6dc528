"""Data types for descriptors, export requests and generated stubs"""

from dataclasses import dataclass
from typing import Optional


class JavaType:
    """A Java type as encoded in a descriptor"""

    def to_descriptor(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class PrimitiveType(JavaType):
    """One of the eight primitive types, keyed by descriptor code"""
    code: str

    NAMES = {
        'Z': 'boolean',
        'B': 'byte',
        'C': 'char',
        'S': 'short',
        'I': 'int',
        'J': 'long',
        'F': 'float',
        'D': 'double',
    }

    def __post_init__(self):
        if self.code not in self.NAMES:
            raise ValueError(f"Not a primitive descriptor code: {self.code!r}")

    @property
    def name(self) -> str:
        return self.NAMES[self.code]

    def to_descriptor(self) -> str:
        return self.code


@dataclass(frozen=True)
class ClassType(JavaType):
    """Class type named by its binary name, e.g. java/lang/String"""
    name: str

    def __post_init__(self):
        if not self.name or ';' in self.name:
            raise ValueError(f"Not a binary class name: {self.name!r}")

    def to_descriptor(self) -> str:
        return f"L{self.name};"


@dataclass(frozen=True)
class ArrayType(JavaType):
    """Array type.

    The element is kept as its descriptor string rather than a nested
    JavaType; ``element()`` parses it back when needed.
    """
    element_descriptor: str

    def __post_init__(self):
        # Checked without the parser; it builds nested ArrayTypes itself
        component = self.element_descriptor.lstrip('[')
        if component in PrimitiveType.NAMES:
            return
        if (len(component) < 3 or component[0] != 'L' or component[-1] != ';'
                or ';' in component[1:-1]):
            raise ValueError(f"Not a field descriptor: {self.element_descriptor!r}")

    def element(self) -> JavaType:
        from .parser import DescriptorParser
        return DescriptorParser(self.element_descriptor).parse_field()

    @property
    def dimensions(self) -> int:
        return 1 + len(self.element_descriptor) - len(self.element_descriptor.lstrip('['))

    def to_descriptor(self) -> str:
        return f"[{self.element_descriptor}"


BOOLEAN = PrimitiveType('Z')
BYTE = PrimitiveType('B')
CHAR = PrimitiveType('C')
SHORT = PrimitiveType('S')
INT = PrimitiveType('I')
LONG = PrimitiveType('J')
FLOAT = PrimitiveType('F')
DOUBLE = PrimitiveType('D')


@dataclass(frozen=True)
class MethodSignature:
    """Parsed method descriptor; ``ret`` is None for void"""
    args: tuple[JavaType, ...] = ()
    ret: Optional[JavaType] = None

    def args_descriptor(self) -> str:
        """Argument list without parentheses, as fed to the mangler"""
        return "".join(arg.to_descriptor() for arg in self.args)

    def to_descriptor(self) -> str:
        ret = self.ret.to_descriptor() if self.ret is not None else 'V'
        return f"({self.args_descriptor()}){ret}"


@dataclass(frozen=True)
class ExportRequest:
    """Identity of one native method plus the function that implements it"""
    class_name: str
    method_name: str
    descriptor: str
    target: str

    @property
    def qualified_name(self) -> str:
        return f"{self.class_name.replace('/', '.')}.{self.method_name}"


@dataclass(frozen=True)
class NativeParam:
    """Parameter of a generated export"""
    type: str
    name: str

    def declaration(self) -> str:
        return f"{self.type} {self.name}"


@dataclass(frozen=True)
class ExportStub:
    """Generated export wrapper forwarding to a user function"""
    qualified_name: str
    symbol: str
    params: tuple[NativeParam, ...]
    return_type: Optional[str]
    target: str
    descriptor: str = ""

    @property
    def native_return(self) -> str:
        return self.return_type or 'void'

    def param_list(self) -> str:
        return ", ".join(p.declaration() for p in self.params)

    def call_args(self) -> str:
        return ", ".join(p.name for p in self.params)
