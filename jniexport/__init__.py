"""
JNI Export Generator Package

Given a native method's class, name and type descriptor, generates:
  1. The parsed method signature
  2. The mangled symbol name the JVM looks up when linking
  3. A C export stub forwarding to a user-supplied function
"""

from .types import (
    JavaType, PrimitiveType, ClassType, ArrayType, MethodSignature,
    ExportRequest, NativeParam, ExportStub,
    BOOLEAN, BYTE, CHAR, SHORT, INT, LONG, FLOAT, DOUBLE,
)
from .errors import JniExportError, UsageError, DescriptorError
from .parser import DescriptorParser, parse_type, parse_method
from .mangling import mangle_name, symbol_name
from .type_mapper import TypeMapper
from .request import from_fields, from_path, resolve_request
from .export_generator import ExportGenerator, generate_export, build_export
from .manifest import ManifestParser

__all__ = [
    'JavaType', 'PrimitiveType', 'ClassType', 'ArrayType', 'MethodSignature',
    'ExportRequest', 'NativeParam', 'ExportStub',
    'BOOLEAN', 'BYTE', 'CHAR', 'SHORT', 'INT', 'LONG', 'FLOAT', 'DOUBLE',
    'JniExportError', 'UsageError', 'DescriptorError',
    'DescriptorParser', 'parse_type', 'parse_method',
    'mangle_name', 'symbol_name', 'TypeMapper',
    'from_fields', 'from_path', 'resolve_request',
    'ExportGenerator', 'generate_export', 'build_export',
    'ManifestParser',
]
