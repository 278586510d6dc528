"""Export Generator - generates JNI export stubs for native methods"""

import logging
from typing import Iterable, Optional

from .errors import JniExportError, UsageError
from .mangling import symbol_name
from .parser import parse_method
from .type_mapper import TypeMapper
from .types import ExportRequest, ExportStub, MethodSignature, NativeParam

logger = logging.getLogger(__name__)


def generate_export(qualified_name: str, signature: MethodSignature, symbol: str,
                    user_function: str, log: Optional[logging.Logger] = None) -> ExportStub:
    """Build the stub that exports ``user_function`` as ``symbol``.

    The stub takes the env and class handles followed by one parameter per
    descriptor argument, in order, and passes all of them straight through.
    """
    params = [
        NativeParam(TypeMapper.ENV_TYPE, 'env'),
        NativeParam(TypeMapper.CLASS_TYPE, 'cls'),
    ]
    for i, arg in enumerate(signature.args):
        params.append(NativeParam(TypeMapper.to_jni(arg), f'arg{i}'))

    stub = ExportStub(
        qualified_name=qualified_name,
        symbol=symbol,
        params=tuple(params),
        return_type=TypeMapper.return_to_jni(signature.ret),
        target=user_function,
        descriptor=signature.to_descriptor(),
    )
    (log or logger).debug("%s: %s(%s) -> %s", qualified_name, symbol,
                          stub.param_list(), stub.native_return)
    return stub


def build_export(request: ExportRequest, log: Optional[logging.Logger] = None) -> ExportStub:
    """Parse, mangle and generate the stub for one request"""
    signature = parse_method(request.descriptor)
    symbol = symbol_name(request.class_name, request.method_name, signature.args_descriptor())
    return generate_export(request.qualified_name, signature, symbol, request.target, log)


class ExportGenerator:
    """Generates the C header and source exporting a set of native methods"""

    def __init__(self, namespace: str, logger: Optional[logging.Logger] = None):
        self.namespace = namespace
        self.logger = logger or logging.getLogger(__name__)
        # symbol -> qualified name of the method exporting it
        self.exported = {}

    def export(self, request: ExportRequest) -> ExportStub:
        """Build one stub; a symbol already exported by this generator is a UsageError"""
        stub = build_export(request, self.logger)
        if stub.symbol in self.exported:
            raise UsageError(
                f"{request.qualified_name} exports {stub.symbol}, "
                f"already exported by {self.exported[stub.symbol]}",
                field='name',
            )
        self.exported[stub.symbol] = request.qualified_name
        self.logger.info("Exported %s as %s", request.qualified_name, stub.symbol)
        return stub

    def generate_all(self, requests: Iterable[ExportRequest]
                     ) -> tuple[list[ExportStub], list[tuple[ExportRequest, JniExportError]]]:
        """Generate every request independently.

        A failing request is recorded and skipped; the others still produce
        stubs. Returns (stubs, failures).
        """
        stubs = []
        failures = []
        for request in requests:
            try:
                stub = self.export(request)
            except JniExportError as e:
                self.logger.error("Failed to export %s: %s", request.qualified_name, e)
                failures.append((request, e))
                continue
            stubs.append(stub)
        return stubs, failures

    def generate_header(self, stubs: Iterable[ExportStub]) -> str:
        """Generate the JNI export declarations header"""
        guard = f"{self.namespace.upper()}_EXPORTS_H"
        lines = [
            "// AUTO-GENERATED - DO NOT EDIT",
            f"#ifndef {guard}",
            f"#define {guard}",
            "",
            "#include <jni.h>",
            "",
            "#ifdef __cplusplus",
            'extern "C" {',
            "#endif",
            "",
        ]

        for stub in stubs:
            lines.append(f"/* {stub.qualified_name} {stub.descriptor} */")
            lines.append(f"{self._export_signature(stub)};")

        lines.extend([
            "",
            "#ifdef __cplusplus",
            "}",
            "#endif",
            "",
            f"#endif // {guard}",
        ])
        return "\n".join(lines)

    def generate_impl(self, stubs: Iterable[ExportStub], header: str) -> str:
        """Generate export definitions forwarding to the user functions"""
        stubs = list(stubs)
        lines = [
            "// AUTO-GENERATED - DO NOT EDIT",
            f'#include "{header}"',
            "",
        ]

        # User functions, declared with the prototype each export calls them with
        declared = set()
        for stub in stubs:
            decl = f"extern {stub.native_return} {stub.target}({stub.param_list()});"
            if decl not in declared:
                declared.add(decl)
                lines.append(decl)
        if declared:
            lines.append("")

        for stub in stubs:
            lines.extend(self._export_impl(stub))

        return "\n".join(lines)

    def _export_signature(self, stub: ExportStub) -> str:
        return f"JNIEXPORT {stub.native_return} JNICALL {stub.symbol}({stub.param_list()})"

    def _export_impl(self, stub: ExportStub) -> list[str]:
        call = f"{stub.target}({stub.call_args()});"
        if stub.return_type is not None:
            call = f"return {call}"
        return [
            f"{self._export_signature(stub)} {{",
            f"    {call}",
            "}",
            "",
        ]
