"""Builds export requests from the two accepted invocation forms:

    named fields:    class = "com.example.Test", name = "m", sig = "(I)I"
    dotted path:     "com.example.Test.m", "(I)I"
"""

import logging
from typing import Mapping, Optional, Sequence

from .errors import UsageError
from .types import ExportRequest

logger = logging.getLogger(__name__)

FIELD_NAMES = ('class', 'name', 'sig')


def normalize_class_name(class_name: str) -> str:
    """Convert a dotted class name to its binary (slash) form"""
    return class_name.replace('.', '/')


def _require(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise UsageError(f"missing '{field}'", field=field)
    return value.strip()


def from_fields(class_name: Optional[str], name: Optional[str], sig: Optional[str],
                target: Optional[str]) -> ExportRequest:
    """Build a request from separately named class, method and descriptor"""
    class_name = _require(class_name, 'class')
    name = _require(name, 'name')
    sig = _require(sig, 'sig')
    target = _require(target, 'target')
    return ExportRequest(
        class_name=normalize_class_name(class_name),
        method_name=name,
        descriptor=sig,
        target=target,
    )


def from_path(path: Optional[str], sig: Optional[str], target: Optional[str]) -> ExportRequest:
    """Build a request from a dotted ``<package>.<Class>.<method>`` path"""
    path = _require(path, 'path')
    class_name, dot, name = path.rpartition('.')
    if not dot or not class_name or not name:
        raise UsageError(f"'{path}' is not a <Class>.<method> path", field='path')
    return from_fields(class_name, name, sig, target)


def resolve_request(positional: Sequence[str], named: Mapping[str, str],
                    target: Optional[str]) -> ExportRequest:
    """Pick the invocation form, rejecting anything that mixes the two"""
    if positional and named:
        raise UsageError("named and positional arguments cannot be mixed")

    if named:
        unknown = sorted(set(named) - set(FIELD_NAMES))
        if unknown:
            raise UsageError(f"unknown field '{unknown[0]}'", field=unknown[0])
        request = from_fields(named.get('class'), named.get('name'), named.get('sig'), target)
    elif len(positional) == 2:
        request = from_path(positional[0], positional[1], target)
    else:
        raise UsageError(f"expected a path and a descriptor, got {len(positional)} argument(s)")

    logger.debug("Resolved %s%s -> %s", request.qualified_name, request.descriptor, request.target)
    return request
