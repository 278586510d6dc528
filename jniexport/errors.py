"""Exceptions raised while generating JNI exports"""

from typing import Optional


USAGE_MESSAGE = "incorrect usage; please consult documentation"


class JniExportError(ValueError):
    """Base class for all generation failures"""


class UsageError(JniExportError):
    """An export request does not match either accepted invocation form"""

    def __init__(self, detail: str = "", field: Optional[str] = None):
        self.detail = detail
        self.field = field
        message = USAGE_MESSAGE
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class DescriptorError(JniExportError):
    """A type or method descriptor is malformed"""

    def __init__(self, descriptor: str, position: int, reason: str):
        self.descriptor = descriptor
        self.position = position
        self.reason = reason
        super().__init__(f"{reason} at pos {position} in '{descriptor}'")
