"""JNI symbol name mangling"""

from typing import Optional

ESCAPES = {
    '/': '_',
    '_': '_1',
    ';': '_2',
    '[': '_3',
}


def _escape_utf16(ch: str) -> str:
    # Characters outside the BMP become a surrogate pair, one escape per unit
    data = ch.encode('utf-16-be', 'surrogatepass')
    return "".join(
        f"_0{int.from_bytes(data[i:i + 2], 'big'):04x}"
        for i in range(0, len(data), 2)
    )


def mangle_name(name: str) -> str:
    """Escape a class, method or descriptor string for use in a symbol"""
    parts = []
    for ch in name:
        if ch.isascii() and ch.isalnum():
            parts.append(ch)
        elif ch in ESCAPES:
            parts.append(ESCAPES[ch])
        else:
            parts.append(_escape_utf16(ch))
    return "".join(parts)


def symbol_name(class_name: str, method: str, args: Optional[str] = None) -> str:
    """Build the exported symbol the JVM resolves for a native method.

    ``class_name`` is a binary name (``pkg/Cls``). With ``args`` set (even to
    an empty string) the long, overload-safe form is produced.
    """
    symbol = f"Java_{mangle_name(class_name)}_{mangle_name(method)}"
    if args is not None:
        symbol += f"__{mangle_name(args)}"
    return symbol
