"""Self-documenting formatting functions meant to be used as ``map`` callables.

How do I turn a list of numbers into strings of space padded binary, zero
padded upper case hex, and so on?

    >>> list(map(binary_pad(3), range(4)))
    ['  0', '  1', ' 10', ' 11']
    >>> list(map(upper_hex_zeropad(2), [10, 255]))
    ['0A', 'FF']

Radix renderings never carry a prefix (``0b``, ``0o``, ``0x``). Negative
values are rendered as the two's-complement bit pattern of their integer type,
never with a ``-`` sign.
"""

from __future__ import annotations

import dataclasses
import logging
import operator
from functools import lru_cache, partial
from typing import Any, Callable

import numpy as np

from .inttypes import (
    IntegerTypeSpec,
    IntType,
    default_int_type,
    resolve_int_type,
    spec_for_dtype,
    twos_complement,
)

logger = logging.getLogger(__name__)

INDENT = "    "

_UNSET: Any = object()

_BRACKETS: dict[type, tuple[str, str]] = {
    list: ("[", "]"),
    tuple: ("(", ")"),
    set: ("{", "}"),
    frozenset: ("frozenset({", "})"),
    dict: ("{", "}"),
}

# What repr() prints in place of a container that contains itself.
_RECURSION_MARKS: dict[type, str] = {list: "[...]", dict: "{...}"}


def to_string(value: Any) -> str:
    """``str(value)`` under a name that reads well in ``map(to_string, ...)``."""
    return str(value)


def debug(value: Any) -> str:
    """``repr(value)``; useful for sequences holding ``None``."""
    return repr(value)


def _pretty_items(
    value: Any, level: int, active: frozenset[int]
) -> tuple[str, list[str], str] | None:
    child = level + 1
    value_type = type(value)

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        fields = [field for field in dataclasses.fields(value) if field.repr]
        items = [
            f"{field.name}={_pretty(getattr(value, field.name), child, active)}"
            for field in fields
        ]
        return f"{value_type.__qualname__}(", items, ")"

    if isinstance(value, tuple) and hasattr(value_type, "_fields"):
        items = [
            f"{name}={_pretty(item, child, active)}"
            for name, item in zip(value_type._fields, value)
        ]
        return f"{value_type.__name__}(", items, ")"

    if value_type not in _BRACKETS:
        return None

    opening, closing = _BRACKETS[value_type]
    if value_type is dict:
        items = [
            f"{_pretty(key, child, active)}: {_pretty(item, child, active)}"
            for key, item in value.items()
        ]
    else:
        items = [_pretty(item, child, active) for item in value]
    return opening, items, closing


def _pretty(value: Any, level: int, active: frozenset[int] = frozenset()) -> str:
    # ``active`` holds the ids of the containers enclosing ``value``.
    if id(value) in active:
        return _RECURSION_MARKS.get(type(value), "...")

    parts = _pretty_items(value, level, active | {id(value)})
    if parts is None:
        return repr(value)

    opening, items, closing = parts
    if not items:
        return repr(value)

    inner = INDENT * (level + 1)
    body = "".join(f"{inner}{item},\n" for item in items)
    return f"{opening}\n{body}{INDENT * level}{closing}"


def debug_pretty(value: Any) -> str:
    """Multi-line ``repr`` with one field per line.

    Dataclasses, named tuples and the builtin containers are expanded, each
    field indented by ``INDENT`` and followed by a comma, with the closing
    bracket on its own line::

        >>> @dataclasses.dataclass
        ... class AStruct:
        ...     value: int
        >>> print(debug_pretty(AStruct(12)))
        AStruct(
            value=12,
        )

    Empty containers and values without structure come out as ``repr``.
    """
    return _pretty(value, 0)


@lru_cache(maxsize=None)
def _native_int_type(value_type: type) -> IntegerTypeSpec | None:
    if issubclass(value_type, (bool, np.bool_)):
        raise TypeError(f"{value_type.__name__} is not an integer type")
    if issubclass(value_type, np.integer):
        spec = spec_for_dtype(value_type)
        logger.debug("Resolved %s to native %s", value_type.__name__, spec.name)
        return spec
    if not hasattr(value_type, "__index__"):
        raise TypeError(f"{value_type.__name__} is not an integer type")
    logger.debug("Resolved %s as an unbounded integer", value_type.__name__)
    return None


def _radix_digits(
    func_name: str,
    value: Any,
    radix_char: str,
    int_type: IntType | None,
) -> str:
    try:
        native = _native_int_type(type(value))
    except TypeError as exc:
        raise TypeError(f"{func_name}() needs an integer value: {exc}") from exc

    number = operator.index(value)
    if int_type is not None:
        spec: IntegerTypeSpec | None = resolve_int_type(int_type)
    elif native is not None:
        spec = native
    elif number < 0:
        spec = default_int_type(number)
    else:
        spec = None

    if spec is not None:
        pattern = twos_complement(number, spec)
        if number < 0:
            logger.debug("Rendering %d through %s as %d", number, spec.name, pattern)
        number = pattern
    return format(number, radix_char)


def _check_width(func_name: str, width: Any) -> int:
    if isinstance(width, (bool, np.bool_)):
        raise TypeError(f"{func_name}() width must be an int, got {type(width).__name__}")
    try:
        width = operator.index(width)
    except TypeError as exc:
        raise TypeError(
            f"{func_name}() width must be an int, got {type(width).__name__}"
        ) from exc
    if width < 0:
        raise ValueError(f"{func_name}() width must be >= 0, got {width}")
    return width


def _padded(
    func: Callable[..., Any],
    width: Any,
    value: Any,
    radix_char: str,
    fill: str,
    int_type: IntType | None,
) -> Any:
    width = _check_width(func.__name__, width)
    if value is _UNSET:
        return partial(func, width, int_type=int_type)
    return _radix_digits(func.__name__, value, radix_char, int_type).rjust(width, fill)


def octal(value: Any, *, int_type: IntType | None = None) -> str:
    """Octal digits, ``format(value, "o")``."""
    return _radix_digits("octal", value, "o", int_type)


def binary(value: Any, *, int_type: IntType | None = None) -> str:
    """Binary digits, ``format(value, "b")``.

    ``int_type`` names the integer type whose bit pattern a negative value
    shows; numpy scalars carry their own::

        >>> binary(-1, int_type="i8")
        '11111111'
        >>> binary(np.int16(-2))
        '1111111111111110'
    """
    return _radix_digits("binary", value, "b", int_type)


def lower_hex(value: Any, *, int_type: IntType | None = None) -> str:
    return _radix_digits("lower_hex", value, "x", int_type)


def upper_hex(value: Any, *, int_type: IntType | None = None) -> str:
    return _radix_digits("upper_hex", value, "X", int_type)


def binary_zero_pad(width: int, value: Any = _UNSET, *, int_type: IntType | None = None) -> Any:
    """Binary padded with leading zeros to at least ``width`` characters.

    ``binary_zero_pad(8, 5)`` gives ``'00000101'``; ``binary_zero_pad(8)``
    gives a formatter for ``map``. Longer values are never truncated.
    """
    return _padded(binary_zero_pad, width, value, "b", "0", int_type)


def binary_pad(width: int, value: Any = _UNSET, *, int_type: IntType | None = None) -> Any:
    """Binary padded with leading spaces to at least ``width`` characters."""
    return _padded(binary_pad, width, value, "b", " ", int_type)


def octal_zero_pad(width: int, value: Any = _UNSET, *, int_type: IntType | None = None) -> Any:
    return _padded(octal_zero_pad, width, value, "o", "0", int_type)


def octal_pad(width: int, value: Any = _UNSET, *, int_type: IntType | None = None) -> Any:
    return _padded(octal_pad, width, value, "o", " ", int_type)


def lower_hex_pad(width: int, value: Any = _UNSET, *, int_type: IntType | None = None) -> Any:
    """Lower case hex padded with leading spaces, ``format(value, f"{width}x")``."""
    return _padded(lower_hex_pad, width, value, "x", " ", int_type)


def upper_hex_pad(width: int, value: Any = _UNSET, *, int_type: IntType | None = None) -> Any:
    """Upper case hex padded with leading spaces, ``format(value, f"{width}X")``."""
    return _padded(upper_hex_pad, width, value, "X", " ", int_type)


def lower_hex_zeropad(width: int, value: Any = _UNSET, *, int_type: IntType | None = None) -> Any:
    """Lower case hex padded with leading zeros, ``format(value, f"0{width}x")``."""
    return _padded(lower_hex_zeropad, width, value, "x", "0", int_type)


def upper_hex_zeropad(width: int, value: Any = _UNSET, *, int_type: IntType | None = None) -> Any:
    """Upper case hex padded with leading zeros.

    >>> list(map(upper_hex_zeropad(2), [0, 10, 255, 256]))
    ['00', '0A', 'FF', '100']
    """
    return _padded(upper_hex_zeropad, width, value, "X", "0", int_type)


def chunk_join(text: str, chunk_size: int, separator: str) -> str:
    """Split ``text`` into runs of ``chunk_size`` characters joined by ``separator``.

    >>> chunk_join("FEEDC0FFEE", 2, " ")
    'FE ED C0 FF EE'

    Chunks are counted in characters, not encoded bytes. The last chunk may be
    shorter. An empty separator or a chunk size below 1 is a caller bug and
    raises ``ValueError``.
    """
    if not isinstance(separator, str):
        raise TypeError(f"separator must be str, got {type(separator).__name__}")
    if not separator:
        raise ValueError("chunk_join() separator must not be empty")
    if not isinstance(text, str):
        raise TypeError(f"text must be str, got {type(text).__name__}")
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int):
        raise TypeError(f"chunk_size must be an int, got {type(chunk_size).__name__}")
    if chunk_size < 1:
        raise ValueError(f"chunk_join() chunk_size must be >= 1, got {chunk_size}")

    chunks = [text[start : start + chunk_size] for start in range(0, len(text), chunk_size)]
    return separator.join(chunks)
