from __future__ import annotations

import ctypes
import logging
from dataclasses import dataclass
from typing import Any, Union

import numpy as np

logger = logging.getLogger(__name__)

# Widths tried, narrowest first, for negative plain ints with no explicit type.
DEFAULT_SIGNED_WIDTHS: tuple[int, ...] = (32, 64, 128)


@dataclass(frozen=True)
class IntegerTypeSpec:
    name: str
    bits: int
    signed: bool

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        if self.signed:
            return (1 << (self.bits - 1)) - 1
        return (1 << self.bits) - 1


def _int_specs() -> dict[str, IntegerTypeSpec]:
    specs: dict[str, IntegerTypeSpec] = {}

    fixed_width: tuple[tuple[str, int, bool], ...] = (
        ("uint8_t", 8, False),
        ("int8_t", 8, True),
        ("uint16_t", 16, False),
        ("int16_t", 16, True),
        ("uint32_t", 32, False),
        ("int32_t", 32, True),
        ("uint64_t", 64, False),
        ("int64_t", 64, True),
        ("uint128_t", 128, False),
        ("int128_t", 128, True),
    )
    for name, bits, signed in fixed_width:
        specs[name] = IntegerTypeSpec(name=name, bits=bits, signed=signed)

    for bits in (8, 16, 32, 64, 128):
        specs[f"i{bits}"] = IntegerTypeSpec(name=f"i{bits}", bits=bits, signed=True)
        specs[f"u{bits}"] = IntegerTypeSpec(name=f"u{bits}", bits=bits, signed=False)

    pointer_bits = ctypes.sizeof(ctypes.c_void_p) * 8
    specs["isize"] = IntegerTypeSpec(name="isize", bits=pointer_bits, signed=True)
    specs["usize"] = IntegerTypeSpec(name="usize", bits=pointer_bits, signed=False)

    short_bits = ctypes.sizeof(ctypes.c_short) * 8
    int_bits_size = ctypes.sizeof(ctypes.c_int) * 8
    long_bits = ctypes.sizeof(ctypes.c_long) * 8
    long_long_bits = ctypes.sizeof(ctypes.c_longlong) * 8

    cpp_native: tuple[tuple[str, int, bool], ...] = (
        ("short", short_bits, True),
        ("unsigned short", short_bits, False),
        ("int", int_bits_size, True),
        ("unsigned int", int_bits_size, False),
        ("long", long_bits, True),
        ("unsigned long", long_bits, False),
        ("long long", long_long_bits, True),
        ("unsigned long long", long_long_bits, False),
    )
    for name, bits, signed in cpp_native:
        specs[name] = IntegerTypeSpec(name=name, bits=bits, signed=signed)

    return specs


INT_TYPE_SPECS = _int_specs()

# Spec, table name, or anything numpy.dtype() accepts as an integer dtype.
IntType = Union[IntegerTypeSpec, str, np.dtype, type]


def spec_for_dtype(dtype: Any) -> IntegerTypeSpec:
    """Build the spec matching a numpy integer dtype (``np.int8``, ``"uint16"``, ...)."""
    try:
        np_dtype = np.dtype(dtype)
    except TypeError as exc:
        raise ValueError(f"Unknown integer type: {dtype!r}") from exc
    if np_dtype.kind not in {"i", "u"}:
        raise ValueError(f"Not an integer dtype: {np_dtype.name!r}")
    return IntegerTypeSpec(
        name=np_dtype.name,
        bits=np_dtype.itemsize * 8,
        signed=np_dtype.kind == "i",
    )


def resolve_int_type(int_type: IntType) -> IntegerTypeSpec:
    """Turn a spec, a type name or a numpy integer dtype into an ``IntegerTypeSpec``.

    Names from ``INT_TYPE_SPECS`` win over numpy's own spelling, so ``"long"``
    means the C ``long`` of this platform.
    """
    if isinstance(int_type, IntegerTypeSpec):
        return int_type
    if isinstance(int_type, str) and int_type in INT_TYPE_SPECS:
        return INT_TYPE_SPECS[int_type]
    return spec_for_dtype(int_type)


def twos_complement(value: int, spec: IntegerTypeSpec) -> int:
    """Return the unsigned storage pattern of ``value`` held in ``spec``."""
    if not spec.min_value <= value <= spec.max_value:
        raise OverflowError(
            f"{value} does not fit {spec.name} "
            f"[{spec.min_value}, {spec.max_value}]"
        )
    return value & ((1 << spec.bits) - 1)


def default_int_type(value: int) -> IntegerTypeSpec:
    """Pick the signed type a negative plain ``int`` is rendered through.

    ``i32`` first, as an unsuffixed integer literal would be, then wider types.
    """
    for bits in DEFAULT_SIGNED_WIDTHS:
        spec = INT_TYPE_SPECS[f"i{bits}"]
        if spec.min_value <= value <= spec.max_value:
            return spec
    widest = INT_TYPE_SPECS[f"i{DEFAULT_SIGNED_WIDTHS[-1]}"]
    raise OverflowError(
        f"{value} is below {widest.min_value}, the {widest.name} minimum; "
        "pass int_type explicitly"
    )
