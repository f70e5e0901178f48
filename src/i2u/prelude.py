"""``from i2u.prelude import *`` brings the mapping helpers into scope."""

from .fmt import (
    binary,
    binary_pad,
    binary_zero_pad,
    chunk_join,
    debug,
    debug_pretty,
    lower_hex,
    lower_hex_pad,
    lower_hex_zeropad,
    octal,
    octal_pad,
    octal_zero_pad,
    to_string,
    upper_hex,
    upper_hex_pad,
    upper_hex_zeropad,
)

__all__ = [
    "to_string", "debug", "debug_pretty",
    "octal", "binary", "lower_hex", "upper_hex",
    "binary_zero_pad", "binary_pad", "octal_zero_pad", "octal_pad",
    "lower_hex_pad", "upper_hex_pad", "lower_hex_zeropad", "upper_hex_zeropad",
    "chunk_join",
]
