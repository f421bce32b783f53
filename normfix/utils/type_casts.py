"""Conversions between floating point values and the integers fixed-point
values are stored in.

Integers are always Python ints. Any integer, including NumPy scalars holding
a two's-complement bit pattern, is first reinterpreted at the given width so
that the bit pattern rather than its signed value is what gets converted.
"""
import math

import numpy as np


def as_unsigned(value, n_bits):
    """Reinterpret the low `n_bits` bits of `value` as an unsigned integer."""
    return int(value) & ((1 << n_bits) - 1)


def as_signed(value, n_bits):
    """Reinterpret the low `n_bits` bits of `value` as a two's-complement
    signed integer.
    """
    value = as_unsigned(value, n_bits)
    if value & (1 << (n_bits - 1)):
        value -= 1 << n_bits
    return value


def unsigned_to_float(u, n_bits, dtype=np.float32):
    """Convert an `n_bits` wide unsigned integer to the nearest value of
    `dtype`.

    Parameters
    ----------
    u : int
        Integer whose low `n_bits` bits are treated as an unsigned magnitude.
    n_bits : int
        Width of the integer.
    dtype : {np.float32, np.float64}
        Floating point type to produce.
    """
    # The NumPy cast rounds once, to nearest even, from the full 64 bits
    return dtype(np.uint64(as_unsigned(u, n_bits)))


def signed_to_float(i, n_bits, dtype=np.float32):
    """Convert an `n_bits` wide two's-complement integer to the nearest value
    of `dtype`.
    """
    return dtype(np.int64(as_signed(i, n_bits)))


def float_to_unsigned(x, n_bits):
    """Convert a floating point value to the nearest `n_bits` wide unsigned
    integer.

    Halfway cases round to even. NaN and values at or below zero become 0,
    values above ``2^n_bits - 1`` saturate to ``2^n_bits - 1``.
    """
    limit = (1 << n_bits) - 1

    # rint preserves the dtype and a float32 or float64 integral value
    # converts to a Python float exactly.
    value = float(np.rint(x))
    if math.isnan(value) or value <= 0.0:
        return 0
    elif math.isinf(value):
        return limit
    return min(int(value), limit)


def float_to_signed(x, n_bits):
    """Convert a floating point value to the nearest `n_bits` wide
    two's-complement integer.

    Halfway cases round to even. NaN becomes 0, values outside
    ``[-2^(n_bits-1), 2^(n_bits-1) - 1]`` saturate to the nearest bound.
    """
    low = -(1 << (n_bits - 1))
    high = (1 << (n_bits - 1)) - 1

    value = float(np.rint(x))
    if math.isnan(value):
        return 0
    elif math.isinf(value):
        return high if value > 0 else low
    return max(low, min(int(value), high))
