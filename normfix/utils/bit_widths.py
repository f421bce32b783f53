"""Bit widths supported by the normalized fixed-point codecs and the scale
terms derived from them.
"""
import logging
import numbers
from types import MappingProxyType

logger = logging.getLogger(__name__)

MIN_BIT_WIDTH = 2
"""Smallest number of bits a normalized fixed-point value may occupy."""

STORAGE_WIDTHS = (32, 64)
"""Widths, in bits, of the integers fixed-point values are stored in."""


class InvalidBitWidthError(ValueError):
    """Raised when a bit width is outside the range supported by a storage
    width.

    Attributes
    ----------
    bit_width :
        The offending bit width, as given.
    storage_bits : int
        Width of the integer type the value would have been stored in.
    """
    def __init__(self, bit_width, storage_bits):
        self.bit_width = bit_width
        self.storage_bits = storage_bits
        super(InvalidBitWidthError, self).__init__(
            "Bit width must be an integer in the range [%d, %d], not %r" %
            (MIN_BIT_WIDTH, storage_bits, bit_width)
        )


def check_storage_width(storage_bits):
    """Ensure that `storage_bits` names a supported integer width."""
    if storage_bits not in STORAGE_WIDTHS:
        raise ValueError(
            "Storage width must be one of %s, not %r" %
            (", ".join(str(w) for w in STORAGE_WIDTHS), storage_bits)
        )
    return storage_bits


def check_bit_width(b, storage_bits):
    """Validate a bit width against a storage width.

    Returns
    -------
    int
        `b` as a plain Python integer.

    Raises
    ------
    InvalidBitWidthError
        If `b` is not an integer in the range ``[2, storage_bits]``.
    """
    # Booleans are Integral but are never meant as a bit width
    if (isinstance(b, bool) or not isinstance(b, numbers.Integral) or
            not MIN_BIT_WIDTH <= b <= storage_bits):
        raise InvalidBitWidthError(b, storage_bits)
    return int(b)


def bit_width_range(storage_bits):
    """Get every bit width which may be stored in `storage_bits` bits."""
    return range(MIN_BIT_WIDTH, check_storage_width(storage_bits) + 1)


def scale(float_type, b, offset=0):
    """Compute ``2^(b - offset) - 1`` as `float_type`.

    The term is evaluated in double precision and only then cast, so large
    values of `b` round once rather than accumulating error.
    """
    return float_type(2.0 ** (b - offset) - 1.0)


def scale_table(float_type, storage_bits, offset=0):
    """Precompute :py:func:`scale` for every bit width `storage_bits` bits may
    hold.

    Returns
    -------
    {int: float_type}
        Read-only mapping from bit width to scale term.
    """
    table = {b: scale(float_type, b, offset)
             for b in bit_width_range(storage_bits)}
    logger.debug("Built %d %s scale terms (2^(b-%d) - 1) for %d-bit storage",
                 len(table), float_type.__name__, offset, storage_bits)
    return MappingProxyType(table)
