"""Conversion of normalized floating point values to and from fixed-point
values of arbitrary bit width, as defined by OpenGL 3.3.
"""
from .codecs import signed, unsigned
from .codecs.signed import (Representation, SignedNormalizedCodec,
                            from_signed_normalized, to_signed_normalized)
from .codecs.unsigned import (UnsignedNormalizedCodec,
                              from_unsigned_normalized,
                              to_unsigned_normalized)
from .utils.bit_widths import InvalidBitWidthError

__version__ = "0.1.0"

__all__ = [
    'signed',
    'unsigned',
    'Representation',
    'SignedNormalizedCodec',
    'UnsignedNormalizedCodec',
    'from_signed_normalized',
    'to_signed_normalized',
    'from_unsigned_normalized',
    'to_unsigned_normalized',
    'InvalidBitWidthError',
    '__version__',
]
