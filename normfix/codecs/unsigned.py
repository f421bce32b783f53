"""Conversion of unsigned normalized fixed-point values to and from floating
point values.

The OpenGL 3.3 specification defines the conversion from floating point
values `x` (implied to be in the range ``[0, 1]``) to unsigned normalized
fixed-point values `f` with `b` bits of precision as::

    f = round(x * (2^b - 1))

and the conversion from `f` back to floating point as::

    x = f / (2^b - 1)

Each :py:class:`UnsignedNormalizedCodec` provides a general pair of
conversions that take `b` as an argument and computes the scale term on every
call, and specialized conversions for each supported `b` which use a scale
term precomputed when the codec is created.
"""
import logging
from types import MappingProxyType

import numpy as np

from ..utils import bit_widths
from ..utils import type_casts as tp

logger = logging.getLogger(__name__)


class UnsignedNormalizedCodec(object):
    """Converts between normalized floating point values and unsigned
    fixed-point values stored in integers of a given width.

    Parameters
    ----------
    float_type : {np.float32, np.float64}
        Type in which all floating point arithmetic is performed and which
        decoding produces.
    storage_bits : {32, 64}
        Width of the integers holding fixed-point values. Bit widths in the
        range ``[2, storage_bits]`` are supported.

    Attributes
    ----------
    scales : {int: float_type}
        Precomputed ``2^b - 1`` for each supported bit width.
    encoders : {int: callable}
        Specialized float to fixed-point conversion for each bit width.
    decoders : {int: callable}
        Specialized fixed-point to float conversion for each bit width.
    """
    def __init__(self, float_type, storage_bits):
        self.float_type = float_type
        self.storage_bits = bit_widths.check_storage_width(storage_bits)

        self.scales = bit_widths.scale_table(float_type, storage_bits)
        self.encoders = MappingProxyType(
            {b: self._make_encoder(b) for b in self.scales})
        self.decoders = MappingProxyType(
            {b: self._make_decoder(b) for b in self.scales})

        logger.debug("Created %r", self)

    def __repr__(self):
        return "<%s %s %d-bit>" % (type(self).__name__,
                                   self.float_type.__name__,
                                   self.storage_bits)

    @property
    def bit_widths(self):
        """Every bit width this codec supports."""
        return bit_widths.bit_width_range(self.storage_bits)

    def encode(self, x, b):
        """Convert `x` to an unsigned normalized fixed-point value with `b`
        bits of precision.

        `x` is expected to be in the range ``[0, 1]``; values outside it are
        not rejected but saturate to ``0`` or ``2^b - 1``.

        Returns
        -------
        int
            A value in the range ``[0, 2^b - 1]``.

        Raises
        ------
        InvalidBitWidthError
            If `b` is not in the range ``[2, storage_bits]``.
        """
        b = bit_widths.check_bit_width(b, self.storage_bits)
        return self._encode(x, b, bit_widths.scale(self.float_type, b))

    def decode(self, f, b):
        """Convert the unsigned normalized fixed-point value `f`, with `b`
        bits of precision, to floating point.

        `f` is expected to be in the range ``[0, 2^b - 1]``. Its low
        `storage_bits` bits are read as an unsigned magnitude, so
        two's-complement bit patterns held in signed integers decode as
        their unsigned value.

        Returns
        -------
        float_type
            A value in the range ``[0, 1]``.
        """
        b = bit_widths.check_bit_width(b, self.storage_bits)
        return self._decode(f, bit_widths.scale(self.float_type, b))

    def encoder(self, b):
        """Get the specialized conversion to `b` bit fixed-point values."""
        return self.encoders[bit_widths.check_bit_width(b, self.storage_bits)]

    def decoder(self, b):
        """Get the specialized conversion from `b` bit fixed-point values."""
        return self.decoders[bit_widths.check_bit_width(b, self.storage_bits)]

    def _encode(self, x, b, scale):
        # Out of range inputs may overflow the float type; saturation in the
        # integer conversion deals with the result.
        with np.errstate(over="ignore", invalid="ignore"):
            product = self.float_type(x) * scale
        f = tp.float_to_unsigned(product, self.storage_bits)

        # Scales for large b round up to 2^b
        return min(f, (1 << b) - 1)

    def _decode(self, f, scale):
        return tp.unsigned_to_float(f, self.storage_bits,
                                    self.float_type) / scale

    def _make_encoder(self, b):
        scale = self.scales[b]

        def encoder(x):
            return self._encode(x, b, scale)

        encoder.__name__ = encoder.__qualname__ = \
            "to_unsigned_normalized%d" % b
        encoder.__doc__ = (
            "Convert `x` to an unsigned normalized fixed-point value with %d "
            "bits of precision." % b
        )
        return encoder

    def _make_decoder(self, b):
        scale = self.scales[b]

        def decoder(f):
            return self._decode(f, scale)

        decoder.__name__ = decoder.__qualname__ = \
            "from_unsigned_normalized%d" % b
        decoder.__doc__ = (
            "Convert the %d bit unsigned normalized fixed-point value `f` to "
            "floating point." % b
        )
        return decoder


float_int = UnsignedNormalizedCodec(np.float32, 32)  # float32 <-> uint32
float_long = UnsignedNormalizedCodec(np.float32, 64)  # float32 <-> uint64
double_int = UnsignedNormalizedCodec(np.float64, 32)  # float64 <-> uint32
double_long = UnsignedNormalizedCodec(np.float64, 64)  # float64 <-> uint64

_float_codecs = {32: float_int, 64: float_long}


def _float_codec(storage_bits):
    return _float_codecs[bit_widths.check_storage_width(storage_bits)]


def to_unsigned_normalized(x, b, storage_bits=32):
    """Convert the float32 value `x` to an unsigned normalized fixed-point
    value with `b` bits of precision, stored in `storage_bits` bits.
    """
    return _float_codec(storage_bits).encode(x, b)


def from_unsigned_normalized(f, b, storage_bits=32):
    """Convert the unsigned normalized fixed-point value `f`, with `b` bits of
    precision and stored in `storage_bits` bits, to a float32 value.
    """
    return _float_codec(storage_bits).decode(f, b)
