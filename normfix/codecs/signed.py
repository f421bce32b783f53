"""Conversion of signed normalized fixed-point values to and from floating
point values.

The OpenGL 3.3 specification defines two representations of signed
normalized fixed-point values with `b` bits of precision:

``without_zero``
    ``-1.0`` maps to ``-2^(b-1)`` and ``1.0`` to ``2^(b-1) - 1``. Zero
    cannot be expressed exactly::

        f = ((x * (2^b - 1)) - 1) / 2
        x = ((2 * f) + 1) / (2^b - 1)

``with_zero``
    ``-1.0`` maps to ``-2^(b-1) + 1`` and ``1.0`` to ``2^(b-1) - 1``, so zero
    is exact but ``-2^(b-1)`` lies outside the representable range::

        f = x * (2^(b-1) - 1)
        x = max(-1.0, f / (2^(b-1) - 1))

Fixed-point results are rounded to the nearest integer and saturate to the
range of the representation.
"""
import enum
import logging
from types import MappingProxyType

import numpy as np

from ..utils import bit_widths
from ..utils import type_casts as tp

logger = logging.getLogger(__name__)


class Representation(enum.Enum):
    """Signed normalized fixed-point representation."""
    without_zero = 0
    """Uses the whole two's-complement range; zero is not representable."""

    with_zero = 1
    """Symmetric about an exactly representable zero."""


def signed_range(b, representation):
    """Get the smallest and largest `b` bit fixed-point values of a
    representation.

    Raises
    ------
    InvalidBitWidthError
        If `b` is not in the range ``[2, 64]``.
    """
    b = bit_widths.check_bit_width(b, max(bit_widths.STORAGE_WIDTHS))
    high = (1 << (b - 1)) - 1
    if representation is Representation.without_zero:
        return -high - 1, high
    return -high, high


class SignedNormalizedCodec(object):
    """Converts between normalized floating point values in ``[-1, 1]`` and
    signed fixed-point values stored in integers of a given width.

    Parameters
    ----------
    float_type : {np.float32, np.float64}
        Type in which all floating point arithmetic is performed and which
        decoding produces.
    storage_bits : {32, 64}
        Width of the integers holding fixed-point values.

    Attributes
    ----------
    scales : {Representation: {int: float_type}}
        Precomputed scale term for each representation and bit width:
        ``2^b - 1`` without zero, ``2^(b-1) - 1`` with zero.
    encoders : {Representation: {int: callable}}
    decoders : {Representation: {int: callable}}
    """
    _scale_offsets = {Representation.without_zero: 0,
                      Representation.with_zero: 1}

    def __init__(self, float_type, storage_bits):
        self.float_type = float_type
        self.storage_bits = bit_widths.check_storage_width(storage_bits)

        self.scales = MappingProxyType({
            rep: bit_widths.scale_table(float_type, storage_bits, offset)
            for rep, offset in self._scale_offsets.items()
        })
        self.encoders = MappingProxyType({
            rep: MappingProxyType({b: self._make_encoder(b, rep)
                                   for b in self.scales[rep]})
            for rep in Representation
        })
        self.decoders = MappingProxyType({
            rep: MappingProxyType({b: self._make_decoder(b, rep)
                                   for b in self.scales[rep]})
            for rep in Representation
        })

        logger.debug("Created %r", self)

    def __repr__(self):
        return "<%s %s %d-bit>" % (type(self).__name__,
                                   self.float_type.__name__,
                                   self.storage_bits)

    @property
    def bit_widths(self):
        """Every bit width this codec supports."""
        return bit_widths.bit_width_range(self.storage_bits)

    def _scale(self, b, representation):
        return bit_widths.scale(self.float_type, b,
                                self._scale_offsets[representation])

    def encode(self, x, b, representation=Representation.with_zero):
        """Convert `x`, expected to be in the range ``[-1, 1]``, to a signed
        normalized fixed-point value with `b` bits of precision.

        Raises
        ------
        InvalidBitWidthError
            If `b` is not in the range ``[2, storage_bits]``.
        """
        representation = Representation(representation)
        b = bit_widths.check_bit_width(b, self.storage_bits)
        return self._encode(x, b, representation,
                            self._scale(b, representation))

    def decode(self, f, b, representation=Representation.with_zero):
        """Convert the signed normalized fixed-point value `f`, with `b` bits
        of precision, to floating point in the range ``[-1, 1]``.

        The low `storage_bits` bits of `f` are read as a two's-complement
        value.
        """
        representation = Representation(representation)
        b = bit_widths.check_bit_width(b, self.storage_bits)
        return self._decode(f, representation,
                            self._scale(b, representation))

    def encoder(self, b, representation=Representation.with_zero):
        """Get the specialized conversion to `b` bit fixed-point values."""
        b = bit_widths.check_bit_width(b, self.storage_bits)
        return self.encoders[Representation(representation)][b]

    def decoder(self, b, representation=Representation.with_zero):
        """Get the specialized conversion from `b` bit fixed-point values."""
        b = bit_widths.check_bit_width(b, self.storage_bits)
        return self.decoders[Representation(representation)][b]

    def _encode(self, x, b, representation, scale):
        ft = self.float_type
        with np.errstate(over="ignore", invalid="ignore"):
            r = ft(x) * scale
            if representation is Representation.without_zero:
                r = (r - ft(1.0)) / ft(2.0)

        low, high = signed_range(b, representation)
        return max(low, min(tp.float_to_signed(r, self.storage_bits), high))

    def _decode(self, f, representation, scale):
        ft = self.float_type
        dx = tp.signed_to_float(f, self.storage_bits, ft)
        if representation is Representation.without_zero:
            return ((ft(2.0) * dx) + ft(1.0)) / scale
        return np.maximum(ft(-1.0), dx / scale)

    def _make_encoder(self, b, representation):
        scale = self.scales[representation][b]

        def encoder(x):
            return self._encode(x, b, representation, scale)

        encoder.__name__ = encoder.__qualname__ = \
            "to_signed_normalized_%s%d" % (representation.name, b)
        encoder.__doc__ = (
            "Convert `x` to a signed normalized fixed-point value with %d "
            "bits of precision, %s." % (b, representation.name.replace("_", " "))
        )
        return encoder

    def _make_decoder(self, b, representation):
        scale = self.scales[representation][b]

        def decoder(f):
            return self._decode(f, representation, scale)

        decoder.__name__ = decoder.__qualname__ = \
            "from_signed_normalized_%s%d" % (representation.name, b)
        decoder.__doc__ = (
            "Convert the %d bit signed normalized fixed-point value `f`, %s, "
            "to floating point." % (b, representation.name.replace("_", " "))
        )
        return decoder


float_int = SignedNormalizedCodec(np.float32, 32)  # float32 <-> int32
float_long = SignedNormalizedCodec(np.float32, 64)  # float32 <-> int64
double_int = SignedNormalizedCodec(np.float64, 32)  # float64 <-> int32
double_long = SignedNormalizedCodec(np.float64, 64)  # float64 <-> int64

_float_codecs = {32: float_int, 64: float_long}


def to_signed_normalized(x, b, representation=Representation.with_zero,
                         storage_bits=32):
    """Convert the float32 value `x` to a signed normalized fixed-point value
    with `b` bits of precision, stored in `storage_bits` bits.
    """
    codec = _float_codecs[bit_widths.check_storage_width(storage_bits)]
    return codec.encode(x, b, representation)


def from_signed_normalized(f, b, representation=Representation.with_zero,
                           storage_bits=32):
    """Convert the signed normalized fixed-point value `f`, with `b` bits of
    precision and stored in `storage_bits` bits, to a float32 value.
    """
    codec = _float_codecs[bit_widths.check_storage_width(storage_bits)]
    return codec.decode(f, b, representation)
