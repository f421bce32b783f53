import numpy as np
import pytest

from normfix import InvalidBitWidthError
from normfix.codecs import signed
from normfix.codecs.signed import Representation

codecs = [signed.float_int, signed.float_long,
          signed.double_int, signed.double_long]

cases = [(c, b, rep) for c in codecs for b in c.bit_widths
         for rep in Representation]
cases_ids = ["%s-%d-b%d-%s" % (c.float_type.__name__, c.storage_bits, b,
                               rep.name) for c, b, rep in cases]


@pytest.mark.parametrize(
    "b, representation, expected",
    [(2, Representation.without_zero, (-2, 1)),
     (2, Representation.with_zero, (-1, 1)),
     (8, Representation.without_zero, (-128, 127)),
     (8, Representation.with_zero, (-127, 127)),
     (64, Representation.with_zero, (-2**63 + 1, 2**63 - 1)),
     ]
)
def test_signed_range(b, representation, expected):
    assert signed.signed_range(b, representation) == expected


@pytest.mark.parametrize("codec, b, representation", cases, ids=cases_ids)
def test_bounds(codec, b, representation):
    """-1 and 1 map to the ends of the representation's range and back."""
    low, high = signed.signed_range(b, representation)
    encoder = codec.encoder(b, representation)
    decoder = codec.decoder(b, representation)

    assert codec.encode(1.0, b, representation) == high
    assert codec.encode(-1.0, b, representation) == low
    assert codec.decode(high, b, representation) == 1.0
    assert codec.decode(low, b, representation) == -1.0

    assert encoder(1.0) == high
    assert encoder(-1.0) == low
    assert decoder(high) == 1.0
    assert decoder(low) == -1.0


@pytest.mark.parametrize("codec", codecs)
def test_zero(codec):
    """Zero is exact with zero, and encodes to the nearest value without."""
    for b in codec.bit_widths:
        assert codec.encode(0.0, b, Representation.with_zero) == 0
        assert codec.decode(0, b, Representation.with_zero) == 0.0

        assert codec.encode(0.0, b, Representation.without_zero) == 0
        assert codec.decode(0, b, Representation.without_zero) > 0.0


@pytest.mark.parametrize("codec", codecs)
def test_with_zero_clamps_most_negative_value(codec):
    for b in codec.bit_widths:
        assert codec.decode(-2**(b - 1), b, Representation.with_zero) == -1.0


@pytest.mark.parametrize("codec", codecs)
def test_saturates_out_of_range_inputs(codec):
    for rep in Representation:
        for b in codec.bit_widths:
            low, high = signed.signed_range(b, rep)
            assert codec.encode(2.0, b, rep) == high
            assert codec.encode(float("inf"), b, rep) == high
            assert codec.encode(-2.0, b, rep) == low
            assert codec.encode(float("-inf"), b, rep) == low
            assert codec.encode(float("nan"), b, rep) == 0


@pytest.mark.parametrize("codec, b, representation", cases, ids=cases_ids)
def test_specialized_matches_general(codec, b, representation,
                                     signed_samples):
    encoder = codec.encoder(b, representation)
    decoder = codec.decoder(b, representation)
    assert encoder.__name__ == "to_signed_normalized_%s%d" % (
        representation.name, b)
    assert decoder.__name__ == "from_signed_normalized_%s%d" % (
        representation.name, b)

    for x in signed_samples:
        f = codec.encode(x, b, representation)
        assert encoder(x) == f
        assert decoder(f) == codec.decode(f, b, representation)

    representation_text = representation.name.replace("_", " ")
    assert "%d bits" % b in encoder.__doc__
    assert representation_text in encoder.__doc__
    assert "%d bit" % b in decoder.__doc__
    assert representation_text in decoder.__doc__


@pytest.mark.parametrize("codec, b, representation", cases, ids=cases_ids)
def test_round_trip(codec, b, representation, signed_samples):
    """Decoding an encoded value lands within one step of the original,
    including the widths where the float32 scale term rounds.
    """
    if representation is Representation.without_zero:
        step = 2.0 / (2**b - 1)
    else:
        step = 1.0 / (2**(b - 1) - 1)

    for x in signed_samples:
        x = codec.float_type(x)
        y = codec.decode(codec.encode(x, b, representation), b,
                         representation)
        assert abs(float(y) - float(x)) <= step


@pytest.mark.parametrize("codec, b, representation", cases, ids=cases_ids)
def test_encode_is_monotonic(codec, b, representation, signed_samples):
    encoded = [codec.encode(x, b, representation)
               for x in np.sort(signed_samples)]
    assert all(a <= c for a, c in zip(encoded, encoded[1:]))


@pytest.mark.parametrize("b", [0, 1, -3, 65, 2.0])
def test_signed_range_rejects_invalid_bit_widths(b):
    for representation in Representation:
        with pytest.raises(InvalidBitWidthError):
            signed.signed_range(b, representation)


def test_known_values():
    assert signed.to_signed_normalized(-1.0, 8) == -127
    assert signed.to_signed_normalized(
        -1.0, 8, Representation.without_zero) == -128
    assert signed.to_signed_normalized(0.5, 8) == 64  # 63.5 ties to even
    assert signed.from_signed_normalized(127, 8) == 1.0
    assert signed.from_signed_normalized(-64, 8) == pytest.approx(
        -64.0 / 127.0, rel=1e-6)
    assert signed.from_signed_normalized(
        0, 8, Representation.without_zero) == pytest.approx(1.0 / 255.0,
                                                           rel=1e-6)
    assert signed.to_signed_normalized(
        1.0, 64, storage_bits=64) == 2**63 - 1


def test_representation_values_accepted():
    assert signed.float_int.encode(-1.0, 8, 0) == -128
    assert signed.float_int.encode(-1.0, 8, 1) == -127
    with pytest.raises(ValueError):
        signed.float_int.encode(-1.0, 8, 2)


def test_decode_reads_storage_as_twos_complement():
    assert signed.from_signed_normalized(2**32 - 1, 8) == \
        signed.from_signed_normalized(-1, 8)
    assert signed.float_long.decode(np.uint64(2**64 - 1), 8) == \
        signed.float_long.decode(-1, 8)


def test_decode_result_types():
    assert type(signed.float_int.decode(3, 8)) is np.float32
    assert type(signed.double_long.decode(
        3, 8, Representation.without_zero)) is np.float64


@pytest.mark.parametrize("codec", codecs)
def test_invalid_bit_widths(codec):
    for b in (0, 1, codec.storage_bits + 1):
        with pytest.raises(InvalidBitWidthError):
            codec.encode(0.5, b)
        with pytest.raises(InvalidBitWidthError):
            codec.decode(1, b, Representation.without_zero)
        with pytest.raises(InvalidBitWidthError):
            codec.encoder(b)
        with pytest.raises(InvalidBitWidthError):
            codec.decoder(b, Representation.without_zero)

    with pytest.raises(ValueError):
        signed.to_signed_normalized(0.5, 8, storage_bits=8)
