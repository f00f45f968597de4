import pytest

from groth16.errors import FieldElementError
from groth16.fields import (
    Fq,
    Fq2,
    Fr,
    c0,
    c1,
    curve_order,
    field_modulus,
    fq2,
    from_bigint,
    from_limbs,
    parse_decimal,
    to_limbs,
)
from groth16.tests import configure_test_logging

configure_test_logging()

U64_MAX = (1 << 64) - 1


def test_limbs_are_little_endian():
    assert to_limbs(1) == (1, 0, 0, 0)
    assert to_limbs(1 << 64) == (0, 1, 0, 0)
    assert to_limbs((1 << 256) - 1) == (U64_MAX,) * 4
    n = field_modulus - 1
    assert from_limbs(to_limbs(n)) == n


@pytest.mark.parametrize("bad", [-1, 1 << 256])
def test_to_limbs_rejects_out_of_range(bad):
    with pytest.raises(FieldElementError):
        to_limbs(bad)


@pytest.mark.parametrize(
    "limbs",
    [
        (0, 0, 0),
        (0, 0, 0, 0, 0),
        (1 << 64, 0, 0, 0),
        (-1, 0, 0, 0),
        (True, 0, 0, 0),
        ("1", 0, 0, 0),
    ],
)
def test_from_limbs_rejects_malformed(limbs):
    with pytest.raises(FieldElementError):
        from_limbs(limbs)


def test_from_bigint_is_strict():
    assert from_bigint(Fq, field_modulus - 1) == Fq(field_modulus - 1)
    assert from_bigint(Fr, 0) == Fr.zero()
    with pytest.raises(FieldElementError):
        from_bigint(Fq, field_modulus)
    with pytest.raises(FieldElementError):
        from_bigint(Fr, curve_order)
    with pytest.raises(FieldElementError):
        from_bigint(Fr, -1)


def test_scalar_and_base_fields_differ():
    # r < p, so r is a valid base field value but zero in the scalar field
    assert curve_order < field_modulus
    assert int(from_bigint(Fq, curve_order)) == curve_order
    assert Fr(curve_order) == Fr.zero()


def test_parse_decimal_accepts_canonical_numerals():
    assert parse_decimal(Fr, "0") == Fr.zero()
    assert parse_decimal(Fr, "1") == Fr.one()
    assert int(parse_decimal(Fq, "123456789")) == 123456789


def test_parse_decimal_reduces_large_values():
    assert parse_decimal(Fr, str(curve_order)) == Fr.zero()
    assert parse_decimal(Fr, str(curve_order + 5)) == Fr(5)
    assert int(parse_decimal(Fq, str(field_modulus + 1))) == 1


def test_parse_decimal_handles_very_long_numerals():
    # longer than the interpreter's int/str digit limit
    text = str(curve_order) + "0" * 4399 + "5"
    assert parse_decimal(Fr, text) == Fr(5)
    assert parse_decimal(Fq, "9" * 5000) == Fq((10**5000 - 1) % field_modulus)


@pytest.mark.parametrize("text", ["", "01", "00", "-1", "+1", " 1", "1 ", "1_000", "0x10", "1e3", "١٢"])
def test_parse_decimal_rejects(text):
    with pytest.raises(FieldElementError):
        parse_decimal(Fr, text)


def test_fq2_components():
    x = fq2(Fq(3), Fq(4))
    assert isinstance(x, Fq2)
    assert c0(x) == Fq(3)
    assert c1(x) == Fq(4)
