"""
BN254 (alt_bn128) fields used by the verifier and both codecs.

Arithmetic is delegated to `py_ecc.optimized_bn128`; this module only pins the
concrete element types and the canonical integer/limb conversions the codecs
need:

- `Fq`   base field (curve coordinates)
- `Fr`   scalar field (public inputs)
- `Fq2`  quadratic extension c0 + c1*u (G2 coordinates)
- `Fq12` target field (pairing output)

Canonical integer form is a 256-bit big integer split into four 64-bit limbs,
least significant limb first.
"""

from __future__ import annotations

from typing import Tuple, Type, TypeVar, Union

from py_ecc.fields import optimized_FQ
from py_ecc.optimized_bn128 import FQ as Fq
from py_ecc.optimized_bn128 import FQ2 as Fq2
from py_ecc.optimized_bn128 import FQ12 as Fq12
from py_ecc.optimized_bn128 import curve_order, field_modulus

from .errors import FieldElementError

LIMBS = 4
LIMB_BITS = 64
LIMB_MASK = (1 << LIMB_BITS) - 1
FIELD_BYTES = 32

_DECIMAL_CHUNK = 1000

Limbs = Tuple[int, int, int, int]


class Fr(optimized_FQ):
    """BN254 scalar field element."""

    field_modulus = curve_order


PrimeField = Union[Fq, Fr]
T = TypeVar("T", Fq, Fr)


def modulus(cls: Type[optimized_FQ]) -> int:
    return int(cls.field_modulus)


def to_limbs(n: int) -> Limbs:
    """Split a non-negative integer < 2**256 into little-endian u64 limbs."""
    if n < 0 or n >> (LIMBS * LIMB_BITS):
        raise FieldElementError("integer does not fit in 4 limbs", value=str(n))
    return tuple((n >> (LIMB_BITS * i)) & LIMB_MASK for i in range(LIMBS))  # type: ignore[return-value]


def from_limbs(limbs: Tuple[int, ...]) -> int:
    if len(limbs) != LIMBS:
        raise FieldElementError(f"expected {LIMBS} limbs, got {len(limbs)}")
    n = 0
    for i, limb in enumerate(limbs):
        if not isinstance(limb, int) or isinstance(limb, bool) or not 0 <= limb <= LIMB_MASK:
            raise FieldElementError(f"limb {i} is not a u64", value=repr(limb))
        n |= limb << (LIMB_BITS * i)
    return n


def from_bigint(cls: Type[T], value: int) -> T:
    """
    Strict constructor: the integer must already be canonical (0 <= value < p).

    py_ecc silently reduces on construction; here an out-of-range value is an error.
    """
    if value < 0 or value >= modulus(cls):
        raise FieldElementError(
            f"value is not below the {cls.__name__} modulus", value=str(value)
        )
    return cls(value)


def parse_decimal(cls: Type[T], text: str) -> T:
    """
    Parse a decimal numeral into the congruent field element.

    Rejects the empty string, signs, whitespace, separators and leading zeros
    ("0" itself is fine). Values at or above the modulus are reduced, whatever
    their length.
    """
    if not isinstance(text, str) or not text:
        raise FieldElementError("empty decimal numeral", value=repr(text))
    if text == "0":
        return cls.zero()
    if not (text.isascii() and text.isdigit()):
        raise FieldElementError("not a decimal numeral", value=text)
    if text[0] == "0":
        raise FieldElementError("decimal numeral has a leading zero", value=text)
    # fold in slices so numerals past int()'s digit limit still reduce
    p = modulus(cls)
    acc = 0
    for i in range(0, len(text), _DECIMAL_CHUNK):
        chunk = text[i : i + _DECIMAL_CHUNK]
        acc = (acc * 10 ** len(chunk) + int(chunk)) % p
    return cls(acc)


def c0(x: Fq2) -> Fq:
    return Fq(x.coeffs[0])


def c1(x: Fq2) -> Fq:
    return Fq(x.coeffs[1])


def fq2(a: Fq, b: Fq) -> Fq2:
    return Fq2([a.n, b.n])


__all__ = [
    "Fq",
    "Fr",
    "Fq2",
    "Fq12",
    "PrimeField",
    "Limbs",
    "LIMBS",
    "LIMB_BITS",
    "FIELD_BYTES",
    "field_modulus",
    "curve_order",
    "modulus",
    "to_limbs",
    "from_limbs",
    "from_bigint",
    "parse_decimal",
    "c0",
    "c1",
    "fq2",
]
