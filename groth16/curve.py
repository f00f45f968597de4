"""
Affine BN254 points for G1 (over Fq) and G2 (over Fq2).

py_ecc works on projective 3-tuples (x, y, z); the codecs and the verifying
key / proof records work on affine coordinates plus an explicit infinity flag.
These two small classes convert between the two worlds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from py_ecc.optimized_bn128 import G1 as _G1
from py_ecc.optimized_bn128 import G2 as _G2
from py_ecc.optimized_bn128 import Z1, Z2, b, b2, is_inf, is_on_curve, multiply, normalize

from .fields import Fq, Fq2

G1Projective = Tuple[Fq, Fq, Fq]
G2Projective = Tuple[Fq2, Fq2, Fq2]


@dataclass(frozen=True)
class G1Affine:
    x: Fq
    y: Fq
    infinity: bool = False

    @classmethod
    def identity(cls) -> "G1Affine":
        return cls(Fq.zero(), Fq.zero(), True)

    @classmethod
    def generator(cls) -> "G1Affine":
        return cls.from_projective(_G1)

    @classmethod
    def from_projective(cls, pt: G1Projective) -> "G1Affine":
        if is_inf(pt):
            return cls.identity()
        x, y = normalize(pt)
        return cls(x, y)

    def to_projective(self) -> G1Projective:
        if self.infinity:
            return Z1
        return (self.x, self.y, Fq.one())

    def neg(self) -> "G1Affine":
        if self.infinity:
            return self
        return G1Affine(self.x, -self.y)

    def is_on_curve(self) -> bool:
        return bool(is_on_curve(self.to_projective(), b))

    def scalar_mul(self, k: int) -> "G1Affine":
        return G1Affine.from_projective(multiply(self.to_projective(), int(k)))


@dataclass(frozen=True)
class G2Affine:
    x: Fq2
    y: Fq2
    infinity: bool = False

    @classmethod
    def identity(cls) -> "G2Affine":
        return cls(Fq2.zero(), Fq2.zero(), True)

    @classmethod
    def generator(cls) -> "G2Affine":
        return cls.from_projective(_G2)

    @classmethod
    def from_projective(cls, pt: G2Projective) -> "G2Affine":
        if is_inf(pt):
            return cls.identity()
        x, y = normalize(pt)
        return cls(x, y)

    def to_projective(self) -> G2Projective:
        if self.infinity:
            return Z2
        return (self.x, self.y, Fq2.one())

    def neg(self) -> "G2Affine":
        if self.infinity:
            return self
        return G2Affine(self.x, -self.y)

    def is_on_curve(self) -> bool:
        return bool(is_on_curve(self.to_projective(), b2))

    def scalar_mul(self, k: int) -> "G2Affine":
        return G2Affine.from_projective(multiply(self.to_projective(), int(k)))


__all__ = ["G1Affine", "G2Affine", "G1Projective", "G2Projective"]
