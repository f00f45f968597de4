"""
groth16.types
=============

Domain records: the verifying key of one circuit, one proof, and the public
inputs bound to it. All are immutable once constructed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .curve import G1Affine, G2Affine
from .fields import Fr

# Public inputs; order is significant (inputs[i] pairs with vk.s[i + 1]).
Inputs = List[Fr]


@dataclass(frozen=True)
class VerifyingKey:
    alpha: G1Affine
    beta: G2Affine
    gamma: G2Affine
    delta: G2Affine
    s: Tuple[G1Affine, ...]

    def __post_init__(self) -> None:
        # accept any sequence for s, store a tuple
        object.__setattr__(self, "s", tuple(self.s))

    @property
    def num_inputs(self) -> int:
        """Number of public inputs this key expects."""
        return len(self.s) - 1


@dataclass(frozen=True)
class Proof:
    pi_a: G1Affine
    pi_b: G2Affine
    pi_c: G1Affine


__all__ = ["Inputs", "VerifyingKey", "Proof"]
