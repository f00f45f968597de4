"""
groth16.tests helpers

Utilities shared by groth16/* tests.

Exports:
- read_json(path) -> Any
- configure_test_logging() -> None
- Vector, make_vector(num_inputs) -> Vector

There are no proving keys in this repository, so valid proofs are built from
known trapdoor scalars: with A = a*G1, B = b*G2, alpha = x_alpha*G1,
beta/gamma/delta = x_*·G2, s_i = sigma_i*G1 and public-input combination
p = sigma_0 + sum x_i*sigma_(i+1), choosing

    c = (a*b - x_alpha*x_beta - p*x_gamma) / x_delta   (mod r)

and C = c*G1 makes e(-A,B)·e(alpha,beta)·e(P,gamma)·e(C,delta) == 1.

Environment toggles:
- GROTH16_TEST_LOG=1      → enable INFO logging for groth16.*
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Sequence, Union

from groth16.config import env_flag
from groth16.curve import G1Affine, G2Affine
from groth16.fields import Fr, curve_order
from groth16.types import Inputs, Proof, VerifyingKey


def read_json(path: Union[str, Path]) -> Any:
    with Path(path).open("r", encoding="utf-8") as fh:
        return json.load(fh)


def configure_test_logging(level: int | None = None) -> None:
    """
    Configure basic logging for groth16.* loggers when GROTH16_TEST_LOG is set.
    """
    if level is None:
        level = logging.INFO
    if env_flag("GROTH16_TEST_LOG", False):
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        logging.getLogger("groth16").setLevel(level)


# --- Deterministic proof vectors ---------------------------------------------

_A, _B = 0x1234567, 0x89ABCDE
_ALPHA, _BETA, _GAMMA, _DELTA = 11, 13, 17, 19
_SIGMA_BASE = 101
_INPUT_BASE = 7


@dataclass(frozen=True)
class Vector:
    vk: VerifyingKey
    proof: Proof
    inputs: Inputs


def make_vector(num_inputs: int = 2, input_values: Sequence[int] | None = None) -> Vector:
    """
    Build a (vk, proof, inputs) triple that verifies.

    Input values default to 7, 8, 9, ...; none of them is 1.
    """
    if input_values is None:
        input_values = [_INPUT_BASE + i for i in range(num_inputs)]
    xs: List[int] = [int(v) % curve_order for v in input_values]
    sigmas = [_SIGMA_BASE + 2 * i for i in range(len(xs) + 1)]

    p = (sigmas[0] + sum(x * s for x, s in zip(xs, sigmas[1:]))) % curve_order
    c = (_A * _B - _ALPHA * _BETA - p * _GAMMA) * pow(_DELTA, -1, curve_order) % curve_order

    g1 = G1Affine.generator()
    g2 = G2Affine.generator()
    vk = VerifyingKey(
        alpha=g1.scalar_mul(_ALPHA),
        beta=g2.scalar_mul(_BETA),
        gamma=g2.scalar_mul(_GAMMA),
        delta=g2.scalar_mul(_DELTA),
        s=[g1.scalar_mul(s) for s in sigmas],
    )
    proof = Proof(pi_a=g1.scalar_mul(_A), pi_b=g2.scalar_mul(_B), pi_c=g1.scalar_mul(c))
    return Vector(vk=vk, proof=proof, inputs=[Fr(x) for x in xs])


configure_test_logging()

__all__ = [
    "read_json",
    "configure_test_logging",
    "Vector",
    "make_vector",
]
