"""
groth16.pairing_bn254
=====================

Thin BN254 (altbn128) multi-pairing wrapper over `py_ecc.optimized_bn128`.

Public API
----------
- multi_miller_loop(g1_points, g2_points) -> Fq12
- final_exponentiation(f) -> Fq12 | None
- multi_pairing(pairs) -> Fq12 | None
- pairing_check(pairs) -> bool

Notes
-----
- Point ordering follows e(P, Q) with P in G1, Q in G2. py_ecc's pairing call
  expects (Q, P); this wrapper handles it.
- The Miller loops of all pairs are multiplied together first and a single
  final exponentiation is applied to the product.
- py_ecc validates that both points are on their curves; a failure there is
  reported as `PairingError`.
- A Miller-loop product of zero has no final exponentiation (it is not in
  Fq12*), `final_exponentiation` reports that as `None`.

License: MIT
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, Tuple

from py_ecc.optimized_bn128 import final_exponentiate as _final_exponentiate
from py_ecc.optimized_bn128 import pairing as _pairing

from .curve import G1Affine, G2Affine
from .errors import PairingError
from .fields import Fq12

log = logging.getLogger(__name__)

__all__ = [
    "multi_miller_loop",
    "final_exponentiation",
    "multi_pairing",
    "pairing_check",
]


def multi_miller_loop(
    g1_points: Sequence[G1Affine], g2_points: Sequence[G2Affine]
) -> Fq12:
    """
    Product of the Miller loops f(P_i, Q_i), without final exponentiation.

    Pairs where either point is the point at infinity contribute one.

    Raises
    ------
    PairingError
        If the sequences differ in length or a point is not on its curve.
    """
    if len(g1_points) != len(g2_points):
        raise PairingError(
            "mismatched pair lists",
            ctx={"g1": len(g1_points), "g2": len(g2_points)},
        )
    acc = Fq12.one()
    for i, (P, Q) in enumerate(zip(g1_points, g2_points)):
        if P.infinity or Q.infinity:
            continue
        try:
            # py_ecc pairing expects (Q, P)
            acc = acc * _pairing(Q.to_projective(), P.to_projective(), final_exponentiate=False)
        except ValueError as e:
            raise PairingError(f"pair[{i}] rejected by pairing backend", ctx={"pair": i}, cause=e) from e
    return acc


def final_exponentiation(f: Fq12) -> Optional[Fq12]:
    """
    Raise a Miller-loop output to (p^12 - 1) / r.

    Returns None when `f` is zero (not invertible), the only input for which
    the final exponentiation is undefined.
    """
    if f == Fq12.zero():
        log.debug("final exponentiation undefined for zero Miller-loop output")
        return None
    return _final_exponentiate(f)


def multi_pairing(pairs: Iterable[Tuple[G1Affine, G2Affine]]) -> Optional[Fq12]:
    """
    Compute the product of e(P_i, Q_i) with one final exponentiation.

    Returns None if the final exponentiation is undefined.
    """
    pairs = list(pairs)
    f = multi_miller_loop([p for p, _ in pairs], [q for _, q in pairs])
    return final_exponentiation(f)


def pairing_check(pairs: Iterable[Tuple[G1Affine, G2Affine]]) -> bool:
    """
    Return True iff the pairing product is the identity in GT.
    """
    result = multi_pairing(pairs)
    return result is not None and result == Fq12.one()
