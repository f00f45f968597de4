"""
groth16.verifier
================

Groth16 verifier for BN254.

Verification equation
---------------------
    e(-A, B) * e(alpha1, beta2) * e(P, gamma2) * e(C, delta2) == 1

where
    P = s[0] + sum_i inputs[i] * s[i + 1]

The four Miller loops are evaluated as one combined loop followed by a single
final exponentiation.

Public API
----------
- verify(vk, proof, inputs) -> VerificationResult
- require_valid(result) -> None
- verify_batch(jobs, *, max_workers=None, executor="thread") -> list[VerificationResult]

Rejection is returned as data. `VerificationResult.failure` tells apart a
pairing that was computed but is not the identity (`PAIRING_MISMATCH`) from a
pairing that could not be computed (`PAIRING_FAILED`) and from a call whose
inputs do not match the key (`INPUT_LENGTH_MISMATCH`).

License: MIT
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from py_ecc.optimized_bn128 import add as _add
from py_ecc.optimized_bn128 import multiply as _mul

from .curve import G1Affine, G1Projective
from .errors import PairingError, VerificationError
from .fields import Fq12, Fr
from .pairing_bn254 import final_exponentiation, multi_miller_loop
from .types import Inputs, Proof, VerifyingKey

log = logging.getLogger(__name__)


class FailureKind(str, Enum):
    PAIRING_MISMATCH = "PAIRING_MISMATCH"
    PAIRING_FAILED = "PAIRING_FAILED"
    INPUT_LENGTH_MISMATCH = "INPUT_LENGTH_MISMATCH"


@dataclass(frozen=True)
class VerificationResult:
    """Result of a verification attempt."""

    ok: bool
    failure: Optional[FailureKind] = None
    message: Optional[str] = None

    def __bool__(self) -> bool:  # allows: if result: ...
        return self.ok


_ACCEPTED = VerificationResult(ok=True)


def _linear_combination(s: Sequence[G1Affine], inputs: Sequence[Fr]) -> G1Projective:
    """
    P = s[0] + sum_i inputs[i] * s[i + 1], accumulated in projective form.
    """
    acc = s[0].to_projective()
    for i, x in enumerate(inputs):
        n = int(x)
        if n != 0:
            acc = _add(acc, _mul(s[i + 1].to_projective(), n))
    return acc


def verify(vk: VerifyingKey, proof: Proof, inputs: Inputs) -> VerificationResult:
    """
    Verify `proof` against `vk` and the ordered public `inputs`.

    Deterministic and side-effect free; calling it twice with the same
    arguments yields the same result.
    """
    if len(inputs) + 1 != len(vk.s):
        msg = f"expected {len(vk.s) - 1} public inputs, got {len(inputs)}"
        log.debug("verify: %s", msg)
        return VerificationResult(False, FailureKind.INPUT_LENGTH_MISMATCH, msg)

    p = G1Affine.from_projective(_linear_combination(vk.s, inputs))

    try:
        miller_out = multi_miller_loop(
            [proof.pi_a.neg(), vk.alpha, p, proof.pi_c],
            [proof.pi_b, vk.beta, vk.gamma, vk.delta],
        )
    except PairingError as e:
        log.debug("verify: %s", e)
        return VerificationResult(False, FailureKind.PAIRING_FAILED, e.msg)

    result = final_exponentiation(miller_out)
    if result is None:
        return VerificationResult(False, FailureKind.PAIRING_FAILED, "final exponentiation undefined")
    if result == Fq12.one():
        return _ACCEPTED
    log.debug("verify: pairing product is not the identity")
    return VerificationResult(False, FailureKind.PAIRING_MISMATCH, "pairing result is not one")


def require_valid(result: VerificationResult) -> None:
    """Turn a rejected result into a `VerificationError`."""
    if not result.ok:
        kind = result.failure.value if result.failure is not None else None
        raise VerificationError(result.message or "proof did not verify", kind=kind)


Job = Tuple[VerifyingKey, Proof, Inputs]


def _verify_job(job: Job) -> VerificationResult:
    vk, proof, inputs = job
    return verify(vk, proof, inputs)


def _make_executor(kind: str, max_workers: Optional[int]) -> Executor:
    if kind == "thread":
        return ThreadPoolExecutor(max_workers=max_workers)
    if kind == "process":
        return ProcessPoolExecutor(max_workers=max_workers)
    raise ValueError(f"unknown executor kind {kind!r} (expected 'thread' or 'process')")


def verify_batch(
    jobs: Iterable[Job],
    *,
    max_workers: Optional[int] = None,
    executor: str = "thread",
) -> List[VerificationResult]:
    """
    Verify independent (vk, proof, inputs) triples concurrently.

    Results are returned in job order. Jobs share no mutable state, so no
    locking is involved; `executor="process"` sidesteps the GIL for large
    batches.
    """
    jobs = list(jobs)
    if not jobs:
        return []
    if max_workers == 1:
        return [_verify_job(j) for j in jobs]
    with _make_executor(executor, max_workers) as pool:
        results = list(pool.map(_verify_job, jobs))
    log.info(
        "verified batch of %d: %d accepted", len(results), sum(1 for r in results if r.ok)
    )
    return results


__all__ = [
    "FailureKind",
    "VerificationResult",
    "verify",
    "require_valid",
    "verify_batch",
]
