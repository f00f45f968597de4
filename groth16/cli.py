#!/usr/bin/env python3
"""
groth16/cli.py: load a verifying key, proof and public inputs from JSON and
verify the proof a number of times.

Prints the outcome and, on rejection, the failure kind and reason. With
--wire the three values are packed into the guest payload (primitive
representation, msgpack) and verified by the guest entry point instead, the
way a constrained environment would receive them.

Usage examples:
  groth16-verify --vk vk.json --proof proof.json --inputs inputs.json
  groth16-verify --vk vk.json --proof proof.json --inputs inputs.json -n 8 --workers 4
  groth16-verify --vk vk.json --proof proof.json --inputs inputs.json --wire --json

Exit codes: 0 accepted, 1 rejected, 2 input files could not be loaded.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Any, Dict, List, Optional

from .config import configure_logging, load_settings
from .errors import GuestHalt, Groth16Error
from .guest import guest_main, write_guest_input
from .json_repr import load_json
from .serialization import dumps_canonical
from .types import Inputs, Proof, VerifyingKey
from .verifier import VerificationResult, verify, verify_batch

log = logging.getLogger("groth16.cli")


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        prog="groth16-verify",
        description="Verify a BN254 Groth16 proof from JSON files.",
    )
    ap.add_argument("--vk", required=True, help="verifying key JSON file")
    ap.add_argument("--proof", required=True, help="proof JSON file")
    ap.add_argument("--inputs", required=True, help="public inputs JSON file")
    ap.add_argument("-n", "--batch-size", type=int, default=None, help="times to verify (default from settings: 1)")
    ap.add_argument("--workers", type=int, default=None, help="parallel workers for the batch")
    ap.add_argument("--wire", action="store_true", help="verify through the guest wire payload")
    ap.add_argument("--json", action="store_true", help="machine-readable output")
    ap.add_argument("--config", default=None, help="settings file (JSON or YAML)")
    ap.add_argument("-v", "--verbose", action="store_true", help="log progress to stderr")
    return ap.parse_args(argv)


def _emit(report: Dict[str, Any], as_json: bool) -> None:
    if as_json:
        sys.stdout.write(dumps_canonical(report) + "\n")
        return
    print(f"Batch size: {report['batch_size']}")
    print(f"Public input length: {report['num_inputs']}")
    if report["ok"]:
        print(f"verify -> ok ({report['elapsed_s']:.3f}s)")
    else:
        print(f"verify -> REJECTED [{report['failure']}] {report['message']}")


def _run_direct(vk: VerifyingKey, proof: Proof, inputs: Inputs, n: int, workers: int, executor: str) -> VerificationResult:
    if n == 0:
        return VerificationResult(ok=True)
    if workers == 1 or n == 1:
        results = [verify(vk, proof, inputs) for _ in range(n)]
    else:
        results = verify_batch([(vk, proof, inputs)] * n, max_workers=workers or None, executor=executor)
    for r in results:
        if not r.ok:
            return r
    return results[0]


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        settings = load_settings(args.config)
    except (OSError, ValueError) as e:
        sys.stderr.write(f"error: bad settings: {e}\n")
        return 2
    configure_logging(settings, force=args.verbose)

    n = settings.batch_size if args.batch_size is None else args.batch_size
    workers = settings.max_workers if args.workers is None else args.workers
    if n < 0 or workers < 0:
        sys.stderr.write("error: batch size and workers must be >= 0\n")
        return 2

    try:
        inputs: Inputs = load_json(args.inputs, Inputs)
        proof: Proof = load_json(args.proof, Proof)
        vk: VerifyingKey = load_json(args.vk, VerifyingKey)
    except Groth16Error as e:
        sys.stderr.write(f"error: {e}\n")
        return 2
    log.info("loaded vk (%d inputs), proof and %d public inputs", vk.num_inputs, len(inputs))

    started = time.perf_counter()
    if args.wire:
        try:
            payload = write_guest_input(n, inputs, proof, vk)
        except Groth16Error as e:
            sys.stderr.write(f"error: {e}\n")
            return 2
        log.info("guest payload: %d bytes", len(payload))
        try:
            guest_main(payload)
            result = VerificationResult(ok=True)
        except GuestHalt as e:
            # the guest only reports that it halted; re-run once on the host for the reason
            result = verify(vk, proof, inputs)
            log.warning("guest halted: %s", e)
    else:
        result = _run_direct(vk, proof, inputs, n, workers, settings.executor)
    elapsed = time.perf_counter() - started
    if not result.ok:
        log.warning("proof rejected: %s", result.failure.value if result.failure else result.message)

    report = {
        "ok": result.ok,
        "failure": result.failure.value if result.failure is not None else None,
        "message": result.message,
        "batch_size": n,
        "num_inputs": len(inputs),
        "wire": bool(args.wire),
        "elapsed_s": round(elapsed, 6),
    }
    _emit(report, args.json)
    return 0 if result.ok else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
