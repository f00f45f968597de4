# groth16/__init__.py
"""
groth16: BN254 Groth16 proof verification

A small, stable interface around one operation: check a Groth16 proof for
given public inputs against the verifying key of its circuit, on the BN254
(alt_bn128) curve. Curve and pairing arithmetic come from `py_ecc`.

Modules
-------
- `groth16.fields`          → Fq / Fr / Fq2 / Fq12 and canonical limb conversion
- `groth16.curve`           → affine G1 / G2 points
- `groth16.types`           → VerifyingKey, Proof, Inputs
- `groth16.pairing_bn254`   → combined Miller loop + final exponentiation
- `groth16.verifier`        → verify / verify_batch / require_valid
- `groth16.json_repr`       → human-readable JSON files (decimal or 0x-hex numerals)
- `groth16.primitive_repr`  → machine-word trees and their msgpack wire form
- `groth16.guest`           → host -> guest payload and the guest entry point
- `groth16.config`          → settings (file + GROTH16_* env) and logging setup
- `groth16.cli`             → `groth16-verify` command

Usage
-----
>>> from groth16 import load_json, verify, Inputs, Proof, VerifyingKey
>>> vk = load_json("vk.json", VerifyingKey)
>>> proof = load_json("proof.json", Proof)
>>> inputs = load_json("inputs.json", Inputs)
>>> verify(vk, proof, inputs).ok
True

Rejection is a value, not an exception: inspect `result.failure` for the
reason, or call `require_valid(result)` to raise `VerificationError`.
"""

from __future__ import annotations

from .curve import G1Affine, G2Affine
from .errors import (
    ErrorCode,
    FieldElementError,
    Groth16Error,
    GuestHalt,
    InfinityPointError,
    JsonReprError,
    LoaderError,
    PairingError,
    PrimitiveReprError,
    VerificationError,
)
from .fields import Fq, Fq2, Fq12, Fr
from .json_repr import dump_json, dumps_json, from_json, load_json, to_json
from .primitive_repr import decode_wire, encode_wire, from_repr, to_repr
from .types import Inputs, Proof, VerifyingKey
from .verifier import FailureKind, VerificationResult, require_valid, verify, verify_batch

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # fields & points
    "Fq",
    "Fr",
    "Fq2",
    "Fq12",
    "G1Affine",
    "G2Affine",
    # records
    "Inputs",
    "Proof",
    "VerifyingKey",
    # verification
    "FailureKind",
    "VerificationResult",
    "verify",
    "verify_batch",
    "require_valid",
    # representations
    "to_json",
    "from_json",
    "load_json",
    "dumps_json",
    "dump_json",
    "to_repr",
    "from_repr",
    "encode_wire",
    "decode_wire",
    # errors
    "ErrorCode",
    "Groth16Error",
    "FieldElementError",
    "JsonReprError",
    "PrimitiveReprError",
    "LoaderError",
    "PairingError",
    "VerificationError",
    "InfinityPointError",
    "GuestHalt",
]
