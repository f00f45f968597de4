"""
groth16.guest
=============

Boundary contract of a constrained guest program that verifies proofs.

The host writes one msgpack payload

    (batch_size: u32, inputs_repr, proof_repr, vk_repr)

built from the primitive representation (`groth16.primitive_repr`). The guest
rebuilds typed values with `from_repr`, verifies the proof `batch_size` times
and halts abnormally (`GuestHalt`) on the first rejection. A successful run
returns nothing.
"""

from __future__ import annotations

import logging
from typing import Tuple

import msgspec

from .errors import GuestHalt, PrimitiveReprError
from .primitive_repr import U32, InputsRepr, ProofRepr, VerifyingKeyRepr, from_repr, to_repr
from .types import Inputs, Proof, VerifyingKey
from .verifier import verify

log = logging.getLogger(__name__)

GuestInputRepr = Tuple[U32, InputsRepr, ProofRepr, VerifyingKeyRepr]

_encoder = msgspec.msgpack.Encoder()
_decoder = msgspec.msgpack.Decoder(GuestInputRepr)


def write_guest_input(batch_size: int, inputs: Inputs, proof: Proof, vk: VerifyingKey) -> bytes:
    """Host side: serialize one guest payload."""
    return _encoder.encode((to_repr(batch_size), to_repr(inputs), to_repr(proof), to_repr(vk)))


def read_guest_input(data: bytes) -> Tuple[int, Inputs, Proof, VerifyingKey]:
    """Guest side: decode a payload back into typed values."""
    try:
        batch_size, inputs_repr, proof_repr, vk_repr = _decoder.decode(data)
    except (msgspec.ValidationError, msgspec.DecodeError) as e:
        raise PrimitiveReprError(f"malformed guest payload: {e}", cause=e) from e
    return (
        batch_size,
        from_repr(Inputs, inputs_repr, where="$.inputs"),
        from_repr(Proof, proof_repr, where="$.proof"),
        from_repr(VerifyingKey, vk_repr, where="$.vk"),
    )


def guest_main(data: bytes) -> None:
    """
    Verify the payload's proof `batch_size` times.

    For simplicity a batch is simulated by verifying the same proof repeatedly.

    Raises
    ------
    GuestHalt
        On the first rejected verification.
    """
    batch_size, inputs, proof, vk = read_guest_input(data)
    log.debug("guest: batch_size=%d, %d public inputs", batch_size, len(inputs))
    for i in range(batch_size):
        result = verify(vk, proof, inputs)
        if not result.ok:
            kind = result.failure.value if result.failure is not None else "UNKNOWN"
            raise GuestHalt(f"verification {i} failed: {kind}: {result.message}")


__all__ = ["GuestInputRepr", "write_guest_input", "read_guest_input", "guest_main"]
