import pytest

from groth16.errors import GuestHalt, PrimitiveReprError
from groth16.fields import Fr
from groth16.guest import guest_main, read_guest_input, write_guest_input
from groth16.tests import configure_test_logging

configure_test_logging()


def test_payload_round_trip(vk, proof, inputs):
    data = write_guest_input(3, inputs, proof, vk)
    batch_size, got_inputs, got_proof, got_vk = read_guest_input(data)
    assert batch_size == 3
    assert got_inputs == inputs
    assert got_proof == proof
    assert got_vk == vk


def test_malformed_payload():
    with pytest.raises(PrimitiveReprError):
        read_guest_input(b"\x93\x01\x90")
    with pytest.raises(PrimitiveReprError):
        read_guest_input(b"")


def test_batch_size_must_fit_u32(vk, proof, inputs):
    with pytest.raises(PrimitiveReprError):
        write_guest_input(1 << 32, inputs, proof, vk)


def test_empty_batch_verifies_nothing(vk, proof):
    # even a mismatched input list passes when nothing is verified
    guest_main(write_guest_input(0, [], proof, vk))


@pytest.mark.slow
def test_guest_accepts_valid_batch(vk, proof, inputs):
    assert guest_main(write_guest_input(2, inputs, proof, vk)) is None


@pytest.mark.slow
def test_guest_halts_on_rejected_proof(vk, proof, inputs):
    bad = [Fr.one()] + list(inputs[1:])
    with pytest.raises(GuestHalt, match="PAIRING_MISMATCH"):
        guest_main(write_guest_input(1, bad, proof, vk))
