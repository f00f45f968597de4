import msgspec
import pytest

from groth16.curve import G1Affine, G2Affine
from groth16.errors import InfinityPointError, PrimitiveReprError
from groth16.fields import Fq, Fr, curve_order, field_modulus, fq2, to_limbs
from groth16.primitive_repr import (
    decode_wire,
    encode_wire,
    from_repr,
    projective_from_repr,
    projective_to_repr,
    to_repr,
    wire_type,
)
from groth16.tests import configure_test_logging
from groth16.types import Inputs, Proof, VerifyingKey

configure_test_logging()


def test_field_is_four_le_limbs():
    assert to_repr(Fr(1)) == (1, 0, 0, 0)
    assert to_repr(Fq(1 << 64)) == (0, 1, 0, 0)
    assert from_repr(Fq, to_limbs(field_modulus - 1)) == Fq(field_modulus - 1)


def test_nested_shapes(vk, proof):
    g1 = to_repr(proof.pi_a)
    assert len(g1) == 2 and all(len(c) == 4 for c in g1)
    g2 = to_repr(proof.pi_b)
    assert len(g2) == 2 and all(len(c) == 2 for c in g2)
    assert len(to_repr(proof)) == 3

    vr = to_repr(vk)
    assert len(vr) == 5
    assert isinstance(vr[4], list) and len(vr[4]) == vk.num_inputs + 1


def test_round_trip(vk, proof, inputs):
    assert from_repr(VerifyingKey, to_repr(vk)) == vk
    assert from_repr(Proof, to_repr(proof)) == proof
    assert from_repr(Inputs, to_repr(inputs)) == inputs
    assert from_repr(int, to_repr(7)) == 7
    x = fq2(Fq(5), Fq(6))
    assert from_repr(type(x), to_repr(x)) == x


def test_value_at_or_above_modulus_is_rejected():
    with pytest.raises(PrimitiveReprError):
        from_repr(Fr, to_limbs(curve_order))
    with pytest.raises(PrimitiveReprError):
        from_repr(Fq, to_limbs(field_modulus))
    # r is canonical in Fq
    assert from_repr(Fq, to_limbs(curve_order)) == Fq(curve_order)


@pytest.mark.parametrize("limbs", [(0, 0, 0), (1 << 64, 0, 0, 0), (-1, 0, 0, 0), "abcd"])
def test_malformed_limbs(limbs):
    with pytest.raises(PrimitiveReprError):
        from_repr(Fr, limbs)


def test_error_names_location(proof):
    tree = to_repr(proof)
    pi_b = tree[1]
    tree = (tree[0], (pi_b[0], (pi_b[1][0], (0, 0, 0))), tree[2])
    with pytest.raises(PrimitiveReprError) as ei:
        from_repr(Proof, tree)
    assert ei.value.ctx["field"] == "$.pi_b.y[1]"


def test_wrong_arity(vk):
    with pytest.raises(PrimitiveReprError):
        from_repr(VerifyingKey, to_repr(vk)[:4])
    with pytest.raises(PrimitiveReprError):
        from_repr(Inputs, (1, 2))


def test_u32_range():
    with pytest.raises(PrimitiveReprError):
        to_repr(1 << 32)
    with pytest.raises(PrimitiveReprError):
        from_repr(int, -1)
    with pytest.raises(PrimitiveReprError):
        from_repr(int, True)


def test_infinity_is_not_representable():
    with pytest.raises(InfinityPointError):
        to_repr(G1Affine.identity())
    with pytest.raises(InfinityPointError):
        to_repr(G2Affine.identity())


def test_projective_form(proof):
    g1 = proof.pi_a.to_projective()
    assert projective_from_repr(G1Affine, projective_to_repr(g1)) == g1
    g2 = proof.pi_b.to_projective()
    assert projective_from_repr(G2Affine, projective_to_repr(g2)) == g2

    # infinity has z == 0 and is representable in projective form
    inf = G1Affine.identity().to_projective()
    back = projective_from_repr(G1Affine, projective_to_repr(inf))
    assert G1Affine.from_projective(back).infinity


def test_wire_round_trip(vk, proof, inputs):
    for value, kind in ((vk, VerifyingKey), (proof, Proof), (inputs, Inputs)):
        data = encode_wire(value)
        assert isinstance(data, bytes)
        assert decode_wire(kind, data) == value


def test_wire_decode_checks_types(proof):
    tree = to_repr(proof)
    short = msgspec.msgpack.encode(tree[:2])
    with pytest.raises(PrimitiveReprError):
        decode_wire(Proof, short)
    with pytest.raises(PrimitiveReprError):
        decode_wire(Fr, msgspec.msgpack.encode([-1, 0, 0, 0]))
    with pytest.raises(PrimitiveReprError):
        decode_wire(Fr, msgspec.msgpack.encode([1, 0, 0, 0, 0]))
    with pytest.raises(PrimitiveReprError):
        decode_wire(Fr, b"\xc1")


def test_wire_accepts_full_width_limbs():
    # the largest u64 is a valid word; the value it forms is then range-checked
    assert decode_wire(Fr, msgspec.msgpack.encode([(1 << 64) - 1, 0, 0, 0])) == Fr((1 << 64) - 1)
    with pytest.raises(PrimitiveReprError):
        decode_wire(Fr, msgspec.msgpack.encode([(1 << 64) - 1] * 4))


def test_wire_type_for_lists():
    assert msgspec.msgpack.decode(encode_wire([Fr(3)]), type=wire_type(Inputs)) == [(3, 0, 0, 0)]
