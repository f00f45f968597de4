"""
groth16.primitive_repr
======================

Representation of every domain value as a tree of unsigned machine words,
tuples and lists. This is what crosses the host -> guest boundary: the tree is
language neutral and cheap to (de)serialize inside a constrained environment.

Shapes
------
    Fq, Fr        -> (u64, u64, u64, u64)        little-endian limbs
    Fq2           -> (Fq, Fq)                    (c0, c1)
    G1Affine      -> (Fq, Fq)                    (x, y)
    G2Affine      -> (Fq2, Fq2)                  (x, y)
    Proof         -> (G1, G2, G1)                (pi_a, pi_b, pi_c)
    VerifyingKey  -> (G1, G2, G2, G2, [G1, ...]) (alpha, beta, gamma, delta, s)
    List[T]       -> [T, ...]
    int           -> u32 (batch sizes and similar counters)

Contract
--------
    from_repr(kind, to_repr(x)) == x    for every x without a point at infinity

`to_repr` on a point at infinity raises `InfinityPointError`; `from_repr`
never produces one. Out-of-range limbs, values not below the modulus and
arity mismatches raise `PrimitiveReprError`.

Wire form
---------
`encode_wire` / `decode_wire` serialize the tree with msgpack (msgspec). The
decoder is typed, so signs, u32 widths and arities are checked before
`from_repr` sees the tree. msgpack integers stop at 2**64 - 1, which bounds
limbs from above.

License: MIT
"""

from __future__ import annotations

import logging
import typing
from typing import Annotated, Any, Callable, Dict, List, Tuple

import msgspec

from .curve import G1Affine, G1Projective, G2Affine, G2Projective
from .errors import FieldElementError, InfinityPointError, PrimitiveReprError
from .fields import Fq, Fq2, Fr, Limbs, c0, c1, fq2, from_bigint, from_limbs, to_limbs
from .types import Proof, VerifyingKey

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Wire types (msgspec)
# ---------------------------------------------------------------------------

# msgspec bounds must fit an int64; the u64 ceiling comes from msgpack itself
U64 = Annotated[int, msgspec.Meta(ge=0)]
U32 = Annotated[int, msgspec.Meta(ge=0, le=(1 << 32) - 1)]

FqRepr = Tuple[U64, U64, U64, U64]
Fq2Repr = Tuple[FqRepr, FqRepr]
G1Repr = Tuple[FqRepr, FqRepr]
G2Repr = Tuple[Fq2Repr, Fq2Repr]
ProofRepr = Tuple[G1Repr, G2Repr, G1Repr]
VerifyingKeyRepr = Tuple[G1Repr, G2Repr, G2Repr, G2Repr, List[G1Repr]]
InputsRepr = List[FqRepr]
G1ProjectiveRepr = Tuple[FqRepr, FqRepr, FqRepr]
G2ProjectiveRepr = Tuple[Fq2Repr, Fq2Repr, Fq2Repr]

U32_MAX = (1 << 32) - 1


# ---------------------------------------------------------------------------
# Shape helpers
# ---------------------------------------------------------------------------


def _seq(repr_: Any, n: int, where: str) -> Tuple[Any, ...]:
    if not isinstance(repr_, (tuple, list)) or len(repr_) != n:
        got = len(repr_) if isinstance(repr_, (tuple, list)) else type(repr_).__name__
        raise PrimitiveReprError(f"expected {n} elements, got {got}", field=where)
    return tuple(repr_)


# ---------------------------------------------------------------------------
# Per-type codecs
# ---------------------------------------------------------------------------


def _field_to_repr(x: Any) -> Limbs:
    return to_limbs(int(x))


def _field_from_repr(cls: Any) -> Callable[[Any, str], Any]:
    def decode(repr_: Any, where: str) -> Any:
        limbs = _seq(repr_, 4, where)
        try:
            return from_bigint(cls, from_limbs(limbs))
        except FieldElementError as e:
            raise PrimitiveReprError(e.msg, field=where, ctx=e.ctx, cause=e) from e

    return decode


_fq_from_repr = _field_from_repr(Fq)
_fr_from_repr = _field_from_repr(Fr)


def _fq2_to_repr(x: Fq2) -> Tuple[Limbs, Limbs]:
    return (_field_to_repr(c0(x)), _field_to_repr(c1(x)))


def _fq2_from_repr(repr_: Any, where: str) -> Fq2:
    a, b = _seq(repr_, 2, where)
    return fq2(_fq_from_repr(a, f"{where}[0]"), _fq_from_repr(b, f"{where}[1]"))


def _g1_to_repr(p: G1Affine) -> Tuple[Limbs, Limbs]:
    if p.infinity:
        raise InfinityPointError("cannot represent the G1 point at infinity")
    return (_field_to_repr(p.x), _field_to_repr(p.y))


def _g1_from_repr(repr_: Any, where: str) -> G1Affine:
    x, y = _seq(repr_, 2, where)
    return G1Affine(_fq_from_repr(x, f"{where}.x"), _fq_from_repr(y, f"{where}.y"), False)


def _g2_to_repr(p: G2Affine) -> Tuple[Any, Any]:
    if p.infinity:
        raise InfinityPointError("cannot represent the G2 point at infinity")
    return (_fq2_to_repr(p.x), _fq2_to_repr(p.y))


def _g2_from_repr(repr_: Any, where: str) -> G2Affine:
    x, y = _seq(repr_, 2, where)
    return G2Affine(_fq2_from_repr(x, f"{where}.x"), _fq2_from_repr(y, f"{where}.y"), False)


def _proof_to_repr(pf: Proof) -> Tuple[Any, Any, Any]:
    return (_g1_to_repr(pf.pi_a), _g2_to_repr(pf.pi_b), _g1_to_repr(pf.pi_c))


def _proof_from_repr(repr_: Any, where: str) -> Proof:
    a, b, c = _seq(repr_, 3, where)
    return Proof(
        pi_a=_g1_from_repr(a, f"{where}.pi_a"),
        pi_b=_g2_from_repr(b, f"{where}.pi_b"),
        pi_c=_g1_from_repr(c, f"{where}.pi_c"),
    )


def _vk_to_repr(vk: VerifyingKey) -> Tuple[Any, Any, Any, Any, Any]:
    return (
        _g1_to_repr(vk.alpha),
        _g2_to_repr(vk.beta),
        _g2_to_repr(vk.gamma),
        _g2_to_repr(vk.delta),
        [_g1_to_repr(p) for p in vk.s],
    )


def _vk_from_repr(repr_: Any, where: str) -> VerifyingKey:
    alpha, beta, gamma, delta, s = _seq(repr_, 5, where)
    if not isinstance(s, (list, tuple)):
        raise PrimitiveReprError("expected a sequence of G1 points", field=f"{where}.s")
    return VerifyingKey(
        alpha=_g1_from_repr(alpha, f"{where}.alpha"),
        beta=_g2_from_repr(beta, f"{where}.beta"),
        gamma=_g2_from_repr(gamma, f"{where}.gamma"),
        delta=_g2_from_repr(delta, f"{where}.delta"),
        s=tuple(_g1_from_repr(p, f"{where}.s[{i}]") for i, p in enumerate(s)),
    )


def _u32_to_repr(n: int) -> int:
    if isinstance(n, bool) or not isinstance(n, int) or not 0 <= n <= U32_MAX:
        raise PrimitiveReprError("expected a u32", ctx={"value": repr(n)})
    return n


def _u32_from_repr(repr_: Any, where: str) -> int:
    if isinstance(repr_, bool) or not isinstance(repr_, int) or not 0 <= repr_ <= U32_MAX:
        raise PrimitiveReprError("expected a u32", field=where, ctx={"value": repr(repr_)})
    return repr_


_ENCODERS: Dict[Any, Callable[[Any], Any]] = {
    Fq: _field_to_repr,
    Fr: _field_to_repr,
    Fq2: _fq2_to_repr,
    G1Affine: _g1_to_repr,
    G2Affine: _g2_to_repr,
    Proof: _proof_to_repr,
    VerifyingKey: _vk_to_repr,
    int: _u32_to_repr,
}

_DECODERS: Dict[Any, Callable[[Any, str], Any]] = {
    Fq: _fq_from_repr,
    Fr: _fr_from_repr,
    Fq2: _fq2_from_repr,
    G1Affine: _g1_from_repr,
    G2Affine: _g2_from_repr,
    Proof: _proof_from_repr,
    VerifyingKey: _vk_from_repr,
    int: _u32_from_repr,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def to_repr(value: Any) -> Any:
    """
    Convert a domain value (or a list/tuple of them) to its primitive tree.

    Lists keep their order and length; a plain `int` is treated as a u32.
    """
    if isinstance(value, (list, tuple)):
        return [to_repr(v) for v in value]
    enc = _ENCODERS.get(type(value))
    if enc is None:
        raise TypeError(f"no primitive representation for {type(value).__name__}")
    return enc(value)


def from_repr(kind: Any, repr_: Any, *, where: str = "$") -> Any:
    """
    Rebuild a value of `kind` from its primitive tree.

    `kind` is one of Fq, Fr, Fq2, G1Affine, G2Affine, Proof, VerifyingKey, int,
    or `List[...]` of those (e.g. `groth16.types.Inputs`).
    """
    if typing.get_origin(kind) in (list, List):
        (elem,) = typing.get_args(kind)
        if not isinstance(repr_, (list, tuple)):
            raise PrimitiveReprError("expected a sequence", field=where)
        return [from_repr(elem, r, where=f"{where}[{i}]") for i, r in enumerate(repr_)]
    dec = _DECODERS.get(kind)
    if dec is None:
        raise TypeError(f"no primitive representation for {getattr(kind, '__name__', kind)!r}")
    return dec(repr_, where)


def projective_to_repr(pt: G1Projective | G2Projective) -> Tuple[Any, Any, Any]:
    """(x, y, z) of a py_ecc projective point; infinity (z == 0) is representable here."""
    x, y, z = pt
    enc = _fq2_to_repr if isinstance(x, Fq2) else _field_to_repr
    return (enc(x), enc(y), enc(z))


def projective_from_repr(kind: Any, repr_: Any, *, where: str = "$") -> G1Projective | G2Projective:
    """Inverse of `projective_to_repr`; `kind` is G1Affine or G2Affine."""
    dec = {G1Affine: _fq_from_repr, G2Affine: _fq2_from_repr}.get(kind)
    if dec is None:
        raise TypeError(f"no projective representation for {getattr(kind, '__name__', kind)!r}")
    x, y, z = _seq(repr_, 3, where)
    return (dec(x, f"{where}.x"), dec(y, f"{where}.y"), dec(z, f"{where}.z"))


# Wire types for decode_wire, keyed by domain kind.
_WIRE_TYPES: Dict[Any, Any] = {
    Fq: FqRepr,
    Fr: FqRepr,
    Fq2: Fq2Repr,
    G1Affine: G1Repr,
    G2Affine: G2Repr,
    Proof: ProofRepr,
    VerifyingKey: VerifyingKeyRepr,
    int: U32,
}


def wire_type(kind: Any) -> Any:
    """msgspec type describing the primitive tree of `kind`."""
    if typing.get_origin(kind) in (list, List):
        (elem,) = typing.get_args(kind)
        return List[wire_type(elem)]  # type: ignore[misc]
    try:
        return _WIRE_TYPES[kind]
    except KeyError:
        raise TypeError(f"no wire type for {getattr(kind, '__name__', kind)!r}") from None


_encoder = msgspec.msgpack.Encoder()


def encode_wire(value: Any) -> bytes:
    """msgpack bytes of `to_repr(value)`."""
    return _encoder.encode(to_repr(value))


def decode_wire(kind: Any, data: bytes) -> Any:
    """Typed msgpack decode followed by `from_repr(kind, ...)`."""
    try:
        tree = msgspec.msgpack.decode(data, type=wire_type(kind))
    except (msgspec.ValidationError, msgspec.DecodeError) as e:
        raise PrimitiveReprError(f"malformed wire payload: {e}", cause=e) from e
    log.debug("decoded %d-byte wire payload", len(data))
    return from_repr(kind, tree)


__all__ = [
    "FqRepr",
    "Fq2Repr",
    "G1Repr",
    "G2Repr",
    "ProofRepr",
    "VerifyingKeyRepr",
    "InputsRepr",
    "G1ProjectiveRepr",
    "G2ProjectiveRepr",
    "U32",
    "U64",
    "to_repr",
    "from_repr",
    "projective_to_repr",
    "projective_from_repr",
    "wire_type",
    "encode_wire",
    "decode_wire",
]
