"""
groth16.json_repr
=================

Human-readable JSON representation of keys, proofs and public inputs.

Shapes
------
Verifying key (vk.json):
{
  "alpha": [x, y],
  "beta":  [[x_c0, x_c1], [y_c0, y_c1]],
  "gamma": [[x_c0, x_c1], [y_c0, y_c1]],
  "delta": [[x_c0, x_c1], [y_c0, y_c1]],
  "s":     [[x, y], ...]                 # length = 1 + #public inputs
}

Proof (proof.json):
{
  "pi_a": [x, y],
  "pi_b": [[x_c0, x_c1], [y_c0, y_c1]],
  "pi_c": [x, y]
}

Public inputs (inputs.json):
  [ "123", "0x45", ... ]

Field elements are strings. `to_json` always writes decimal. `from_json`
also accepts `0x`-prefixed hex, read as a big-endian numeral of at most 32
bytes (odd digit counts get one leading '0'); hex values must already be
below the modulus, decimal values are reduced.

The point at infinity has no JSON form: encoding it raises
`InfinityPointError`, decoded points always have `infinity=False`.

Public API
----------
- to_json(value) -> JSON-compatible tree
- from_json(kind, data) -> value
- load_json(path, kind) -> value           (raises LoaderError)
- dumps_json(value) -> bytes / dump_json(path, value) -> None

License: MIT
"""

from __future__ import annotations

import logging
import os
import struct
import typing
from typing import Any, Callable, Dict, List, Tuple, Union

import msgspec

from .curve import G1Affine, G2Affine
from .errors import FieldElementError, InfinityPointError, JsonReprError, LoaderError
from .fields import Fq, Fq2, Fr, c0, c1, fq2, from_bigint, from_limbs, parse_decimal
from .serialization import le_bytes32_from_hex
from .types import Proof, VerifyingKey

log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

# ---------------------------------------------------------------------------
# JSON shapes (msgspec)
# ---------------------------------------------------------------------------

FieldJson = str
Fq2Json = Tuple[str, str]
G1AffineJson = Tuple[str, str]
G2AffineJson = Tuple[Fq2Json, Fq2Json]


class VerifyingKeyJson(msgspec.Struct):
    alpha: G1AffineJson
    beta: G2AffineJson
    gamma: G2AffineJson
    delta: G2AffineJson
    s: List[G1AffineJson]


class ProofJson(msgspec.Struct):
    pi_a: G1AffineJson
    pi_b: G2AffineJson
    pi_c: G1AffineJson


# ---------------------------------------------------------------------------
# Field elements
# ---------------------------------------------------------------------------


def _field_from_hex(cls: Any, s: str) -> Any:
    try:
        le = le_bytes32_from_hex(s)
    except ValueError as e:
        raise FieldElementError(f"failed to parse hex string: {e}", value=s, cause=e) from e
    return from_bigint(cls, from_limbs(struct.unpack("<4Q", le)))


def _field_from_json(cls: Any) -> Callable[[Any, str], Any]:
    def decode(data: Any, where: str) -> Any:
        if not isinstance(data, str):
            raise JsonReprError(
                f"expected a string field element, got {type(data).__name__}", field=where
            )
        try:
            if data.startswith("0x"):
                return _field_from_hex(cls, data)
            return parse_decimal(cls, data)
        except FieldElementError as e:
            raise JsonReprError(e.msg, field=where, ctx=e.ctx, cause=e) from e

    return decode


_fq_from_json = _field_from_json(Fq)
_fr_from_json = _field_from_json(Fr)


def _field_to_json(x: Any) -> str:
    return str(int(x))


def _pair(data: Any, where: str) -> Tuple[Any, Any]:
    if not isinstance(data, (list, tuple)) or len(data) != 2:
        raise JsonReprError("expected a 2-element array", field=where)
    return data[0], data[1]


# ---------------------------------------------------------------------------
# Fq2 and points
# ---------------------------------------------------------------------------


def _fq2_to_json(x: Fq2) -> List[str]:
    return [_field_to_json(c0(x)), _field_to_json(c1(x))]


def _fq2_from_json(data: Any, where: str) -> Fq2:
    a, b = _pair(data, where)
    return fq2(_fq_from_json(a, f"{where}[0]"), _fq_from_json(b, f"{where}[1]"))


def _g1_to_json(p: G1Affine) -> List[str]:
    if p.infinity:
        raise InfinityPointError("cannot represent the G1 point at infinity")
    return [_field_to_json(p.x), _field_to_json(p.y)]


def _g1_from_json(data: Any, where: str) -> G1Affine:
    x, y = _pair(data, where)
    return G1Affine(_fq_from_json(x, f"{where}[0]"), _fq_from_json(y, f"{where}[1]"), False)


def _g2_to_json(p: G2Affine) -> List[List[str]]:
    if p.infinity:
        raise InfinityPointError("cannot represent the G2 point at infinity")
    return [_fq2_to_json(p.x), _fq2_to_json(p.y)]


def _g2_from_json(data: Any, where: str) -> G2Affine:
    x, y = _pair(data, where)
    return G2Affine(_fq2_from_json(x, f"{where}[0]"), _fq2_from_json(y, f"{where}[1]"), False)


# ---------------------------------------------------------------------------
# Proof and verifying key
# ---------------------------------------------------------------------------


def _convert(data: Any, shape: Any, where: str) -> Any:
    try:
        return msgspec.convert(data, type=shape)
    except msgspec.ValidationError as e:
        # msgspec reports the location as "... - at `$.beta[1]`"
        msg = str(e)
        field = where
        if " - at `" in msg:
            field = msg.rsplit(" - at `", 1)[1].rstrip("`").replace("$", where, 1)
        raise JsonReprError(msg, field=field, cause=e) from e


def _proof_to_json(pf: Proof) -> Dict[str, Any]:
    return msgspec.to_builtins(
        ProofJson(
            pi_a=_g1_to_json(pf.pi_a),
            pi_b=_g2_to_json(pf.pi_b),
            pi_c=_g1_to_json(pf.pi_c),
        )
    )


def _proof_from_json(data: Any, where: str) -> Proof:
    js: ProofJson = _convert(data, ProofJson, where)
    return Proof(
        pi_a=_g1_from_json(js.pi_a, f"{where}.pi_a"),
        pi_b=_g2_from_json(js.pi_b, f"{where}.pi_b"),
        pi_c=_g1_from_json(js.pi_c, f"{where}.pi_c"),
    )


def _vk_to_json(vk: VerifyingKey) -> Dict[str, Any]:
    return msgspec.to_builtins(
        VerifyingKeyJson(
            alpha=_g1_to_json(vk.alpha),
            beta=_g2_to_json(vk.beta),
            gamma=_g2_to_json(vk.gamma),
            delta=_g2_to_json(vk.delta),
            s=[_g1_to_json(p) for p in vk.s],
        )
    )


def _vk_from_json(data: Any, where: str) -> VerifyingKey:
    js: VerifyingKeyJson = _convert(data, VerifyingKeyJson, where)
    return VerifyingKey(
        alpha=_g1_from_json(js.alpha, f"{where}.alpha"),
        beta=_g2_from_json(js.beta, f"{where}.beta"),
        gamma=_g2_from_json(js.gamma, f"{where}.gamma"),
        delta=_g2_from_json(js.delta, f"{where}.delta"),
        s=tuple(_g1_from_json(p, f"{where}.s[{i}]") for i, p in enumerate(js.s)),
    )


_ENCODERS: Dict[Any, Callable[[Any], Any]] = {
    Fq: _field_to_json,
    Fr: _field_to_json,
    Fq2: _fq2_to_json,
    G1Affine: _g1_to_json,
    G2Affine: _g2_to_json,
    Proof: _proof_to_json,
    VerifyingKey: _vk_to_json,
}

_DECODERS: Dict[Any, Callable[[Any, str], Any]] = {
    Fq: _fq_from_json,
    Fr: _fr_from_json,
    Fq2: _fq2_from_json,
    G1Affine: _g1_from_json,
    G2Affine: _g2_from_json,
    Proof: _proof_from_json,
    VerifyingKey: _vk_from_json,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def to_json(value: Any) -> Any:
    """JSON-compatible tree (dicts, lists, decimal strings) for `value`."""
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    enc = _ENCODERS.get(type(value))
    if enc is None:
        raise TypeError(f"no JSON representation for {type(value).__name__}")
    return enc(value)


def from_json(kind: Any, data: Any, *, where: str = "$") -> Any:
    """
    Rebuild a value of `kind` from its JSON tree.

    `kind` is one of Fq, Fr, Fq2, G1Affine, G2Affine, Proof, VerifyingKey or
    `List[...]` of those (e.g. `groth16.types.Inputs`).
    """
    if typing.get_origin(kind) in (list, List):
        (elem,) = typing.get_args(kind)
        if not isinstance(data, list):
            raise JsonReprError("expected a JSON array", field=where)
        return [from_json(elem, d, where=f"{where}[{i}]") for i, d in enumerate(data)]
    dec = _DECODERS.get(kind)
    if dec is None:
        raise TypeError(f"no JSON representation for {getattr(kind, '__name__', kind)!r}")
    return dec(data, where)


def load_json(path: PathLike, kind: Any) -> Any:
    """
    Load a `kind` value from a JSON file.

    Any I/O error, malformed JSON, wrong shape or bad numeral raises
    `LoaderError` carrying the file path and, where known, the field.
    """
    p = os.fspath(path)
    try:
        with open(p, "rb") as fh:
            raw = fh.read()
    except OSError as e:
        raise LoaderError(f"cannot read file: {e.strerror or e}", path=p, cause=e) from e
    try:
        data = msgspec.json.decode(raw)
    except msgspec.DecodeError as e:
        raise LoaderError(f"malformed JSON: {e}", path=p, cause=e) from e
    try:
        value = from_json(kind, data)
    except JsonReprError as e:
        raise LoaderError(e.msg, path=p, field=e.ctx.get("field"), cause=e) from e
    log.debug("loaded %s from %s", getattr(kind, "__name__", kind), p)
    return value


def dumps_json(value: Any, *, indent: int = 2) -> bytes:
    """Encoded canonical (decimal) JSON of `value`."""
    buf = msgspec.json.encode(to_json(value))
    return msgspec.json.format(buf, indent=indent) if indent else buf


def dump_json(path: PathLike, value: Any, *, indent: int = 2) -> None:
    """Write `dumps_json(value)` to `path`."""
    with open(os.fspath(path), "wb") as fh:
        fh.write(dumps_json(value, indent=indent))
        fh.write(b"\n")


__all__ = [
    "FieldJson",
    "Fq2Json",
    "G1AffineJson",
    "G2AffineJson",
    "VerifyingKeyJson",
    "ProofJson",
    "to_json",
    "from_json",
    "load_json",
    "dumps_json",
    "dump_json",
]
