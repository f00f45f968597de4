"""
Typed exceptions for the groth16 package.

Design goals
- Structured: machine-readable code + human message + contextual fields.
- Composable: wrap lower-level exceptions with preserved causes.
- Rejection of a proof is *not* an error: see `groth16.verifier.VerificationResult`.

Exported:
  - Groth16Error (base)
  - FieldElementError, JsonReprError, PrimitiveReprError, LoaderError
  - PairingError, VerificationError
  - InfinityPointError, GuestHalt (contract violations, AssertionError subclasses)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class ErrorCode(str, Enum):
    """Canonical error codes."""

    UNKNOWN = "UNKNOWN"

    FIELD_ELEMENT = "FIELD_ELEMENT"  # bad numeral / out of range value
    JSON_REPR = "JSON_REPR"  # JSON shape or content invalid
    PRIMITIVE_REPR = "PRIMITIVE_REPR"  # primitive word tree invalid
    LOAD = "LOAD"  # file could not be read or decoded
    PAIRING = "PAIRING"  # pairing collaborator refused the input
    VERIFICATION = "VERIFICATION"  # raised only on request (require_valid)


@dataclass
class Groth16Error(Exception):
    """
    Base structured error.

    Fields:
      code:  stable machine code (ErrorCode | str)
      msg:   human-readable summary
      ctx:   small dict of contextual fields (path, field, lengths, ...)
      cause: optional underlying exception (not serialized)
    """

    code: ErrorCode | str = ErrorCode.UNKNOWN
    msg: str = "groth16 error"
    ctx: Dict[str, Any] = field(default_factory=dict)
    cause: Optional[BaseException] = None

    def __str__(self) -> str:
        parts = [f"[{getattr(self.code, 'value', self.code)}] {self.msg}"]
        if self.ctx:
            parts.append(f"ctx={self.ctx}")
        if self.cause:
            parts.append(f"cause={self.cause!r}")
        return " ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": getattr(self.code, "value", str(self.code)),
            "msg": self.msg,
            "ctx": self.ctx,
        }


def _ctx(base: Dict[str, Any], extra: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    if extra:
        base.update(extra)
    return base


class FieldElementError(Groth16Error):
    """A numeral could not be turned into a canonical field element."""

    def __init__(
        self,
        msg: str = "invalid field element",
        *,
        value: Optional[str] = None,
        ctx: Optional[Mapping[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        base: Dict[str, Any] = {}
        if value is not None:
            base["value"] = value
        super().__init__(code=ErrorCode.FIELD_ELEMENT, msg=msg, ctx=_ctx(base, ctx), cause=cause)


class JsonReprError(Groth16Error):
    """JSON representation has the wrong shape or holds an invalid numeral."""

    def __init__(
        self,
        msg: str = "invalid JSON representation",
        *,
        field: Optional[str] = None,
        ctx: Optional[Mapping[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        base: Dict[str, Any] = {}
        if field is not None:
            base["field"] = field
        super().__init__(code=ErrorCode.JSON_REPR, msg=msg, ctx=_ctx(base, ctx), cause=cause)


class PrimitiveReprError(Groth16Error):
    """Primitive word tree has the wrong arity or holds out-of-range words."""

    def __init__(
        self,
        msg: str = "invalid primitive representation",
        *,
        field: Optional[str] = None,
        ctx: Optional[Mapping[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        base: Dict[str, Any] = {}
        if field is not None:
            base["field"] = field
        super().__init__(code=ErrorCode.PRIMITIVE_REPR, msg=msg, ctx=_ctx(base, ctx), cause=cause)


class LoaderError(Groth16Error):
    """A key/proof/inputs file could not be loaded. ctx always carries `path`."""

    def __init__(
        self,
        msg: str = "could not load file",
        *,
        path: str,
        field: Optional[str] = None,
        ctx: Optional[Mapping[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        base: Dict[str, Any] = {"path": path}
        if field is not None:
            base["field"] = field
        super().__init__(code=ErrorCode.LOAD, msg=msg, ctx=_ctx(base, ctx), cause=cause)


class PairingError(Groth16Error):
    """The pairing collaborator rejected its input (e.g. a point off the curve)."""

    def __init__(
        self,
        msg: str = "pairing computation failed",
        *,
        ctx: Optional[Mapping[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(code=ErrorCode.PAIRING, msg=msg, ctx=dict(ctx or {}), cause=cause)


class VerificationError(Groth16Error):
    """Raised by `require_valid` when a caller opts into exception flow."""

    def __init__(
        self,
        msg: str = "proof did not verify",
        *,
        kind: Optional[str] = None,
        ctx: Optional[Mapping[str, Any]] = None,
    ) -> None:
        base: Dict[str, Any] = {}
        if kind is not None:
            base["kind"] = kind
        super().__init__(code=ErrorCode.VERIFICATION, msg=msg, ctx=_ctx(base, ctx))


class InfinityPointError(AssertionError):
    """Attempt to serialize the point at infinity (never valid in a key or proof)."""


class GuestHalt(AssertionError):
    """Abnormal termination of the guest program on a rejected proof."""


__all__ = [
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
