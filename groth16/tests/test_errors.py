from groth16.errors import (
    ErrorCode,
    FieldElementError,
    Groth16Error,
    GuestHalt,
    InfinityPointError,
    LoaderError,
    PairingError,
)


def test_loader_error_carries_path_and_field():
    cause = FieldElementError("bad", value="01")
    e = LoaderError("bad numeral", path="/tmp/vk.json", field="$.alpha[0]", cause=cause)
    assert isinstance(e, Groth16Error)
    assert e.code is ErrorCode.LOAD
    assert e.to_dict() == {
        "code": "LOAD",
        "msg": "bad numeral",
        "ctx": {"path": "/tmp/vk.json", "field": "$.alpha[0]"},
    }
    text = str(e)
    assert text.startswith("[LOAD] bad numeral")
    assert "/tmp/vk.json" in text and "cause=" in text


def test_extra_ctx_is_merged():
    e = FieldElementError("too big", value="99", ctx={"modulus": "Fr"})
    assert e.ctx == {"value": "99", "modulus": "Fr"}


def test_defaults():
    e = PairingError()
    assert e.msg == "pairing computation failed"
    assert e.ctx == {} and e.cause is None
    assert str(e) == "[PAIRING] pairing computation failed"


def test_contract_violations_are_assertions():
    assert issubclass(InfinityPointError, AssertionError)
    assert issubclass(GuestHalt, AssertionError)
    assert not issubclass(InfinityPointError, Groth16Error)
