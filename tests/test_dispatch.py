import pytest

from wavefn_core.records import Principal
from wavefn_registry.dispatch import (
    CALL_WEIGHT,
    PAYS_FEE,
    SignedCall,
    add_wavefunction,
    authenticate,
    dispatch,
    ensure_signed,
    sign_call,
)
from wavefn_registry.errors import PayloadTooLarge, Unauthenticated
from wavefn_registry.registry import Registry

SEED_A = bytes.fromhex("a665a45920422f9d417e4867efdc4fb8a04a1f3fff1fa07e998e86f7f7a27ae3")
SEED_B = bytes(32)


def test_signed_call_authenticates_to_signer():
    call = sign_call(SEED_A, b"psi")
    assert authenticate(call) == Principal(call.signer)


def test_tampered_payload_fails_authentication():
    call = sign_call(SEED_A, b"psi")
    forged = SignedCall(function=b"psj", signer=call.signer, signature=call.signature)
    assert authenticate(forged) is None


def test_wrong_signer_fails_authentication():
    call = sign_call(SEED_A, b"psi")
    other = sign_call(SEED_B, b"psi")
    assert authenticate(SignedCall(b"psi", other.signer, call.signature)) is None


def test_malformed_key_or_signature_fails_authentication():
    call = sign_call(SEED_A, b"psi")
    assert authenticate(SignedCall(b"psi", call.signer[:31], call.signature)) is None
    assert authenticate(SignedCall(b"psi", call.signer, call.signature[:10])) is None


def test_ensure_signed():
    p = Principal(b"\x01" * 32)
    assert ensure_signed(p) is p
    with pytest.raises(Unauthenticated):
        ensure_signed(None)


def test_dispatch_stores_under_signer():
    reg = Registry(max_bytes=16)
    call = sign_call(SEED_A, b"psi")
    rid = dispatch(reg, call)
    assert reg.store.get(rid).author == call.signer
    assert reg.sink.events[0].author == call.signer


def test_dispatch_rejects_forged_call_before_size_check():
    reg = Registry(max_bytes=4)
    call = sign_call(SEED_A, b"too large")
    forged = SignedCall(function=call.function, signer=sign_call(SEED_B, b"").signer, signature=call.signature)
    with pytest.raises(Unauthenticated):
        dispatch(reg, forged)
    with pytest.raises(PayloadTooLarge):
        dispatch(reg, call)
    assert len(reg.store) == 0


def test_add_wavefunction_returns_nothing_and_is_fee_free():
    reg = Registry(max_bytes=16)
    origin = authenticate(sign_call(SEED_A, b"psi"))
    assert add_wavefunction(reg, origin, b"psi") is None
    assert len(reg.store) == 1
    assert PAYS_FEE is False
    assert CALL_WEIGHT == 10_000

    with pytest.raises(Unauthenticated):
        add_wavefunction(reg, None, b"psi")
