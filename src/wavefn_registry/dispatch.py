"""The add_wavefunction call surface.

Authentication happens here, before any Registry logic runs. A call's origin
is either a verified ``Principal`` or ``None``.
"""
from __future__ import annotations

from dataclasses import dataclass

from wavefn_core.crypto import sign_ed25519, verify_ed25519
from wavefn_core.protocol import CALL_DOMAIN
from wavefn_core.records import Principal

from .errors import Unauthenticated
from .registry import Registry

# Deployment policy for the call. Metering is the host's concern.
CALL_WEIGHT = 10_000
PAYS_FEE = False


@dataclass(frozen=True)
class SignedCall:
    function: bytes
    signer: bytes
    signature: bytes


def signing_payload(function: bytes) -> bytes:
    return CALL_DOMAIN + bytes(function)


def sign_call(seed: bytes, function: bytes) -> SignedCall:
    function = bytes(function)
    pub, sig = sign_ed25519(seed, signing_payload(function))
    return SignedCall(function=function, signer=pub, signature=sig)


def authenticate(call: SignedCall) -> Principal | None:
    if not verify_ed25519(call.signer, signing_payload(call.function), call.signature):
        return None
    return Principal(call.signer)


def ensure_signed(origin: Principal | None) -> Principal:
    if origin is None:
        raise Unauthenticated()
    return origin


def add_wavefunction(registry: Registry, origin: Principal | None, function: bytes) -> None:
    author = ensure_signed(origin)
    registry.submit(author, function)


def dispatch(registry: Registry, call: SignedCall) -> str:
    """Authenticate a signed call and submit it. Returns the RecordId."""
    author = ensure_signed(authenticate(call))
    return registry.submit(author, call.function)
