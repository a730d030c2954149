from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey


def verify_ed25519(public_key_bytes: bytes, message: bytes, signature: bytes) -> bool:
    try:
        vk = VerifyKey(public_key_bytes)
    except (TypeError, ValueError):
        return False
    try:
        vk.verify(message, signature)
        return True
    except (BadSignatureError, ValueError):
        return False


def sign_ed25519(seed: bytes, message: bytes) -> tuple[bytes, bytes]:
    """Sign ``message`` with the key derived from ``seed``. Returns (public_key, signature)."""
    sk = SigningKey(seed)
    return bytes(sk.verify_key), sk.sign(message).signature
