"""Multisig service: deterministic ECDSA keys derived from the mnemonic seed."""

from __future__ import annotations

import enum
import hashlib
import hmac
import logging
from dataclasses import dataclass

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, utils
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from .mnemonic import KvManager

log = logging.getLogger(__name__)

MIN_SESSION_NONCE_LEN = 4
MESSAGE_DIGEST_LEN = 32
_SECP256K1_ORDER = int(
    "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141", 16
)
_SIGNATURE_ALGORITHM = ec.ECDSA(utils.Prehashed(hashes.SHA256()))


class KeyPresence(enum.IntEnum):
    UNSPECIFIED = 0
    PRESENT = 1
    ABSENT = 2
    FAIL = 3


@dataclass(frozen=True)
class KeygenResponse:
    """Either the encoded public key or an error message."""

    pub_key: bytes | None = None
    error: str | None = None


@dataclass(frozen=True)
class SignResponse:
    """Either a DER-encoded signature or an error message."""

    signature: bytes | None = None
    error: str | None = None


def _derive_key(secret_recovery_key: bytes, session_nonce: bytes) -> ec.EllipticCurvePrivateKey:
    if len(session_nonce) < MIN_SESSION_NONCE_LEN:
        raise ValueError(
            f"session nonce length {len(session_nonce)} is less than the minimum "
            f"{MIN_SESSION_NONCE_LEN}"
        )
    counter = 0
    while True:
        material = hmac.new(
            secret_recovery_key,
            session_nonce + counter.to_bytes(4, "big"),
            hashlib.sha512,
        ).digest()
        scalar = int.from_bytes(material, "big") % _SECP256K1_ORDER
        if scalar:
            return ec.derive_private_key(scalar, ec.SECP256K1())
        counter += 1


def _encoded_verifying_key(key: ec.EllipticCurvePrivateKey) -> bytes:
    return key.public_key().public_bytes(Encoding.X962, PublicFormat.CompressedPoint)


def _check_digest(msg_digest: bytes) -> bytes:
    digest = bytes(msg_digest)
    if len(digest) != MESSAGE_DIGEST_LEN:
        raise ValueError(
            f"message digest must be {MESSAGE_DIGEST_LEN} bytes, got {len(digest)}"
        )
    return digest


def verify(pub_key: bytes, msg_digest: bytes, signature: bytes) -> bool:
    """Check a DER signature over a 32-byte digest against a compressed public key."""
    digest = _check_digest(msg_digest)
    public_key = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), bytes(pub_key))
    try:
        public_key.verify(bytes(signature), digest, _SIGNATURE_ALGORITHM)
    except InvalidSignature:
        return False
    return True


class MultisigService:
    """Keygen, sign and key-presence requests backed by a KvManager."""

    def __init__(self, kv_manager: KvManager) -> None:
        self.kv_manager = kv_manager

    async def handle_key_presence(self, key_uid: str) -> KeyPresence:
        await self.kv_manager.seed()
        log.debug("[%s] key presence check for multisig always return Present", key_uid)
        return KeyPresence.PRESENT

    async def handle_keygen(self, key_uid: str) -> bytes:
        secret_recovery_key = await self.kv_manager.seed()
        try:
            key = _derive_key(secret_recovery_key, key_uid.encode("utf-8"))
        except ValueError as err:
            raise ValueError("Cannot generate keypair") from err
        return _encoded_verifying_key(key)

    async def handle_sign(self, key_uid: str, msg_to_sign: bytes) -> bytes:
        secret_recovery_key = await self.kv_manager.seed()
        try:
            key = _derive_key(secret_recovery_key, key_uid.encode("utf-8"))
        except ValueError as err:
            raise ValueError("key re-generation failed") from err
        digest = _check_digest(msg_to_sign)
        return key.sign(digest, _SIGNATURE_ALGORITHM)

    async def key_presence(self, key_uid: str) -> KeyPresence:
        try:
            result = await self.handle_key_presence(key_uid)
        except Exception as err:
            log.error("Unable to complete key presence check: %s", err)
            return KeyPresence.FAIL
        log.info("Key presence check completed succesfully")
        return result

    async def keygen(self, key_uid: str, party_uid: str = "") -> KeygenResponse:
        try:
            pub_key = await self.handle_keygen(key_uid)
        except Exception as err:
            log.error(
                "[%s] Multisig Keygen with key id [%s] failed: %s", party_uid, key_uid, err
            )
            return KeygenResponse(error=str(err))
        log.info("[%s] Multisig Keygen with key id [%s] completed", party_uid, key_uid)
        return KeygenResponse(pub_key=pub_key)

    async def sign(self, key_uid: str, msg_to_sign: bytes, party_uid: str = "") -> SignResponse:
        try:
            signature = await self.handle_sign(key_uid, msg_to_sign)
        except Exception as err:
            log.error(
                "[%s] Multisig sign with key id [%s] and message [%r] failed: %s",
                party_uid,
                key_uid,
                msg_to_sign,
                err,
            )
            return SignResponse(error=str(err))
        log.info(
            "[%s] Multisig Sign with key id [%s] and message [%r] completed",
            party_uid,
            key_uid,
            msg_to_sign,
        )
        return SignResponse(signature=signature)