import asyncio

import pytest

from tofnd.mnemonic import Cmd, KvManager
from tofnd.multisig import KeyPresence, MultisigService, verify

MSG = bytes([32] * 32)


@pytest.fixture
def service(tmp_path):
    manager = KvManager(tmp_path)
    asyncio.run(manager.handle_mnemonic(Cmd.CREATE))
    yield MultisigService(manager)
    manager.close()


@pytest.fixture
def empty_service(tmp_path):
    manager = KvManager(tmp_path)
    yield MultisigService(manager)
    manager.close()


@pytest.mark.asyncio
async def test_multisig_keygen_sign(service):
    key = "multisig key"
    keygen = await service.keygen(key, "")
    assert keygen.error is None
    assert len(keygen.pub_key) == 33

    signed = await service.sign(key, MSG, "")
    assert signed.error is None
    assert verify(keygen.pub_key, MSG, signed.signature) is True


@pytest.mark.asyncio
async def test_multisig_only_sign(service):
    signed = await service.sign("multisig key", MSG, "")
    assert signed.error is None
    assert len(signed.signature) > 0


@pytest.mark.asyncio
async def test_multisig_short_key_fail(service):
    keygen = await service.keygen("k", "")
    assert keygen.pub_key is None
    assert keygen.error == "Cannot generate keypair"

    signed = await service.sign("k", MSG, "")
    assert signed.signature is None
    assert signed.error == "key re-generation failed"


@pytest.mark.asyncio
async def test_multisig_truncated_msg_fail(service):
    signed = await service.sign("key-uid", bytes([32] * 31), "")
    assert signed.signature is None
    assert "32" in signed.error


@pytest.mark.asyncio
async def test_key_presence(service):
    assert await service.key_presence("key_uid") == KeyPresence.PRESENT


@pytest.mark.asyncio
async def test_key_presence_without_mnemonic_fails(empty_service):
    assert await empty_service.key_presence("key_uid") == KeyPresence.FAIL


@pytest.mark.asyncio
async def test_keygen_without_mnemonic_fails(empty_service):
    keygen = await empty_service.keygen("key-uid", "")
    assert keygen.pub_key is None
    assert keygen.error


@pytest.mark.asyncio
async def test_keygen_is_deterministic_per_key(service):
    first = await service.handle_keygen("key-one")
    again = await service.handle_keygen("key-one")
    other = await service.handle_keygen("key-two")
    assert first == again
    assert first != other


@pytest.mark.asyncio
async def test_signature_rejected_for_other_digest(service):
    pub_key = await service.handle_keygen("key-uid")
    signature = await service.handle_sign("key-uid", MSG)
    assert verify(pub_key, bytes([33] * 32), signature) is False


@pytest.mark.asyncio
async def test_signature_rejected_for_other_key(service):
    other_pub_key = await service.handle_keygen("other-key")
    signature = await service.handle_sign("key-uid", MSG)
    assert verify(other_pub_key, MSG, signature) is False


@pytest.mark.asyncio
async def test_handle_sign_raises_on_short_digest(service):
    with pytest.raises(ValueError):
        await service.handle_sign("key-uid", bytes(31))


def test_verify_rejects_wrong_digest_length():
    with pytest.raises(ValueError):
        verify(bytes(33), bytes(31), b"")