import pytest

from tofnd.errors import ExistsError, GetError, LogicalError, PutError, ReserveError
from tofnd.kv import Kv
from tofnd.store import KeyReservation


@pytest.fixture
def kv(tmp_path):
    handle = Kv(tmp_path)
    yield handle
    handle.close()


def test_store_lives_under_root(tmp_path):
    handle = Kv(tmp_path)
    try:
        assert handle.path == tmp_path / "kvstore" / "kv"
        assert handle.path.is_dir()
    finally:
        handle.close()


@pytest.mark.asyncio
async def test_put_get_round_trip(kv):
    reservation = await kv.reserve_key("key")
    assert reservation == KeyReservation("key")
    await kv.put(reservation, b"\x00\x01payload")
    assert await kv.get("key") == b"\x00\x01payload"


@pytest.mark.asyncio
async def test_reserve_twice_fails(kv):
    await kv.reserve_key("key")
    with pytest.raises(ReserveError) as info:
        await kv.reserve_key("key")
    assert isinstance(info.value.inner, LogicalError)


@pytest.mark.asyncio
async def test_put_without_reservation_fails(kv):
    with pytest.raises(PutError) as info:
        await kv.put(KeyReservation("key"), b"value")
    assert isinstance(info.value.inner, LogicalError)
    assert await kv.exists("key") is False


@pytest.mark.asyncio
async def test_get_missing_fails(kv):
    with pytest.raises(GetError) as info:
        await kv.get("missing")
    assert isinstance(info.value.inner, LogicalError)


@pytest.mark.asyncio
async def test_exists_tracks_state(kv):
    assert await kv.exists("key") is False
    reservation = await kv.reserve_key("key")
    assert await kv.exists("key") is True
    await kv.put(reservation, b"value")
    assert await kv.exists("key") is True


@pytest.mark.asyncio
async def test_unreserve_frees_key(kv):
    reservation = await kv.reserve_key("key")
    await kv.unreserve_key(reservation)
    assert await kv.exists("key") is False
    again = await kv.reserve_key("key")
    assert again == reservation


@pytest.mark.asyncio
async def test_with_db_name_persists(tmp_path):
    db_name = tmp_path / "custom"
    first = Kv.with_db_name(db_name)
    await first.put(await first.reserve_key("key"), b"value")
    first.close()
    second = Kv.with_db_name(db_name)
    try:
        assert second.path == db_name
        assert await second.get("key") == b"value"
    finally:
        second.close()


@pytest.mark.asyncio
async def test_closed_kv_raises(tmp_path):
    handle = Kv(tmp_path)
    handle.close()
    with pytest.raises(ExistsError):
        await handle.exists("key")