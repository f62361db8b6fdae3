import pytest

from locket.shared.core.exceptions import DuplicateResourceError, ValidationError
from locket.shared.models import Device
from locket.shared.models.enums import Era, Ownership
from locket.shared.repositories.device_repository import DeviceRepository
from locket.shared.repositories.media_repository import MediaRepository
from locket.shared.repositories.user_repository import UserRepository


async def _add_devices(session, owner, count: int, prefix: str = "device") -> None:
    for index in range(count):
        session.add(Device(user_id=owner.id, name=f"{prefix}-{index:02d}", identifier=f"id-{index}"))
    await session.flush()


async def test_pagination_is_zero_indexed(session, make_user) -> None:
    user, _ = await make_user()
    await _add_devices(session, user, 25)
    repo = DeviceRepository(session)

    pages = [await repo.paginate(page, 10, owner_id=user.id) for page in range(4)]

    assert [len(page) for page in pages] == [10, 10, 5, 0]
    seen = [device.id for page in pages for device in page]
    assert len(seen) == len(set(seen)) == 25



async def test_pagination_past_the_end_is_empty(session, make_user) -> None:
    user, _ = await make_user()
    await _add_devices(session, user, 3)
    repo = DeviceRepository(session)

    assert await repo.paginate(1, 3, owner_id=user.id) == []
    assert await repo.paginate(10**20, 100, owner_id=user.id) == []

async def test_pagination_rejects_negative_page_and_zero_limit(session) -> None:
    repo = DeviceRepository(session)
    with pytest.raises(ValidationError):
        await repo.paginate(-1, 10)
    with pytest.raises(ValidationError):
        await repo.paginate(0, 0)


async def test_owner_scoping(session, make_user) -> None:
    user, _ = await make_user()
    other, _ = await make_user()
    await _add_devices(session, user, 2)
    await _add_devices(session, other, 3)
    repo = DeviceRepository(session)

    mine = await repo.list(owner_id=user.id)
    assert len(mine) == 2
    assert await repo.count(owner_id=other.id) == 3

    theirs = (await repo.list(owner_id=other.id))[0]
    assert await repo.get(theirs.id, owner_id=user.id) is None
    assert await repo.update(theirs.id, {"name": "stolen"}, owner_id=user.id) is None
    assert await repo.destroy(theirs.id, owner_id=user.id) is False


async def test_search_is_substring_and_whitelisted(session, make_user) -> None:
    user, _ = await make_user()
    session.add(Device(user_id=user.id, name="Kitchen tablet", identifier="k-1"))
    session.add(Device(user_id=user.id, name="Bedroom frame", identifier="b-1"))
    session.add(Device(user_id=user.id, name="100%_done", identifier="p-1"))
    await session.flush()
    repo = DeviceRepository(session)

    results = await repo.search_by_field("name", "KITCH", owner_id=user.id)
    assert [device.name for device in results] == ["Kitchen tablet"]

    # wildcard characters match literally
    results = await repo.search_by_field("name", "%_", owner_id=user.id)
    assert [device.name for device in results] == ["100%_done"]

    with pytest.raises(ValidationError):
        await repo.search_by_field("user_id", "abc", owner_id=user.id)


async def test_exact_filter_coerces_and_whitelists(session, make_user, make_media) -> None:
    user, _ = await make_user()
    await make_media(user, era=Era.PAST)
    present = await make_media(user, era=Era.PRESENT)
    repo = MediaRepository(session)

    results = await repo.filter_by_exact_fields({"era": "present"}, owner_id=user.id)
    assert [media.id for media in results] == [present.id]

    with pytest.raises(ValidationError):
        await repo.filter_by_exact_fields({"era": "future"}, owner_id=user.id)
    with pytest.raises(ValidationError):
        await repo.filter_by_exact_fields({"path": "x"}, owner_id=user.id)


async def test_store_rejects_unknown_fields(session, make_user) -> None:
    user, _ = await make_user()
    repo = DeviceRepository(session)

    with pytest.raises(ValidationError):
        await repo.store({"user_id": user.id, "name": "a", "identifier": "b", "colour": "red"})


async def test_update_ignores_owner_and_none(session, make_user) -> None:
    user, _ = await make_user()
    other, _ = await make_user()
    repo = DeviceRepository(session)
    device = await repo.store({"user_id": user.id, "name": "phone", "identifier": "p-1"})

    updated = await repo.update(
        device.id,
        {"name": "new phone", "platform": None, "user_id": other.id},
        owner_id=user.id,
    )

    assert updated.name == "new phone"
    assert updated.user_id == user.id


async def test_user_repository_hashes_and_rejects_duplicates(session) -> None:
    repo = UserRepository(session)
    assert repo.ownership is Ownership.SELF

    user = await repo.store({"email": "ann@example.com", "password": "correct horse"})
    assert user.password_hash != "correct horse"
    assert await repo.email_exists("ann@example.com")

    with pytest.raises(DuplicateResourceError):
        await repo.store({"email": "ann@example.com", "password": "another one"})
    with pytest.raises(ValidationError):
        await repo.store({"email": "bob@example.com"})
