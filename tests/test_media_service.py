from pathlib import Path

import pytest
from sqlalchemy import func, select

from locket.shared.core.exceptions import MediaNotFoundError, ServerError, StorageError
from locket.shared.models import Media, MediaSession
from locket.shared.models.enums import Era, LinkOutcome
from locket.shared.repositories.media_repository import MediaRepository
from locket.shared.services.media_service import MediaService, file_extension


async def _session_count(session) -> int:
    result = await session.execute(select(func.count()).select_from(MediaSession))
    return result.scalar_one()


def test_file_extension() -> None:
    assert file_extension("holiday.JPG") == "JPG"
    assert file_extension("archive.tar.gz") == "gz"
    assert file_extension("README") == ""


async def test_present_draw_picks_own_present_media(session, storage, make_user, make_media) -> None:
    user, _ = await make_user()
    other, _ = await make_user()
    presents = {(await make_media(user, era=Era.PRESENT)).id for _ in range(3)}
    await make_media(user, era=Era.PAST)
    await make_media(other, era=Era.PRESENT)

    service = MediaService(session, storage)
    for draws in range(1, 6):
        media = await service.get_present(user.id)
        assert media.id in presents
        assert await _session_count(session) == draws


async def test_present_draw_without_present_media(session, storage, make_user, make_media) -> None:
    user, _ = await make_user()
    await make_media(user, era=Era.PAST)

    service = MediaService(session, storage)
    with pytest.raises(MediaNotFoundError):
        await service.get_present(user.id)

    assert await _session_count(session) == 0


async def test_store_link_requires_both_items_owned(session, storage, make_user, make_media) -> None:
    user, _ = await make_user()
    other, _ = await make_user()
    mine = await make_media(user, era=Era.PAST)
    theirs = await make_media(other, era=Era.PRESENT)

    service = MediaService(session, storage)
    with pytest.raises(MediaNotFoundError):
        await service.store_link(user.id, mine.id, theirs.id)
    with pytest.raises(MediaNotFoundError):
        await service.store_link(other.id, mine.id, theirs.id)

    assert await service.get_links(mine.id) == []


async def test_store_link_and_read_links_across_users(session, storage, make_user, make_media) -> None:
    user, _ = await make_user()
    past = await make_media(user, era=Era.PAST)
    present = await make_media(user, era=Era.PRESENT)

    service = MediaService(session, storage)
    assert await service.store_link(user.id, past.id, present.id) is LinkOutcome.CREATED

    # links are readable by id without an ownership check
    assert await service.get_links(past.id) == [present.id]


async def test_destroy_removes_payload_then_row(session, storage, make_user, make_media) -> None:
    user, _ = await make_user()
    media = await make_media(user)

    service = MediaService(session, storage)
    await service.destroy(user.id, media.id)
    await session.commit()

    assert await storage.get(media.path) is None
    assert await MediaRepository(session).get(media.id) is None


async def test_destroy_of_foreign_media_is_not_found(session, storage, make_user, make_media) -> None:
    user, _ = await make_user()
    other, _ = await make_user()
    media = await make_media(other)

    service = MediaService(session, storage)
    with pytest.raises(MediaNotFoundError):
        await service.destroy(user.id, media.id)

    assert await storage.get(media.path) == b"payload"


async def test_destroy_with_missing_payload_still_removes_row(session, storage, make_user, make_media) -> None:
    user, _ = await make_user()
    media = await make_media(user)
    await storage.delete(media.path)

    service = MediaService(session, storage)
    await service.destroy(user.id, media.id)

    assert await MediaRepository(session).get(media.id) is None


async def test_destroy_row_failure_raises_server_error(
    session, storage, make_user, make_media, monkeypatch
) -> None:
    user, _ = await make_user()
    media = await make_media(user)

    async def failing_destroy(self, record_id, owner_id=None):
        raise RuntimeError("database went away")

    monkeypatch.setattr(MediaRepository, "destroy", failing_destroy)

    service = MediaService(session, storage)
    with pytest.raises(ServerError):
        await service.destroy(user.id, media.id)

    # payload is gone, the row is left for follow-up
    assert await storage.get(media.path) is None
    result = await session.execute(select(Media).where(Media.id == media.id))
    assert result.scalar_one_or_none() is not None


async def test_payload_of_row_without_file_is_not_found(session, storage, make_user, make_media) -> None:
    user, _ = await make_user()
    media = await make_media(user)
    await storage.delete(media.path)

    service = MediaService(session, storage)
    with pytest.raises(MediaNotFoundError):
        await service.get_payload(user.id, media.id)


async def test_store_upload_creates_row_and_payload(session, storage, make_user, tmp_path) -> None:
    user, _ = await make_user()
    upload = tmp_path / "upload.png"
    upload.write_bytes(b"\x89PNG")

    service = MediaService(session, storage)
    media = await service.store_upload(
        owner_id=user.id,
        local_path=str(upload),
        original_name="sunset.png",
        mimetype="image/png",
        era=Era.PRESENT,
    )

    assert media.user_id == user.id
    assert media.path.startswith(f"{user.id}/")
    assert media.path.endswith(".png")
    assert media.era is Era.PRESENT
    assert await storage.get(media.path) == b"\x89PNG"


async def _media_count(session) -> int:
    result = await session.execute(select(func.count()).select_from(Media))
    return result.scalar_one()


async def test_store_upload_storage_failure_creates_no_row(
    session, storage, make_user, tmp_path, monkeypatch
) -> None:
    user, _ = await make_user()
    upload = tmp_path / "upload.jpg"
    upload.write_bytes(b"\xff\xd8")

    async def failing_put(local_path, original_name, extension, owner_id):
        raise StorageError("local", "disk full")

    monkeypatch.setattr(storage, "put", failing_put)

    service = MediaService(session, storage)
    with pytest.raises(StorageError):
        await service.store_upload(user.id, str(upload), "upload.jpg", "image/jpeg")

    assert await _media_count(session) == 0


async def test_store_upload_row_failure_leaves_payload_orphaned(
    session, storage, make_user, tmp_path, monkeypatch
) -> None:
    user, _ = await make_user()
    upload = tmp_path / "upload.jpg"
    upload.write_bytes(b"\xff\xd8")

    async def failing_store(self, fields):
        raise RuntimeError("insert failed")

    monkeypatch.setattr(MediaRepository, "store", failing_store)

    service = MediaService(session, storage)
    with pytest.raises(ServerError):
        await service.store_upload(user.id, str(upload), "upload.jpg", "image/jpeg")

    stored = list((Path(storage.root) / str(user.id)).iterdir())
    assert len(stored) == 1
    assert stored[0].read_bytes() == b"\xff\xd8"
    assert await _media_count(session) == 0


async def test_destroy_storage_failure_keeps_row(
    session, storage, make_user, make_media, monkeypatch
) -> None:
    user, _ = await make_user()
    media = await make_media(user)
    destroy_calls = []

    async def failing_delete(location):
        raise StorageError("local", "permission denied")

    async def recording_destroy(self, record_id, owner_id=None):
        destroy_calls.append(record_id)
        return True

    monkeypatch.setattr(storage, "delete", failing_delete)
    monkeypatch.setattr(MediaRepository, "destroy", recording_destroy)

    service = MediaService(session, storage)
    with pytest.raises(StorageError):
        await service.destroy(user.id, media.id)

    assert destroy_calls == []
    assert await MediaRepository(session).get(media.id) is not None
    assert await storage.get(media.path) == b"payload"
