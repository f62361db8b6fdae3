import uuid

from locket.shared.models.enums import Era, LinkOutcome
from locket.shared.repositories.media_repository import MediaRepository
from locket.shared.services.linking_service import LinkingService


async def test_cross_era_link_is_created_once(session, make_user, make_media) -> None:
    user, _ = await make_user()
    past = await make_media(user, era=Era.PAST)
    present = await make_media(user, era=Era.PRESENT)

    service = LinkingService(session)
    source = await service.media_repo.get(past.id)

    assert await service.create_link(source, present.id) is LinkOutcome.CREATED
    assert await service.create_link(source, present.id) is LinkOutcome.EXISTS
    await session.commit()

    assert await MediaRepository(session).get_link_ids(past.id) == [present.id]


async def test_same_era_link_is_a_no_op(session, make_user, make_media) -> None:
    user, _ = await make_user()
    first = await make_media(user, era=Era.PRESENT)
    second = await make_media(user, era=Era.PRESENT)

    service = LinkingService(session)
    source = await service.media_repo.get(first.id)

    assert await service.create_link(source, second.id) is LinkOutcome.REJECTED_SAME_ERA
    assert await MediaRepository(session).get_link_ids(first.id) == []


async def test_link_to_self_is_rejected(session, make_user, make_media) -> None:
    user, _ = await make_user()
    media = await make_media(user, era=Era.PAST)

    service = LinkingService(session)
    source = await service.media_repo.get(media.id)

    assert await service.create_link(source, media.id) is LinkOutcome.REJECTED_SAME_ERA
    assert await MediaRepository(session).get_link_ids(media.id) == []


async def test_missing_target_is_rejected(session, make_user, make_media) -> None:
    user, _ = await make_user()
    media = await make_media(user, era=Era.PAST)

    service = LinkingService(session)
    source = await service.media_repo.get(media.id)

    assert await service.create_link(source, uuid.uuid4()) is LinkOutcome.REJECTED_MISSING
    assert await MediaRepository(session).get_link_ids(media.id) == []


async def test_links_are_not_symmetric(session, make_user, make_media) -> None:
    user, _ = await make_user()
    past = await make_media(user, era=Era.PAST)
    present = await make_media(user, era=Era.PRESENT)

    service = LinkingService(session)
    repo = service.media_repo
    await service.create_link(await repo.get(past.id), present.id)

    assert await repo.get_link_ids(present.id) == []

    assert await service.create_link(await repo.get(present.id), past.id) is LinkOutcome.CREATED
    assert await repo.get_link_ids(present.id) == [past.id]


async def test_link_map_groups_targets_by_source(session, make_user, make_media) -> None:
    user, _ = await make_user()
    past = await make_media(user, era=Era.PAST)
    present_a = await make_media(user, era=Era.PRESENT)
    present_b = await make_media(user, era=Era.PRESENT)
    lonely = await make_media(user, era=Era.PAST)

    repo = MediaRepository(session)
    assert await repo.add_link(past.id, present_a.id)
    assert await repo.add_link(past.id, present_b.id)
    assert not await repo.add_link(past.id, present_a.id)

    link_map = await repo.get_link_map([past.id, lonely.id])

    assert sorted(link_map[past.id]) == sorted([present_a.id, present_b.id])
    assert link_map.get(lonely.id, []) == []
