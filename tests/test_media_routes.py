import uuid

from sqlalchemy import func, select

from locket.shared.models import MediaSession


async def _upload(client, headers, era: str | None = None, content: bytes = b"\xff\xd8jpeg", name: str = "photo.jpg"):
    upload_headers = dict(headers)
    if era is not None:
        upload_headers["era"] = era
    return await client.post(
        "/api/media",
        files={"file": (name, content, "image/jpeg")},
        headers=upload_headers,
    )


async def test_upload_defaults_and_show(client, make_user, storage) -> None:
    user, headers = await make_user()

    response = await _upload(client, headers)
    assert response.status_code == 200
    media = response.json()["payload"]
    assert media["user_id"] == str(user.id)
    assert media["era"] == "past"
    assert media["locket"] == "none"
    assert media["links"] == []
    assert media["mimetype"] == "image/jpeg"

    response = await client.get(f"/api/media/{media['id']}", headers=headers)
    assert response.status_code == 200
    assert response.content == b"\xff\xd8jpeg"
    assert response.headers["content-type"].startswith("image/jpeg")

    # binary retrieval with the token in the query string and a size hint
    token = headers["Authorization"].split(" ", 1)[1]
    response = await client.get(f"/api/media/{media['id']}", params={"token": token, "size": 512})
    assert response.status_code == 200


async def test_upload_headers_are_validated(client, make_user) -> None:
    _, headers = await make_user()

    response = await _upload(client, headers, era="future")
    assert response.status_code == 400

    response = await client.post("/api/media", headers=headers)
    assert response.status_code == 400
    assert response.json()["payload"] is None


async def test_upload_cleans_temporary_file(client, make_user, tmp_path) -> None:
    _, headers = await make_user()

    response = await _upload(client, headers, era="present")

    assert response.status_code == 200
    assert list((tmp_path / "uploads").iterdir()) == []


async def test_show_rejects_out_of_range_size(client, make_user) -> None:
    _, headers = await make_user()
    media = (await _upload(client, headers)).json()["payload"]

    response = await client.get(f"/api/media/{media['id']}", params={"size": 50}, headers=headers)

    assert response.status_code == 400


async def test_link_scenario(client, make_user) -> None:
    _, headers = await make_user()
    past = (await _upload(client, headers, era="past")).json()["payload"]
    present = (await _upload(client, headers, era="present")).json()["payload"]

    response = await client.post(
        "/api/media/links",
        json={"mediaId": past["id"], "linkId": present["id"]},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["payload"] is None

    response = await client.get(f"/api/media/links/{past['id']}", headers=headers)
    assert response.json()["payload"] == [present["id"]]

    # no automatic reverse edge
    response = await client.get(f"/api/media/links/{present['id']}", headers=headers)
    assert response.json()["payload"] == []

    await client.post(
        "/api/media/links",
        json={"mediaId": present["id"], "linkId": past["id"]},
        headers=headers,
    )
    response = await client.get(f"/api/media/links/{present['id']}", headers=headers)
    assert response.json()["payload"] == [past["id"]]

    # repeating the link changes nothing
    await client.post(
        "/api/media/links",
        json={"mediaId": past["id"], "linkId": present["id"]},
        headers=headers,
    )
    response = await client.get("/api/media", headers=headers)
    links = {media["id"]: media["links"] for media in response.json()["payload"]}
    assert links == {past["id"]: [present["id"]], present["id"]: [past["id"]]}


async def test_same_era_link_answers_success_without_linking(client, make_user) -> None:
    _, headers = await make_user()
    first = (await _upload(client, headers, era="past")).json()["payload"]
    second = (await _upload(client, headers, era="past")).json()["payload"]

    response = await client.post(
        "/api/media/links",
        json={"mediaId": first["id"], "linkId": second["id"]},
        headers=headers,
    )

    assert response.status_code == 200
    response = await client.get(f"/api/media/links/{first['id']}", headers=headers)
    assert response.json()["payload"] == []


async def test_link_to_foreign_media_is_not_found(client, make_user) -> None:
    _, headers = await make_user()
    _, other_headers = await make_user()
    mine = (await _upload(client, headers, era="past")).json()["payload"]
    theirs = (await _upload(client, other_headers, era="present")).json()["payload"]

    response = await client.post(
        "/api/media/links",
        json={"mediaId": mine["id"], "linkId": theirs["id"]},
        headers=headers,
    )
    assert response.status_code == 404

    # link lists are readable across users
    response = await client.get(f"/api/media/links/{theirs['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json()["payload"] == []

    response = await client.get(f"/api/media/links/{uuid.uuid4()}", headers=headers)
    assert response.status_code == 404


async def test_request_present(client, make_user, session_factory) -> None:
    _, headers = await make_user()

    response = await client.get("/api/media/request", headers=headers)
    assert response.status_code == 404

    await _upload(client, headers, era="past")
    present = (await _upload(client, headers, era="present")).json()["payload"]

    for _ in range(3):
        response = await client.get("/api/media/request", headers=headers)
        assert response.status_code == 200
        assert response.json()["payload"] == present["id"]

    async with session_factory() as db:
        result = await db.execute(select(func.count()).select_from(MediaSession))
        assert result.scalar_one() == 3


async def test_update_is_not_implemented(client, make_user) -> None:
    _, headers = await make_user()
    media = (await _upload(client, headers)).json()["payload"]

    response = await client.post(f"/api/media/{media['id']}", json={"era": "present"}, headers=headers)

    assert response.status_code == 501
    assert response.json()["errors"] is True


async def test_destroy(client, make_user, storage) -> None:
    _, headers = await make_user()
    _, other_headers = await make_user()
    past = (await _upload(client, headers, era="past")).json()["payload"]
    present = (await _upload(client, headers, era="present")).json()["payload"]
    await client.post(
        "/api/media/links",
        json={"mediaId": present["id"], "linkId": past["id"]},
        headers=headers,
    )

    response = await client.delete(f"/api/media/{past['id']}", headers=other_headers)
    assert response.status_code == 404

    response = await client.delete(f"/api/media/{past['id']}", headers=headers)
    assert response.status_code == 200
    assert await storage.get(past["path"]) is None

    response = await client.get(f"/api/media/{past['id']}", headers=headers)
    assert response.status_code == 404

    # edges pointing at the deleted item go with it
    response = await client.get(f"/api/media/links/{present['id']}", headers=headers)
    assert response.json()["payload"] == []


async def test_media_listing_filters_and_pages(client, make_user) -> None:
    _, headers = await make_user()
    for _ in range(3):
        await _upload(client, headers, era="past")
    await _upload(client, headers, era="present")

    response = await client.get("/api/media", params={"era": "present"}, headers=headers)
    assert [media["era"] for media in response.json()["payload"]] == ["present"]

    response = await client.get("/api/media/get/0/3", headers=headers)
    assert len(response.json()["payload"]) == 3

    response = await client.get("/api/media/search/mimetype/jpeg", headers=headers)
    assert len(response.json()["payload"]) == 4


async def test_upload_header_values_ignore_case(client, make_user) -> None:
    _, headers = await make_user()

    response = await client.post(
        "/api/media",
        files={"file": ("photo.jpg", b"\xff\xd8", "image/jpeg")},
        headers={**headers, "era": "PRESENT", "locket": "Perm"},
    )

    assert response.status_code == 200
    assert response.json()["payload"]["era"] == "present"
    assert response.json()["payload"]["locket"] == "perm"
