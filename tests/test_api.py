import os

import pytest
from conftest import AAC_BYTES, sign_up_and_in

from aacshare.app.api.endpoints.audio import content_disposition
from aacshare.app.api.errors import STATUS_BY_KIND
from aacshare.app.core.errors import ErrorKind


async def upload(client, headers, content=AAC_BYTES, filename="track.aac"):
    return await client.post(
        "/api/audio/", headers=headers, files={"file": (filename, content, "audio/aac")}
    )


async def test_root(client):
    response = await client.get("/")

    assert response.status_code == 200


async def test_sign_up_duplicate_username(client):
    await sign_up_and_in(client, "Alice", "alice")

    response = await client.post(
        "/auth/sign-up", json={"name": "Alice 2", "username": "alice", "password": "x"}
    )

    assert response.status_code == 400
    assert response.json() == {"message": "user exists"}


async def test_sign_up_invalid_body(client):
    response = await client.post("/auth/sign-up", json={"username": "alice"})

    assert response.status_code == 400
    assert "message" in response.json()


async def test_sign_in_wrong_password(client):
    await sign_up_and_in(client, "Alice", "alice", password="right")

    response = await client.post("/auth/sign-in", json={"username": "alice", "password": "wrong"})

    assert response.status_code == 401
    assert response.json() == {"message": "user or password is incorrect"}


async def test_refresh_rotates_token(client):
    _, _, refresh_token = await sign_up_and_in(client, "Alice", "alice")

    response = await client.post("/auth/refresh", json={"refresh_token": refresh_token})
    assert response.status_code == 200
    tokens = response.json()
    assert tokens["refresh_token"] != refresh_token

    response = await client.get(
        "/api/audio/",
        params={"offset": 0, "limit": 10, "order_type": "owner"},
        headers={"Authorization": f"Bearer {tokens['token']}"},
    )
    assert response.status_code == 200

    stale = await client.post("/auth/refresh", json={"refresh_token": refresh_token})
    assert stale.status_code == 401


async def test_api_requires_token(client):
    no_header = await client.get("/api/shares", params={"offset": 0, "limit": 10})
    bad_token = await client.get(
        "/api/shares", params={"offset": 0, "limit": 10}, headers={"Authorization": "Bearer nope"}
    )

    assert no_header.status_code == 401
    assert no_header.json() == {"message": "empty auth header"}
    assert bad_token.status_code == 401


async def test_upload_describe_download_share(client, storage):
    owner_id, owner, _ = await sign_up_and_in(client, "Owner", "owner")
    other_id, other, _ = await sign_up_and_in(client, "Other", "other")

    response = await upload(client, owner)
    assert response.status_code == 200
    audio_id = response.json()["id"]

    response = await client.put(f"/api/audio/{audio_id}", headers=owner, json={"title": "song"})
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}

    response = await client.get(f"/api/audio/{audio_id}", headers=owner)
    assert response.status_code == 200
    assert response.content == AAC_BYTES
    assert response.headers["content-disposition"] == 'attachment; filename="song.aac"'
    assert response.headers["content-length"] == str(len(AAC_BYTES))

    response = await client.get(f"/api/audio/{audio_id}", headers=other)
    assert response.status_code == 404

    response = await client.post(f"/api/share/{audio_id}", headers=owner, json={"share_to": other_id})
    assert response.status_code == 200

    response = await client.get(f"/api/audio/{audio_id}", headers=other)
    assert response.status_code == 200
    assert response.content == AAC_BYTES

    response = await client.get(
        "/api/audio/", params={"offset": 0, "limit": 10, "order_type": "owner"}, headers=other
    )
    assert response.json() == {
        "total_count": 1,
        "records": [
            {
                "id": audio_id,
                "name": "song",
                "is_owner": False,
                "owner_id": owner_id,
                "owner_name": "Owner",
                "shared_to": [{"id": other_id, "name": "Other"}],
            }
        ],
    }

    response = await client.get("/api/shares", params={"offset": 0, "limit": 10}, headers=other)
    assert response.json() == {
        "total_count": 1,
        "users": [{"id": other_id, "name": "Other", "shared_records": 1}],
    }

    response = await client.request(
        "DELETE", f"/api/share/{audio_id}", headers=owner, json={"share_to": other_id}
    )
    assert response.status_code == 200

    response = await client.get(f"/api/audio/{audio_id}", headers=other)
    assert response.status_code == 404


async def test_unshared_audio_omits_shared_to(client):
    _, owner, _ = await sign_up_and_in(client, "Owner", "owner")
    await upload(client, owner)

    response = await client.get(
        "/api/audio/", params={"offset": 0, "limit": 10, "order_type": "alphabet"}, headers=owner
    )

    (record,) = response.json()["records"]
    assert "shared_to" not in record
    assert record["is_owner"] is True
    assert record["name"] == ""


async def test_upload_rejects_non_aac(client, storage):
    _, owner, _ = await sign_up_and_in(client, "Owner", "owner")

    response = await upload(client, owner, content=b"ID3\x03\x00" + b"\x00" * 64, filename="x.mp3")

    assert response.status_code == 400
    assert response.json() == {"message": "file is not aac"}
    assert not os.path.exists(storage.directory) or os.listdir(storage.directory) == []


async def test_upload_too_large(client):
    _, owner, _ = await sign_up_and_in(client, "Owner", "owner")
    headers = dict(owner, **{"Content-Length": str(11 << 20)})

    response = await client.post("/api/audio/", headers=headers, content=b"")

    assert response.status_code == 413


async def test_describe_requires_a_field(client):
    _, owner, _ = await sign_up_and_in(client, "Owner", "owner")
    audio_id = (await upload(client, owner)).json()["id"]

    response = await client.put(f"/api/audio/{audio_id}", headers=owner, json={})

    assert response.status_code == 400
    assert "update structure has no values" in response.json()["message"]


async def test_describe_other_users_audio(client):
    _, owner, _ = await sign_up_and_in(client, "Owner", "owner")
    _, other, _ = await sign_up_and_in(client, "Other", "other")
    audio_id = (await upload(client, owner)).json()["id"]

    response = await client.put(f"/api/audio/{audio_id}", headers=other, json={"duration": 10})

    assert response.status_code == 404
    assert response.json() == {"message": "you are not owner or audio not exists"}


async def test_list_unknown_order_type(client):
    _, owner, _ = await sign_up_and_in(client, "Owner", "owner")

    response = await client.get(
        "/api/audio/", params={"offset": 0, "limit": 10, "order_type": "size"}, headers=owner
    )

    assert response.status_code == 400
    assert response.json() == {"message": "unknown order type"}


async def test_share_errors(client):
    owner_id, owner, _ = await sign_up_and_in(client, "Owner", "owner")
    other_id, other, _ = await sign_up_and_in(client, "Other", "other")
    audio_id = (await upload(client, owner)).json()["id"]

    self_share = await client.post(f"/api/share/{audio_id}", headers=owner, json={"share_to": owner_id})
    missing_user = await client.post(f"/api/share/{audio_id}", headers=owner, json={"share_to": 9999})
    not_owner = await client.post(f"/api/share/{audio_id}", headers=other, json={"share_to": owner_id})
    await client.post(f"/api/share/{audio_id}", headers=owner, json={"share_to": other_id})
    duplicate = await client.post(f"/api/share/{audio_id}", headers=owner, json={"share_to": other_id})

    assert self_share.status_code == 400
    assert missing_user.status_code == 400
    assert not_owner.status_code == 404
    assert duplicate.status_code == 409
    assert duplicate.json() == {"message": "share exists"}


async def test_chunked_upload_stops_reading_past_the_limit(client):
    _, owner, _ = await sign_up_and_in(client, "Owner", "owner")
    boundary = "aacshare-boundary"
    head = (
        f"--{boundary}\r\n"
        'Content-Disposition: form-data; name="file"; filename="big.aac"\r\n'
        "Content-Type: audio/aac\r\n\r\n"
    ).encode()
    chunk = b"\x00" * (1 << 20)
    sent = 0

    async def body():
        nonlocal sent
        sent += len(head)
        yield head + AAC_BYTES
        for _ in range(20):
            sent += len(chunk)
            yield chunk
        yield f"\r\n--{boundary}--\r\n".encode()

    headers = dict(owner, **{"Content-Type": f"multipart/form-data; boundary={boundary}"})
    response = await client.post("/api/audio/", headers=headers, content=body())

    assert response.status_code == 413
    assert response.json() == {"message": "uploaded file is too large"}
    assert sent < 12 << 20


@pytest.mark.parametrize(
    "title, expected",
    [
        ("song", 'attachment; filename="song.aac"'),
        ("my song", 'attachment; filename="my song.aac"'),
        ("", 'attachment; filename="audio.aac"'),
        ("песня", "attachment; filename=\"_____.aac\"; filename*=utf-8''%D0%BF%D0%B5%D1%81%D0%BD%D1%8F.aac"),
        ('say "hi"', "attachment; filename=\"say _hi_.aac\"; filename*=utf-8''say%20%22hi%22.aac"),
    ],
)
def test_content_disposition(title, expected):
    assert content_disposition(title) == expected


def test_too_large_maps_to_413():
    assert STATUS_BY_KIND[ErrorKind.TOO_LARGE] == 413
