"""
Integration tests for the game, upload and health endpoints.
"""

import pytest

from app.models.game import ENDING_SOUND_URL


@pytest.mark.asyncio
async def test_game_data_defaults(client):
    response = await client.get("/api/game-data")

    assert response.status_code == 200
    body = response.json()
    assert body["config"]["start"] == 1
    assert body["config"]["end"] == 41
    assert body["config"]["special_num"] == 3
    assert len(body["sequence"]) == 42
    assert body["sequence"][2] == {"step": 3, "value": "3", "is_aho": True, "assets": {}}
    assert body["sequence"][-1] == {
        "step": 42,
        "value": "オモロー",
        "is_aho": True,
        "assets": {"sound": ENDING_SOUND_URL},
    }


@pytest.mark.asyncio
async def test_update_settings(client):
    response = await client.put(
        "/api/settings",
        json={
            "start_num": 1,
            "end_num": 5,
            "special_num": 2,
            "magic_word": "Fin",
            "aho_text": "Aho!",
            "aho_image_url": "",
            "aho_sound_url": None,
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Settings updated successfully"
    assert body["data"]["end_num"] == 5
    assert body["data"]["aho_image_url"] is None

    game = (await client.get("/api/game-data")).json()
    assert [s["is_aho"] for s in game["sequence"]] == [False, True, False, True, False, True]
    assert game["sequence"][1]["assets"] == {"text": "Aho!"}
    assert game["sequence"][-1]["value"] == "Fin"


@pytest.mark.asyncio
async def test_update_settings_rejects_bad_range(client):
    response = await client.put(
        "/api/settings",
        json={"start_num": 10, "end_num": 5, "special_num": 3, "magic_word": "x"},
    )

    assert response.status_code == 400
    assert response.json() == {"message": "Start Number must be smaller than End Number"}


@pytest.mark.asyncio
async def test_upload_and_serve(client):
    response = await client.post(
        "/api/upload",
        files={"file": ("aho.png", b"\x89PNG fake", "image/png")},
        headers={"x-forwarded-proto": "https"},
    )

    assert response.status_code == 200
    url = response.json()["url"]
    assert url.startswith("https://test/uploads/")
    assert url.endswith("-aho.png")

    served = await client.get(url.replace("https://test", ""))
    assert served.status_code == 200
    assert served.content == b"\x89PNG fake"


@pytest.mark.asyncio
async def test_upload_without_file(client):
    response = await client.post("/api/upload", files={"other": ("x.txt", b"x", "text/plain")})

    assert response.status_code == 400
    assert response.json() == {"message": "No file uploaded."}


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
