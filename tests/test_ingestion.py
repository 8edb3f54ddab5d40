import app.routers.uploads as uploads_router


def _spy_on_handler(monkeypatch) -> list:
    calls = []
    original = uploads_router._read_upload

    async def spy(file, policy):
        calls.append(file)
        return await original(file, policy)

    monkeypatch.setattr(uploads_router, "_read_upload", spy)
    return calls


def test_oversized_upload_is_rejected_before_the_handler_runs(client, cdn, set_policy, monkeypatch) -> None:
    set_policy(max_size_bytes=1024 * 1024)
    calls = _spy_on_handler(monkeypatch)
    content = b"\x00" * (2 * 1024 * 1024)

    response = client.post("/api/upload", files={"file": ("big.png", content, "image/png")})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"].startswith("File too large. Size: 2.00 MB. Max: 1 MB")
    assert calls == []
    assert cdn.requests == []


def test_file_info_is_guarded_as_well(client, set_policy, monkeypatch) -> None:
    set_policy(max_size_bytes=1024 * 1024)
    calls = _spy_on_handler(monkeypatch)

    response = client.post(
        "/api/file-info",
        files={"file": ("big.webm", b"\x00" * (3 * 1024 * 1024), "video/webm")},
    )

    assert response.status_code == 400
    assert response.json()["error"].startswith("File too large. Size: 3.00 MB")
    assert calls == []


def test_upload_within_multipart_allowance_reaches_post_parse_check(client, cdn, set_policy, monkeypatch) -> None:
    set_policy(max_size_bytes=1024 * 1024)
    calls = _spy_on_handler(monkeypatch)
    content = b"\x00" * (1024 * 1024 + 1024)

    response = client.post("/api/upload", files={"file": ("edge.mp4", content, "video/mp4")})

    assert response.status_code == 400
    assert response.json()["error"] == "File too large. Size: 1.00 MB. Max: 1 MB"
    assert len(calls) == 1
    assert cdn.requests == []


def test_size_guard_ignores_other_routes(client, set_policy) -> None:
    set_policy(max_size_bytes=1)

    response = client.get("/api/health")

    assert response.status_code == 200
