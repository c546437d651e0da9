from pathlib import Path

BASE = "/api/v1/resumes/"


def _upload(client, headers, title="Main CV", filename="cv.pdf", content=b"%PDF-1.4 test", **form):
    data = {"title": title}
    data.update(form)
    return client.post(
        BASE,
        data=data,
        files={"file": (filename, content, "application/octet-stream")},
        headers=headers,
    )


def test_upload_get_and_download(client, auth_headers) -> None:
    resp = _upload(client, auth_headers, description="General", tags="python, backend")
    assert resp.status_code == 201
    resume = resp.json()
    assert resume["file_type"] == "PDF"
    assert resume["file_size_bytes"] == len(b"%PDF-1.4 test")
    assert resume["tags"] == ["python", "backend"]
    assert resume["usage_count"] == 0
    assert Path(resume["file_path"]).is_file()
    assert resp.headers["Location"].endswith(f"{BASE}{resume['id']}")

    download = client.get(f"{BASE}{resume['id']}/download", headers=auth_headers)
    assert download.status_code == 200
    assert download.content == b"%PDF-1.4 test"
    assert download.headers["content-type"] == "application/pdf"
    assert 'filename="Main CV.pdf"' in download.headers["content-disposition"]


def test_rejected_uploads(client, auth_headers) -> None:
    bad_type = _upload(client, auth_headers, filename="cv.exe")
    assert bad_type.status_code == 400
    assert bad_type.json()["detail"] == "Only PDF, DOCX, MD files are allowed"

    empty = _upload(client, auth_headers, content=b"")
    assert empty.status_code == 400
    assert empty.json()["detail"] == "File is required"


def test_only_one_default_resume(client, auth_headers) -> None:
    first = _upload(client, auth_headers, title="R1", is_default="true").json()
    second = _upload(client, auth_headers, title="R2", is_default="true").json()
    assert second["is_default"] is True
    assert client.get(f"{BASE}{first['id']}", headers=auth_headers).json()["is_default"] is False

    resp = client.patch(f"{BASE}{first['id']}", json={"is_default": True}, headers=auth_headers)
    assert resp.status_code == 204

    listed = client.get(BASE, headers=auth_headers).json()
    assert [r["title"] for r in listed if r["is_default"]] == ["R1"]
    assert listed[0]["title"] == "R1" # default first


def test_versions(client, auth_headers) -> None:
    resume = _upload(client, auth_headers).json()

    mismatch = client.post(
        f"{BASE}{resume['id']}/versions",
        data={"version_name": "v2"},
        files={"file": ("cv.md", b"# CV", "text/markdown")},
        headers=auth_headers,
    )
    assert mismatch.status_code == 400
    assert mismatch.json()["detail"] == "File type must match original resume type (PDF)"

    created = client.post(
        f"{BASE}{resume['id']}/versions",
        data={"version_name": "v2", "changes": "Tightened summary"},
        files={"file": ("cv-v2.pdf", b"%PDF v2", "application/pdf")},
        headers=auth_headers,
    )
    assert created.status_code == 201
    version = created.json()
    assert version["resume_id"] == resume["id"]

    versions = client.get(f"{BASE}{resume['id']}/versions", headers=auth_headers).json()
    assert [v["version_name"] for v in versions] == ["v2"]

    download = client.get(f"{BASE}{resume['id']}/versions/{version['id']}/download", headers=auth_headers)
    assert download.content == b"%PDF v2"
    assert 'filename="Main CV_v2.pdf"' in download.headers["content-disposition"]


def test_delete_removes_files_and_is_blocked_while_in_use(client, auth_headers, company_id) -> None:
    resume = _upload(client, auth_headers).json()
    version = client.post(
        f"{BASE}{resume['id']}/versions",
        data={"version_name": "v2"},
        files={"file": ("cv-v2.pdf", b"%PDF v2", "application/pdf")},
        headers=auth_headers,
    ).json()

    app = client.post(
        "/api/v1/job-applications/",
        json={"job_title": "Dev", "company_id": company_id, "resume_id": resume["id"]},
        headers=auth_headers,
    ).json()
    assert app["resume_title"] == "Main CV"
    assert client.get(f"{BASE}{resume['id']}", headers=auth_headers).json()["usage_count"] == 1

    blocked = client.delete(f"{BASE}{resume['id']}", headers=auth_headers)
    assert blocked.status_code == 409

    detach = client.patch(
        f"/api/v1/job-applications/{app['id']}", json={"resume_id": None}, headers=auth_headers
    )
    assert detach.status_code == 204

    assert client.delete(f"{BASE}{resume['id']}", headers=auth_headers).status_code == 204
    assert not Path(resume["file_path"]).exists()
    assert not Path(version["file_path"]).exists()
    assert client.get(f"{BASE}{resume['id']}", headers=auth_headers).status_code == 404


def test_missing_file_on_disk_is_not_found(client, auth_headers) -> None:
    resume = _upload(client, auth_headers).json()
    Path(resume["file_path"]).unlink()
    resp = client.get(f"{BASE}{resume['id']}/download", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "File not found"


def test_other_users_resumes_are_not_found(client, register, auth_headers) -> None:
    resume = _upload(client, auth_headers).json()
    version = client.post(
        f"{BASE}{resume['id']}/versions",
        data={"version_name": "v2"},
        files={"file": ("cv-v2.pdf", b"%PDF v2", "application/pdf")},
        headers=auth_headers,
    ).json()
    intruder = register("mallory@example.com")
    rid = resume["id"]

    assert client.get(f"{BASE}{rid}", headers=intruder).status_code == 404
    assert client.patch(f"{BASE}{rid}", json={"title": "Mine"}, headers=intruder).status_code == 404
    assert client.put(f"{BASE}{rid}", json={"is_default": True}, headers=intruder).status_code == 404
    assert client.get(f"{BASE}{rid}/download", headers=intruder).status_code == 404
    assert client.get(f"{BASE}{rid}/versions", headers=intruder).status_code == 404
    assert client.get(f"{BASE}{rid}/versions/{version['id']}/download", headers=intruder).status_code == 404
    upload = client.post(
        f"{BASE}{rid}/versions",
        data={"version_name": "v3"},
        files={"file": ("cv-v3.pdf", b"%PDF v3", "application/pdf")},
        headers=intruder,
    )
    assert upload.status_code == 404
    assert client.delete(f"{BASE}{rid}", headers=intruder).status_code == 404
    assert client.get(BASE, headers=intruder).json() == []

    owned = client.get(f"{BASE}{rid}", headers=auth_headers).json()
    assert owned["title"] == "Main CV"
    assert Path(owned["file_path"]).is_file()


def test_search_matches_decoded_tags(client, auth_headers) -> None:
    _upload(client, auth_headers, title="Tagged", tags="python, backend")
    _upload(client, auth_headers, title="Plain")

    assert [r["title"] for r in client.get(BASE, params={"search": "PYTH"}, headers=auth_headers).json()] == ["Tagged"]
    assert client.get(BASE, params={"search": '"'}, headers=auth_headers).json() == []
    assert client.get(BASE, params={"search": ","}, headers=auth_headers).json() == []
