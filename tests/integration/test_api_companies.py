def test_company_crud_and_duplicates(client, auth_headers) -> None:
    create_resp = client.post(
        "/api/v1/companies/",
        json={"name": "Acme", "industry": "Software", "location": "Berlin"},
        headers=auth_headers,
    )
    assert create_resp.status_code == 201
    company = create_resp.json()
    assert company["job_applications_count"] == 0
    assert create_resp.headers["Location"].endswith(f"/api/v1/companies/{company['id']}")

    dup_resp = client.post("/api/v1/companies/", json={"name": "Acme"}, headers=auth_headers)
    assert dup_resp.status_code == 409
    assert dup_resp.json()["detail"] == "A company with this name already exists"

    patch_resp = client.patch(
        f"/api/v1/companies/{company['id']}", json={"notes": "Met at fair"}, headers=auth_headers
    )
    assert patch_resp.status_code == 204

    fetched = client.get(f"/api/v1/companies/{company['id']}", headers=auth_headers).json()
    assert fetched["notes"] == "Met at fair"
    assert fetched["industry"] == "Software" # untouched by the partial update

    delete_resp = client.delete(f"/api/v1/companies/{company['id']}", headers=auth_headers)
    assert delete_resp.status_code == 204
    assert client.get(f"/api/v1/companies/{company['id']}", headers=auth_headers).status_code == 404


def test_blank_name_is_a_client_error(client, auth_headers) -> None:
    resp = client.post("/api/v1/companies/", json={"name": "   "}, headers=auth_headers)
    assert resp.status_code == 400


def test_rename_to_existing_name_conflicts(client, auth_headers) -> None:
    client.post("/api/v1/companies/", json={"name": "Acme"}, headers=auth_headers)
    other = client.post("/api/v1/companies/", json={"name": "Globex"}, headers=auth_headers).json()
    resp = client.put(f"/api/v1/companies/{other['id']}", json={"name": "Acme"}, headers=auth_headers)
    assert resp.status_code == 409


def test_list_search_and_pagination_headers(client, auth_headers) -> None:
    for name in ["Initech", "Acme", "Globex"]:
        client.post("/api/v1/companies/", json={"name": name}, headers=auth_headers)

    resp = client.get("/api/v1/companies/", params={"page": 1, "page_size": 2}, headers=auth_headers)
    assert resp.status_code == 200
    assert [c["name"] for c in resp.json()] == ["Acme", "Globex"]
    assert resp.headers["X-Total-Count"] == "3"
    assert resp.headers["X-Page"] == "1"
    assert resp.headers["X-Page-Size"] == "2"

    search = client.get("/api/v1/companies/", params={"search": "tech"}, headers=auth_headers)
    assert [c["name"] for c in search.json()] == ["Initech"]

    assert client.get("/api/v1/companies/", params={"page": 0}, headers=auth_headers).status_code == 422


def test_delete_blocked_while_applications_exist(client, auth_headers, company_id) -> None:
    client.post(
        "/api/v1/job-applications/",
        json={"job_title": "Dev", "company_id": company_id},
        headers=auth_headers,
    )
    resp = client.delete(f"/api/v1/companies/{company_id}", headers=auth_headers)
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Cannot delete company with associated job applications"

    listed = client.get("/api/v1/companies/", headers=auth_headers).json()
    assert listed[0]["job_applications_count"] == 1


def test_other_users_companies_are_not_found(client, register, auth_headers, company_id) -> None:
    intruder = register("mallory@example.com")
    assert client.get(f"/api/v1/companies/{company_id}", headers=intruder).status_code == 404
    assert client.delete(f"/api/v1/companies/{company_id}", headers=intruder).status_code == 404
    assert client.get("/api/v1/companies/", headers=intruder).json() == []

    # Names are unique per user only
    resp = client.post("/api/v1/companies/", json={"name": "Acme"}, headers=intruder)
    assert resp.status_code == 201


def test_contacts(client, auth_headers, company_id) -> None:
    resp = client.post(
        f"/api/v1/companies/{company_id}/contacts",
        json={"name": "Zed", "email": "zed@example.com"},
        headers=auth_headers,
    )
    assert resp.status_code == 201
    zed_id = resp.json()["id"]
    location = resp.headers["Location"]
    assert location.endswith(f"/api/v1/companies/{company_id}/contacts/{zed_id}")
    assert client.get(location, headers=auth_headers).json()["email"] == "zed@example.com"
    client.post(f"/api/v1/companies/{company_id}/contacts", json={"name": "Amy"}, headers=auth_headers)

    contacts = client.get(f"/api/v1/companies/{company_id}/contacts", headers=auth_headers).json()
    assert [c["name"] for c in contacts] == ["Amy", "Zed"]

    assert client.delete(
        f"/api/v1/companies/{company_id}/contacts/{zed_id}", headers=auth_headers
    ).status_code == 204
    assert client.delete(
        f"/api/v1/companies/{company_id}/contacts/{zed_id}", headers=auth_headers
    ).status_code == 404


def test_contacts_are_scoped_to_their_company(client, register, auth_headers, company_id) -> None:
    contact_id = client.post(
        f"/api/v1/companies/{company_id}/contacts", json={"name": "Zed"}, headers=auth_headers
    ).json()["id"]
    other = client.post("/api/v1/companies/", json={"name": "Globex"}, headers=auth_headers).json()
    intruder = register("mallory@example.com")

    assert client.get(f"/api/v1/companies/{other['id']}/contacts/{contact_id}", headers=auth_headers).status_code == 404
    assert client.get(f"/api/v1/companies/{company_id}/contacts/{contact_id}", headers=intruder).status_code == 404
    assert client.get(f"/api/v1/companies/{company_id}/contacts", headers=intruder).status_code == 404
    assert client.delete(f"/api/v1/companies/{company_id}/contacts/{contact_id}", headers=intruder).status_code == 404
    assert client.patch(f"/api/v1/companies/{company_id}", json={"notes": "x"}, headers=intruder).status_code == 404
