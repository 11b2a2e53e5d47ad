def test_health(auth_client):
    resp = auth_client.get("/api/auth/health")
    assert resp.status_code == 200
    assert resp.json()["data"] == {"status": "healthy"}


def test_profile(auth_client, member):
    resp = auth_client.get("/api/users/me", headers=member.headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["id"] == member.id
    assert data["email"] == member.email
    assert data["role"] == "user"


def test_admin_creates_user(auth_client, admin):
    resp = auth_client.post("/api/users", headers=admin.headers, json={
        "email": "  New.Person@Example.com ",
        "full_name": "New Person",
        "role": "staff",
    })
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "User created successfully"
    assert body["status_code"] == "201"
    assert body["data"]["email"] == "new.person@example.com"
    assert body["data"]["role"] == "staff"
    assert body["data"]["is_verified"] is True


def test_duplicate_email_is_rejected(auth_client, admin, member):
    resp = auth_client.post("/api/users", headers=admin.headers,
                            json={"email": member.email.upper()})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Email already exists"
    assert resp.json()["status_code"] == "3000"


def test_invalid_role_is_rejected(auth_client, admin):
    resp = auth_client.post("/api/users", headers=admin.headers,
                            json={"email": "x@example.com", "role": "owner"})
    assert resp.status_code == 422
    assert resp.json()["status_code"] == "1001"


def test_non_admin_cannot_manage_users(auth_client, staff):
    assert auth_client.get("/api/users", headers=staff.headers).status_code == 403
    resp = auth_client.post("/api/users", headers=staff.headers,
                            json={"email": "x@example.com"})
    assert resp.status_code == 403
    assert resp.json()["message"] == "Access denied. Admin role required."


def test_list_users_with_filters(auth_client, admin, staff, member):
    resp = auth_client.get("/api/users", headers=admin.headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["total"] == 3

    resp = auth_client.get("/api/users", headers=admin.headers, params={"role": "staff"})
    users = resp.json()["data"]["users"]
    assert [u["email"] for u in users] == [staff.email]

    resp = auth_client.get("/api/users", headers=admin.headers, params={"search": "USER"})
    assert [u["email"] for u in resp.json()["data"]["users"]] == [member.email]


def test_read_user_self_or_admin(auth_client, admin, staff, member):
    assert auth_client.get(f"/api/users/{member.id}", headers=member.headers).status_code == 200
    assert auth_client.get(f"/api/users/{member.id}", headers=admin.headers).status_code == 200

    resp = auth_client.get(f"/api/users/{member.id}", headers=staff.headers)
    assert resp.status_code == 403
    assert resp.json()["message"] == "Access denied"


def test_read_missing_user(auth_client, admin):
    resp = auth_client.get("/api/users/00000000-0000-0000-0000-000000000000",
                           headers=admin.headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "User not found"


def test_user_updates_own_name_only(auth_client, member):
    resp = auth_client.put(f"/api/users/{member.id}", headers=member.headers,
                           json={"full_name": "  Renamed  "})
    assert resp.status_code == 200
    assert resp.json()["data"]["full_name"] == "Renamed"

    resp = auth_client.put(f"/api/users/{member.id}", headers=member.headers,
                           json={"role": "admin"})
    assert resp.status_code == 403


def test_admin_changes_role_and_verification(auth_client, admin, make_user):
    pending = make_user("user", verified=False)
    resp = auth_client.put(f"/api/users/{pending.id}", headers=admin.headers,
                           json={"role": "staff", "is_verified": True})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["role"] == "staff"
    assert data["is_verified"] is True


def test_soft_delete_user(auth_client, admin, member):
    resp = auth_client.delete(f"/api/users/{member.id}", headers=admin.headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "User deleted successfully"

    resp = auth_client.get(f"/api/users/{member.id}", headers=admin.headers)
    assert resp.status_code == 404


def test_admin_cannot_delete_self(auth_client, admin):
    resp = auth_client.delete(f"/api/users/{admin.id}", headers=admin.headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "You cannot delete your own account"


def test_deleted_email_can_be_provisioned_again(auth_client, admin, member):
    auth_client.delete(f"/api/users/{member.id}", headers=admin.headers)
    resp = auth_client.post("/api/users", headers=admin.headers,
                            json={"email": member.email, "role": "staff"})
    assert resp.status_code == 201
    assert resp.json()["data"]["id"] == member.id
    assert resp.json()["data"]["role"] == "staff"


def test_issued_token_works(auth_client, client, admin, staff):
    resp = auth_client.post(f"/api/users/{staff.id}/token", headers=admin.headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["token_type"] == "bearer"
    assert data["expires_in"] == 10080 * 60
    assert data["user"]["email"] == staff.email

    headers = {"Authorization": f"Bearer {data['access_token']}"}
    assert client.get("/api/items", headers=headers).status_code == 200


def test_non_text_full_name_is_rejected(auth_client, admin):
    resp = auth_client.post("/api/users", headers=admin.headers,
                            json={"email": "n@example.com", "full_name": 123})
    assert resp.status_code == 422
    assert resp.json()["status_code"] == "1001"


def test_list_users_rejects_bad_paging(auth_client, admin):
    for params in ({"skip": -1}, {"limit": 0}, {"limit": -1}, {"limit": 501}):
        resp = auth_client.get("/api/users", headers=admin.headers, params=params)
        assert resp.status_code == 422, params


def test_user_search_treats_wildcards_literally(auth_client, admin, member):
    resp = auth_client.get("/api/users", headers=admin.headers, params={"search": "%"})
    assert resp.json()["data"]["total"] == 0

    resp = auth_client.get("/api/users", headers=admin.headers, params={"search": "_"})
    assert resp.json()["data"]["total"] == 0
