"""CRUD behaviour of /api/users against a real (SQLite) store."""


def _create(client, payload):
    resp = client.post("/api/users", json=payload)
    assert resp.status_code == 201
    return resp.json()


# --- full lifecycle ---

def test_create_get_delete_lifecycle(client, ana):
    created = _create(client, ana)
    assert isinstance(created["id"], int)
    assert created["nombre"] == "Ana"
    assert created["correo"] == "ana@example.com"

    resp = client.get(f"/api/users/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == created

    resp = client.delete(f"/api/users/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Usuario eliminado"}

    resp = client.get(f"/api/users/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == {}


# --- list ---

def test_list_empty(client):
    resp = client.get("/api/users")
    assert resp.status_code == 200
    assert resp.json() == []


def test_list_contains_all_created(client):
    created = [
        _create(client, {"nombre": f"user{i}", "correo": f"user{i}@example.com"})
        for i in range(3)
    ]
    resp = client.get("/api/users")
    assert resp.status_code == 200
    listed = resp.json()
    assert len(listed) >= 3
    for user in created:
        assert user in listed


# --- create ---

def test_ids_are_increasing_and_not_reused(client, ana):
    first = _create(client, ana)
    second = _create(client, ana)
    assert second["id"] > first["id"]

    client.delete(f"/api/users/{second['id']}")
    third = _create(client, ana)
    assert third["id"] > second["id"]


def test_create_without_body_stores_nulls(client):
    resp = client.post("/api/users")
    assert resp.status_code == 201
    body = resp.json()
    assert body["nombre"] is None
    assert body["correo"] is None


def test_create_accepts_english_aliases(client):
    created = _create(client, {"name": "Bob", "email": "bob@example.com"})
    assert created["nombre"] == "Bob"
    assert created["correo"] == "bob@example.com"


def test_create_ignores_unknown_keys(client):
    created = _create(client, {"nombre": "Eve", "rol": "admin"})
    assert set(created) == {"id", "nombre", "correo"}


def test_create_does_not_validate_email_format(client):
    created = _create(client, {"nombre": "X", "correo": "not-an-email"})
    assert created["correo"] == "not-an-email"


def test_create_rejects_non_string_fields(client):
    resp = client.post("/api/users", json={"nombre": 123})
    assert resp.status_code == 422
    assert "nombre" in resp.json()["error"]


# --- get ---

def test_get_missing_returns_empty_object(client):
    resp = client.get("/api/users/999")
    assert resp.status_code == 200
    assert resp.json() == {}


def test_get_non_integer_id_is_validation_error(client):
    resp = client.get("/api/users/abc")
    assert resp.status_code == 422
    assert "user_id" in resp.json()["error"]


# --- update ---

def test_update_overwrites_both_fields(client, ana):
    created = _create(client, ana)
    resp = client.put(f"/api/users/{created['id']}", json={"nombre": "Ana Maria"})
    assert resp.status_code == 200
    assert resp.json() == {"id": created["id"], "nombre": "Ana Maria", "correo": None}

    resp = client.get(f"/api/users/{created['id']}")
    assert resp.json()["correo"] is None


def test_update_missing_returns_empty_object(client):
    resp = client.put("/api/users/999", json={"nombre": "Nadie"})
    assert resp.status_code == 200
    assert resp.json() == {}


# --- delete ---

def test_delete_is_idempotent(client, ana):
    created = _create(client, ana)
    for _ in range(2):
        resp = client.delete(f"/api/users/{created['id']}")
        assert resp.status_code == 200
        assert resp.json() == {"message": "Usuario eliminado"}


def test_delete_missing_id_is_acknowledged(client):
    resp = client.delete("/api/users/12345")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Usuario eliminado"}


# --- strict not-found mode ---

def test_strict_mode_get_missing_is_404(make_client):
    client = make_client(strict_not_found=True)
    resp = client.get("/api/users/999")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Usuario no encontrado"}


def test_strict_mode_update_missing_is_404(make_client):
    client = make_client(strict_not_found=True)
    resp = client.put("/api/users/999", json={"nombre": "Nadie"})
    assert resp.status_code == 404


def test_strict_mode_still_returns_existing(make_client, ana):
    client = make_client(strict_not_found=True)
    created = _create(client, ana)
    assert client.get(f"/api/users/{created['id']}").json() == created


# --- misc ---

def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_cors_allows_any_origin_by_default(client):
    resp = client.get("/api/users", headers={"Origin": "http://example.org"})
    assert resp.headers["access-control-allow-origin"] == "*"


# --- id range ---

def test_oversized_id_is_validation_error_on_every_route(client):
    big = "99999999999999999999"
    for method, kwargs in (("GET", {}), ("PUT", {"json": {"nombre": "X"}}), ("DELETE", {})):
        resp = client.request(method, f"/api/users/{big}", **kwargs)
        assert resp.status_code == 422
        assert "user_id" in resp.json()["error"]


def test_largest_int32_id_is_accepted(client):
    resp = client.get("/api/users/2147483647")
    assert resp.status_code == 200
    assert resp.json() == {}


def test_negative_id_is_just_missing(client):
    resp = client.get("/api/users/-1")
    assert resp.status_code == 200
    assert resp.json() == {}
