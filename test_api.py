from fastapi.testclient import TestClient

from dwoms.main import app

client = TestClient(app)


def signup(name, email, role):
    response = client.post("/auth/signup", json={"name": name, "email": email, "password": "pw", "role": role})
    assert response.status_code == 201, response.text
    return response.json()


def login(email):
    response = client.post("/auth/login", json={"email": email, "password": "anything"})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


def bearer(session):
    return {"Authorization": f"Bearer {session['token']}"}


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["failed_routers"] == 0


def test_requests_without_token_are_rejected():
    assert client.get("/dashboard").status_code == 401
    assert client.get("/tasks", headers={"Authorization": "Bearer bogus"}).status_code == 401


def test_signup_login_logout():
    session = signup("Admin User", "admin@dwoms.com", "admin")
    assert session["token_type"] == "bearer"
    assert session["user"]["role"] == "admin"

    me = client.get("/auth/me", headers=bearer(session))
    assert me.json()["email"] == "admin@dwoms.com"

    headers = login("ADMIN@dwoms.com")
    assert client.post("/auth/logout", headers=headers).status_code == 200
    assert client.get("/auth/me", headers=headers).status_code == 401


def test_login_unknown_email():
    response = client.post("/auth/login", json={"email": "ghost@dwoms.com", "password": "x"})
    assert response.status_code == 401


def test_signup_duplicate_email():
    signup("Maria", "maria@dwoms.com", "worker")
    response = client.post(
        "/auth/signup", json={"name": "Maria 2", "email": "Maria@dwoms.com", "password": "pw", "role": "worker"}
    )
    assert response.status_code == 409


def test_navigation_and_role_gates():
    headers = bearer(signup("Client Viewer", "client@dwoms.com", "client"))

    nav = client.get("/navigation", headers=headers).json()
    assert [e["name"] for e in nav["entries"]] == ["Dashboard"]

    assert client.get("/dashboard", headers=headers).status_code == 200
    assert client.get("/inventory/items", headers=headers).status_code == 403
    assert client.get("/reports/summary", headers=headers).status_code == 403
    assert client.get("/users", headers=headers).status_code == 403


def test_task_flow_across_roles():
    admin = bearer(signup("Admin User", "admin@dwoms.com", "admin"))
    worker = client.post(
        "/users", headers=admin, json={"name": "John Worker", "email": "worker@dwoms.com", "role": "worker"}
    ).json()["data"]
    other = client.post(
        "/users", headers=admin, json={"name": "Maria Worker", "email": "maria@dwoms.com", "role": "worker"}
    ).json()["data"]

    created = client.post(
        "/tasks", headers=admin,
        json={"product_type": "Widget A", "assigned_worker_id": worker["id"], "estimated_time": 45},
    )
    assert created.status_code == 201
    task = created.json()["data"]
    assert task["status"] == "Assigned"
    assert task["assigned_worker_name"] == "John Worker"

    bad = client.post(
        "/tasks", headers=admin,
        json={"product_type": "Widget A", "assigned_worker_id": "user-missing", "estimated_time": 45},
    )
    assert bad.status_code == 404

    # a second worker cannot move John's task
    maria = login(other["email"])
    assert client.get(f"/tasks/{task['id']}", headers=maria).status_code == 403
    response = client.patch(f"/tasks/{task['id']}/status", headers=maria, json={"status": "In Progress"})
    assert response.status_code == 403

    john = login(worker["email"])
    assert client.get("/tasks", headers=john).json()["can_create"] is False
    assert client.post(
        "/tasks", headers=john,
        json={"product_type": "X", "assigned_worker_id": worker["id"], "estimated_time": 5},
    ).status_code == 403

    next_statuses = client.get(f"/tasks/{task['id']}/next-statuses", headers=john).json()
    assert next_statuses["next"] == ["In Progress"]

    response = client.patch(f"/tasks/{task['id']}/status", headers=john, json={"status": "In Progress"})
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "In Progress"

    response = client.patch(f"/tasks/{task['id']}/status", headers=john, json={"status": "Completed"})
    assert response.status_code == 409

    listing = client.get("/tasks", headers=john).json()
    assert listing["counts"]["in_progress"] == 1
    assert [t["id"] for t in listing["data"]] == [task["id"]]


def test_production_entries_are_scoped_for_workers():
    john = bearer(signup("John Worker", "worker@dwoms.com", "worker"))
    response = client.post(
        "/production", headers=john,
        json={"product_name": "Widget A", "quantity": 40, "shift": "morning", "date": "2024-06-05"},
    )
    assert response.status_code == 201
    assert response.json()["data"]["worker_name"] == "John Worker"

    maria = bearer(signup("Maria Worker", "maria@dwoms.com", "worker"))
    client.post("/production", headers=maria, json={"product_name": "Widget B", "quantity": 10})

    entries = client.get("/production", headers=maria).json()["data"]
    assert [e["product_name"] for e in entries] == ["Widget B"]

    negative = client.post("/production", headers=maria, json={"product_name": "Widget B", "quantity": -1})
    assert negative.status_code == 422


def test_inventory_stock_movements():
    headers = bearer(signup("Sarah Supervisor", "supervisor@dwoms.com", "supervisor"))
    item = client.post(
        "/inventory/items", headers=headers,
        json={"item_name": "Aluminum Rods", "current_stock": 10, "min_stock_level": 20, "unit": "rods"},
    ).json()["data"]
    assert item["is_low_stock"] is True

    stocked = client.post(f"/inventory/items/{item['id']}/stock", headers=headers, json={"quantity": 15, "action": "in"})
    assert stocked.json()["data"]["current_stock"] == 25
    assert client.get("/inventory/low-stock", headers=headers).json()["count"] == 0

    drained = client.post(f"/inventory/items/{item['id']}/stock", headers=headers, json={"quantity": 999, "action": "out"})
    assert drained.json()["data"]["current_stock"] == 0

    assert client.post(
        f"/inventory/items/{item['id']}/stock", headers=headers, json={"quantity": 0, "action": "in"}
    ).status_code == 422

    renamed = client.patch(f"/inventory/items/{item['id']}", headers=headers, json={"unit": "bars"})
    assert renamed.json()["data"]["unit"] == "bars"

    assert client.delete(f"/inventory/items/{item['id']}", headers=headers).status_code == 200
    assert client.get(f"/inventory/items/{item['id']}", headers=headers).status_code == 404


def test_user_management():
    session = signup("Admin User", "admin@dwoms.com", "admin")
    headers = bearer(session)

    created = client.post("/users", headers=headers, json={"name": "Sam", "email": "sam@dwoms.com", "role": "client"})
    assert created.status_code == 201
    sam = created.json()["data"]
    assert sam["created_by"] == session["user"]["id"]

    duplicate = client.post("/users", headers=headers, json={"name": "Sam", "email": "SAM@dwoms.com"})
    assert duplicate.status_code == 409

    promoted = client.patch(f"/users/{sam['id']}/role", headers=headers, json={"role": "supervisor"})
    assert promoted.json()["data"]["role"] == "supervisor"
    assert client.get("/users?role=supervisor", headers=headers).json()["count"] == 1

    own = client.delete(f"/users/{session['user']['id']}", headers=headers)
    assert own.status_code == 400
    assert own.json()["detail"] == "You can't delete your own account"
    assert client.get("/users", headers=headers).json()["count"] == 2

    assert client.delete(f"/users/{sam['id']}", headers=headers).status_code == 200


def test_reports():
    headers = bearer(signup("Admin User", "admin@dwoms.com", "admin"))
    client.post("/production", headers=headers, json={"product_name": "Widget A", "quantity": 12})

    summary = client.get("/reports/summary", headers=headers).json()["data"]
    assert summary["total_units_produced"] == 12

    csv_response = client.get("/reports/production/csv", headers=headers)
    assert csv_response.status_code == 200
    assert csv_response.headers["content-type"].startswith("text/csv")
    assert "attachment; filename=production_" in csv_response.headers["content-disposition"]
    assert csv_response.text.splitlines()[0] == "Date,Worker,Product,Quantity,Shift"

    document = client.get("/reports/inventory/document", headers=headers)
    assert document.status_code == 200
    assert "dwoms_inventory_report.xlsx" in document.headers["content-disposition"]

    backwards = client.get(
        "/reports/tasks/csv", headers=headers, params={"start_date": "2024-06-30", "end_date": "2024-06-01"}
    )
    assert backwards.status_code == 400
    assert client.get("/reports/unknown/csv", headers=headers).status_code == 422


def test_dashboard_productivity_only_for_managers():
    john = bearer(signup("John Worker", "worker@dwoms.com", "worker"))
    client.post("/production", headers=john, json={"product_name": "Widget A", "quantity": 7})

    worker_view = client.get("/dashboard", headers=john).json()["metrics"]
    assert worker_view["total_production"] == 7
    assert worker_view["worker_productivity"] == []

    viewer = bearer(signup("Client Viewer", "client@dwoms.com", "client"))
    assert client.get("/dashboard", headers=viewer).json()["metrics"]["worker_productivity"] == []

    supervisor = bearer(signup("Sarah Supervisor", "supervisor@dwoms.com", "supervisor"))
    rows = client.get("/dashboard", headers=supervisor).json()["metrics"]["worker_productivity"]
    assert [(r["worker_name"], r["quantity"]) for r in rows] == [("John Worker", 7)]


def test_admin_cannot_change_own_role():
    session = signup("Admin User", "admin@dwoms.com", "admin")
    headers = bearer(session)

    response = client.patch(f"/users/{session['user']['id']}/role", headers=headers, json={"role": "client"})
    assert response.status_code == 400
    assert response.json()["detail"] == "You can't change your own role"
    # still an admin
    assert client.get("/users", headers=headers).status_code == 200


def test_blank_user_name_is_rejected():
    headers = bearer(signup("Admin User", "admin@dwoms.com", "admin"))

    response = client.post("/users", headers=headers, json={"name": "   ", "email": "blank@dwoms.com"})
    assert response.status_code == 422

    created = client.post("/users", headers=headers, json={"name": "  Sam  ", "email": "sam@dwoms.com"})
    assert created.json()["data"]["name"] == "Sam"


def test_startup_seeds_demo_data(monkeypatch):
    from dwoms.core.config import settings

    monkeypatch.setattr(settings, "SEED_DEMO_DATA", True)
    with TestClient(app) as seeded:
        response = seeded.post("/auth/login", json={"email": "admin@dwoms.com", "password": "anything"})
        assert response.status_code == 200
        assert response.json()["user"]["role"] == "admin"
