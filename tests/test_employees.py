from concurrent.futures import ThreadPoolExecutor

from fastapi.testclient import TestClient

from conftest import ADMIN_HEADERS, LIBRARY

EMPLOYEE_42 = {"EMPID": 42, "EMPNAME": "DOUGLAS", "EMPCITY": "DENVER", "EMPSTATE": "CO"}


def _create(client, employee=EMPLOYEE_42):
    resp = client.post("/employees", json=employee, headers=ADMIN_HEADERS)
    assert resp.status_code == 201
    return resp


def test_create_then_fetch_returns_submitted_fields(client):
    _create(client)

    resp = client.get("/employees/42")
    assert resp.status_code == 200
    assert resp.json() == EMPLOYEE_42


def test_delete_then_fetch_finds_nothing(client):
    _create(client)

    resp = client.delete("/employees/42", headers=ADMIN_HEADERS)
    assert resp.status_code == 200
    assert resp.json()["success"] is True

    resp = client.get("/employees/42")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Employee not found"}


def test_list_is_ordered_by_id(client):
    for empid in (30, 10, 20):
        _create(client, {**EMPLOYEE_42, "EMPID": empid})

    rows = client.get("/employees").json()
    assert [row["EMPID"] for row in rows] == [10, 20, 30]


def test_list_sql_is_fixed_and_capped(client, fake_db):
    client.get("/employees")
    sql, params = fake_db.statements[-1]
    assert sql == (
        f"SELECT * FROM {LIBRARY}.EMPPF1 ORDER BY EMPID FETCH FIRST 100 ROWS ONLY"
    )
    assert params == ()


def test_values_are_bound_not_interpolated(client, fake_db):
    hostile = {**EMPLOYEE_42, "EMPNAME": "X'; DROP TABLE EMPPF1 --"}
    _create(client, hostile)

    sql, params = fake_db.statements[-1]
    assert "DROP" not in sql
    assert sql.endswith("VALUES (?, ?, ?, ?)")
    assert params == (42, "X'; DROP TABLE EMPPF1 --", "DENVER", "CO")


def test_update_changes_fields(client):
    _create(client)

    resp = client.put(
        "/employees/42",
        json={"EMPID": 42, "EMPNAME": "DOUG", "EMPCITY": "BOULDER", "EMPSTATE": "CO"},
        headers=ADMIN_HEADERS,
    )
    assert resp.status_code == 200
    assert client.get("/employees/42").json()["EMPCITY"] == "BOULDER"


def test_update_missing_employee_is_not_found(client):
    resp = client.put(
        "/employees/99",
        json={"EMPNAME": "NOBODY", "EMPCITY": "", "EMPSTATE": ""},
        headers=ADMIN_HEADERS,
    )
    assert resp.status_code == 404


def test_update_without_every_field_keeps_the_row(client, fake_db):
    _create(client)
    written = len(fake_db.statements)

    resp = client.put(
        "/employees/42", json={"EMPNAME": "DOUG"}, headers=ADMIN_HEADERS
    )
    assert resp.status_code == 422
    assert len(fake_db.statements) == written
    assert client.get("/employees/42").json() == EMPLOYEE_42


def test_delete_missing_employee_is_not_found(client):
    resp = client.delete("/employees/99", headers=ADMIN_HEADERS)
    assert resp.status_code == 404


def test_duplicate_id_is_generic_error(client):
    _create(client)

    resp = client.post("/employees", json=EMPLOYEE_42, headers=ADMIN_HEADERS)
    assert resp.status_code == 500
    assert resp.json() == {"error": "Database query failed"}


def test_query_failure_returns_generic_error(client, fake_db):
    fake_db.fail = True
    resp = client.get("/employees")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Database query failed"}


def test_concurrent_updates_both_succeed(app, client):
    """No locking: both writers get a success and the last write wins."""
    _create(client)
    clients = [TestClient(app), TestClient(app)]
    bodies = [
        {"EMPNAME": "FIRST", "EMPCITY": "A", "EMPSTATE": "AA"},
        {"EMPNAME": "SECOND", "EMPCITY": "B", "EMPSTATE": "BB"},
    ]

    with ThreadPoolExecutor(max_workers=2) as pool:
        futures = [
            pool.submit(c.put, "/employees/42", json=body, headers=ADMIN_HEADERS)
            for c, body in zip(clients, bodies)
        ]
        statuses = [f.result().status_code for f in futures]

    assert statuses == [200, 200]
    assert client.get("/employees/42").json()["EMPNAME"] in {"FIRST", "SECOND"}
