from conftest import API, create_asset, make_department


def test_create_and_list_departments(client, admin_headers, officer_headers):
    make_department(client, admin_headers, name="Department of Physics")
    make_department(client, admin_headers, name="Central Library", type_="service")

    res = client.get(f"{API}/departments", headers=officer_headers)
    assert res.status_code == 200
    names = [d["name"] for d in res.json()["data"]]
    assert names == ["Central Library", "Department of Physics"]


def test_duplicate_name_is_409(client, admin_headers):
    make_department(client, admin_headers, name="Department of Chemistry")

    res = client.post(
        f"{API}/departments",
        json={"name": "Department of Chemistry", "type": "academic"},
        headers=admin_headers,
    )
    assert res.status_code == 409
    assert res.json()["error"] == "Department already exists"


def test_invalid_type_is_400(client, admin_headers):
    res = client.post(
        f"{API}/departments",
        json={"name": "Department of Music", "type": "cultural"},
        headers=admin_headers,
    )
    assert res.status_code == 400


def test_officer_cannot_manage_departments(client, officer_headers):
    res = client.post(
        f"{API}/departments",
        json={"name": "Department of Physics", "type": "academic"},
        headers=officer_headers,
    )
    assert res.status_code == 403


def test_update_department(client, admin_headers):
    department_id = make_department(client, admin_headers)
    other_id = make_department(client, admin_headers, name="Department of Mathematics")

    res = client.put(
        f"{API}/departments/{department_id}",
        json={"name": "Department of Applied Physics", "type": "major"},
        headers=admin_headers,
    )
    assert res.status_code == 200
    assert res.json()["data"]["type"] == "major"

    res = client.put(
        f"{API}/departments/{other_id}",
        json={"name": "Department of Applied Physics", "type": "academic"},
        headers=admin_headers,
    )
    assert res.status_code == 409

    res = client.put(
        f"{API}/departments/999",
        json={"name": "Nowhere", "type": "academic"},
        headers=admin_headers,
    )
    assert res.status_code == 404


def test_delete_department(client, admin_headers, officer_headers):
    used = make_department(client, admin_headers)
    unused = make_department(client, admin_headers, name="Office Administration", type_="service")
    create_asset(client, officer_headers, used)

    res = client.delete(f"{API}/departments/{used}", headers=admin_headers)
    assert res.status_code == 409
    assert res.json()["error"] == "Department is in use"

    res = client.delete(f"{API}/departments/{unused}", headers=admin_headers)
    assert res.status_code == 200

    res = client.delete(f"{API}/departments/{unused}", headers=admin_headers)
    assert res.status_code == 404
