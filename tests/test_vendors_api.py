from conftest import API

VENDOR = {
    "name": "Acme Scientific",
    "email": "Sales@Acme.example.com",
    "contactNumber": "080-1234567",
    "address": "12 Industrial Area",
}


def _create(client, headers, **overrides):
    return client.post(f"{API}/vendors", json={**VENDOR, **overrides}, headers=headers)


def test_vendor_crud(client, admin_headers, officer_headers):
    res = _create(client, admin_headers)
    assert res.status_code == 201, res.text
    vendor = res.json()["data"]
    assert vendor["email"] == "sales@acme.example.com"
    assert vendor["contactNumber"] == "080-1234567"

    res = client.get(f"{API}/vendors", headers=officer_headers)
    assert [v["name"] for v in res.json()["data"]] == ["Acme Scientific"]

    res = client.put(
        f"{API}/vendors/{vendor['id']}",
        json={**VENDOR, "address": "New Campus Road"},
        headers=admin_headers,
    )
    assert res.status_code == 200
    assert res.json()["data"]["address"] == "New Campus Road"

    res = client.delete(f"{API}/vendors/{vendor['id']}", headers=admin_headers)
    assert res.status_code == 200
    assert client.get(f"{API}/vendors", headers=officer_headers).json()["data"] == []


def test_duplicate_email_is_409(client, admin_headers):
    assert _create(client, admin_headers).status_code == 201

    res = _create(client, admin_headers, name="Acme Again", email="sales@acme.example.com")
    assert res.status_code == 409
    assert res.json()["error"] == "Vendor already exists"


def test_invalid_email_is_400(client, admin_headers):
    res = _create(client, admin_headers, email="not-an-email")
    assert res.status_code == 400


def test_missing_vendor_is_404(client, admin_headers):
    res = client.put(f"{API}/vendors/77", json=VENDOR, headers=admin_headers)
    assert res.status_code == 404
    res = client.delete(f"{API}/vendors/77", headers=admin_headers)
    assert res.status_code == 404


def test_officer_cannot_create_vendor(client, officer_headers):
    assert _create(client, officer_headers).status_code == 403
