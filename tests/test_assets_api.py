import json
import math

from conftest import API, asset_payload, create_asset, make_department

PDF_BYTES = b"%PDF-1.4\n% test bill\n"


def test_create_computes_totals(client, officer_headers, department_id):
    # a client-supplied total must be ignored
    asset_id = create_asset(
        client,
        officer_headers,
        department_id,
        items=[{"itemName": "Microscope", "quantity": 2, "pricePerItem": 100, "totalAmount": 5}],
        grandTotal=1,
    )

    res = client.get(f"{API}/assets/{asset_id}", headers=officer_headers)
    assert res.status_code == 200
    asset = res.json()["data"]
    assert asset["items"][0]["totalAmount"] == 200
    assert asset["grandTotal"] == 200
    assert asset["officer"]["name"] == "Priya Officer"
    assert asset["items"][0]["itemIndex"] == 0


def test_grand_total_sums_items(client, officer_headers, department_id):
    asset_id = create_asset(
        client,
        officer_headers,
        department_id,
        items=[
            {"itemName": "Bench", "quantity": 3, "pricePerItem": 19.99},
            {"itemName": "Stool", "quantity": 1, "pricePerItem": 0.5},
        ],
    )
    asset = client.get(f"{API}/assets/{asset_id}", headers=officer_headers).json()["data"]
    assert [i["totalAmount"] for i in asset["items"]] == [59.97, 0.5]
    assert asset["grandTotal"] == 60.47


def test_get_missing_asset_is_404(client, officer_headers):
    res = client.get(f"{API}/assets/9999", headers=officer_headers)
    assert res.status_code == 404
    assert res.json()["error"] == "Asset not found"
    assert res.json()["success"] is False


def test_requires_token(client):
    res = client.get(f"{API}/assets")
    assert res.status_code == 401

    res = client.get(f"{API}/assets", headers={"Authorization": "Bearer not-a-token"})
    assert res.status_code == 401


def test_validation_errors_are_400(client, officer_headers, department_id):
    bad_year = asset_payload(department_id, academicYear="2024/25")
    res = client.post(f"{API}/assets", json=bad_year, headers=officer_headers)
    assert res.status_code == 400
    assert "academicYear" in res.json()["error"]

    no_items = asset_payload(department_id)
    no_items["items"] = []
    res = client.post(f"{API}/assets", json=no_items, headers=officer_headers)
    assert res.status_code == 400

    bad_type = asset_payload(department_id, type="furniture")
    res = client.post(f"{API}/assets", json=bad_type, headers=officer_headers)
    assert res.status_code == 400

    bad_quantity = asset_payload(
        department_id, items=[{"itemName": "X", "quantity": 0, "pricePerItem": 1}]
    )
    res = client.post(f"{API}/assets", json=bad_quantity, headers=officer_headers)
    assert res.status_code == 400

    assert client.get(f"{API}/assets", headers=officer_headers).json()["total"] == 0


def test_unknown_department_is_rejected(client, officer_headers, department_id):
    res = client.post(
        f"{API}/assets",
        json=asset_payload(department_id + 100),
        headers=officer_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid departmentId"


def test_pagination_covers_every_record_once(client, officer_headers, department_id):
    ids = {
        create_asset(
            client,
            officer_headers,
            department_id,
            items=[{"itemName": f"Item {n}", "quantity": 1, "pricePerItem": n + 1}],
        )
        for n in range(7)
    }

    seen = []
    total_pages = None
    page = 1
    while True:
        body = client.get(
            f"{API}/assets",
            params={"page": page, "limit": 3},
            headers=officer_headers,
        ).json()
        assert body["total"] == 7
        total_pages = body["totalPages"]
        if not body["data"]:
            break
        seen.extend(a["id"] for a in body["data"])
        page += 1

    assert total_pages == math.ceil(7 / 3)
    assert page - 1 == total_pages
    assert len(seen) == len(set(seen)) == 7
    assert set(seen) == ids
    # newest first
    assert seen == sorted(seen, reverse=True)


def test_list_filters(client, officer_headers, admin_headers, department_id):
    other = make_department(client, admin_headers, name="Central Library", type_="service")
    create_asset(
        client, officer_headers, department_id,
        items=[{"itemName": "Laptop", "quantity": 1, "pricePerItem": 900, "vendorName": "Dell India"}],
    )
    create_asset(
        client, officer_headers, other,
        type="revenue", subcategory="Stationery", academicYear="2023-24",
        items=[{"itemName": "Paper", "quantity": 10, "pricePerItem": 5, "vendorName": "Office Mart"}],
    )

    def total(**params):
        res = client.get(f"{API}/assets", params=params, headers=officer_headers)
        assert res.status_code == 200, res.text
        return res.json()["total"]

    assert total() == 2
    assert total(type="revenue") == 1
    assert total(departmentId=other) == 1
    assert total(vendorName="dell") == 1
    assert total(academicYear="2023-24") == 1
    assert total(subcategory="station") == 1
    assert total(search="laptop") == 1
    assert total(search="100%") == 0


def test_update_recomputes_totals(client, officer_headers, department_id):
    asset_id = create_asset(client, officer_headers, department_id)

    res = client.put(
        f"{API}/assets/{asset_id}",
        json={"items": [
            {"itemName": "Rack", "quantity": 3, "pricePerItem": 150},
            {"itemName": "Shelf", "quantity": 1, "pricePerItem": 50},
        ]},
        headers=officer_headers,
    )
    assert res.status_code == 200, res.text
    asset = res.json()["data"]
    assert [i["totalAmount"] for i in asset["items"]] == [450, 50]
    assert asset["grandTotal"] == 500

    res = client.put(
        f"{API}/assets/{asset_id}",
        json={"subcategory": "Storage"},
        headers=officer_headers,
    )
    assert res.json()["data"]["subcategory"] == "Storage"
    assert res.json()["data"]["grandTotal"] == 500


def test_update_requires_a_field(client, officer_headers, department_id):
    asset_id = create_asset(client, officer_headers, department_id)
    res = client.put(f"{API}/assets/{asset_id}", json={}, headers=officer_headers)
    assert res.status_code == 400


def test_update_and_delete_missing_asset(client, officer_headers):
    res = client.put(f"{API}/assets/42", json={"subcategory": "x"}, headers=officer_headers)
    assert res.status_code == 404
    res = client.delete(f"{API}/assets/42", headers=officer_headers)
    assert res.status_code == 404


def test_delete_asset(client, officer_headers, department_id):
    asset_id = create_asset(client, officer_headers, department_id)

    res = client.delete(f"{API}/assets/{asset_id}", headers=officer_headers)
    assert res.status_code == 200
    assert res.json()["success"] is True

    assert client.get(f"{API}/assets/{asset_id}", headers=officer_headers).status_code == 404


def test_summary_stats(client, officer_headers, department_id):
    create_asset(client, officer_headers, department_id)
    create_asset(
        client, officer_headers, department_id, type="revenue",
        items=[{"itemName": "Chalk", "quantity": 10, "pricePerItem": 1.5}],
    )

    res = client.get(f"{API}/assets/summary/stats", headers=officer_headers)
    assert res.status_code == 200
    body = res.json()
    assert body["totalAssets"] == 2
    assert body["totalValue"] == 215
    assert body["byType"]["capital"] == {"count": 1, "totalValue": 200}
    assert body["byType"]["revenue"] == {"count": 1, "totalValue": 15}


def _multipart_create(client, headers, department_id, files):
    payload = asset_payload(
        department_id,
        items=[
            {"itemName": "Printer", "quantity": 1, "pricePerItem": 250},
            {"itemName": "Toner", "quantity": 4, "pricePerItem": 25},
        ],
    )
    return client.post(
        f"{API}/assets",
        data={"payload": json.dumps(payload)},
        files=files,
        headers=headers,
    )


def test_multipart_create_stores_bill_files(client, officer_headers, department_id):
    res = _multipart_create(
        client, officer_headers, department_id,
        files=[
            ("files", ("bill one.pdf", PDF_BYTES, "application/pdf")),
            ("files", ("bill-two.png", b"\x89PNG\r\n", "image/png")),
        ],
    )
    assert res.status_code == 201, res.text
    asset_id = res.json()["id"]

    asset = client.get(f"{API}/assets/{asset_id}", headers=officer_headers).json()["data"]
    assert asset["grandTotal"] == 350
    assert asset["items"][0]["billFileName"] == "bill_one.pdf"
    assert asset["items"][1]["billFileName"] == "bill-two.png"

    res = client.get(f"{API}/assets/{asset_id}/file/0", headers=officer_headers)
    assert res.status_code == 200
    assert res.content == PDF_BYTES
    assert res.headers["content-type"] == "application/pdf"
    assert res.headers["content-disposition"].startswith("inline")

    res = client.get(
        f"{API}/assets/{asset_id}/file/1",
        params={"download": "true"},
        headers=officer_headers,
    )
    assert res.headers["content-disposition"] == 'attachment; filename="bill-two.png"'


def test_multipart_rejects_bad_file_type(client, officer_headers, department_id):
    res = _multipart_create(
        client, officer_headers, department_id,
        files=[("files", ("notes.txt", b"hello", "text/plain"))],
    )
    assert res.status_code == 400
    assert client.get(f"{API}/assets", headers=officer_headers).json()["total"] == 0


def test_multipart_rejects_more_files_than_items(client, officer_headers, department_id):
    res = _multipart_create(
        client, officer_headers, department_id,
        files=[("files", (f"b{n}.pdf", PDF_BYTES, "application/pdf")) for n in range(3)],
    )
    assert res.status_code == 400


def test_missing_item_file_is_404(client, officer_headers, department_id):
    asset_id = create_asset(client, officer_headers, department_id)

    assert client.get(f"{API}/assets/{asset_id}/file/0", headers=officer_headers).status_code == 404
    assert client.get(f"{API}/assets/{asset_id}/file/5", headers=officer_headers).status_code == 404


def test_replace_item_file_and_trim_on_update(client, officer_headers, department_id):
    res = _multipart_create(
        client, officer_headers, department_id,
        files=[
            ("files", ("first.pdf", PDF_BYTES, "application/pdf")),
            ("files", ("second.pdf", PDF_BYTES, "application/pdf")),
        ],
    )
    asset_id = res.json()["id"]

    res = client.put(
        f"{API}/assets/{asset_id}/file/0",
        files={"file": ("replacement.pdf", b"%PDF-1.7 new", "application/pdf")},
        headers=officer_headers,
    )
    assert res.status_code == 200, res.text
    assert res.json()["data"]["items"][0]["billFileName"] == "replacement.pdf"
    assert client.get(
        f"{API}/assets/{asset_id}/file/0", headers=officer_headers
    ).content == b"%PDF-1.7 new"

    # shrinking to one item drops the upload of the removed index
    res = client.put(
        f"{API}/assets/{asset_id}",
        json={"items": [{"itemName": "Printer", "quantity": 1, "pricePerItem": 250}]},
        headers=officer_headers,
    )
    assert res.status_code == 200
    items = res.json()["data"]["items"]
    assert len(items) == 1
    assert items[0]["billFileName"] == "replacement.pdf"
    assert client.get(f"{API}/assets/{asset_id}/file/1", headers=officer_headers).status_code == 404


def test_external_bill_url_redirects(client, officer_headers, department_id):
    asset_id = create_asset(
        client, officer_headers, department_id,
        items=[{
            "itemName": "Router", "quantity": 1, "pricePerItem": 80,
            "billFileUrl": "https://files.example.com/bill.pdf",
        }],
    )
    res = client.get(
        f"{API}/assets/{asset_id}/file/0",
        headers=officer_headers,
        follow_redirects=False,
    )
    assert res.status_code == 307
    assert res.headers["location"] == "https://files.example.com/bill.pdf"


def test_unit_price_keeps_extra_precision(client, officer_headers, department_id):
    asset_id = create_asset(
        client,
        officer_headers,
        department_id,
        items=[{"itemName": "Chalk", "quantity": 3, "pricePerItem": 0.335}],
    )

    asset = client.get(f"{API}/assets/{asset_id}", headers=officer_headers).json()["data"]
    assert asset["items"][0]["pricePerItem"] == 0.335
    assert asset["items"][0]["totalAmount"] == 1.01
    assert asset["grandTotal"] == 1.01
