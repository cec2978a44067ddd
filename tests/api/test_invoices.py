"""
Tests for invoice endpoints.
"""

from decimal import Decimal


INVOICE = {
    "number": "INV-2024-001",
    "customer_name": "Gulf Retail LLC",
    "invoice_date": "2024-05-02",
    "lines": [
        {"description": "Consulting", "quantity": "4", "unit_price": "250.00"},
    ],
}


def test_create_invoice_returns_201(client, company):
    response = client.post(f"/companies/{company.id}/invoices", json=INVOICE)
    assert response.status_code == 201
    data = response.json()
    assert Decimal(data["subtotal"]) == Decimal("1000.00")
    assert Decimal(data["vat_amount"]) == Decimal("50.00")
    assert Decimal(data["total"]) == Decimal("1050.00")
    assert data["status"] == "draft"


def test_invoice_entry_is_a_draft_until_posted(client, company):
    client.post(f"/companies/{company.id}/invoices", json=INVOICE)
    entries = client.get(
        f"/companies/{company.id}/journal", params={"source": "invoice"}
    ).json()
    assert len(entries) == 1
    assert entries[0]["status"] == "draft"


def test_post_invoice(client, company):
    invoice_id = client.post(
        f"/companies/{company.id}/invoices", json=INVOICE
    ).json()["id"]

    response = client.post(f"/companies/{company.id}/invoices/{invoice_id}/post")
    assert response.status_code == 200
    data = response.json()
    assert data["invoice"]["status"] == "sent"
    assert len(data["posted_entry_ids"]) == 1

    again = client.post(f"/companies/{company.id}/invoices/{invoice_id}/post")
    assert again.status_code == 400


def test_duplicate_invoice_number_returns_400(client, company):
    client.post(f"/companies/{company.id}/invoices", json=INVOICE)
    response = client.post(f"/companies/{company.id}/invoices", json=INVOICE)
    assert response.status_code == 400


def test_get_and_list_invoices(client, company):
    invoice_id = client.post(
        f"/companies/{company.id}/invoices", json=INVOICE
    ).json()["id"]

    response = client.get(f"/companies/{company.id}/invoices/{invoice_id}")
    assert response.status_code == 200
    assert response.json()["lines"][0]["description"] == "Consulting"

    listed = client.get(f"/companies/{company.id}/invoices").json()
    assert [i["id"] for i in listed] == [invoice_id]


def test_unknown_invoice_returns_404(client, company):
    response = client.get(f"/companies/{company.id}/invoices/999")
    assert response.status_code == 404


def test_mark_invoice_paid(client, company, accounts):
    invoice_id = client.post(
        f"/companies/{company.id}/invoices", json=INVOICE
    ).json()["id"]

    response = client.patch(
        f"/companies/{company.id}/invoices/{invoice_id}/status",
        json={"status": "paid", "payment_account_id": accounts["1010"].id},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "paid"

    payments = client.get(
        f"/companies/{company.id}/journal", params={"source": "payment"}
    ).json()
    assert len(payments) == 1
    assert payments[0]["status"] == "posted"
    assert Decimal(payments[0]["total_debit"]) == Decimal("1050.00")


def test_mark_paid_without_account_returns_400(client, company):
    invoice_id = client.post(
        f"/companies/{company.id}/invoices", json=INVOICE
    ).json()["id"]

    response = client.patch(
        f"/companies/{company.id}/invoices/{invoice_id}/status",
        json={"status": "paid"},
    )
    assert response.status_code == 400

    invoice = client.get(f"/companies/{company.id}/invoices/{invoice_id}").json()
    assert invoice["status"] == "draft"


def test_void_invoice(client, company):
    invoice_id = client.post(
        f"/companies/{company.id}/invoices", json=INVOICE
    ).json()["id"]

    response = client.patch(
        f"/companies/{company.id}/invoices/{invoice_id}/status",
        json={"status": "void"},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "void"

    posted = client.post(f"/companies/{company.id}/invoices/{invoice_id}/post")
    assert posted.status_code == 400


def test_invalid_status_returns_422(client, company):
    invoice_id = client.post(
        f"/companies/{company.id}/invoices", json=INVOICE
    ).json()["id"]
    response = client.patch(
        f"/companies/{company.id}/invoices/{invoice_id}/status",
        json={"status": "refunded"},
    )
    assert response.status_code == 422
