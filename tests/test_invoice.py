from datetime import datetime, timezone

import pytest

from tradehub.models.order import Discount, OrderDocument, OrderItemDocument, ShippingAddress
from tradehub.services.invoice import InvoiceGenerator, format_money


@pytest.fixture
def order():
    created = datetime(2024, 3, 1, 10, 30, tzinfo=timezone.utc)
    return OrderDocument(
        id="order_1709289000000_abc123xyz",
        order_number="ORD-1709289000000",
        reference_id="REF-1709289000000",
        tracking_number="TRK-1709289000000-ABC123XYZ",
        items=[
            OrderItemDocument(id=1, name="Wireless Earbuds", price=2500, quantity=2),
            OrderItemDocument(id=2, name="<b>Cable</b>", price=500, quantity=1),
        ],
        subtotal=5500,
        shipping=500,
        tax=375,
        total=5375,
        created_at=created,
        estimated_delivery=created,
        shipping_address=ShippingAddress(
            first_name="Ada",
            last_name="Obi",
            email="ada@example.com",
            address="12 Marina Road",
            city="Lagos",
            state="Lagos",
            zip_code="100001",
        ),
        discount=Discount(code="SAVE1000", discount_amount=1000),
    )


def test_format_money():
    assert format_money(2500) == "₦2,500"
    assert format_money(187.5) == "₦187.50"
    assert format_money(1234567) == "₦1,234,567"


def test_html_invoice(order):
    html = InvoiceGenerator().generate_html(order)

    assert "Invoice #ORD-1709289000000" in html
    assert "Due Date: 2024-03-31" in html
    assert "Ada Obi" in html
    assert "₦5,000" in html
    assert "SAVE1000 Discount" in html
    assert "₦4,500" in html
    assert "Tax (7.5%)" in html
    assert "&lt;b&gt;Cable&lt;/b&gt;" in html
    assert "<b>Cable</b>" not in html


def test_text_invoice(order):
    text = InvoiceGenerator(due_days=14).generate_plain_text(order)

    assert "INVOICE #ORD-1709289000000" in text
    assert "DUE DATE: 2024-03-15" in text
    assert "TOTAL DUE:" in text
    assert "₦5,375" in text
    assert "ORDER STATUS: PENDING" in text


def test_text_invoice_without_discount(order):
    order.discount = None
    text = InvoiceGenerator().generate_plain_text(order)
    assert "DISCOUNT" not in text


def test_invoice_over_http(client):
    from conftest import checkout_payload

    order_id = client.post("/api/orders", json=checkout_payload()).json()["data"]["id"]

    html = client.get(f"/api/orders/{order_id}/invoice")
    assert html.status_code == 200
    assert html.headers["content-type"].startswith("text/html")

    text = client.get(f"/api/orders/{order_id}/invoice?format=text")
    assert text.headers["content-type"].startswith("text/plain")
    assert "₦3,188" in text.text

    assert client.get("/api/orders/order_missing/invoice").status_code == 404
