import json
from dataclasses import replace
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from conftest import WEBHOOK_SECRET, login
from tradehub.repositories import InMemoryPaymentRepository
from tradehub.schemas.payment import PaymentInitRequest
from tradehub.services.payments import PaymentService, sign_payload, to_minor_units, verify_signature
from tradehub.utils.errors import (
    AuthenticationError,
    NotFoundError,
    PaymentInitializationError,
    ValidationError,
)


def init_request(**overrides) -> PaymentInitRequest:
    values = {
        "reference": "REF-1700000000000",
        "amount": 3188,
        "userInfo": {"userEmail": "ada@example.com", "userName": "Ada Obi"},
    }
    values.update(overrides)
    return PaymentInitRequest.model_validate(values)


def callback_body(reference="REF-1700000000000", status="SUCCESS", **extra) -> bytes:
    return json.dumps({"reference": reference, "status": status, **extra}).encode()


def unreachable_transport() -> httpx.AsyncClient:
    def handler(request):
        raise AssertionError(f"unexpected gateway call to {request.url}")
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_minor_units():
    assert to_minor_units(3188) == 318800
    assert to_minor_units(99.99) == 9999


def test_signature_roundtrip_and_tamper():
    body = callback_body()
    signature = sign_payload(WEBHOOK_SECRET, body)
    assert verify_signature(WEBHOOK_SECRET, body, signature)
    assert verify_signature(WEBHOOK_SECRET, body, signature.upper())
    assert not verify_signature(WEBHOOK_SECRET, body + b" ", signature)
    assert not verify_signature("other-secret", body, signature)


@pytest.mark.asyncio
async def test_demo_initiation_builds_url_without_io(payment_repository, demo_config):
    service = PaymentService(payment_repository, demo_config, http_client=unreachable_transport())
    data = await service.initiate_payment(init_request())

    url = urlparse(data.cashier_url)
    query = parse_qs(url.query)
    assert data.cashier_url.startswith(demo_config.demo_cashier_url)
    assert query == {"reference": ["REF-1700000000000"], "amount": ["3188"], "email": ["ada@example.com"]}
    assert data.checkout_url == data.cashier_url

    record = await payment_repository.get("REF-1700000000000")
    assert record.status == "PENDING"
    assert record.amount == 3188


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [0, -50])
async def test_non_positive_amount_creates_no_record(payment_repository, demo_config, amount):
    service = PaymentService(payment_repository, demo_config)
    with pytest.raises(ValidationError):
        await service.initiate_payment(init_request(amount=amount))
    assert await payment_repository.list() == []


@pytest.mark.asyncio
async def test_missing_user_info_is_rejected(payment_repository, demo_config):
    service = PaymentService(payment_repository, demo_config)
    with pytest.raises(ValidationError, match="Missing required fields"):
        await service.initiate_payment(init_request(userInfo=None))


@pytest.mark.asyncio
async def test_production_initiation_posts_minor_units(payment_repository, production_config):
    sent = []

    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(request)
        return httpx.Response(200, json={"data": {"cashierUrl": "https://cashier.example/pay/1"}})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    service = PaymentService(payment_repository, production_config, http_client=client)
    data = await service.initiate_payment(init_request())

    assert data.cashier_url == "https://cashier.example/pay/1"
    assert len(sent) == 1
    body = json.loads(sent[0].content)
    assert body["amount"] == 318800
    assert body["currency"] == "NGN"
    assert body["userInfo"] == {"userEmail": "ada@example.com", "userName": "Ada Obi"}
    assert sent[0].headers["Authorization"] == f"Bearer {WEBHOOK_SECRET}"
    assert str(sent[0].url).endswith("/api/v1/international/transaction/initialize")
    await client.aclose()


@pytest.mark.asyncio
async def test_gateway_failure_raises_initialization_error(payment_repository, production_config):
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(502, text="bad gateway")))
    service = PaymentService(payment_repository, production_config, http_client=client)

    with pytest.raises(PaymentInitializationError):
        await service.initiate_payment(init_request())
    # the PENDING record was written before the gateway call
    assert (await payment_repository.get("REF-1700000000000")).status == "PENDING"
    await client.aclose()



async def seed_pending(repository, config) -> PaymentService:
    demo = PaymentService(repository, replace(config, mode="demo"))
    await demo.initiate_payment(init_request())
    return PaymentService(repository, config)


@pytest.mark.asyncio
async def test_callback_with_bad_signature_leaves_record_alone(payment_repository, production_config):
    service = await seed_pending(payment_repository, production_config)
    body = callback_body(status="SUCCESS")

    with pytest.raises(AuthenticationError, match="Invalid webhook signature"):
        await service.handle_callback(body, sign_payload("wrong-secret", body))

    assert (await payment_repository.get("REF-1700000000000")).status == "PENDING"
    [entry] = await payment_repository.list_webhooks()
    assert entry.signature_valid is False
    assert entry.processed is False


@pytest.mark.asyncio
async def test_callback_with_valid_signature_updates_record(payment_repository, production_config):
    service = await seed_pending(payment_repository, production_config)
    body = callback_body(status="SUCCESS", transactionId="TXN-42")

    payload = await service.handle_callback(body, sign_payload(WEBHOOK_SECRET, body))

    assert payload.reference == "REF-1700000000000"
    record = await payment_repository.get("REF-1700000000000")
    assert record.status == "SUCCESS"
    assert record.transaction_id == "TXN-42"
    assert record.updated_at is not None
    [entry] = await payment_repository.list_webhooks()
    assert entry.signature_valid is True
    assert entry.processed is True


@pytest.mark.asyncio
async def test_demo_callback_skips_signature_check(payment_repository, demo_config):
    service = await seed_pending(payment_repository, demo_config)
    await service.handle_callback(callback_body(status="FAILED"), "not-a-real-signature")
    assert (await payment_repository.get("REF-1700000000000")).status == "FAILED"


@pytest.mark.asyncio
async def test_replayed_callback_is_last_write_wins(payment_repository, demo_config):
    service = await seed_pending(payment_repository, demo_config)
    await service.handle_callback(callback_body(status="SUCCESS"), None)
    await service.handle_callback(callback_body(status="FAILED"), None)

    assert (await payment_repository.get("REF-1700000000000")).status == "FAILED"
    webhooks = await payment_repository.list_webhooks()
    assert [w.payment_status for w in webhooks] == ["FAILED", "SUCCESS"]


@pytest.mark.asyncio
async def test_callback_for_unknown_reference_is_acknowledged(payment_repository, demo_config):
    service = PaymentService(payment_repository, demo_config)
    payload = await service.handle_callback(callback_body(reference="REF-unknown"), None)

    # acknowledged for now; the next test records the intended rejection
    assert payload.reference == "REF-unknown"
    assert await payment_repository.get("REF-unknown") is None
    [entry] = await payment_repository.list_webhooks()
    assert entry.error_message == "Payment record not found"


@pytest.mark.xfail(strict=True, reason="unknown references are acknowledged today; they should be rejected")
@pytest.mark.asyncio
async def test_callback_for_unknown_reference_should_be_rejected(payment_repository, demo_config):
    service = PaymentService(payment_repository, demo_config)
    with pytest.raises(NotFoundError):
        await service.handle_callback(callback_body(reference="REF-unknown"), None)


@pytest.mark.asyncio
async def test_unsigned_production_callback_is_accepted_unverified(payment_repository, production_config):
    service = await seed_pending(payment_repository, production_config)
    await service.handle_callback(callback_body(status="SUCCESS"), None)

    assert (await payment_repository.get("REF-1700000000000")).status == "SUCCESS"
    [entry] = await payment_repository.list_webhooks()
    assert entry.signature_valid is None
    assert entry.processed is True


@pytest.mark.asyncio
async def test_webhook_log_keeps_newest_entries(demo_config):
    repository = InMemoryPaymentRepository(max_webhooks=3)
    service = PaymentService(repository, demo_config)
    for n in range(5):
        await service.handle_callback(callback_body(reference=f"REF-{n}"), None)

    assert [w.reference for w in await repository.list_webhooks()] == ["REF-4", "REF-3", "REF-2"]


@pytest.mark.asyncio
async def test_malformed_callback_is_rejected(payment_repository, demo_config):
    service = PaymentService(payment_repository, demo_config)
    with pytest.raises(ValidationError):
        await service.handle_callback(b'{"status": "SUCCESS"}', None)
    with pytest.raises(ValidationError):
        await service.handle_callback(b"not json", None)


@pytest.mark.asyncio
async def test_status_of_unknown_reference(payment_repository, demo_config):
    with pytest.raises(NotFoundError):
        await PaymentService(payment_repository, demo_config).get_payment_status("REF-missing")


def test_initialize_over_http_in_demo_mode(client):
    response = client.post(
        "/api/payment/initialize",
        json={"reference": "REF-1", "amount": 5000, "userInfo": {"userEmail": "ada@example.com"}},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Payment initialization successful (Demo Mode)"
    assert "reference=REF-1" in body["data"]["cashierUrl"]
    assert "amount=5000" in body["data"]["cashierUrl"]

    status = client.get("/api/payment/status/REF-1").json()["data"]
    assert status["paymentStatus"] == "PENDING"
    assert status["amount"] == 5000


def test_zero_amount_over_http(client):
    response = client.post(
        "/api/payment/initialize",
        json={"reference": "REF-2", "amount": 0, "userInfo": {"userEmail": "ada@example.com"}},
    )
    assert response.status_code == 400
    assert client.get("/api/payment/status/REF-2").status_code == 404


def test_production_flow_over_http(production_client, gateway_calls):
    response = production_client.post(
        "/api/payment/initialize",
        json={"reference": "REF-3", "amount": 3188, "userInfo": {"userEmail": "ada@example.com"}},
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Payment initialization successful"
    assert response.json()["data"]["cashierUrl"] == "https://cashier.opaycheckout.com/abc"
    assert len(gateway_calls) == 1

    body = callback_body(reference="REF-3", status="SUCCESS")
    forged = production_client.post(
        "/api/payment/callback",
        content=body,
        headers={"Content-Type": "application/json", "opay-signature": "0" * 64},
    )
    assert forged.status_code == 401
    assert production_client.get("/api/payment/status/REF-3").json()["data"]["paymentStatus"] == "PENDING"

    signed = production_client.post(
        "/api/payment/callback",
        content=body,
        headers={"Content-Type": "application/json", "opay-signature": sign_payload(WEBHOOK_SECRET, body)},
    )
    assert signed.status_code == 200
    assert signed.json()["reference"] == "REF-3"
    assert production_client.get("/api/payment/status/REF-3").json()["data"]["paymentStatus"] == "SUCCESS"


def post_raw(client, path, body: str):
    return client.post(path, content=body, headers={"Content-Type": "application/json"})


@pytest.mark.parametrize("raw_amount", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_amount_over_http(client, raw_amount):
    body = '{"reference": "REF-NF", "amount": %s, "userInfo": {"userEmail": "ada@example.com"}}' % raw_amount
    response = post_raw(client, "/api/payment/initialize", body)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert client.get("/api/payment/status/REF-NF").status_code == 404


def test_non_finite_amount_in_production_leaves_listings_intact(production_client, gateway_calls):
    body = '{"reference": "REF-I", "amount": Infinity, "userInfo": {"userEmail": "ada@example.com"}}'
    assert post_raw(production_client, "/api/payment/initialize", body).status_code == 400
    assert gateway_calls == []
    assert production_client.get("/api/payment/status/REF-I").status_code == 404

    headers = login(production_client, "orders@tradehub.com")
    listing = production_client.get("/api/admin/payments/transactions", headers=headers)
    assert listing.status_code == 200
    assert listing.json()["total"] == 0


def test_overflowing_amount_is_rejected(client):
    response = client.post(
        "/api/payment/initialize",
        json={"reference": "REF-BIG", "amount": 1e308, "userInfo": {"userEmail": "ada@example.com"}},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Amount is out of range"
    assert client.get("/api/payment/status/REF-BIG").status_code == 404


def test_non_finite_callback_amount_is_rejected(client):
    response = post_raw(client, "/api/payment/callback", '{"reference": "REF-1", "status": "SUCCESS", "amount": NaN}')
    assert response.status_code == 400

    headers = login(client, "support@tradehub.com")
    webhooks = client.get("/api/admin/payments/webhooks", headers=headers)
    assert webhooks.status_code == 200
    assert webhooks.json()["data"][0]["errorMessage"] == "Malformed callback payload"
