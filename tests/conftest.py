import httpx
import pytest
from fastapi.testclient import TestClient

from tradehub.config.payment import get_payment_config
from tradehub.config.settings import Settings
from tradehub.main import create_app
from tradehub.repositories import InMemoryOrderRepository, InMemoryPaymentRepository
from tradehub.services.auth import DEMO_PASSWORD

WEBHOOK_SECRET = "test-opay-secret"


def make_settings(**overrides) -> Settings:
    values = {
        "PAYMENT_MODE": "demo",
        "OPAY_SECRET_KEY": WEBHOOK_SECRET,
        "JWT_SECRET": "test-jwt-signing-secret-of-32-bytes",
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


def checkout_payload(**overrides) -> dict:
    payload = {
        "items": [{"id": 1, "name": "Wireless Earbuds", "price": 2500, "quantity": 1, "category": "Electronics"}],
        "subtotal": 2500,
        "shipping": 500,
        "tax": 188,
        "total": 3188,
        "shippingAddress": {
            "firstName": "Ada",
            "lastName": "Obi",
            "email": "ada@example.com",
            "phone": "+2348000000000",
            "address": "12 Marina Road",
            "city": "Lagos",
            "state": "Lagos",
            "zipCode": "100001",
        },
        "shippingMethod": "standard",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def gateway_calls():
    return []


@pytest.fixture
def production_client(gateway_calls):
    """App in production mode whose OPay calls are answered by a mock transport."""

    def handler(request: httpx.Request) -> httpx.Response:
        gateway_calls.append(request)
        return httpx.Response(
            200,
            json={"code": "00000", "data": {"cashierUrl": "https://cashier.opaycheckout.com/abc"}},
        )

    app = create_app(make_settings(PAYMENT_MODE="production"))
    app.state.http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def order_repository():
    return InMemoryOrderRepository()


@pytest.fixture
def payment_repository():
    return InMemoryPaymentRepository()


@pytest.fixture
def demo_config():
    return get_payment_config(make_settings())


@pytest.fixture
def production_config():
    return get_payment_config(make_settings(PAYMENT_MODE="production"))


def login(client: TestClient, email: str) -> dict:
    response = client.post("/api/admin/login", json={"email": email, "password": DEMO_PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['data']['token']}"}
