import httpx

from app.schemas.order import OrderItemResponse, OrderResponse
from app.schemas.user import UserResponse
from app.services.factory_client import FactoryClient


DINER = UserResponse(id=2, name="pizza diner", email="diner@test.com", roles=[])
ORDER = OrderResponse(
    id=11,
    franchise_id=1,
    store_id=1,
    items=[OrderItemResponse(id=5, menu_id=1, description="Veggie", price=0.05)],
)


def _respond(monkeypatch, status_code, body, calls):
    def fake_post(url, json, headers, timeout):
        calls.append({"url": url, "json": json, "headers": headers})
        return httpx.Response(status_code, json=body)

    monkeypatch.setattr(httpx, "post", fake_post)


def test_submit_order_relays_report_and_token(monkeypatch):
    calls = []
    _respond(monkeypatch, 200, {"reportUrl": "http://report", "jwt": "factory.jwt.sig"}, calls)
    client = FactoryClient(base_url="http://factory/", api_key="key")

    result = client.submit_order(DINER, ORDER)

    assert result.ok
    assert result.report_url == "http://report"
    assert result.jwt == "factory.jwt.sig"
    assert calls[0]["url"] == "http://factory/api/order"
    assert calls[0]["headers"]["Authorization"] == "Bearer key"
    assert calls[0]["json"]["diner"] == {"id": 2, "name": "pizza diner", "email": "diner@test.com"}
    assert calls[0]["json"]["order"]["storeId"] == 1
    assert calls[0]["json"]["order"]["items"][0]["menuId"] == 1


def test_submit_order_failure_keeps_report_link(monkeypatch):
    _respond(monkeypatch, 500, {"reportUrl": "http://report"}, [])

    result = FactoryClient(base_url="http://factory", api_key="key").submit_order(DINER, ORDER)

    assert not result.ok
    assert result.report_url == "http://report"
    assert result.jwt is None


def test_submit_order_transport_error_is_failure(monkeypatch):
    def fake_post(*args, **kwargs):
        raise httpx.ConnectError("factory down")

    monkeypatch.setattr(httpx, "post", fake_post)

    result = FactoryClient(base_url="http://factory", api_key="key").submit_order(DINER, ORDER)

    assert not result.ok
    assert result.report_url is None
