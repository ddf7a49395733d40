import pytest

from bonding_engine.webapi.webapi import create_app


STATE_AFTER_B = {
    "creator": "creator",
    "creator_id": 7,
    "slope": 10,
    "initial_price": 1000,
    "reserve_ratio": 9000,
    "current_supply": 50,
    "total_reserve": 70975,
}


@pytest.fixture
def client():
    app = create_app()
    app.config["TESTING"] = True
    return app.test_client()


def test_buy_from_empty_state(client):
    state = dict(STATE_AFTER_B, current_supply=0, total_reserve=0)
    resp = client.post("/curve/transaction", json={"state": state, "action": "buy", "amount": 100, "user_id": "bob"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["amount"] == 149500
    assert data["state"]["current_supply"] == 100
    assert data["state"]["total_reserve"] == 149500
    assert data["event"] == {
        "buyer": "bob",
        "amount": 100,
        "cost": 149500,
        "new_supply": 100,
        "event_type": "TOKEN_PURCHASED",
    }


def test_sell(client):
    state = dict(STATE_AFTER_B, current_supply=100, total_reserve=149500)
    resp = client.post("/curve/transaction", json={"state": state, "action": "sell", "amount": 50})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["amount"] == 78525
    assert data["state"]["total_reserve"] == 70975
    assert data["event"]["event_type"] == "TOKEN_SOLD"


def test_sell_more_than_supply(client):
    resp = client.post("/curve/transaction", json={"state": STATE_AFTER_B, "action": "sell", "amount": 51})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "INSUFFICIENT_SUPPLY"


def test_zero_amount(client):
    resp = client.post("/curve/transaction", json={"state": STATE_AFTER_B, "action": "buy", "amount": 0})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "INVALID_AMOUNT"


def test_request_validation(client):
    state = dict(STATE_AFTER_B, reserve_ratio=20_000)
    resp = client.post("/curve/transaction", json={"state": state, "action": "buy", "amount": 1})
    assert resp.status_code == 422


def test_fees(client):
    resp = client.post("/curve/fees", json={"state": STATE_AFTER_B})
    assert resp.status_code == 200
    assert resp.get_json() == {"spot_price": 1500, "minimum_reserve": 62250, "available_fees": 8725}


def test_withdraw(client):
    resp = client.post("/curve/withdraw", json={"state": STATE_AFTER_B, "caller": "creator", "amount": 8725})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["amount"] == 8725
    assert data["state"]["total_reserve"] == 62250


def test_withdraw_too_much(client):
    resp = client.post("/curve/withdraw", json={"state": STATE_AFTER_B, "caller": "creator", "amount": 8726})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "INSUFFICIENT_FEES"


def test_withdraw_unauthorized(client):
    resp = client.post("/curve/withdraw", json={"state": STATE_AFTER_B, "caller": "mallory", "amount": 1})
    assert resp.status_code == 403
    assert resp.get_json()["error"] == "UNAUTHORIZED"


def test_validate(client):
    resp = client.post("/curve/validate", json={"state": STATE_AFTER_B})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["errors"] == []
    assert data["info"]["available_fees"] == "8725"
