"""HTTP surface of parcel orders."""

from conftest import auth_headers, order_payload

BASE = "/api/v1/express"


def _create(client, customer, **overrides):
    response = client.post(BASE, json=order_payload(**overrides), headers=auth_headers(customer))
    assert response.status_code == 201
    return response.json()


def test_create_and_read_order(client, make_user):
    customer = make_user("customer")

    created = _create(client, customer)
    fetched = client.get(f"{BASE}/{created['id']}", headers=auth_headers(customer))

    assert created["status"] == "pending"
    assert created["timeline"] == []
    assert created["payment"] == {"amount": 5.0, "method": "wechat", "status": "pending"}
    assert fetched.status_code == 200
    assert fetched.json()["order_number"] == created["order_number"]


def test_order_duration_is_bounded(client, make_user):
    customer = make_user("customer")

    response = client.post(BASE, json=order_payload(duration_hours=24 * 30), headers=auth_headers(customer))

    assert response.status_code == 422
    assert response.json()["code"] == "invalid_input"


def test_outsiders_cannot_view_an_order(client, make_user):
    customer, outsider = make_user("customer"), make_user("outsider")
    created = _create(client, customer)

    response = client.get(f"{BASE}/{created['id']}", headers=auth_headers(outsider))

    assert response.status_code == 403


def test_lifecycle_over_http(client, make_user, dispatcher):
    customer, helper = make_user("customer"), make_user("helper")
    order_id = _create(client, customer)["id"]

    accepted = client.post(f"{BASE}/{order_id}/accept", headers=auth_headers(helper))
    skipped = client.post(
        f"{BASE}/{order_id}/transition", json={"status": "delivered"}, headers=auth_headers(helper),
    )
    picked = client.post(
        f"{BASE}/{order_id}/transition", json={"status": "picked", "note": "On my way"}, headers=auth_headers(helper),
    )

    assert accepted.status_code == 200
    assert accepted.json()["helper_id"] == helper.id
    assert skipped.status_code == 409
    assert skipped.json()["code"] == "invalid_transition"
    assert picked.status_code == 200
    assert [entry["action"] for entry in picked.json()["timeline"]] == ["Order accepted", "Parcel picked up"]
    assert dispatcher.types_for(customer.id) == ["order_accepted", "order_status_update"]


def test_self_accept_is_forbidden(client, make_user):
    customer = make_user("customer")
    order_id = _create(client, customer)["id"]

    response = client.post(f"{BASE}/{order_id}/accept", json={"note": "mine"}, headers=auth_headers(customer))

    assert response.status_code == 403
    assert response.json()["code"] == "forbidden"


def test_unknown_status_is_422(client, make_user):
    customer = make_user("customer")
    order_id = _create(client, customer)["id"]

    response = client.post(f"{BASE}/{order_id}/transition", json={"status": "shipped"}, headers=auth_headers(customer))

    assert response.status_code == 422


def test_rate_flow(client, make_user):
    customer, helper = make_user("customer"), make_user("helper")
    order_id = _create(client, customer)["id"]
    client.post(f"{BASE}/{order_id}/accept", headers=auth_headers(helper))
    for status in ("picked", "delivered"):
        client.post(f"{BASE}/{order_id}/transition", json={"status": status}, headers=auth_headers(helper))
    client.post(f"{BASE}/{order_id}/transition", json={"status": "completed"}, headers=auth_headers(customer))

    first = client.post(f"{BASE}/{order_id}/rate", json={"score": 5, "comment": "Great"}, headers=auth_headers(customer))
    second = client.post(f"{BASE}/{order_id}/rate", json={"score": 2}, headers=auth_headers(customer))
    out_of_range = client.post(f"{BASE}/{order_id}/rate", json={"score": 9}, headers=auth_headers(customer))

    assert first.status_code == 200
    assert first.json()["rating"]["score"] == 5
    assert second.status_code == 409
    assert second.json()["code"] == "already_rated"
    assert out_of_range.status_code == 422


def test_missing_order_is_404(client, make_user):
    helper = make_user("helper")

    response = client.post(f"{BASE}/missing/accept", headers=auth_headers(helper))

    assert response.status_code == 404
