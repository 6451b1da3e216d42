import uuid

from app.modules.orders.repository import OrdersRepository

DATE = "2024-05-01"


def create_couriers(client, *couriers):
    response = client.post("/api/v1/couriers/", json={"couriers": list(couriers)})
    assert response.status_code == 200, response.text
    return response.json()["couriers"]


def create_orders(client, *orders):
    response = client.post("/api/v1/orders/", json={"orders": list(orders)})
    assert response.status_code == 200, response.text
    return response.json()["orders"]


def courier_payload(courier_type="AUTO", regions=(1,), working_hours=("10:00-23:00",)):
    return {"courier_type": courier_type, "regions": list(regions), "working_hours": list(working_hours)}


def order_payload(weight, region=1, delivery_hours=("11:00-12:00",), cost=100):
    return {"weight": weight, "region": region, "delivery_hours": list(delivery_hours), "cost": cost}


def membership(couriers):
    return {
        c["courier_id"]: sorted(o["order_id"] for g in c["orders"] for o in g["orders"])
        for c in couriers
    }


# ==================== HEALTH ====================

def test_health_endpoints(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/api/v1/couriers/health").json()["service"] == "couriers"
    assert client.get("/api/v1/orders/health").json()["service"] == "orders"


# ==================== COURIERS ====================

def test_create_and_get_courier(client):
    [courier] = create_couriers(client, courier_payload("BIKE", [1, 2], ["09:00-11:00"]))

    response = client.get(f"/api/v1/couriers/{courier['courier_id']}")

    assert response.status_code == 200
    assert response.json() == {
        "courier_id": courier["courier_id"],
        "courier_type": "BIKE",
        "regions": [1, 2],
        "working_hours": ["09:00-11:00"],
    }


def test_list_couriers_paginates(client):
    create_couriers(client, courier_payload(), courier_payload("FOOT"), courier_payload("BIKE"))

    default = client.get("/api/v1/couriers/").json()
    page = client.get("/api/v1/couriers/", params={"limit": 2, "offset": 2}).json()

    assert default["count"] == 1
    assert page["count"] == 1
    assert page["limit"] == 2 and page["offset"] == 2
    assert client.get("/api/v1/couriers/", params={"limit": -1}).status_code == 422


def test_invalid_courier_payloads_are_rejected(client):
    invalid = [
        courier_payload("BOAT"),
        courier_payload(regions=[]),
        courier_payload(regions=[-1]),
        courier_payload(working_hours=["10:00-09:00"]),
        courier_payload(working_hours=["10-12"]),
    ]

    for payload in invalid:
        response = client.post("/api/v1/couriers/", json={"couriers": [payload]})
        assert response.status_code == 422, payload


def test_unknown_courier_returns_404(client):
    assert client.get(f"/api/v1/couriers/{uuid.uuid4()}").status_code == 404
    assert client.get("/api/v1/couriers/not-a-uuid").status_code == 422


# ==================== ORDERS ====================

def test_create_and_get_order(client):
    [order] = create_orders(client, order_payload(4.5, cost=350))

    response = client.get(f"/api/v1/orders/{order['order_id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["weight"] == 4.5
    assert body["courier_id"] is None
    assert body["completed_time"] is None


def test_invalid_order_payloads_are_rejected(client):
    invalid = [
        order_payload(0),
        order_payload(-3),
        order_payload(2, region=-1),
        order_payload(2, cost=-5),
        order_payload(2, delivery_hours=["12:00-11:00"]),
    ]

    for payload in invalid:
        response = client.post("/api/v1/orders/", json={"orders": [payload]})
        assert response.status_code == 422, payload

    assert client.get(f"/api/v1/orders/{uuid.uuid4()}").status_code == 404


# ==================== ASSIGNMENT ====================

def test_assign_and_reconstruct(client):
    [courier] = create_couriers(client, courier_payload())
    light, heavy, too_heavy = create_orders(client, order_payload(25), order_payload(30), order_payload(45))

    response = client.post("/api/v1/orders/assign", params={"date": DATE})

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["date"] == DATE
    assert body["unassigned_orders"] == []
    assert len(body["couriers"]) == 1
    [group] = body["couriers"][0]["orders"]
    assert [o["order_id"] for o in group["orders"]] == [heavy["order_id"], light["order_id"]]
    assert all(o["courier_id"] == courier["courier_id"] for o in group["orders"])

    stored = client.get(f"/api/v1/orders/{light['order_id']}").json()
    assert stored["courier_id"] == courier["courier_id"]
    # El pedido de 45 kg nunca entra a la corrida
    assert client.get(f"/api/v1/orders/{too_heavy['order_id']}").json()["courier_id"] is None

    # Segunda corrida: no quedan órdenes pendientes
    again = client.post("/api/v1/orders/assign", params={"date": DATE}).json()
    assert again["couriers"] == []

    report = client.get("/api/v1/couriers/assignments", params={"date": DATE}).json()
    assert membership(report["couriers"]) == membership(body["couriers"])

    other_day = client.get("/api/v1/couriers/assignments", params={"date": "2024-05-02"}).json()
    assert other_day["couriers"] == []


def test_assign_reports_unplaceable_orders(client):
    create_couriers(client, courier_payload("FOOT", [1], ["10:00-10:30"]))
    first, second = create_orders(
        client,
        order_payload(2, delivery_hours=["10:00-10:40"]),
        order_payload(1, delivery_hours=["10:00-10:40"]),
    )

    body = client.post("/api/v1/orders/assign", params={"date": DATE}).json()

    assert body["unassigned_orders"] == [second["order_id"]]
    assert client.get(f"/api/v1/orders/{second['order_id']}").json()["courier_id"] is None


def test_assignments_filtered_by_courier(client):
    auto, foot = create_couriers(
        client,
        courier_payload("AUTO", [1]),
        courier_payload("FOOT", [2], ["10:00-12:00"]),
    )
    create_orders(client, order_payload(5, region=1), order_payload(2, region=2))
    client.post("/api/v1/orders/assign", params={"date": DATE})

    report = client.get(
        "/api/v1/couriers/assignments",
        params={"date": DATE, "courier_id": foot["courier_id"]}
    ).json()

    assert [c["courier_id"] for c in report["couriers"]] == [foot["courier_id"]]
    unknown = client.get(
        "/api/v1/couriers/assignments",
        params={"date": DATE, "courier_id": str(uuid.uuid4())}
    )
    assert unknown.status_code == 404


def test_assign_aborts_on_persistence_failure(client, monkeypatch):
    create_couriers(client, courier_payload())
    orders = create_orders(client, order_payload(5), order_payload(4), order_payload(3))
    original = OrdersRepository.commit_assignment
    calls = []

    def failing_commit(self, order_id, distribution_date, courier_id):
        calls.append(order_id)
        if len(calls) == 2:
            raise RuntimeError("connection lost")
        return original(self, order_id, distribution_date, courier_id)

    monkeypatch.setattr(OrdersRepository, "commit_assignment", failing_commit)

    response = client.post("/api/v1/orders/assign", params={"date": DATE})

    assert response.status_code == 500
    assigned = [
        client.get(f"/api/v1/orders/{o['order_id']}").json()["courier_id"] is not None
        for o in orders
    ]
    # Solo la primera orden (la más pesada) quedó confirmada
    assert assigned == [True, False, False]


def test_set_courier_manually(client):
    [courier] = create_couriers(client, courier_payload())
    [order] = create_orders(client, order_payload(5))

    response = client.put(
        "/api/v1/orders/set_courier",
        params={"order_id": order["order_id"], "courier_id": courier["courier_id"]}
    )

    assert response.status_code == 200
    assert response.json()["courier_id"] == courier["courier_id"]

    missing = client.put(
        "/api/v1/orders/set_courier",
        params={"order_id": order["order_id"], "courier_id": str(uuid.uuid4())}
    )
    assert missing.status_code == 404


# ==================== COMPLETION & META-INFO ====================

def _assigned_pair(client):
    [courier] = create_couriers(client, courier_payload())
    orders = create_orders(client, order_payload(5, cost=100), order_payload(4, cost=200))
    client.post("/api/v1/orders/assign", params={"date": DATE})
    return courier, orders


def test_complete_orders_and_meta_info(client):
    courier, orders = _assigned_pair(client)
    complete_info = [
        {"courier_id": courier["courier_id"], "order_id": o["order_id"], "complete_time": f"{DATE}T12:00:00"}
        for o in orders
    ]

    response = client.post("/api/v1/orders/complete", json={"complete_info": complete_info})

    assert response.status_code == 200, response.text
    assert all(o["completed_time"] for o in response.json()["orders"])

    meta = client.get(
        f"/api/v1/couriers/meta-info/{courier['courier_id']}",
        params={"start_date": DATE, "end_date": "2024-05-02"}
    )
    assert meta.status_code == 200
    body = meta.json()
    assert body["earnings"] == 4 * 300
    assert body["rating"] == 2 // 24 * 1
    assert body["courier"]["courier_id"] == courier["courier_id"]


def test_complete_keeps_first_completion_time(client):
    courier, [order, _] = _assigned_pair(client)

    def complete(time):
        return client.post("/api/v1/orders/complete", json={"complete_info": [
            {"courier_id": courier["courier_id"], "order_id": order["order_id"], "complete_time": time}
        ]})

    complete(f"{DATE}T12:00:00")
    response = complete(f"{DATE}T15:00:00")

    assert response.status_code == 200
    assert response.json()["orders"][0]["completed_time"].startswith(f"{DATE}T12:00:00")


def test_complete_rejects_mismatches(client):
    courier, [order, _] = _assigned_pair(client)
    [stranger] = create_couriers(client, courier_payload("FOOT"))

    cases = [
        {"courier_id": stranger["courier_id"], "order_id": order["order_id"], "complete_time": f"{DATE}T12:00:00"},
        {"courier_id": courier["courier_id"], "order_id": order["order_id"], "complete_time": "2024-05-03T12:00:00"},
        {"courier_id": courier["courier_id"], "order_id": str(uuid.uuid4()), "complete_time": f"{DATE}T12:00:00"},
        {"courier_id": str(uuid.uuid4()), "order_id": order["order_id"], "complete_time": f"{DATE}T12:00:00"},
    ]

    for info in cases:
        response = client.post("/api/v1/orders/complete", json={"complete_info": [info]})
        assert response.status_code == 400, info

    assert client.get(f"/api/v1/orders/{order['order_id']}").json()["completed_time"] is None


def test_meta_info_validates_range_and_courier(client):
    [courier] = create_couriers(client, courier_payload())
    url = f"/api/v1/couriers/meta-info/{courier['courier_id']}"

    assert client.get(url, params={"start_date": DATE, "end_date": DATE}).status_code == 400
    assert client.get(url, params={"start_date": "2024-05-02", "end_date": DATE}).status_code == 400
    missing = client.get(
        f"/api/v1/couriers/meta-info/{uuid.uuid4()}",
        params={"start_date": DATE, "end_date": "2024-05-02"}
    )
    assert missing.status_code == 404


def test_forty_kg_orders_never_enter_the_run(client):
    [courier] = create_couriers(client, courier_payload())
    at_limit, below_limit = create_orders(client, order_payload(40), order_payload(39.9))

    body = client.post("/api/v1/orders/assign", params={"date": DATE}).json()

    assert membership(body["couriers"]) == {courier["courier_id"]: [below_limit["order_id"]]}
    assert body["unassigned_orders"] == []
    assert client.get(f"/api/v1/orders/{at_limit['order_id']}").json()["courier_id"] is None


def test_complete_uses_day_in_sent_offset(client):
    courier, [late, early] = _assigned_pair(client)

    def complete(order, time):
        return client.post("/api/v1/orders/complete", json={"complete_info": [
            {"courier_id": courier["courier_id"], "order_id": order["order_id"], "complete_time": time}
        ]})

    # 22:00 del 1 de mayo en -05:00 ya es 2 de mayo en UTC
    accepted = complete(late, f"{DATE}T22:00:00-05:00")
    # 01:00 del 2 de mayo en +05:00 todavía es 1 de mayo en UTC
    rejected = complete(early, "2024-05-02T01:00:00+05:00")

    assert accepted.status_code == 200, accepted.text
    assert accepted.json()["orders"][0]["completed_time"].startswith("2024-05-02T03:00:00")
    assert rejected.status_code == 400
