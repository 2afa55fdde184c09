from __future__ import annotations

from fastapi.testclient import TestClient

from rateio.domain.expenses import SettlementMode


def test_get_group_balances_returns_reimbursements(
    client: TestClient, group, add_expense
) -> None:
    add_expense(
        expense_id="mercado",
        amount=1200,
        paid_by="ana",
        paid_for=("ana", "bia", "caio"),
    )

    response = client.get(f"/v1/groups/{group.group_id}/balances")

    assert response.status_code == 200
    body = response.json()
    assert body["group_id"] == "viagem"
    assert body["balances"] == {
        "ana": {"paid": 800, "paid_for": 0, "total": 800},
        "caio": {"paid": 0, "paid_for": 400, "total": -400},
        "bia": {"paid": 0, "paid_for": 400, "total": -400},
    }
    assert "public_balances" not in body
    assert body["reimbursements"] == [
        {"from": "caio", "to": "ana", "amount": 400},
        {"from": "bia", "to": "ana", "amount": 400},
    ]
    assert body["totals"]["total_owed"] == 800
    assert body["stats"]["total_group_spending"] == 1200
    assert body["viewer"] is None


def test_get_group_balances_splits_modes(
    client: TestClient, group, add_expense
) -> None:
    add_expense(
        expense_id="uber",
        amount=900,
        paid_by="bia",
        paid_for=("bia", "caio", "duda"),
        settlement_mode=SettlementMode.STRAIGHT,
    )
    add_expense(
        expense_id="barraca",
        amount=3000,
        paid_by="ana",
        paid_for=("ana", "bia", "caio"),
        settlement_mode=SettlementMode.LEASE,
        lease_owner_id="ana",
    )

    body = client.get(f"/v1/groups/{group.group_id}/balances").json()

    assert body["reimbursements"] == []
    assert body["straight"] == [
        {
            "expense_id": "uber",
            "expense_title": "uber",
            "from": "caio",
            "to": "bia",
            "amount": 300,
        },
        {
            "expense_id": "uber",
            "expense_title": "uber",
            "from": "duda",
            "to": "bia",
            "amount": 300,
        },
    ]
    (lease_item,) = body["lease"]
    assert lease_item["item_name"] == "barraca item"
    assert lease_item["owner_id"] == "ana"
    assert lease_item["buy_in_breakdown"] == [
        {"participant_id": "bia", "amount": 1000, "paid": False},
        {"participant_id": "caio", "amount": 1000, "paid": False},
    ]
    assert body["totals"]["total_owed"] == 2600


def test_get_group_balances_with_viewer(
    client: TestClient, group, add_expense
) -> None:
    add_expense(
        expense_id="mercado",
        amount=1200,
        paid_by="ana",
        paid_for=("ana", "bia", "caio"),
    )

    response = client.get(
        f"/v1/groups/{group.group_id}/balances",
        params={"participant_id": "ana"},
    )

    body = response.json()
    assert response.status_code == 200
    assert body["viewer"] == {
        "total_owed": 0,
        "total_owed_to_you": 800,
        "net": -800,
    }
    assert body["stats"]["participant_paid_for"] == 1200
    assert body["stats"]["participant_share"] == 400


def test_get_group_balances_returns_404_for_unknown_viewer(
    client: TestClient, group
) -> None:
    response = client.get(
        f"/v1/groups/{group.group_id}/balances",
        params={"participant_id": "zeca"},
    )

    assert response.status_code == 404
    assert response.json()["code"] == "PARTICIPANT_NOT_FOUND"


def test_get_group_balances_returns_404_for_unknown_group(
    client: TestClient,
) -> None:
    response = client.get("/v1/groups/nope/balances")

    assert response.status_code == 404
    assert response.json()["code"] == "GROUP_NOT_FOUND"


def test_get_group_balances_hides_raw_paid_totals(
    client: TestClient, group, add_expense
) -> None:
    add_expense(
        expense_id="hotel",
        amount=3000,
        paid_by="ana",
        paid_for=("ana", "bia", "caio"),
    )

    body = client.get(f"/v1/groups/{group.group_id}/balances").json()

    assert body["balances"]["ana"]["paid"] == 2000
    assert all(entry["paid"] != 3000 for entry in body["balances"].values())
    assert body["balances"]["bia"] == {"paid": 0, "paid_for": 1000, "total": -1000}
    assert body["stats"]["total_group_spending"] == 3000
