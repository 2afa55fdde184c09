from __future__ import annotations

from fastapi.testclient import TestClient

from rateio.domain.expenses import SettlementMode


def test_get_person_debts_groups_by_creditor(
    client: TestClient, group, add_expense
) -> None:
    add_expense(
        expense_id="mercado",
        amount=900,
        paid_by="ana",
        paid_for=("ana", "bia", "caio"),
    )
    add_expense(
        expense_id="uber",
        amount=600,
        paid_by="bia",
        paid_for=("bia", "caio"),
        settlement_mode=SettlementMode.STRAIGHT,
    )

    response = client.get(f"/v1/groups/{group.group_id}/participants/caio/debts")

    assert response.status_code == 200
    body = response.json()
    assert body["participant_id"] == "caio"
    assert body["total_owed"] == 600
    assert [
        (creditor["creditor_id"], creditor["total_amount"])
        for creditor in body["creditors"]
    ] == [("ana", 300), ("bia", 300)]
    straight_item = body["creditors"][1]["items"][0]
    assert straight_item["type"] == "straight"
    assert straight_item["expense_id"] == "uber"


def test_get_person_debts_is_empty_for_creditor(
    client: TestClient, group, add_expense
) -> None:
    add_expense(
        expense_id="mercado",
        amount=900,
        paid_by="ana",
        paid_for=("ana", "bia", "caio"),
    )

    body = client.get(f"/v1/groups/{group.group_id}/participants/ana/debts").json()

    assert body["total_owed"] == 0
    assert body["creditors"] == []


def test_get_person_debts_returns_404_for_outsider(
    client: TestClient, group
) -> None:
    response = client.get(f"/v1/groups/{group.group_id}/participants/zeca/debts")

    assert response.status_code == 404
    assert response.json()["code"] == "PARTICIPANT_NOT_FOUND"
