from __future__ import annotations

from fastapi.testclient import TestClient

from rateio.api.app import create_app


def test_list_participants_returns_group_members(
    client: TestClient,
    group,
) -> None:
    response = client.get(f"/v1/groups/{group.group_id}/participants")

    assert response.status_code == 200
    body = response.json()
    assert body["group_id"] == "viagem"
    assert [item["id"] for item in body["participants"]] == [
        "ana",
        "bia",
        "caio",
        "duda",
    ]


def test_list_participants_returns_404_for_unknown_group(client: TestClient) -> None:
    response = client.get("/v1/groups/nope/participants")

    assert response.status_code == 404
    assert response.json()["code"] == "GROUP_NOT_FOUND"


def test_openapi_contains_group_routes() -> None:
    schema = create_app().openapi()
    paths = schema["paths"]

    assert "get" in paths["/v1/groups/{group_id}/participants"]
    assert {"get", "post"} <= set(paths["/v1/groups/{group_id}/expenses"])
    assert "get" in paths["/v1/groups/{group_id}/balances"]
    assert "get" in paths["/v1/groups/{group_id}/participants/{participant_id}/debts"]
    assert (
        "post"
        in paths["/v1/groups/{group_id}/expenses/{expense_id}/lease/buyback/toggle"]
    )
