"""MCP server exposing rateio API capabilities as agent tools."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, Protocol

import httpx
from fastmcp import FastMCP

from rateio.core.settings import get_settings

SettlementModeFilter = Literal["NORMAL", "STRAIGHT", "LEASE"]
SplitModeName = Literal["EVENLY", "BY_SHARES", "BY_PERCENTAGE", "BY_AMOUNT"]
ParamValue = str | int | float | bool | None
ParamsMapping = Mapping[str, ParamValue]


class APIRequester(Protocol):
    """Requester abstraction to simplify HTTP boundary testing."""

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: ParamsMapping | None = None,
        json_body: Mapping[str, object] | None = None,
    ) -> object: ...


@dataclass(slots=True, frozen=True)
class HTTPAPIRequester:
    """HTTP client wrapper for the rateio REST API."""

    base_url: str
    timeout_seconds: float

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: ParamsMapping | None = None,
        json_body: Mapping[str, object] | None = None,
    ) -> object:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
        ) as client:
            response = await client.request(
                method=method,
                url=path,
                params=params,
                json=dict(json_body) if json_body else None,
            )

        if not response.is_success:
            raise RuntimeError(describe_api_error(response))
        try:
            return response.json()
        except ValueError as exc:
            raise RuntimeError(
                f"API returned a non-JSON response with status {response.status_code}."
            ) from exc


def describe_api_error(response: httpx.Response) -> str:
    """Render an API error body as one line an agent can act on."""

    try:
        payload = response.json()
    except ValueError:
        text = response.text.strip()
        suffix = f": {text}" if text else "."
        return f"API request failed with status {response.status_code}{suffix}"

    if isinstance(payload, Mapping):
        code = payload.get("code")
        message = payload.get("message")
        if isinstance(code, str) and isinstance(message, str):
            details = payload.get("details")
            if details is None:
                return f"API error {code}: {message}"
            return f"API error {code}: {message} | details={details}"

    return f"API request failed with status {response.status_code}: {payload}"


def _lease_path(group_id: str, expense_id: str) -> str:
    return f"/v1/groups/{group_id}/expenses/{expense_id}/lease"


def create_mcp_server(
    *,
    api_base_url: str | None = None,
    timeout_seconds: float | None = None,
    requester: APIRequester | None = None,
) -> FastMCP:
    """Create MCP server with tools mapped to the group expense endpoints."""

    settings = get_settings()
    resolved_base_url = (api_base_url or settings.mcp_api_base_url).rstrip("/")
    resolved_timeout = (
        settings.mcp_api_timeout_seconds if timeout_seconds is None else timeout_seconds
    )
    if resolved_timeout <= 0:
        raise ValueError("MCP API timeout must be greater than zero.")

    mcp = FastMCP(name="Rateio")
    api_requester: APIRequester = requester or HTTPAPIRequester(
        base_url=resolved_base_url,
        timeout_seconds=resolved_timeout,
    )

    @mcp.tool
    async def list_participants(group_id: str) -> object:
        """List the participants of a group."""

        return await api_requester.request(
            "GET", f"/v1/groups/{group_id}/participants"
        )

    @mcp.tool
    async def list_expenses(
        group_id: str,
        settlement_mode: SettlementModeFilter | None = None,
    ) -> object:
        """List group expenses, optionally for one settlement mode."""

        params: dict[str, ParamValue] | None = None
        if settlement_mode is not None:
            params = {"settlement_mode": settlement_mode}
        return await api_requester.request(
            "GET", f"/v1/groups/{group_id}/expenses", params=params
        )

    @mcp.tool
    async def create_expense(
        group_id: str,
        title: str,
        amount: int,
        paid_by: str,
        paid_for: list[dict[str, Any]],
        split_mode: SplitModeName = "EVENLY",
        settlement_mode: SettlementModeFilter = "NORMAL",
        expense_date: str | None = None,
        lease_owner_id: str | None = None,
        lease_item_name: str | None = None,
        lease_buyback_date: str | None = None,
    ) -> object:
        """Register an expense; amount is in minor units (cents)."""

        payload: dict[str, object] = {
            "title": title,
            "amount": amount,
            "paid_by": paid_by,
            "paid_for": paid_for,
            "split_mode": split_mode,
            "settlement_mode": settlement_mode,
        }
        optional_fields = {
            "expense_date": expense_date,
            "lease_owner_id": lease_owner_id,
            "lease_item_name": lease_item_name,
            "lease_buyback_date": lease_buyback_date,
        }
        payload.update(
            {key: value for key, value in optional_fields.items() if value is not None}
        )
        return await api_requester.request(
            "POST", f"/v1/groups/{group_id}/expenses", json_body=payload
        )

    @mcp.tool
    async def get_group_balances(
        group_id: str,
        participant_id: str | None = None,
    ) -> object:
        """Return balances, suggested reimbursements, straight and lease items."""

        params: dict[str, ParamValue] | None = None
        if participant_id is not None:
            params = {"participant_id": participant_id}
        return await api_requester.request(
            "GET", f"/v1/groups/{group_id}/balances", params=params
        )

    @mcp.tool
    async def get_person_debts(group_id: str, participant_id: str) -> object:
        """Return what one participant owes, grouped by creditor."""

        return await api_requester.request(
            "GET", f"/v1/groups/{group_id}/participants/{participant_id}/debts"
        )

    @mcp.tool
    async def toggle_lease_buyback(group_id: str, expense_id: str) -> object:
        """Mark a lease buy-back as settled, or reopen it."""

        return await api_requester.request(
            "POST", f"{_lease_path(group_id, expense_id)}/buyback/toggle"
        )

    @mcp.tool
    async def toggle_lease_buyback_active(group_id: str, expense_id: str) -> object:
        """Offer a lease buy-back to the co-users, or retract it."""

        return await api_requester.request(
            "POST", f"{_lease_path(group_id, expense_id)}/buyback-active/toggle"
        )

    @mcp.tool
    async def toggle_lease_buy_in(
        group_id: str,
        expense_id: str,
        participant_id: str,
    ) -> object:
        """Flip whether a co-user already paid their lease buy-in."""

        return await api_requester.request(
            "POST",
            f"{_lease_path(group_id, expense_id)}/buy-ins/{participant_id}/toggle",
        )

    return mcp
