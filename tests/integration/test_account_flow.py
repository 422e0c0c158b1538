"""Integration tests for tasks, accounts and expenses (requires running PG + Redis).

Uses the session-scoped client fixture from tests/integration/conftest.py.
All tests share one event loop — avoids asyncpg pool cross-loop error.
"""

import pytest
from httpx import AsyncClient

from tests.integration.helpers import register

pytestmark = pytest.mark.asyncio(loop_scope="session")


async def _account(client: AsyncClient, headers: dict[str, str], **body: object) -> dict:
    resp = await client.post("/api/v1/accounts", json={"name": "Main", **body}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def _expense(
    client: AsyncClient, headers: dict[str, str], account_id: str, amount: str
) -> dict:
    resp = await client.post(
        "/api/v1/expenses",
        data={"description": "Groceries", "amount": amount, "account_id": account_id},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


class TestTasks:
    async def test_toggle_and_isolation(self, client: AsyncClient) -> None:
        alice, bob = await register(client), await register(client)
        task = (
            await client.post("/api/v1/tasks", json={"title": "Mine"}, headers=alice)
        ).json()["data"]

        resp = await client.patch(f"/api/v1/tasks/{task['id']}/toggle", headers=alice)
        assert resp.json()["data"]["completed"] is True

        resp = await client.get(f"/api/v1/tasks/{task['id']}", headers=bob)
        assert resp.status_code == 404


class TestBalances:
    async def test_derived_balance(self, client: AsyncClient) -> None:
        headers = await register(client)
        account = await _account(client, headers, initial_balance=1000000, currency="COP")
        await _expense(client, headers, account["id"], "200000")
        await _expense(client, headers, account["id"], "100000")

        detail = (await client.get(f"/api/v1/accounts/{account['id']}", headers=headers)).json()
        assert detail["data"]["current_balance"] == 700000
        assert detail["data"]["total_expenses"] == 300000

        stats = (await client.get("/api/v1/accounts/stats", headers=headers)).json()["data"]
        assert stats["total_balance"] == 700000
        assert stats["total_accounts"] == 1
        assert stats["total_expenses_this_month"] == 300000

    async def test_delete_account_removes_expenses(self, client: AsyncClient) -> None:
        headers = await register(client)
        account = await _account(client, headers)
        expense = await _expense(client, headers, account["id"], "10")

        resp = await client.delete(f"/api/v1/accounts/{account['id']}", headers=headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["deleted_expenses"] == 1

        resp = await client.get(f"/api/v1/expenses/{expense['id']}", headers=headers)
        assert resp.status_code == 404


class TestReceipts:
    async def test_upload_and_download(self, client: AsyncClient) -> None:
        headers = await register(client)
        account = await _account(client, headers)
        resp = await client.post(
            "/api/v1/expenses",
            data={"description": "Lunch", "amount": "12.50", "account_id": account["id"]},
            files={"receipt": ("lunch.png", b"\x89PNG-bytes", "image/png")},
            headers=headers,
        )
        expense = resp.json()["data"]
        assert expense["has_receipt"] is True

        image = await client.get(f"/api/v1/expenses/{expense['id']}/image", headers=headers)
        assert image.status_code == 200
        assert image.content == b"\x89PNG-bytes"


class TestOwnership:
    async def test_other_users_account_is_404(self, client: AsyncClient) -> None:
        alice, bob = await register(client), await register(client)
        account = await _account(client, alice, name="Alice savings", initial_balance=500)
        url = f"/api/v1/accounts/{account['id']}"

        resp = await client.get(url, headers=bob)
        assert resp.status_code == 404
        assert resp.json()["code"] == 3001

        resp = await client.put(url, json={"name": "Hijacked"}, headers=bob)
        assert resp.status_code == 404
        assert resp.json()["code"] == 3001

        resp = await client.delete(url, headers=bob)
        assert resp.status_code == 404
        assert resp.json()["code"] == 3001

        kept = (await client.get(url, headers=alice)).json()["data"]
        assert kept["name"] == "Alice savings"
        assert kept["initial_balance"] == 500

    async def test_other_users_expense_is_404(self, client: AsyncClient) -> None:
        alice, bob = await register(client), await register(client)
        account = await _account(client, alice)
        expense = await _expense(client, alice, account["id"], "42.00")
        url = f"/api/v1/expenses/{expense['id']}"

        resp = await client.get(url, headers=bob)
        assert resp.status_code == 404
        assert resp.json()["code"] == 4001

        resp = await client.put(url, data={"description": "Hijacked", "amount": "1"}, headers=bob)
        assert resp.status_code == 404
        assert resp.json()["code"] == 4001

        resp = await client.delete(url, headers=bob)
        assert resp.status_code == 404
        assert resp.json()["code"] == 4001

        kept = (await client.get(url, headers=alice)).json()["data"]
        assert kept["description"] == "Groceries"
        assert kept["amount"] == 42
