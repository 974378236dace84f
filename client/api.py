"""Async wrapper around the HTTP API.

Every call returns decoded JSON. Anything other than a 2xx answer raises
``ApiError`` carrying the status and the server's plain-text reason.
"""
from datetime import date
from typing import Any, Dict, Optional

import httpx

from config import settings


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code} – {message}")
        self.status_code = status_code


def to_iso_date(value: date) -> str:
    return value.isoformat()[:10]


class MoneyApi:
    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.AsyncClient] = None,
                 timeout: float = 10.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "MoneyApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        response = await self._client.request(method, path, **kwargs)
        if response.is_error:
            raise ApiError(response.status_code, response.text or response.reason_phrase)
        return response.json()

    # Split ledger

    async def get_incomes(self, year: int, month: int) -> Dict[str, Any]:
        return await self._request("GET", "/api/incomes", params={"year": year, "month": month})

    async def get_expenses(self, year: int, month: int) -> Dict[str, Any]:
        return await self._request("GET", "/api/expenses", params={"year": year, "month": month})

    async def get_summary(self, year: int, month: int) -> Dict[str, Any]:
        return await self._request("GET", "/api/summary", params={"year": year, "month": month})

    async def add_income(self, amount: float, source: str, on: date) -> Dict[str, Any]:
        return await self._request("POST", "/api/incomes", json={
            "amount": amount,
            "source": source,
            "date": to_iso_date(on),
        })

    async def add_expense(self, amount: float, category: str, description: str, on: date) -> Dict[str, Any]:
        return await self._request("POST", "/api/expenses", json={
            "amount": amount,
            "category": category,
            "description": description,
            "date": to_iso_date(on),
        })

    # Unified transactions

    async def get_transactions(self, year: int, month: int) -> Dict[str, Any]:
        return await self._request("GET", "/api/tx", params={"year": year, "month": month})

    async def get_transaction_summary(self, year: int, month: int) -> Dict[str, Any]:
        return await self._request("GET", "/api/tx/summary", params={"year": year, "month": month})

    async def add_transaction(self, kind: str, amount: float, on: date,
                              description: Optional[str] = None) -> Dict[str, Any]:
        return await self._request("POST", "/api/tx", json={
            "occurredOn": to_iso_date(on),
            "type": kind,
            "amount": amount,
            "description": description,
        })
