"""Remote transport: passes queries and commands to an API server over HTTP+JSON.

Routes::

    GET    {base}/select?query=<json>
    POST   {base}/insert
    PATCH  {base}/update
    DELETE {base}/delete
    POST   {base}/call
"""
from __future__ import annotations

import json
import logging
from typing import Any

import requests
from pydantic import BaseModel

from poststack.query.commands import (
    CallCommand,
    DeleteCommand,
    InsertCommand,
    SelectQuery,
    UpdateCommand,
)
from poststack.transport.base import Transport

logger = logging.getLogger(__name__)


class WebTransport(Transport):
    """Sends queries and commands to a remote API as JSON.

    HTTP errors (``requests.HTTPError``) and connection errors propagate
    to the caller unchanged.

    Args:
        base_url: API root, with or without a trailing slash.
        session: Optional ``requests.Session`` (e.g. with auth headers).
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        timeout: float = 30,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        self.timeout = timeout

    def select(self, query: SelectQuery) -> list[dict[str, Any]]:
        return self._request("GET", "select", params={"query": json.dumps(_payload(query))})

    def insert(self, command: InsertCommand) -> list[dict[str, Any]]:
        return self._request("POST", "insert", body=command)

    def update(self, command: UpdateCommand) -> list[dict[str, Any]]:
        return self._request("PATCH", "update", body=command)

    def delete(self, command: DeleteCommand) -> list[dict[str, Any]]:
        return self._request("DELETE", "delete", body=command)

    def call(self, command: CallCommand) -> Any:
        return self._request("POST", "call", body=command)

    def _request(
        self,
        method: str,
        route: str,
        params: dict[str, str] | None = None,
        body: BaseModel | None = None,
    ) -> Any:
        url = f"{self.base_url}/{route}"
        logger.debug("%s %s", method, url)
        response = self.session.request(
            method,
            url,
            params=params,
            json=_payload(body) if body is not None else None,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()


def _payload(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json", exclude_none=True)
