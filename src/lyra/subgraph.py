from __future__ import annotations

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)


class SubgraphClient:
    """Minimal GraphQL client for the Lyra subgraph."""

    def __init__(self, url: str, timeout: float = 30.0, session: requests.Session | None = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def query(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Post a query, raising on HTTP or GraphQL errors. Returns the `data` object."""
        logger.debug(f"subgraph query vars={variables}")
        resp = self.session.post(
            self.url,
            json={"query": query, "variables": variables or {}},
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        body = resp.json()
        if body.get("errors"):
            raise RuntimeError(f"Subgraph errors: {body['errors']}")
        return body.get("data") or {}
