"""Data provider boundary for the dashboard.

Views only talk to the ``DataProvider`` protocol. ``SnapshotProvider`` answers
those queries from a JSON snapshot document so the dashboard runs without any
network access; a live SDK-backed provider only has to implement the same
coroutines.
"""

from __future__ import annotations

import asyncio
import copy
import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

NETWORKS: tuple[str, ...] = ("mainnet", "testnet", "localnet")
DEMO_SNAPSHOT = "demo_snapshot.json"


class ProviderError(Exception):
    """Raised when the provider cannot answer a query."""


class DataProvider(Protocol):
    network: str

    async def get_global_state(self) -> dict[str, Any]: ...

    async def get_supply(self) -> dict[str, Any]: ...

    async def get_fees(self) -> dict[str, dict[str, int]]: ...

    async def get_wallet(self) -> dict[str, Any]: ...

    async def list_proposals(self) -> list[dict[str, Any]]: ...

    async def get_proposal(self, proposal_id: int) -> dict[str, Any]: ...


class SnapshotProvider:
    """Serve DAO, wallet, and proposal state from an in-memory snapshot.

    ``latency`` seconds are awaited before each answer to mimic a remote
    query; the dashboard stays responsive while it elapses.
    """

    def __init__(self, document: dict[str, Any], network: str | None = None, latency: float = 0.0) -> None:
        if not isinstance(document, dict):
            raise ProviderError("snapshot must be a JSON object")
        self._document = document
        self.network = network or str(document.get("network", "mainnet"))
        self.latency = max(0.0, latency)

    @classmethod
    def from_path(cls, path: Path, network: str | None = None, latency: float = 0.0) -> SnapshotProvider:
        try:
            document = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ProviderError(f"cannot read snapshot {path}: {exc}") from exc
        return cls(document, network=network, latency=latency)

    @classmethod
    def demo(cls, network: str | None = None, latency: float = 0.0) -> SnapshotProvider:
        text = resources.files("daodash.data").joinpath(DEMO_SNAPSHOT).read_text(encoding="utf-8")
        return cls(json.loads(text), network=network, latency=latency)

    async def _section(self, name: str) -> Any:
        if self.latency:
            await asyncio.sleep(self.latency)
        if name not in self._document:
            raise ProviderError(f"{name} data unavailable")
        logger.debug("snapshot query: %s", name)
        return copy.deepcopy(self._document[name])

    async def get_global_state(self) -> dict[str, Any]:
        return await self._section("dao")

    async def get_supply(self) -> dict[str, Any]:
        return await self._section("supply")

    async def get_fees(self) -> dict[str, dict[str, int]]:
        return await self._section("fees")

    async def get_wallet(self) -> dict[str, Any]:
        return await self._section("wallet")

    async def list_proposals(self) -> list[dict[str, Any]]:
        proposals = await self._section("proposals")
        summaries = [
            {
                "id": proposal["id"],
                "status": proposal.get("status", "draft"),
                "creator": proposal.get("creator", ""),
                "votes": proposal.get("votes", {}),
                "action_count": len(proposal.get("actions", [])),
                "created": proposal.get("created", 0),
            }
            for proposal in proposals
        ]
        summaries.sort(key=lambda item: item["id"], reverse=True)
        return summaries

    async def get_proposal(self, proposal_id: int) -> dict[str, Any]:
        for proposal in await self._section("proposals"):
            if proposal.get("id") == proposal_id:
                return proposal
        raise ProviderError(f"proposal {proposal_id} not found")
