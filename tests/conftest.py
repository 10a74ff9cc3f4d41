"""Shared test fixtures for communityid tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from communityid import Flow, Protocol

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def load_baseline() -> Callable[[str], list[dict[str, Any]]]:
    """Load a baseline file from tests/data by name."""

    def _load(name: str) -> list[dict[str, Any]]:
        with (DATA_DIR / name).open(encoding="utf-8") as f:
            return json.load(f)

    return _load


@pytest.fixture
def flow_from_baseline() -> Callable[[dict[str, Any]], Flow]:
    """Build a Flow from a baseline entry, using Flow.partial when ports are absent."""

    def _build(entry: dict[str, Any]) -> Flow:
        proto = Protocol.from_number(entry["proto"])

        if entry.get("sport") is None:
            return Flow.partial(proto, entry["saddr"], entry["daddr"])

        return Flow(proto, entry["saddr"], entry["sport"], entry["daddr"], entry["dport"])

    return _build


@pytest.fixture
def tcp_flow() -> Flow:
    """TCP flow 192.168.1.10:12345 -> 192.168.1.20:80."""
    return Flow(Protocol.TCP, "192.168.1.10", 12345, "192.168.1.20", 80)


@pytest.fixture
def udp_flow() -> Flow:
    """UDP flow 192.168.1.42:4242 -> 8.8.8.8:53."""
    return Flow(Protocol.UDP, "192.168.1.42", 4242, "8.8.8.8", 53)
