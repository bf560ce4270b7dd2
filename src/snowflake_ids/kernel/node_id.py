"""
Node identifier providers

A generator built without an explicit node id asks a NodeIdProvider once, at
construction. The default policy hashes the hardware addresses of every local
network interface; when none can be read it falls back to a cryptographically
random value. Either way the result is masked into [0, 1023].

Providers return a NodeIdResult instead of raising, so the random fallback
applies whatever the reason hardware derivation came up empty.
"""

import hashlib
import secrets
import uuid
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Literal, Protocol

from pydantic import BaseModel, Field

from snowflake_ids.kernel.logging import get_logger

logger = get_logger(__name__)

NODE_ID_MASK = 1023

SYSFS_NET = Path("/sys/class/net")

NodeIdSource = Literal["hardware", "random", "static"]


class NodeIdResult(BaseModel):
    """Outcome of node id derivation"""

    node_id: int = Field(ge=0, le=NODE_ID_MASK)
    source: NodeIdSource
    detail: str = ""

    model_config = {"frozen": True}


class NodeIdProvider(Protocol):
    """Protocol for node id derivation strategies"""

    def provide(self) -> NodeIdResult:
        """Return a node id in [0, 1023] and where it came from"""
        ...


def _normalize_address(raw: str) -> str | None:
    """Uppercase hex digits of a hardware address, or None if it is unusable"""
    digits = raw.strip().replace(":", "").replace("-", "").upper()
    if not digits or any(c not in "0123456789ABCDEF" for c in digits):
        return None
    # Loopback and tunnel devices report an all-zero address
    if set(digits) == {"0"}:
        return None
    return digits


def read_sysfs_addresses(root: Path = SYSFS_NET) -> list[str]:
    """
    Read interface hardware addresses from Linux sysfs

    Interfaces are visited in name order so the derived id is stable across
    runs. Unreadable interfaces are skipped.
    """
    if not root.is_dir():
        return []

    addresses = []
    for iface in sorted(root.iterdir()):
        try:
            raw = (iface / "address").read_text()
        except OSError:
            continue
        normalized = _normalize_address(raw)
        if normalized:
            addresses.append(normalized)
    return addresses


def read_uuid_node_address() -> list[str]:
    """
    Hardware address as reported by uuid.getnode()

    getnode() returns a random number with the multicast bit set when it
    cannot find a real address; that value is discarded.
    """
    node = uuid.getnode()
    if (node >> 40) & 1:
        return []
    return [f"{node:012X}"]


def read_hardware_addresses() -> list[str]:
    """Hardware addresses of all local interfaces, best effort"""
    return read_sysfs_addresses() or read_uuid_node_address()


def hash_addresses(addresses: Iterable[str]) -> int:
    """Stable 64-bit hash of the concatenated addresses"""
    digest = hashlib.sha256("".join(addresses).encode("ascii")).digest()
    return int.from_bytes(digest[:8], "big")


def random_node_id() -> int:
    return secrets.randbits(32) & NODE_ID_MASK


class HardwareNodeIdProvider:
    """
    Default provider: hash of hardware addresses, random fallback

    Args:
        address_source: Callable returning hardware addresses; defaults to
            reading the local interfaces
    """

    def __init__(
        self, address_source: Callable[[], list[str]] | None = None
    ) -> None:
        self._address_source = address_source or read_hardware_addresses

    def provide(self) -> NodeIdResult:
        addresses = [a for a in map(_normalize_address, self._address_source()) if a]
        if not addresses:
            logger.warning(
                "No hardware address available, using random node id",
            )
            return RandomNodeIdProvider().provide()

        return NodeIdResult(
            node_id=hash_addresses(addresses) & NODE_ID_MASK,
            source="hardware",
            detail=f"{len(addresses)} interface address(es)",
        )


class RandomNodeIdProvider:
    """Cryptographically random node id"""

    def provide(self) -> NodeIdResult:
        return NodeIdResult(node_id=random_node_id(), source="random")


class StaticNodeIdProvider:
    """Fixed node id, masked into range like every other provider"""

    def __init__(self, value: int) -> None:
        self._value = value

    def provide(self) -> NodeIdResult:
        return NodeIdResult(node_id=self._value & NODE_ID_MASK, source="static")


# Global default provider
default_node_id_provider: NodeIdProvider = HardwareNodeIdProvider()
