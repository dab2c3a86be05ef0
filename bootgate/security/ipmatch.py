# bootgate/security/ipmatch.py
from __future__ import annotations

import ipaddress
import logging
from typing import Iterable, Optional, Tuple, Union

from bootgate.errors import InvalidIpPatternError

logger = logging.getLogger(__name__)

Network = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]
Address = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def _parse_entry(entry: str) -> Network:
    text = (entry or "").strip()
    if not text:
        raise InvalidIpPatternError("empty IP allow-list entry")
    try:
        # strict=False: "10.0.0.1/8" means the 10.0.0.0/8 network
        return ipaddress.ip_network(text, strict=False)
    except ValueError as exc:
        raise InvalidIpPatternError(f"invalid IP allow-list entry {entry!r}: {exc}") from exc


def _parse_address(ip: Optional[str]) -> Optional[Address]:
    if not ip or not isinstance(ip, str):
        return None
    text = ip.strip()
    if text.startswith("[") and text.endswith("]"):
        text = text[1:-1]
    # zone ids ("fe80::1%eth0") never match configured networks
    text = text.split("%", 1)[0]
    try:
        addr = ipaddress.ip_address(text)
    except ValueError:
        return None
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        return addr.ipv4_mapped
    return addr


class IpAllowList:
    """
    Ordered allow-list of literal addresses and CIDR networks.

    Empty list = no IP restriction. A non-empty list never allows a missing or
    unparsable client address.
    """

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries: Tuple[str, ...] = tuple(entries)
        self._networks: Tuple[Network, ...] = tuple(_parse_entry(e) for e in self._entries)

    @property
    def entries(self) -> Tuple[str, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def allows(self, ip: Optional[str]) -> bool:
        if not self._networks:
            return True
        addr = _parse_address(ip)
        if addr is None:
            logger.debug("client ip missing or unparsable; not in allow-list")
            return False
        return any(addr.version == net.version and addr in net for net in self._networks)
