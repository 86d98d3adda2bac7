"""Transport modes and the explicit state the transport selector threads through calls."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TransportMode(str, Enum):
    REMOTE_PROXY = "remote-proxy"
    DIRECT_BACKEND = "direct-backend"
    LOCAL_FIXTURE = "local-fixture"


@dataclass(frozen=True)
class TransportState:
    """Which backend currently services data calls.

    Immutable: every selector operation returns a new state. Demotion only
    moves down the fallback order; ``refresh`` is the only way back up.
    """

    mode: TransportMode = TransportMode.REMOTE_PROXY
    proxy_available: bool = False
    checked: bool = False
    demotions: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TransportResult:
    value: Any
    state: TransportState
