"""Transport selection for the client library.

Chooses which gateway services data calls: the remote proxy, direct storage
access or local fixtures. The choice is an explicit ``TransportState`` that
callers pass in and get back; the selector itself keeps no mode.

Fallback is one-directional. A call that fails because its backend is
unreachable demotes the state to the next mode and is served there; only
``refresh`` moves back up.
"""

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from portal.application.interfaces import PortalGateway
from portal.domain.entities import TransportMode, TransportResult, TransportState
from portal.domain.exceptions import BackendUnavailableError, ValidationError

logger = logging.getLogger(__name__)

FALLBACK_ORDER = (
    TransportMode.REMOTE_PROXY,
    TransportMode.DIRECT_BACKEND,
    TransportMode.LOCAL_FIXTURE,
)

OPERATIONS = frozenset({"create", "get", "list", "update", "delete"})


class TransportSelector:
    def __init__(
        self,
        gateways: Mapping[TransportMode, PortalGateway],
        *,
        direct_available: bool,
        probe_attempts: int = 2,
    ):
        if TransportMode.LOCAL_FIXTURE not in gateways:
            raise ValueError("A local-fixture gateway is required as the last fallback")
        self._gateways = dict(gateways)
        self._direct_available = (
            direct_available and TransportMode.DIRECT_BACKEND in self._gateways
        )
        self._probe_attempts = max(1, probe_attempts)

    async def probe(self, state: TransportState | None = None) -> TransportState:
        """Pick the best reachable mode.

        Proxy if its health check answers, else direct storage when
        credentials are configured, else fixtures.
        """
        proxy_available = await self._proxy_healthy()
        if proxy_available:
            mode = TransportMode.REMOTE_PROXY
        elif self._direct_available:
            mode = TransportMode.DIRECT_BACKEND
        else:
            mode = TransportMode.LOCAL_FIXTURE

        previous = state.mode if state is not None and state.checked else None
        if previous != mode:
            logger.info("Transport mode selected: %s", mode.value)
        return TransportState(mode=mode, proxy_available=proxy_available, checked=True)

    async def refresh(self, state: TransportState) -> TransportState:
        """Re-run the initial probe; the only way back up the fallback order."""
        return await self.probe(state)

    async def execute(
        self, state: TransportState, operation: str, *args: Any, **kwargs: Any
    ) -> TransportResult:
        """Run a gateway operation in the current mode, demoting on unavailability.

        Domain errors (validation, not-found, already-exists, operation
        failures) propagate unchanged and never demote.
        """
        if operation not in OPERATIONS:
            raise ValidationError.single("operation", f"Unsupported operation '{operation}'")
        if not state.checked:
            state = await self.probe(state)

        while True:
            gateway = self._gateways[state.mode]
            try:
                value = await getattr(gateway, operation)(*args, **kwargs)
            except BackendUnavailableError as exc:
                next_mode = self._next_mode(state.mode)
                if next_mode is None:
                    raise
                logger.warning(
                    "%s %s failed (%s); falling back to %s",
                    state.mode.value, operation, exc.message, next_mode.value,
                )
                state = replace(
                    state,
                    mode=next_mode,
                    proxy_available=(
                        state.proxy_available and state.mode != TransportMode.REMOTE_PROXY
                    ),
                    demotions=(*state.demotions, f"{state.mode.value}: {exc.message}"),
                )
                continue
            return TransportResult(value=value, state=state)

    async def _proxy_healthy(self) -> bool:
        gateway = self._gateways.get(TransportMode.REMOTE_PROXY)
        if gateway is None:
            return False
        for attempt in range(1, self._probe_attempts + 1):
            try:
                if await gateway.health():
                    return True
            except BackendUnavailableError as exc:
                logger.debug("Proxy health check error: %s", exc)
            logger.warning(
                "Proxy health check failed (attempt %d/%d)", attempt, self._probe_attempts
            )
        return False

    def _next_mode(self, mode: TransportMode) -> TransportMode | None:
        for candidate in FALLBACK_ORDER[FALLBACK_ORDER.index(mode) + 1:]:
            if candidate == TransportMode.DIRECT_BACKEND and not self._direct_available:
                continue
            if candidate in self._gateways:
                return candidate
        return None
