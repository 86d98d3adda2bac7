"""Unit tests for transport selection and one-way fallback."""

from pathlib import Path

import httpx
import pytest

from portal.application.interfaces import PortalGateway
from portal.application.services import TransportSelector
from portal.config import Settings
from portal.domain.entities import EntityName, Page, TransportMode, TransportState
from portal.domain.exceptions import (
    BackendUnavailableError,
    ConfigurationError,
    NotFoundError,
    ValidationError,
)
from portal.infrastructure.gateways import DirectGateway, FixtureGateway, build_transport_selector


class _StubGateway(PortalGateway):
    """Gateway double that records calls and can be switched off."""

    def __init__(self, mode: TransportMode, *, up: bool = True, healthy: bool | None = None):
        self.mode = mode
        self.up = up
        self.healthy = up if healthy is None else healthy
        self.calls: list[str] = []
        self.health_checks = 0

    def _call(self, name: str):
        self.calls.append(name)
        if not self.up:
            raise BackendUnavailableError(f"{self.mode.value} down")

    async def health(self) -> bool:
        self.health_checks += 1
        return self.healthy

    async def create(self, entity, payload):
        self._call("create")
        return {**payload, "id": "new", "servedBy": self.mode.value}

    async def get(self, entity, item_id):
        self._call("get")
        if item_id == "missing":
            raise NotFoundError(entity.value, item_id)
        return {"id": item_id, "servedBy": self.mode.value}

    async def list(self, entity, *, limit=50, cursor=None):
        self._call("list")
        return Page(items=[{"servedBy": self.mode.value}])

    async def update(self, entity, item_id, fields):
        self._call("update")
        return {**fields, "id": item_id}

    async def delete(self, entity, item_id):
        self._call("delete")


def _selector(proxy=None, direct=None, fixture=None, *, direct_available=True):
    gateways = {TransportMode.LOCAL_FIXTURE: fixture or _StubGateway(TransportMode.LOCAL_FIXTURE)}
    if proxy is not None:
        gateways[TransportMode.REMOTE_PROXY] = proxy
    if direct is not None:
        gateways[TransportMode.DIRECT_BACKEND] = direct
    return TransportSelector(gateways, direct_available=direct_available)


# ── Probe ──


@pytest.mark.asyncio
async def test_probe_prefers_healthy_proxy():
    selector = _selector(
        proxy=_StubGateway(TransportMode.REMOTE_PROXY),
        direct=_StubGateway(TransportMode.DIRECT_BACKEND),
    )

    state = await selector.probe()

    assert state == TransportState(mode=TransportMode.REMOTE_PROXY, proxy_available=True, checked=True)


@pytest.mark.asyncio
async def test_probe_retries_proxy_then_uses_direct():
    proxy = _StubGateway(TransportMode.REMOTE_PROXY, healthy=False)
    selector = _selector(proxy=proxy, direct=_StubGateway(TransportMode.DIRECT_BACKEND))

    state = await selector.probe()

    assert proxy.health_checks == 2
    assert state.mode is TransportMode.DIRECT_BACKEND
    assert state.proxy_available is False


@pytest.mark.asyncio
async def test_probe_without_credentials_goes_to_fixtures():
    selector = _selector(
        proxy=_StubGateway(TransportMode.REMOTE_PROXY, healthy=False),
        direct=_StubGateway(TransportMode.DIRECT_BACKEND),
        direct_available=False,
    )

    assert (await selector.probe()).mode is TransportMode.LOCAL_FIXTURE


def test_fixture_gateway_is_required():
    with pytest.raises(ValueError):
        TransportSelector({}, direct_available=False)


# ── Execute ──


@pytest.mark.asyncio
async def test_execute_probes_unchecked_state():
    selector = _selector(proxy=_StubGateway(TransportMode.REMOTE_PROXY))

    result = await selector.execute(TransportState(), "get", EntityName.CLIENTS, "c-1")

    assert result.value["servedBy"] == "remote-proxy"
    assert result.state.checked is True


@pytest.mark.asyncio
async def test_unavailable_proxy_demotes_to_direct_and_stays_there():
    proxy = _StubGateway(TransportMode.REMOTE_PROXY, up=False, healthy=True)
    direct = _StubGateway(TransportMode.DIRECT_BACKEND)
    selector = _selector(proxy=proxy, direct=direct)
    state = await selector.probe()

    first = await selector.execute(state, "list", EntityName.TICKETS)
    second = await selector.execute(first.state, "list", EntityName.TICKETS)

    assert first.value.items[0]["servedBy"] == "direct-backend"
    assert first.state.mode is TransportMode.DIRECT_BACKEND
    assert first.state.proxy_available is False
    assert first.state.demotions == ("remote-proxy: remote-proxy down",)
    assert second.state.mode is TransportMode.DIRECT_BACKEND
    assert proxy.calls == ["list"]
    assert direct.calls == ["list", "list"]


@pytest.mark.asyncio
async def test_demotion_skips_direct_without_credentials():
    proxy = _StubGateway(TransportMode.REMOTE_PROXY, up=False, healthy=True)
    direct = _StubGateway(TransportMode.DIRECT_BACKEND)
    selector = _selector(proxy=proxy, direct=direct, direct_available=False)
    state = await selector.probe()

    result = await selector.execute(state, "create", EntityName.TICKETS, {"subject": "Help"})

    assert result.state.mode is TransportMode.LOCAL_FIXTURE
    assert result.value["servedBy"] == "local-fixture"
    assert direct.calls == []


@pytest.mark.asyncio
async def test_domain_errors_do_not_demote():
    proxy = _StubGateway(TransportMode.REMOTE_PROXY)
    selector = _selector(proxy=proxy, direct=_StubGateway(TransportMode.DIRECT_BACKEND))
    state = await selector.probe()

    with pytest.raises(NotFoundError):
        await selector.execute(state, "get", EntityName.CLIENTS, "missing")

    result = await selector.execute(state, "get", EntityName.CLIENTS, "c-1")
    assert result.state.mode is TransportMode.REMOTE_PROXY


@pytest.mark.asyncio
async def test_last_mode_failure_propagates():
    fixture = _StubGateway(TransportMode.LOCAL_FIXTURE, up=False)
    selector = _selector(fixture=fixture, direct_available=False)
    state = await selector.probe()

    with pytest.raises(BackendUnavailableError):
        await selector.execute(state, "list", EntityName.CLIENTS)


@pytest.mark.asyncio
async def test_refresh_is_the_only_way_back_up():
    proxy = _StubGateway(TransportMode.REMOTE_PROXY, up=False, healthy=True)
    selector = _selector(proxy=proxy, direct=_StubGateway(TransportMode.DIRECT_BACKEND))
    demoted = (await selector.execute(await selector.probe(), "list", EntityName.APPS)).state

    proxy.up = True
    still_demoted = (await selector.execute(demoted, "list", EntityName.APPS)).state
    refreshed = await selector.refresh(still_demoted)

    assert still_demoted.mode is TransportMode.DIRECT_BACKEND
    assert refreshed.mode is TransportMode.REMOTE_PROXY
    assert refreshed.demotions == ()


@pytest.mark.asyncio
async def test_unknown_operation_is_rejected():
    selector = _selector()
    with pytest.raises(ValidationError):
        await selector.execute(TransportState(checked=True, mode=TransportMode.LOCAL_FIXTURE), "drop")


# ── Fixture and direct gateways ──


@pytest.mark.asyncio
async def test_fixture_gateway_serves_bundled_records():
    fixtures_file = Path(__file__).resolve().parents[2] / "data" / "fixtures.yaml"
    gateway = FixtureGateway.from_file(fixtures_file)

    page = await gateway.list(EntityName.CLIENTS, limit=1)
    rest = await gateway.list(EntityName.CLIENTS, limit=1, cursor=page.cursor)
    ticket = await gateway.get(EntityName.TICKETS, "ticket-1002")

    assert page.items[0]["id"] == "client-acme"
    assert rest.items[0]["id"] == "client-bluegum"
    assert ticket["status"] == "In Progress"
    assert await gateway.get(EntityName.TICKETS, "nope") is None


@pytest.mark.asyncio
async def test_fixture_gateway_echoes_writes():
    gateway = FixtureGateway({})

    created = await gateway.create(EntityName.APPS, {"name": "Portal"})
    updated = await gateway.update(EntityName.APPS, "a-1", {"name": "Renamed"})

    assert created["name"] == "Portal"
    assert created["id"]
    assert updated == {"name": "Renamed", "id": "a-1"}
    assert await gateway.delete(EntityName.APPS, "a-1") is None


def test_fixture_gateway_missing_file_is_empty(tmp_path):
    gateway = FixtureGateway.from_file(tmp_path / "absent.yaml")
    assert gateway.records(EntityName.CLIENTS) == []


def test_fixture_gateway_rejects_bad_shape(tmp_path):
    bad = tmp_path / "fixtures.yaml"
    bad.write_text("clients: not-a-list\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        FixtureGateway.from_file(bad)


@pytest.mark.asyncio
async def test_direct_gateway_runs_entity_services(services):
    gateway = DirectGateway(services)

    created = await gateway.create(
        EntityName.TICKETS,
        {"subject": "Help", "description": "It broke.", "priority": "Low", "email": "a@acme.com"},
    )
    fetched = await gateway.get(EntityName.TICKETS, created["id"])
    page = await gateway.list(EntityName.TICKETS)

    assert created["status"] == "Open"
    assert fetched["ticketNumber"] == created["ticketNumber"]
    assert page.count == 1
    assert await gateway.health() is True


@pytest.mark.asyncio
async def test_factory_without_credentials_falls_back_to_fixtures(monkeypatch):
    monkeypatch.delenv("AWS_ACCESS_KEY_ID", raising=False)
    monkeypatch.delenv("AWS_SECRET_ACCESS_KEY", raising=False)

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(refuse))
    selector = build_transport_selector(Settings(_env_file=None), http_client=http_client)

    result = await selector.execute(TransportState(), "get", EntityName.CLIENTS, "client-acme")

    assert result.state.mode is TransportMode.LOCAL_FIXTURE
    assert result.state.proxy_available is False
    assert result.value["id"] == "client-acme"
