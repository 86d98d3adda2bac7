from .direct_gateway import DirectGateway
from .factory import build_transport_selector
from .fixture_gateway import FixtureGateway
from .proxy_gateway import ProxyGateway

__all__ = ["DirectGateway", "FixtureGateway", "ProxyGateway", "build_transport_selector"]
