from fastapi.requests import HTTPConnection

from roster.errors import HubNotConfiguredError
from roster.hub import RosterHub


def get_hub(connection: HTTPConnection) -> RosterHub:
    """FastAPI dependency returning the hub created by the app factory.

    Typed as HTTPConnection so the same dependency serves HTTP and WebSocket routes.
    """
    hub = getattr(connection.app.state, "hub", None)
    if hub is None:
        raise HubNotConfiguredError("roster hub is not configured on this app")
    return hub
