#Marks routing as a package.
#Re-exports the public API (OSRMClient, fetch_route, route_fetcher_from_client)
#so other modules import from routing without knowing internal file names.
#No business logic.

from .osrm_client import OSRMClient, OSRMError, NoRouteError
from .route_service import fetch_route, route_fetcher_from_client, RouteFetcher

__all__ = [
    "OSRMClient",
    "OSRMError",
    "NoRouteError",
    "fetch_route",
    "route_fetcher_from_client",
    "RouteFetcher",
]
