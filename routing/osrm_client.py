#Purpose: The OSRM "adapter/client".
#Sole responsibility: talk to OSRM via HTTP and return normalized outputs.
#Encapsulates OSRM-specific details:
#coordinate formatting (lon,lat)
#URL construction (/route, /table)
#error handling (OSRMError / NoRouteError)
#parsing response JSON (including GeoJSON geometry) into our internal shape
#It should not contain aggregation rules or viewport math.


from dotenv import load_dotenv
import os
from typing import List, Tuple, Dict, Any, Optional
import requests

# Read OSRM base URL from environment
# Example in .env:
# BASE_URL=http://router.project-osrm.org
load_dotenv()
BASE_URL = os.getenv("BASE_URL")

# Internal coordinate type: (lat, lon)
LatLon = Tuple[float, float]

class OSRMError(Exception):
    """Raised when OSRM answers with anything other than code == "Ok"."""
    pass

class NoRouteError(OSRMError):
    """OSRM could not connect the coordinates (code NoRoute or no candidates)."""
    pass

class OSRMClient:
    """
    OSRM Adapter / Client

    Sole responsibility:
    - Talk to OSRM via HTTP
    - Convert internal (lat, lon) → OSRM (lon,lat) and back
    - Return normalized outputs

    """
    def __init__(self, profile: str = "driving", timeout: float = 5, base_url: Optional[str] = None):
        self.base_url = base_url or BASE_URL
        self.timeout = timeout #the time to wait for a response from OSRM before giving up
        self.profile = profile #the mode of transportation (driving, walking, cycling)

        if not self.base_url:
            raise ValueError("OSRM base URL not set. Please set BASE_URL in the .env file.")
        self.base_url = self.base_url.rstrip("/")

    #----------------
    # Internal helpers for coordinate formatting and response validation
    #----------------
    def format_coordinates(self, coords: List[LatLon]) -> str:
        """Convert list of (lat, lon) to OSRM format 'lon,lat;lon,lat;...'"""
        return ';'.join([f"{lon},{lat}" for lat, lon in coords])

    @staticmethod
    def parse_geometry(geometry: Optional[Dict[str, Any]]) -> List[LatLon]:
        """GeoJSON LineString ([lon, lat] pairs) -> list of (lat, lon)."""
        if not geometry:
            return []
        return [(float(lat), float(lon)) for lon, lat in geometry.get("coordinates", [])]

    def _get(self, url: str, params: Dict[str, str]) -> Dict[str, Any]:
        response = requests.get(url, params=params, timeout=self.timeout)
        data = response.json()

        code = data.get("code")
        if code == "NoRoute":
            raise NoRouteError(data.get("message", "No route found"))
        if code != "Ok":
            raise OSRMError(f"OSRM error: {data.get('message', code or 'Unknown error')}")
        return data

    #----------------
    # route service (single best route)
    #----------------
    def compute_route(self, coordinates: List[LatLon], with_geometry: bool = False) -> Dict[str, Any]:
        """
        calls the OSRM /route endpoint with the given coordinates and
        returns the first route candidate OSRM ranks for us.

        Returns:
            {
                "distance": float, # in meters
                "duration": float, # in seconds
                "geometry": List[LatLon], # empty unless with_geometry=True
            }
        """
        if len(coordinates) < 2:
            raise ValueError("At least two coordinates are required to compute a route.")

        url = f"{self.base_url}/route/v1/{self.profile}/{self.format_coordinates(coordinates)}"
        params = {"alternatives": "false"}
        if with_geometry:
            params["overview"] = "full"
            params["geometries"] = "geojson"
        else:
            params["overview"] = "false" # we don't need the geometry of the route

        data = self._get(url, params)

        routes = data.get("routes") or []
        if not routes:
            raise NoRouteError("OSRM returned no route candidates")

        route = routes[0] #first candidate wins (OSRM orders them best first)

        return {
            "distance": float(route["distance"]),
            "duration": float(route["duration"]),
            "geometry": self.parse_geometry(route.get("geometry")) if with_geometry else [],
        }

    #----------------
    # table service (batch durations)
    #----------------
    def compute_table(self, sources: List[LatLon],
                      destinations: List[LatLon]
                      ) -> Dict[str, List[List[Optional[float]]]]:
        """
        calls the OSRM /table endpoint.
        used to rank candidate meeting points by everyone's travel time.

        returns :
        {
            "durations": [[seconds, ...], ...], # rows = sources, cols = destinations
            "distances": [[meters, ...], ...],
        }
        unreachable pairs are None.
        """
        if not sources or not destinations:
            return {"durations": [], "distances": []}

        coordinates = self.format_coordinates(list(sources) + list(destinations))
        source_index = ";".join(str(i) for i in range(len(sources)))
        destination_index = ";".join(
            str(i) for i in range(len(sources), len(sources) + len(destinations))
        )
        params = {
            "sources": source_index,
            "destinations": destination_index,
            "annotations": "duration,distance",
        }

        url = f"{self.base_url}/table/v1/{self.profile}/{coordinates}"
        data = self._get(url, params)

        return {
            "durations": data.get("durations", []),
            "distances": data.get("distances", []),
        }
