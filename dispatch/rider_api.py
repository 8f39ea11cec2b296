#Purpose: The rider backend "adapter/client".
#Sole responsibility: talk to the rider orders API via HTTP and return normalized outputs.
#Encapsulates API-specific details:
#URL construction (/api/rider/orders, /accept, /complete)
#timeouts + error handling
#parsing response JSON into your internal shape
#It should not contain lifecycle rules.


from dotenv import load_dotenv
import logging
import os
from typing import Any, Dict, List, Optional
import requests

# Read the rider API base URL from environment
# Example in .env:
# RIDER_API_BASE_URL=https://api.example.com
load_dotenv()

logger = logging.getLogger(__name__)


class RiderApiError(Exception):
    """Raised when the rider API is unreachable or answers with ok != true."""
    pass


class RiderApiClient:
    """
    Rider API Adapter / Client

    Sole responsibility:
    - Talk to the rider orders API via HTTP
    - Raise RiderApiError for any failed call
    - Return normalized outputs
    """
    def __init__(self, base_url: Optional[str] = None, timeout: int = 5, session: Optional[requests.Session] = None):
        self.base_url = (base_url or os.getenv("RIDER_API_BASE_URL") or "").rstrip("/")
        self.timeout = timeout #the time to wait for a response before giving up
        self.session = session or requests.Session()

        if not self.base_url:
            raise ValueError("Rider API base URL not set. Please set RIDER_API_BASE_URL in the .env file.")

    #----------------
    # Internal helpers
    #----------------
    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _parse(self, response: requests.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.ok or not data.get("ok"):
            raise RiderApiError(
                f"Rider API error ({response.status_code}): {data.get('error', 'Unknown error')}"
            )
        return data

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.session.post(self._url(path), json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise RiderApiError(f"Rider API unreachable: {exc}") from exc
        return self._parse(response)

    #----------------
    # Public methods
    #----------------
    def fetch_available_orders(self) -> List[Dict[str, Any]]:
        """
        GET /api/rider/orders

        Returns:
            the raw order payloads (sanitize before showing to riders)
        """
        try:
            response = self.session.get(self._url("/api/rider/orders"), timeout=self.timeout)
        except requests.RequestException as exc:
            raise RiderApiError(f"Rider API unreachable: {exc}") from exc

        data = self._parse(response)
        return list(data.get("orders") or [])

    def accept_order(self, rider_id: str, order_id: str) -> Dict[str, Any]:
        """POST /api/rider/orders/accept"""
        return self._post("/api/rider/orders/accept", {"riderId": rider_id, "orderId": order_id})

    def complete_order(self, rider_id: str, order_id: str, code: str) -> Dict[str, Any]:
        """POST /api/rider/orders/complete"""
        return self._post(
            "/api/rider/orders/complete",
            {"riderId": rider_id, "orderId": order_id, "code": code},
        )
