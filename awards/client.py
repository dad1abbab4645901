"""HTTP client for the awards backend API."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from awards.config import Settings
from awards.models import Award, VoteOrder
from awards.payloads import parse_award, parse_award_list

logger = logging.getLogger(__name__)


def _segment(value: int | str) -> str:
    """Escape a value for use as a single URL path segment."""
    segment = quote(str(value), safe="")
    # "." and ".." would still be collapsed as dot segments
    if segment in (".", ".."):
        segment = segment.replace(".", "%2E")
    return segment


class ClientError(Exception):
    """Error talking to the awards backend.

    Attributes:
        status_code: HTTP status from the backend, or None for transport errors
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AwardClient:
    """Read awards and start vote purchases against the backend API.

    The client only reads award data and asks the backend to open a pending
    vote. Pricing returned by the backend is authoritative; the local
    VoteOrder total is never sent as the amount to charge.

    Args:
        settings: Base URL and timeout; read from the environment if omitted
        transport: Optional httpx transport (used by tests)
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.settings = settings or Settings.from_env()
        self._client = httpx.Client(
            base_url=self.settings.api_base_url,
            timeout=self.settings.api_timeout,
            follow_redirects=True,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    def __enter__(self) -> "AwardClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("%s %s failed with HTTP %s", method, path, status)
            raise ClientError(f"HTTP error from awards API: {status}", status) from e
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ClientError(f"Error reaching awards API: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise ClientError(f"Awards API returned invalid JSON: {e}") from e

    def get_award(self, slug_or_id: int | str) -> Award:
        """Fetch one award with its categories and nominees."""
        return parse_award(self._request("GET", f"/awards/{_segment(slug_or_id)}"))

    def list_awards(self, **params: Any) -> list[Award]:
        """Fetch awards, passing filters (status, search, page, ...) through."""
        return parse_award_list(self._request("GET", "/awards", params=params))

    def initiate_vote(
        self,
        order: VoteOrder,
        voter_email: str,
        voter_name: str | None = None,
        voter_phone: str | None = None,
    ) -> dict[str, Any]:
        """Ask the backend to open a pending vote for a priced order.

        Returns the backend's response, which carries the payment details.
        """
        body: dict[str, Any] = {
            "number_of_votes": order.quantity,
            "voter_email": voter_email,
        }
        if voter_name:
            body["voter_name"] = voter_name
        if voter_phone:
            body["voter_phone"] = voter_phone

        logger.info(
            "Initiating %d vote(s) for nominee %s", order.quantity, order.nominee_id
        )
        return self._request("POST", f"/votes/nominees/{_segment(order.nominee_id)}", json=body)
