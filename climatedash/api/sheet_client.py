"""Client for the spreadsheet-backed sensor data endpoint."""

import json
import logging
from typing import Any, Dict, List, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..core.exceptions import EmptyResultError, PayloadError, TransportError
from ..ingest import normalize
from ..models import SamplePoint

logger = logging.getLogger("climatedash.server")

DEFAULT_DATA_URL = (
    "https://script.google.com/macros/s/"
    "AKfycbxnSb-bzTLWQmbHbo-ZBwxZn9444juSqzHjLokPZklrA86hXME_rt3NH8x1d-8xo8ZJoQ/exec"
)


class SheetClient:
    """HTTP client for the sensor spreadsheet endpoint."""

    def __init__(self, data_url: str = DEFAULT_DATA_URL, timeout: int = 30):
        """
        Initialize sheet client.

        Args:
            data_url: Full URL of the JSON endpoint
            timeout: Request timeout in seconds
        """
        self.data_url = data_url
        self.timeout = timeout

    def _get_json(self, headers: Optional[Dict[str, str]] = None) -> Any:
        """
        GET the endpoint and decode the JSON body.

        Raises:
            TransportError: On connection errors and non-2xx responses
            PayloadError: When the body is not valid JSON
        """
        hdrs = {"Accept": "application/json"}
        hdrs.update(headers or {})
        req = Request(self.data_url, headers=hdrs, method="GET")

        try:
            with urlopen(req, timeout=self.timeout) as resp:
                status = getattr(resp, "status", 200)
                if not 200 <= status < 300:
                    raise TransportError(f"HTTP error! status: {status}", status=status)
                raw = resp.read().decode("utf-8")
        except HTTPError as e:
            raise TransportError(f"HTTP error! status: {e.code}", status=e.code) from e
        except URLError as e:
            raise TransportError(f"failed to reach data source: {e.reason}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise TransportError(f"failed to read data source: {e}") from e

        try:
            return json.loads(raw)
        except ValueError as e:
            raise PayloadError(f"Invalid data format: {e}") from e

    def fetch_records(self) -> List[Any]:
        """
        Fetch raw records.

        Returns:
            The decoded JSON array, unmodified

        Raises:
            TransportError, PayloadError
        """
        data = self._get_json()
        if not isinstance(data, list):
            raise PayloadError("Invalid data format: expected an array")
        return data

    def fetch_series(self) -> List[SamplePoint]:
        """
        Fetch and normalize the series.

        An empty array from the source is a valid, empty series. A non-empty
        array in which no record survives normalization is an error.
        """
        records = self.fetch_records()
        points = normalize(records)

        if records and not points:
            raise EmptyResultError("No valid data points found in the response")

        logger.debug(f"sheet client: {len(records)} records -> {len(points)} points")
        return points
