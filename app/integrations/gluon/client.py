"""HTTP client for the Gluon domain service.

All calls return OperationResult so callers never handle raw requests
responses or transport exceptions.

Usage:
    from integrations.gluon.client import GluonClient

    client = GluonClient(base_url="http://gluon:8080")
    result = client.get("/teams", params={"name": "platform"})
    if result.is_success:
        teams = result.data
"""

from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

from core.config import settings
from core.logging import get_module_logger
from infrastructure.operations import (
    OperationResult,
    classify_http_response,
    classify_request_error,
)

logger = get_module_logger()


class GluonClient:
    """Session based REST client for Gluon.

    Attributes:
        base_url: Gluon base URL
        timeout: Default timeout in seconds
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[int] = None):
        """Initialize the client.

        Args:
            base_url: Gluon base URL, defaults to settings.gluon.GLUON_BASE_URL
            timeout: Request timeout, defaults to settings.gluon.GLUON_TIMEOUT_SECONDS
        """
        self.base_url = (base_url or settings.gluon.GLUON_BASE_URL).rstrip("/") + "/"
        self.timeout = timeout or settings.gluon.GLUON_TIMEOUT_SECONDS
        self._session = requests.Session()
        self._session.headers.update(
            {
                "User-Agent": "QM-Bot/1.0",
                "Accept": "application/json",
            }
        )

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> OperationResult:
        return self._request("GET", path, params=params)

    def post(self, path: str, json_data: Optional[Dict[str, Any]] = None) -> OperationResult:
        return self._request("POST", path, json_data=json_data)

    def put(self, path: str, json_data: Optional[Dict[str, Any]] = None) -> OperationResult:
        return self._request("PUT", path, json_data=json_data)

    def _request(
        self,
        method: str,
        path: str,
        json_data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> OperationResult:
        url = urljoin(self.base_url, path.lstrip("/"))
        log = logger.bind(method=method, url=url)
        log.debug("gluon_request")

        try:
            response = self._session.request(
                method=method,
                url=url,
                json=json_data,
                params=params,
                timeout=self.timeout,
            )
        except Exception as e:  # pylint: disable=broad-except
            result = classify_request_error(e)
            log.error("gluon_request_failed", status=result.status.value, error=str(e))
            return result

        result = classify_http_response(response)
        if result.is_success:
            log.debug("gluon_request_succeeded", status_code=response.status_code)
        else:
            log.warning(
                "gluon_request_unsuccessful",
                status=result.status.value,
                status_code=response.status_code,
            )
        return result
