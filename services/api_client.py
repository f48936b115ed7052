# -*- coding: utf-8 -*-
"""
Registration Change API Client
==============================

HTTP access to the registration backend: change context, program
details, contact search and the three execute operations.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests
import urllib3

from services.exceptions import ApiException, NetworkException
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ApiConfig:
    """
    Connection settings for the registration API.

    Reads from .env via Config when a value is not given.

    Example .env:
        API_BASE_URL=https://registrations.example.org/api
        API_TOKEN=...
        API_VERIFY_SSL=false
    """
    base_url: str = None
    token: Optional[str] = None
    timeout: int = None
    verify_ssl: bool = None
    api_version: str = None

    def __post_init__(self):
        from app.config import Config

        if self.base_url is None:
            self.base_url = Config.API_BASE_URL
        if self.token is None:
            self.token = Config.API_TOKEN
        if self.timeout is None:
            self.timeout = Config.API_TIMEOUT
        if self.verify_ssl is None:
            self.verify_ssl = Config.API_VERIFY_SSL
        if self.api_version is None:
            self.api_version = Config.API_VERSION


class RegistrationChangeApiClient:
    """
    Client for the registration change endpoints.

    Every method returns the decoded JSON body. HTTP errors raise
    ApiException, transport failures raise NetworkException.

    Usage:
        client = RegistrationChangeApiClient(ApiConfig())
        data = client.get_change_context("a0B5e000001AbCdEAK")
    """

    def __init__(self, config: ApiConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.base_url = config.base_url.rstrip('/')
        self.session = session or requests.Session()

        if not config.verify_ssl:
            # Self-signed certificates in development
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        logger.info(f"Registration API client ready at {self.base_url}")

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{self.config.api_version}{endpoint}"

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        return headers

    def _request(
        self,
        method: str,
        endpoint: str,
        json_data: Optional[Dict] = None,
        params: Optional[Dict] = None
    ) -> Any:
        """
        Run an HTTP request with error mapping.

        Args:
            method: HTTP method (GET, POST)
            endpoint: API endpoint below the version prefix (e.g., "/registrations/transfer")
            json_data: JSON payload
            params: Query parameters

        Returns:
            Response JSON data, or None for an empty body
        """
        url = self._url(endpoint)

        logger.info(f"[API REQ] {method} {endpoint}")
        if params:
            logger.info(f"[API REQ] Params: {params}")
        if json_data:
            logger.info(f"[API REQ] Body: {json.dumps(json_data, indent=2, ensure_ascii=False, default=str)}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                json=json_data,
                params=params,
                headers=self._headers(),
                timeout=self.config.timeout,
                verify=self.config.verify_ssl
            )
            response.raise_for_status()

            result = response.json() if response.text else None

            logger.info(f"[API RES] {response.status_code} {endpoint}")
            if result:
                res_str = json.dumps(result, indent=2, ensure_ascii=False, default=str)
                if len(res_str) > 1000:
                    logger.debug(f"[API RES] Body (truncated): {res_str[:1000]}...")
                else:
                    logger.debug(f"[API RES] Body: {res_str}")

            return result

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else 0
            response_data = {}
            try:
                response_data = e.response.json() if e.response is not None else {}
            except ValueError:
                pass
            response_text = e.response.text[:500] if e.response is not None else ''
            logger.error(f"[API ERR] {status_code} {method} {endpoint} | Response: {response_data or response_text}")
            raise ApiException(
                message=str(e),
                status_code=status_code,
                response_data=response_data if isinstance(response_data, dict) else {},
                context=endpoint
            )
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.error(f"Network error: {endpoint} - {e}")
            raise NetworkException(
                message=str(e),
                original_error=e,
                context=endpoint
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {endpoint} - {e}")
            raise NetworkException(
                message=str(e),
                original_error=e,
                context=endpoint
            )

    # ==================== Change context ====================

    def get_change_context(self, registrant_id: str) -> Dict[str, Any]:
        """
        Load the registrant, originating financial record and program catalog.

        Returns:
            InitData payload (registrant, originatingFinancialRecord,
            availablePrograms, originalProgramFeeTotal, discountTotal)
        """
        logger.debug(f"Fetching change context for registrant {registrant_id}")
        return self._request("GET", f"/registrations/{registrant_id}/change-context")

    def get_program_details(self, program_id: str, pricing_context_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Fetch fee details for a program under the registration's pricing context.

        Returns:
            {"expectedProgramFee": ..., "transferFeeUnitPrice": ...}
        """
        params = {"pricingContextId": pricing_context_id} if pricing_context_id else None
        return self._request("GET", f"/programs/{program_id}/details", params=params)

    def search_contacts(self, term: str, account_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """Search contacts eligible as a substitute registrant."""
        params = {"term": term}
        if account_id:
            params["accountId"] = account_id
        return self._request("GET", "/contacts/search", params=params) or []

    # ==================== Execute operations ====================

    def execute_transfer(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/registrations/transfer", json_data=payload)

    def execute_cancellation(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/registrations/cancellation", json_data=payload)

    def execute_substitution(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/registrations/substitution", json_data=payload)


# ==================== Singleton Instance ====================

_api_client_instance: Optional[RegistrationChangeApiClient] = None


def get_api_client(config: Optional[ApiConfig] = None) -> RegistrationChangeApiClient:
    """
    Shared RegistrationChangeApiClient instance.

    Args:
        config: API configuration (used on first call only)
    """
    global _api_client_instance

    if _api_client_instance is None:
        if config is None:
            config = ApiConfig()
        _api_client_instance = RegistrationChangeApiClient(config)

    return _api_client_instance


def reset_api_client():
    """Drop the shared client (for tests)."""
    global _api_client_instance
    _api_client_instance = None
