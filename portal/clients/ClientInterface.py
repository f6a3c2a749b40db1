from abc import ABC, abstractmethod

import httpx

from portal.helper.HelperConfig import HelperConfig


class ClientInterface(ABC):
    def __init__(self, helper_config: HelperConfig):
        self.logging = helper_config.get_logger()
        self._helper_config = helper_config
        self.timeout = helper_config.get_timeout_val(f"{self.get_client_type().upper()}_TIMEOUT")

        self._client: httpx.AsyncClient | None = None

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def get_client_type(self) -> str:
        """
        Returns the type of the client in lowercase. E.g. "portal"
        """
        return self._get_client_type().lower()

    @abstractmethod
    def _get_client_type(self) -> str:
        """
        Returns the type of the client. E.g. "portal"
        """
        pass

    def get_engine_name(self) -> str:
        """
        Returns the name of the engine used by the client. E.g. "encoded"
        """
        return self._get_engine_name().lower()

    @abstractmethod
    def _get_engine_name(self) -> str:
        """
        Returns the name of the engine used by the client. E.g. "encoded"
        """
        pass

    ################ AUTH ##################
    @abstractmethod
    def _get_auth_header(self) -> dict:
        """
        Returns the authentication header for the backend server, if credentials are set.

        Returns:
            dict: A dictionary containing the auth data
        """
        pass

    ################ HEADERS ##################
    def _get_default_headers(self) -> dict:
        """
        Returns headers sent with every request, before the auth header is merged in.
        """
        return {}

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_base_url(self) -> str:
        """
        Returns the base URL of the backend server

        Returns:
            str: The base URL of the backend server (e.g. "http://localhost:6543")
        """
        pass

    ##########################################
    ############ CORE REQUESTS ###############
    ##########################################

    async def boot(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialise the HTTP client.

        Args:
            transport: Optional transport to route requests through instead of the network.
        """
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def build_url(self, endpoint: str = "") -> str:
        """Join an endpoint (with any query string already in it) onto the base URL."""
        endpoint = "/" + endpoint.strip().lstrip("/") if endpoint.strip() else ""
        return f"{self._get_base_url().rstrip('/')}{endpoint}"

    async def do_request(
        self,
        method: str = "GET",
        json: dict | None = None,
        endpoint: str = "",
    ) -> httpx.Response:
        """Send an HTTP request to the backend.

        Status codes are not checked here; callers decide what a non-2xx response means.

        Args:
            method: HTTP method (GET, PUT, POST, …).
            json: JSON-serialisable body.
            endpoint: Path to append to the base URL (leading slash optional), including any query string.

        Returns:
            The raw httpx.Response.

        Raises:
            Exception: If the client is not initialised.
            httpx.HTTPError: On transport failures.
        """
        if self._client is None:
            raise Exception("HTTP client not initialised. Call boot() before making requests.")

        headers: dict = {}
        headers.update(self._get_default_headers())
        headers.update(self._get_auth_header())

        url = self.build_url(endpoint)
        return await self._client.request(method, url, headers=headers, json=json)
