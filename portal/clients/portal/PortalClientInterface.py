from abc import abstractmethod

import httpx

from portal.clients.ClientInterface import ClientInterface
from portal.clients.portal.models.Cart import CartFailure, CartResult, CartSuccess
from portal.clients.portal.models.ReportPage import PageFailure, PageResult, PageSuccess, ReportPage
from portal.helper.HelperConfig import HelperConfig
from portal.models.keypair import Keypair

REPORT_PAGE_SIZE = 500


class PortalClientInterface(ClientInterface):
    def __init__(self, helper_config: HelperConfig, keypair: Keypair):
        super().__init__(helper_config=helper_config)
        self._keypair = keypair

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        return "portal"

    def get_page_size(self) -> int:
        """
        Returns the number of records requested per report page.
        """
        return REPORT_PAGE_SIZE

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._keypair.server

    @abstractmethod
    def _get_endpoint_report(self, record_type: str, field: str, filters: str, offset: int, limit: int) -> str:
        """
        Returns the endpoint path, including its query string, for one report page.

        Args:
            record_type (str): Type of records to list, e.g. "Experiment".
            field (str): Dotted field path to include in each record, e.g. "files.@id".
            filters (str): Extra query-string filters appended verbatim, e.g. "status=released". May be empty.
            offset (int): Index of the first record of the page.
            limit (int): Maximum number of records in the page.

        Returns:
            str: The endpoint path, e.g. "/report/?type=Experiment&limit=500&from=0&field=files.%40id"
        """
        pass

    @abstractmethod
    def _get_endpoint_put_cart(self) -> str:
        """
        Returns the endpoint path for creating a cart with PUT.
        """
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_fetch_report_page(self, record_type: str, field: str, filters: str, offset: int) -> PageResult:
        """
        Fetches one page of report records.

        Transport and response errors do not raise; they are logged and returned as a PageFailure
        so the caller decides what to do with them.

        Args:
            record_type (str): Type of records to list.
            field (str): Dotted field path to request.
            filters (str): Extra query-string filters, may be empty.
            offset (int): Index of the first record of the page.

        Returns:
            PageResult: PageSuccess with the parsed page, or PageFailure.
        """
        endpoint = self._get_endpoint_report(
            record_type=record_type,
            field=field,
            filters=filters,
            offset=offset,
            limit=self.get_page_size(),
        )
        url = self.build_url(endpoint)
        self.logging.debug("REQUEST %s:%s:%s\n%s", self._get_base_url(), record_type, field, url)

        try:
            resp = await self.do_request(method="GET", endpoint=endpoint)
            self._log_response("SEARCH RESPONSE", resp)
            resp.raise_for_status()
            page = self._parse_endpoint_report(resp.json())
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers undecodable JSON and pydantic validation errors
            self.logging.error("OBJECT LOAD ERROR: %s", e)
            return PageFailure(url=url, error=str(e), status_code=self._status_code_of(e))
        return PageSuccess(page=page)

    async def do_put_cart(self, name: str, elements: list[str] | None = None) -> CartResult:
        """
        Creates one cart.

        Args:
            name (str): Display name of the new cart.
            elements (list[str] | None): @ids of datasets to put in the cart. Empty by default.

        Returns:
            CartResult: CartSuccess with the new cart's @id when the portal reports it, or CartFailure.
        """
        body = {"name": name, "elements": elements or []}
        url = self.build_url(self._get_endpoint_put_cart())
        self.logging.debug("PUT %s\n%s", url, body)

        try:
            resp = await self.do_request(method="PUT", endpoint=self._get_endpoint_put_cart(), json=body)
            self._log_response("CART RESPONSE", resp)
            resp.raise_for_status()
            cart_id = self._parse_endpoint_put_cart(resp.json())
        except (httpx.HTTPError, ValueError) as e:
            self.logging.error("CART CREATE ERROR %s: %s", name, e)
            return CartFailure(name=name, error=str(e), status_code=self._status_code_of(e))
        return CartSuccess(name=name, cart_id=cart_id)

    def _log_response(self, label: str, resp: httpx.Response) -> None:
        self.logging.debug("%s %d %s\n%s", label, resp.status_code, resp.reason_phrase, dict(resp.headers))

    def _status_code_of(self, error: Exception) -> int | None:
        if isinstance(error, httpx.HTTPStatusError):
            return error.response.status_code
        return None

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    @abstractmethod
    def _parse_endpoint_report(self, response: dict) -> ReportPage:
        """
        Parse a report listing response into a ReportPage.

        Raises:
            ValueError: If the response lacks the record list or has the wrong shape.
        """
        pass

    @abstractmethod
    def _parse_endpoint_put_cart(self, response: dict) -> str | None:
        """
        Extract the @id of the created cart from a PUT response, if the portal returns one.
        """
        pass
