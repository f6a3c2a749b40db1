import base64

from portal.clients.portal.PortalClientInterface import PortalClientInterface
from portal.clients.portal.models.ReportPage import ReportPage
from portal.helper.HelperConfig import HelperConfig
from portal.helper.field_path import encode_query_value
from portal.models.keypair import Keypair


class PortalClientEncoded(PortalClientInterface):
    def __init__(self, helper_config: HelperConfig, keypair: Keypair):
        super().__init__(helper_config=helper_config, keypair=keypair)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Encoded"

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        if not self._keypair.has_credentials():
            return {}
        token = base64.b64encode(f"{self._keypair.key}:{self._keypair.secret}".encode("utf-8")).decode("ascii")
        return {"Authorization": f"Basic {token}"}

    ################ HEADERS ##################
    def _get_default_headers(self) -> dict:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    ################ ENDPOINTS ##################
    def _get_endpoint_report(self, record_type: str, field: str, filters: str, offset: int, limit: int) -> str:
        plain_url = f"/report/?type={record_type}"
        if filters:
            plain_url += f"&{filters}"
        plain_url += f"&limit={limit}&from={offset}&field={encode_query_value(field)}"
        return plain_url

    def _get_endpoint_put_cart(self) -> str:
        return "/carts/@@put-cart"

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def _parse_endpoint_report(self, response: dict) -> ReportPage:
        if not isinstance(response, dict):
            raise ValueError(f"Report response must be a JSON object, got {type(response).__name__}")
        return ReportPage.model_validate(response)

    def _parse_endpoint_put_cart(self, response: dict) -> str | None:
        # encoded answers with a result object whose @graph holds the new cart
        graph = response.get("@graph") if isinstance(response, dict) else None
        if graph:
            first = graph[0]
            if isinstance(first, dict):
                return first.get("@id")
            return str(first)
        return response.get("@id") if isinstance(response, dict) else None
