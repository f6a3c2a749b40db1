from portal.helper.HelperConfig import HelperConfig
from portal.clients.portal.PortalClientInterface import PortalClientInterface
from portal.models.keypair import Keypair


class PortalClientManager:
    """
    Manager class to instantiate the portal client for the configured engine.
    """

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()

    def _get_engine_from_env(self) -> str:
        """
        Reads the portal engine from ENV configuration (PORTAL_ENGINE, default "encoded").

        Returns:
            str: The engine name with its first letter capitalised, e.g. "Encoded".
        """
        engine = self.helper_config.get_string_val("PORTAL_ENGINE", default="encoded")
        return engine.strip().lower().capitalize()

    def get_client(self, keypair: Keypair) -> PortalClientInterface:
        """
        Instantiates the portal client for the configured engine.

        Args:
            keypair (Keypair): Credentials and server of the target portal.

        Returns:
            PortalClientInterface: The client instance. It still needs to be booted.

        Raises:
            ValueError: If the configured engine is not supported.
        """
        engine = self._get_engine_from_env()
        className = f"PortalClient{engine}"
        try:
            module = __import__(
                f"portal.clients.portal.{engine.lower()}.{className}",
                fromlist=[className],
            )
            client_class = getattr(module, className)
        except (ImportError, AttributeError) as e:
            raise ValueError(f"Unsupported portal engine specified: '{engine}'. Error: {e}")
        self.logging.debug(f"Instantiated portal client for engine: {engine}")
        return client_class(helper_config=self.helper_config, keypair=keypair)
