from pydantic import BaseModel


class Keypair(BaseModel):
    """
    Represents one entry of the keyfile: the credentials and host of a portal target.

    Attributes:
        key (str): Access key id assigned by the portal. Empty for anonymous access.
        secret (str): Access key secret. Empty for anonymous access.
        server (str): Base URL of the portal, e.g. "https://www.encodeproject.org".
    """

    key: str = ""
    secret: str = ""
    server: str

    def has_credentials(self) -> bool:
        return bool(self.key or self.secret)
