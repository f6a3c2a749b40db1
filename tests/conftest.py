import logging
from typing import Callable

import httpx
import pytest
import pytest_asyncio

from portal.clients.portal.encoded.PortalClientEncoded import PortalClientEncoded
from portal.helper.HelperConfig import HelperConfig
from portal.logging.logging_setup import CustomFormatter
from portal.models.keypair import Keypair


def make_record(record_id: str, files: list[str] | None = None, **fields) -> dict:
    record = {"@id": record_id, **fields}
    if files is not None:
        record["files"] = files
    return record


def make_page(records: list[dict], total: int | None = None) -> dict:
    return {"@graph": records, "total": total if total is not None else len(records)}


class RecordingHandler:
    """MockTransport handler that serves canned responses and remembers the requests it saw."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self._responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    def offsets(self) -> list[int]:
        return [int(request.url.params["from"]) for request in self.requests]


def paged_responder(pages: list[dict]) -> Callable[[httpx.Request], httpx.Response]:
    """Serve pages by their `from` offset (500 per page), then empty pages."""
    def respond(request: httpx.Request) -> httpx.Response:
        index = int(request.url.params["from"]) // 500
        page = pages[index] if index < len(pages) else make_page([], total=0)
        return httpx.Response(200, json=page)
    return respond


@pytest.fixture
def helper_config():
    return HelperConfig(logger=logging.getLogger("portal.tests"))


@pytest.fixture
def keypair():
    return Keypair(key="key", secret="secret", server="https://portal.example.org/")


@pytest.fixture
def anonymous_keypair():
    return Keypair(server="http://localhost:6543")


@pytest_asyncio.fixture
async def booted_client(helper_config, keypair):
    """Factory that boots an encoded portal client against a MockTransport handler."""
    clients: list[PortalClientEncoded] = []

    async def factory(handler, client_keypair: Keypair | None = None) -> PortalClientEncoded:
        client = PortalClientEncoded(helper_config=helper_config, keypair=client_keypair or keypair)
        await client.boot(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.close()


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Drop handlers installed by setup_logging() so they do not outlive the captured streams."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler.formatter, CustomFormatter):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
