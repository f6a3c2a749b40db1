import json
import math

import httpx
import pytest

from carts import cart_runner
from portal.clients.ClientInterface import ClientInterface
from report import report_runner
from report.services.ReportService import ReportFetchError

from conftest import RecordingHandler, make_page, make_record, paged_responder


@pytest.fixture
def keyfile(tmp_path):
    path = tmp_path / "keypairs.json"
    path.write_text(
        json.dumps({"test": {"key": "k", "secret": "s", "server": "https://portal.example.org"}}),
        encoding="utf-8",
    )
    return str(path)


@pytest.fixture
def route_to(monkeypatch):
    """Make every booted client talk to the given handler instead of the network."""
    def install(handler):
        async def fake_boot(self, transport=None):
            self._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        monkeypatch.setattr(ClientInterface, "boot", fake_boot)
    return install


class TestReportRunner:
    def test_defaults(self):
        args = report_runner.build_parser().parse_args([])

        assert args.key == "localhost"
        assert args.keyfile == "keypairs.json"
        assert args.record_type == "Experiment"
        assert args.property == "files.@id"
        assert args.filter == ""
        assert args.greater == 1
        assert args.less == math.inf
        assert args.debug is False

    @pytest.mark.asyncio
    async def test_prints_count_and_matches(self, keyfile, route_to, capsys):
        records = [make_record("/exp/1", files=["a", "b"]), make_record("/exp/2", files=[])]
        handler = RecordingHandler(paged_responder([make_page(records)]))
        route_to(handler)

        results = await report_runner.main(["-k", "test", "-f", keyfile, "-a", "status=released"])

        out = capsys.readouterr().out
        assert "\n1 results\n/exp/1 - 2\n" in out
        assert [str(result) for result in results] == ["/exp/1 - 2"]
        assert handler.requests[0].url.params["status"] == "released"

    @pytest.mark.asyncio
    async def test_length_bounds(self, keyfile, route_to):
        records = [make_record(f"/exp/{n}", files=["x"] * n) for n in range(1, 6)]
        route_to(RecordingHandler(paged_responder([make_page(records)])))

        results = await report_runner.main(["-k", "test", "-f", keyfile, "-g", "2", "-l", "3"])

        assert [str(result) for result in results] == ["/exp/2 - 2", "/exp/3 - 3"]

    @pytest.mark.asyncio
    async def test_unknown_key_fails_before_any_request(self, keyfile, route_to):
        handler = RecordingHandler(paged_responder([]))
        route_to(handler)

        with pytest.raises(ValueError, match="not found"):
            await report_runner.main(["-k", "missing", "-f", keyfile])

        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_fetch_error_propagates(self, keyfile, route_to):
        route_to(RecordingHandler(lambda request: httpx.Response(500)))

        with pytest.raises(ReportFetchError, match="Could not load report page"):
            await report_runner.main(["-k", "test", "-f", keyfile])


class TestCartRunner:
    def test_defaults(self):
        args = cart_runner.build_parser().parse_args([])

        assert args.count == 1
        assert args.prefix == "Cart"
        assert args.start == 1

    @pytest.mark.asyncio
    async def test_creates_carts(self, keyfile, route_to, capsys):
        handler = RecordingHandler(lambda request: httpx.Response(200, json={"@graph": [{"@id": "/carts/new/"}]}))
        route_to(handler)

        batch = await cart_runner.main(["-k", "test", "-f", keyfile, "-n", "2", "-p", "Mine"])

        assert [json.loads(request.content)["name"] for request in handler.requests] == ["Mine 1", "Mine 2"]
        assert all(request.method == "PUT" for request in handler.requests)
        assert len(batch.created) == 2
        assert "2 of 2 carts created" in capsys.readouterr().out
