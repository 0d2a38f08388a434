"""
Pytest configuration for provider tests

Blockfrost is faked with httpx.MockTransport: routes map a request path to a
JSON body, a list of pages, or a callable.
"""

from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
import pytest_asyncio

from utxo_provider.fetching import BlockfrostProvider

BASE_URL = "https://blockfrost.test"
PROJECT_ID = "preprodTestProject"

TX_A = "a" * 64
TX_B = "b" * 64
TX_C = "c" * 64
ADDRESS = "addr_test1qz2fxv2umyhttkxyxp8x0dlpdt3k6cwng5pxj3jhsydzer3jcu5d8ps7zex2k2xt3uqxgjqnnj83ws8lhrn648jjxtwq2ytjqp"
POLICY = "0be55d262b29f564998ff81efe21bdc0022621c12f15af08d0f2ddb1"
UNIT = POLICY + "4e4654"  # "NFT"


class Paged:
    """Paginated collection: page N (1-based) is pages[N-1], then empty pages."""

    def __init__(self, pages: List[List[Dict[str, Any]]]):
        self.pages = pages

    def page(self, number: int) -> List[Dict[str, Any]]:
        return self.pages[number - 1] if 0 < number <= len(self.pages) else []


def error_body(status: int, message: str = "error") -> Dict[str, Any]:
    return {"status_code": status, "error": "Error", "message": message}


class FakeBlockfrost:
    """Routes requests by path and records every request seen."""

    def __init__(self):
        self.routes: Dict[str, Any] = {}
        self.requests: List[httpx.Request] = []

    def route(self, path: str, body: Any = None, status: int = 200):
        self.routes[path] = (status, body)

    def paged(self, path: str, pages: List[List[Dict[str, Any]]]):
        self.routes[path] = Paged(pages)

    def error(self, path: str, status: int, message: str = "error"):
        self.route(path, error_body(status, message), status)

    def handle(self, path: str, fn: Callable[[httpx.Request], Any]):
        self.routes[path] = fn

    def calls(self, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def handler(self, request: httpx.Request):
        self.requests.append(request)
        target = self.routes.get(request.url.path)
        if target is None:
            return httpx.Response(404, json=error_body(404, "The requested component has not been found."))
        if callable(target):
            return target(request)
        if isinstance(target, Paged):
            return httpx.Response(200, json=target.page(int(request.url.params.get("page", "1"))))
        status, body = target
        return httpx.Response(status, json=body)


def utxo_record(
    tx_hash: str = TX_A,
    output_index: int = 0,
    lovelace: str = "2000000",
    address: str = ADDRESS,
    extra_amount: Optional[List[Dict[str, str]]] = None,
    **fields,
) -> Dict[str, Any]:
    """Blockfrost address UTxO record."""
    record = {
        "address": address,
        "tx_hash": tx_hash,
        "output_index": output_index,
        "amount": [{"unit": "lovelace", "quantity": lovelace}] + (extra_amount or []),
        "block": "f" * 64,
        "data_hash": None,
        "inline_datum": None,
        "reference_script_hash": None,
    }
    record.update(fields)
    return record


def tx_output(output_index: int, lovelace: str = "1000000", **fields) -> Dict[str, Any]:
    """Blockfrost /txs/{hash}/utxos output record (no tx_hash)."""
    record = utxo_record(output_index=output_index, lovelace=lovelace, **fields)
    del record["tx_hash"]
    del record["block"]
    record["collateral"] = False
    return record


@pytest.fixture
def fake():
    return FakeBlockfrost()


@pytest_asyncio.fixture
async def make_provider(fake):
    """Provider factory; every provider made is closed on teardown."""
    providers: List[BlockfrostProvider] = []

    def _make(**kwargs) -> BlockfrostProvider:
        provider = BlockfrostProvider(
            url=BASE_URL,
            project_id=PROJECT_ID,
            transport=httpx.MockTransport(kwargs.pop("handler", fake.handler)),
            **kwargs,
        )
        providers.append(provider)
        return provider

    yield _make

    for provider in providers:
        await provider.close()


@pytest_asyncio.fixture
async def provider(make_provider):
    async with make_provider() as provider:
        yield provider
