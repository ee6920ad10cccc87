import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Generator

import orjson
import pytest

from okx_rest.api import OkxApiClient
from tests.mock_executors import MockHttpExecutor, MockOutputNotExhausted

DATA_DIR = Path(__file__).parent.joinpath("data")

BASE_URL = "https://www.okx.com"

log = logging.getLogger(__name__)


@pytest.fixture
def mock_http_client() -> Generator[tuple[OkxApiClient, MockHttpExecutor], None, None]:
    mock_http = MockHttpExecutor()
    client = OkxApiClient(
        api_key="FOO",
        secret_key="BAR",
        passphrase="BAZ",
        # replace real network requests with our mock
        executor=mock_http,
    )

    yield (client, mock_http)

    if len(mock_http.staged_outputs) > 0:
        raise MockOutputNotExhausted(mock_http.staged_outputs)


@lru_cache(maxsize=1)
def data_files() -> list[Path]:
    return list(DATA_DIR.iterdir())


def json_data_files(name: str) -> list[Path]:
    return list(
        sorted(
            path
            for path in data_files()
            if path.match(f"{name}.*.json")
        )
    )


def load_json(name: str, case: int | None = None) -> dict[str, Any]:
    case_part = f"case{case}." if case is not None else ""
    path = DATA_DIR / f"{name}.{case_part}json"
    with open(path, "rb") as fh:
        return orjson.loads(fh.read())


def load_json_all_cases(name: str) -> list[tuple[dict[str, Any], Path]]:
    """Load all json payloads for a given base name (case0, case1, ...)."""
    results = []
    for path in json_data_files(name):
        with open(path, "rb") as fh:
            payload = orjson.loads(fh.read())
            results.append((payload, path))
    return results


def query_of(url: str) -> str:
    """Return the raw query string of a recorded URL."""
    return url.partition("?")[2]
