# tests/test_key_providers.py
import threading

import pytest
import requests

from pkg_authgate.adapters.keys.local import InMemoryKeyProvider, LocalFileKeyProvider
from pkg_authgate.adapters.keys.remote import HttpKeyProvider
from pkg_authgate.domain.exceptions import KeyLoadError


# --- local file ------------------------------------------------------------


def test_local_file_provider_reads_key(key_files, key_pair):
    private_path, public_path = key_files

    assert LocalFileKeyProvider(private_path).load() == key_pair[0]
    assert LocalFileKeyProvider(str(public_path)).load() == key_pair[1]


def test_local_file_provider_missing_file(tmp_path):
    provider = LocalFileKeyProvider(tmp_path / "nope.pem")

    with pytest.raises(KeyLoadError) as exc_info:
        provider.load()

    assert isinstance(exc_info.value.cause, FileNotFoundError)


def test_local_file_provider_empty_file(tmp_path):
    path = tmp_path / "empty.pem"
    path.write_bytes(b"")

    with pytest.raises(KeyLoadError):
        LocalFileKeyProvider(path).load()


def test_local_file_provider_rereads_without_cache(tmp_path):
    path = tmp_path / "key.pem"
    path.write_bytes(b"first")
    provider = LocalFileKeyProvider(path)

    assert provider.load() == b"first"
    path.write_bytes(b"second")
    assert provider.load() == b"second"


def test_local_file_provider_cache(tmp_path):
    path = tmp_path / "key.pem"
    path.write_bytes(b"first")
    provider = LocalFileKeyProvider(path, cache=True)

    assert provider.load() == b"first"
    path.write_bytes(b"second")
    assert provider.load() == b"first"

    provider.invalidate()
    assert provider.load() == b"second"


def test_local_file_provider_concurrent_loads(tmp_path):
    path = tmp_path / "key.pem"
    path.write_bytes(b"shared")
    provider = LocalFileKeyProvider(path, cache=True)
    results = []

    def _worker():
        results.append(provider.load())

    threads = [threading.Thread(target=_worker) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results == [b"shared"] * 16


# --- in memory -------------------------------------------------------------


def test_in_memory_provider():
    assert InMemoryKeyProvider(b"pem").load() == b"pem"
    assert InMemoryKeyProvider("pem").load() == b"pem"

    with pytest.raises(KeyLoadError):
        InMemoryKeyProvider(b"").load()


# --- remote ----------------------------------------------------------------


class _FakeResponse:
    def __init__(self, content: bytes, status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class _FakeSession:
    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def test_http_provider_fetches_and_caches():
    session = _FakeSession(_FakeResponse(b"remote-pem"))
    provider = HttpKeyProvider(
        "https://secrets.example.com/keys/public",
        headers={"X-Token": "t"},
        session=session,
    )

    assert provider.load() == b"remote-pem"
    assert provider.load() == b"remote-pem"

    assert len(session.calls) == 1
    assert session.calls[0]["headers"] == {"X-Token": "t"}
    assert session.calls[0]["timeout"] == 5.0


def test_http_provider_without_cache():
    session = _FakeSession(_FakeResponse(b"one"), _FakeResponse(b"two"))
    provider = HttpKeyProvider("https://secrets.example.com/k", cache_ttl_seconds=0, session=session)

    assert provider.load() == b"one"
    assert provider.load() == b"two"


@pytest.mark.parametrize(
    "response",
    [
        _FakeResponse(b"", status_code=200),
        _FakeResponse(b"denied", status_code=403),
        requests.ConnectionError("unreachable"),
    ],
)
def test_http_provider_failures(response):
    provider = HttpKeyProvider("https://secrets.example.com/k", session=_FakeSession(response))

    with pytest.raises(KeyLoadError):
        provider.load()
