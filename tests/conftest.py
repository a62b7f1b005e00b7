import sys
from types import SimpleNamespace
from pathlib import Path
from urllib.parse import unquote, urlsplit

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


class FakeRaw:
    """urllib3.HTTPResponse stand-in: stream() yields body chunks, optionally failing."""

    def __init__(self, response):
        self.response = response
        self.decode_content = None

    def stream(self, amt=None, decode_content=None):
        self.decode_content = decode_content
        for i, chunk in enumerate(self.response.iter_content(amt)):
            if self.response.fail_after is not None and i >= self.response.fail_after:
                raise self.response.error
            yield chunk


class FakeResponse:
    def __init__(self, status_code=200, headers=None, content=b'', chunk=4,
                 error=None, fail_after=None):
        self.error = error
        self.fail_after = fail_after
        self.raw = FakeRaw(self)
        self.status_code = status_code
        self.headers = headers or {}
        self.content = content
        self.chunk = chunk
        self.closed = False

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.content), self.chunk):
            yield self.content[i:i + self.chunk]

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


class FakeSession:
    """
    In-memory stand-in for requests.Session that behaves like a bucket:
    PUT stores, GET/HEAD read, DELETE removes. Bodies are drained the way
    requests would drain them.
    """

    def __init__(self):
        self.objects = {}
        self.calls = []
        self.sources = {}

    def request(self, method, url, headers=None, data=None, stream=False):
        if data is not None and not isinstance(data, (bytes, bytearray)):
            data = b''.join(data)
        self.calls.append({'method': method, 'url': url, 'headers': dict(headers or {}),
                           'data': data, 'stream': stream})
        path = unquote(urlsplit(url).path)
        if method == 'PUT':
            self.objects[path] = bytes(data or b'')
            return FakeResponse(200, {'ETag': '"abc"', 'Content-Length': '0'})
        if path not in self.objects:
            return FakeResponse(404, {'Content-Length': '0'})
        if method == 'DELETE':
            del self.objects[path]
            return FakeResponse(204, {})
        body = self.objects[path]
        if method == 'HEAD':
            return FakeResponse(200, {'ETag': '"abc"', 'Content-Length': str(len(body))})
        return FakeResponse(200, {'ETag': '"abc"'}, body)

    def get(self, url, stream=False):
        self.calls.append({'method': 'GET', 'url': url, 'headers': {}, 'data': None,
                           'stream': stream})
        resp = FakeResponse(200, {}, self.sources.get(url, b''))
        self.last_source = resp
        return resp


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def conf():
    return {
        'app_id': '1250000000',
        'secret_id': 'AKIDtest',
        'secret_key': 'secretkey',
        'bucket': 'bucket',
        'region': 'ap-guangzhou',
    }


@pytest.fixture
def frozen_clock(monkeypatch):
    """time.time() == 1700000001.4, so the signing window starts at 1700000000."""
    clock = SimpleNamespace(time=lambda: 1700000001.4)
    monkeypatch.setattr('cosclient.utils.time', clock)
    monkeypatch.setattr('cosclient.auth.time', clock)
    monkeypatch.setattr('cosclient.auth.http_date', lambda: 'Tue, 01 Jan 2030 00:00:00 GMT')
