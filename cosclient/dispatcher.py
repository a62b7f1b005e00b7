import logging
from dataclasses import dataclass, field

import requests
from urllib3.exceptions import ProtocolError, ReadTimeoutError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


@dataclass
class RequestDescriptor:
    hostname: str
    path: str
    method: str
    headers: dict = field(default_factory=dict)
    scheme: str = 'http'

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.hostname}{self.path}"


@dataclass
class Reply:
    code: int
    headers: dict
    buffer: bytes = b''
    body: str = ''


def iter_stream(stream, chunk_size: int = CHUNK_SIZE):
    """Yield a readable stream chunk by chunk until EOF."""
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        yield chunk


def iter_wire(resp, chunk_size: int = CHUNK_SIZE):
    """
    Yield the response body exactly as sent, Content-Encoding left applied.
    urllib3 read errors are raised as the requests exceptions iter_content uses.
    """
    try:
        yield from resp.raw.stream(chunk_size, decode_content=False)
    except ProtocolError as e:
        raise requests.exceptions.ChunkedEncodingError(e) from e
    except ReadTimeoutError as e:
        raise requests.exceptions.ConnectionError(e) from e


def _body(data):
    if isinstance(data, str):
        return data.encode('utf-8')
    if data is None or isinstance(data, (bytes, bytearray)):
        return data
    if hasattr(data, 'read'):
        return iter_stream(data)
    # any other iterable of bytes, e.g. Response.iter_content()
    return data


def request(descriptor: RequestDescriptor, data=None, raw: bool = False,
            session: requests.Session = None) -> Reply:
    """
    Perform one HTTP exchange.
    - data: bytes, a readable stream, an iterable of bytes, or None
    - raw: leave Reply.body empty and only fill Reply.buffer
    - session: shared connection pool; one-shot request when None
    Status codes are returned as-is. requests exceptions propagate unchanged.
    """
    http = session or requests
    resp = http.request(
        descriptor.method,
        descriptor.url,
        headers=descriptor.headers,
        data=_body(data),
        stream=True,
    )
    with resp:
        buf = b''.join(iter_wire(resp))
    logger.debug("%s %s -> %s (%d bytes)", descriptor.method, descriptor.url,
                 resp.status_code, len(buf))
    return Reply(
        code=resp.status_code,
        headers={k.lower(): v for k, v in resp.headers.items()},
        buffer=buf,
        body='' if raw else buf.decode('utf-8', errors='replace'),
    )
