import re
import time
from dataclasses import dataclass, field

from .dispatcher import RequestDescriptor
from .exceptions import ConfigurationError
from .utils import COSSigner, encode_uri, http_date

CDN_RE = re.compile(
    r'^((^https?:)?(?://)?)([a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,6}$'
)

REQUIRED = ('app_id', 'secret_id', 'secret_key', 'bucket', 'region')


@dataclass(frozen=True)
class Credentials:
    app_id: str
    secret_id: str
    secret_key: str = field(repr=False)


class Authenticator:
    def __init__(self, app_id: str, secret_id: str, secret_key: str, bucket: str, region: str,
                 prefix: str = None, cdn: str = None):
        values = dict(app_id=app_id, secret_id=secret_id, secret_key=secret_key,
                      bucket=bucket, region=region)
        for name in REQUIRED:
            if not isinstance(values[name], str) or not values[name]:
                raise ConfigurationError(f"'{name}' must be a non-empty string")
        if cdn not in (None, '') and not (isinstance(cdn, str) and CDN_RE.fullmatch(cdn)):
            raise ConfigurationError("'cdn' must be a bare host or URL without trailing '/'")

        self.credentials = Credentials(app_id, secret_id, secret_key)
        self.bucket = bucket
        self.region = region
        self.prefix = prefix
        self.hostname = f"{bucket}-{self.credentials.app_id}.cos.{region}.myqcloud.com"
        self.cdn = cdn or f"http://{self.hostname}"
        self.signer = COSSigner(self.credentials.secret_id, self.credentials.secret_key)

    def file_key(self, key: str) -> str:
        res = self.prefix + key if self.prefix else key
        return res.lstrip('/')

    def sign(self, method: str, key: str, headers: dict = None) -> (dict, RequestDescriptor):
        """
        Sign an object request.
        Host, Date and Content-Type are the signed headers; anything else in
        `headers` is sent unsigned.
        """
        filekey = self.file_key(key)
        signed = {
            'Host': self.hostname,
            'Date': http_date(),
            'Content-Type': (headers or {}).get('Content-Type') or '',
        }
        auth = self.signer.get_auth(method, filekey, headers=signed)
        out = dict(headers or {})
        out.update(signed)
        out['Authorization'] = auth
        descriptor = RequestDescriptor(
            hostname=self.hostname,
            path=encode_uri(f"/{filekey}"),
            method=method,
            headers=out,
        )
        return out, descriptor

    def sign_url(self, key: str, ttl: int = 60) -> str:
        expires = int(time.time()) + ttl
        filekey = self.file_key(key)
        auth = self.signer.get_auth('GET', filekey, expires=expires)
        return f"{self.cdn}/{filekey}?{auth}"
