import logging
import posixpath

import requests

from .auth import Authenticator
from .dispatcher import CHUNK_SIZE, Reply, request
from .utils import guess_content_type

logger = logging.getLogger(__name__)


def _scalar(value):
    """Unquoted YAML ids such as `app_id: 1250000000` load as int."""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class COSClient:
    """
    Tencent COS object client: put / get / delete / head and signed URLs.

    `session` is an optional shared requests.Session used as connection pool.
    `content_type_lookup` maps an extension ('png') to a content type or None.
    """

    def __init__(self, app_id: str, secret_id: str, secret_key: str, bucket: str, region: str,
                 prefix: str = None, cdn: str = None, session: requests.Session = None,
                 content_type_lookup=guess_content_type):
        self.auth = Authenticator(app_id, secret_id, secret_key, bucket, region,
                                  prefix=prefix, cdn=cdn)
        self.session = session
        self.content_type_lookup = content_type_lookup

    @classmethod
    def from_config(cls, conf: dict, session: requests.Session = None) -> 'COSClient':
        return cls(
            app_id=_scalar(conf.get('app_id')),
            secret_id=conf.get('secret_id'),
            secret_key=conf.get('secret_key'),
            bucket=_scalar(conf.get('bucket')),
            region=conf.get('region'),
            prefix=conf.get('prefix'),
            cdn=conf.get('cdn'),
            session=session,
        )

    def content_type(self, method: str, key: str, options: dict = None) -> str:
        options = options or {}
        if method in ('PUT', 'POST'):
            ext = posixpath.splitext(options.get('name') or self.auth.file_key(key))[1]
            found = self.content_type_lookup(ext.lstrip('.')) if ext else None
            if found:
                return found
        return options.get('type') or ''

    def request_object(self, method: str, key: str, data=None, raw: bool = False,
                       options: dict = None) -> Reply:
        options = options or {}
        headers = {'Content-Type': self.content_type(method, key, options)}
        if options.get('md5'):
            headers['Content-MD5'] = options['md5']
        _, descriptor = self.auth.sign(method, key, headers=headers)
        return request(descriptor, data, raw=raw, session=self.session)

    def put_object(self, key: str, data, options: dict = None) -> Reply:
        return self.request_object('PUT', key, data, options=options)

    def get_object(self, key: str) -> Reply:
        return self.request_object('GET', key, raw=True)

    def delete_object(self, key: str) -> Reply:
        return self.request_object('DELETE', key)

    def object_meta(self, key: str) -> Reply:
        return self.request_object('HEAD', key)

    def head_object(self, key: str) -> Reply:
        return self.request_object('HEAD', key)

    def get_sign_url(self, key: str, ttl: int = 60) -> str:
        return self.auth.sign_url(key, ttl)

    def put_object_with_url(self, key: str, url: str, options: dict = None) -> str:
        """
        Fetch `url` anonymously and stream it into `key`, then return a
        signed URL for the stored object.
        The source fetch has no size or time bound.
        """
        http = self.session or requests
        with http.get(url, stream=True) as src:
            logger.debug("Source %s -> %s", url, src.status_code)
            reply = self.put_object(key, src.iter_content(CHUNK_SIZE), options)
        logger.debug("Stored %s -> %s", key, reply.code)
        return self.get_sign_url(key)
