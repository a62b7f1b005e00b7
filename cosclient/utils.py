import hashlib
import hmac
import mimetypes
import time
from email.utils import formatdate
from urllib.parse import quote

SIGN_ALGO = 'sha1'
DEFAULT_EXPIRES = 900

# encodeURI leaves these literal; '?' and '#' are escaped so requests keeps them in the path
URI_SAFE = "/;,:@&=+$!*'()"


def cam_safe_url_encode(value) -> str:
    """
    encodeURIComponent with ! ' ( ) * escaped as well.
    Only A-Z a-z 0-9 - _ . ~ are left literal.
    """
    return quote(str(value), safe='')


def encode_uri(path: str) -> str:
    return quote(path, safe=URI_SAFE)


def canonicalize(obj: dict = None) -> (list, list):
    """
    Canonical form of a header or query map.
    Returns (keys, pairs), both ordered by the lowercased key.
    """
    keys = []
    pairs = []
    # sorted() is stable, equal lowercased keys keep their input order
    for k in sorted(obj or {}, key=lambda k: k.lower()):
        v = obj[k]
        key = cam_safe_url_encode(k.lower())
        val = cam_safe_url_encode('' if v is None else v)
        keys.append(key)
        pairs.append(f"{key}={val}")
    return keys, pairs


def http_date(timestamp: float = None) -> str:
    """RFC 1123 date in GMT, English names whatever the locale."""
    return formatdate(timestamp, usegmt=True)


def guess_content_type(ext: str):
    """Map a bare extension ('png') to a content type, None when unknown."""
    if not ext:
        return None
    return mimetypes.guess_type(f"file.{ext.lstrip('.')}", strict=False)[0]


class COSSigner:
    """
    COS request signature (q-sign-algorithm=sha1).
    https://www.qcloud.com/document/product/436/7778
    """

    def __init__(self, secret_id: str, secret_key: str):
        self.secret_id = secret_id
        self._secret_key = secret_key

    def __repr__(self):
        return f"COSSigner(secret_id={self.secret_id!r})"

    def get_auth(self, method: str, key: str, query: dict = None, headers: dict = None,
                 expires: int = None, now: int = None) -> str:
        """
        Build the Authorization token for one request.
        - method: HTTP method, any casing
        - key: object key, '/' is prepended when missing
        - query / headers: maps to sign, both may be empty
        - expires: window end in unix seconds (default now + 900)
        - now: window start override; defaults to the current second minus one
        """
        if now is None:
            now = int(time.time()) - 1
        exp = expires if expires is not None else now + DEFAULT_EXPIRES
        sign_time = f"{now};{exp}"
        key_time = sign_time
        pathname = key if key.startswith('/') else '/' + key

        header_keys, header_pairs = canonicalize(headers)
        query_keys, query_pairs = canonicalize(query)

        # 1) SignKey
        sign_key = hmac.new(self._secret_key.encode('utf-8'),
                            key_time.encode('utf-8'),
                            hashlib.sha1).hexdigest()

        # 2) FormatString, empty segments included
        format_string = "\n".join([
            method.lower(),
            pathname,
            "&".join(query_pairs),
            "&".join(header_pairs),
            ''
        ])

        # 3) StringToSign
        hashed = hashlib.sha1(format_string.encode('utf-8')).hexdigest()
        string_to_sign = "\n".join([SIGN_ALGO, sign_time, hashed, ''])

        # 4) Signature
        signature = hmac.new(sign_key.encode('utf-8'),
                             string_to_sign.encode('utf-8'),
                             hashlib.sha1).hexdigest()

        # 5) Authorization, field order is part of the wire format
        return "&".join([
            f"q-sign-algorithm={SIGN_ALGO}",
            f"q-ak={self.secret_id}",
            f"q-sign-time={sign_time}",
            f"q-key-time={key_time}",
            f"q-header-list={';'.join(header_keys)}",
            f"q-url-param-list={';'.join(query_keys)}",
            f"q-signature={signature}",
        ])
