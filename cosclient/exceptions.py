import requests


class COSError(Exception):
    """Base class for errors raised by cosclient itself."""


class ConfigurationError(COSError, ValueError):
    """Missing or malformed client configuration. Raised at construction."""


# Connection, DNS, TLS and stream failures surface as the requests exception
# that caused them; this alias lets callers catch them without importing requests.
TransportError = requests.RequestException
