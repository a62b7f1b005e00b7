from .auth import Authenticator, Credentials
from .client import COSClient
from .config import load_config
from .dispatcher import Reply, RequestDescriptor, request
from .exceptions import COSError, ConfigurationError, TransportError
from .utils import COSSigner, cam_safe_url_encode, canonicalize

__version__ = "0.1.0"
__all__ = [
    "Authenticator",
    "Credentials",
    "COSClient",
    "COSSigner",
    "COSError",
    "ConfigurationError",
    "TransportError",
    "Reply",
    "RequestDescriptor",
    "request",
    "load_config",
    "cam_safe_url_encode",
    "canonicalize",
]
