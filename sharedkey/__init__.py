from .credentials import AccountIdentity
from .signer import sign_request
from .auth import Authenticator, SharedKeyAuth
from .models import Request

__version__ = "0.1.0"
__all__ = ["AccountIdentity", "Authenticator", "Request", "SharedKeyAuth", "sign_request"]
