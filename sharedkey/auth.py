from urllib.parse import quote, urlencode

from requests.auth import AuthBase

from .credentials import AccountIdentity
from .models import Request
from .signer import sign_request

DEFAULT_API_VERSION = '2021-08-06'
VERSION_HEADER = 'x-ms-version'


class SharedKeyAuth(AuthBase):
    """Signs each request prepared by `requests` just before it is sent."""

    def __init__(self, identity: AccountIdentity, log_string_to_sign: bool = False):
        self.identity = identity
        self.log_string_to_sign = log_string_to_sign

    def __call__(self, r):
        return sign_request(r, self.identity, log_string_to_sign=self.log_string_to_sign)


class Authenticator:
    def __init__(self, account_name: str, account_key: str, endpoint: str = None,
                 api_version: str = DEFAULT_API_VERSION, identity: AccountIdentity = None,
                 log_string_to_sign: bool = False):
        self.identity = identity or AccountIdentity.from_base64(account_name, account_key)
        self.endpoint = (endpoint or f"https://{self.identity.account_name}.blob.core.windows.net").rstrip('/')
        self.api_version = api_version
        self.log_string_to_sign = log_string_to_sign

    @classmethod
    def from_identity(cls, identity: AccountIdentity, **kwargs) -> 'Authenticator':
        return cls(identity.account_name, None, identity=identity, **kwargs)

    @property
    def auth(self) -> SharedKeyAuth:
        return SharedKeyAuth(self.identity, log_string_to_sign=self.log_string_to_sign)

    def build_url(self, path: str = '/', query: dict = None) -> str:
        if not path.startswith('/'):
            path = '/' + path
        url = self.endpoint + quote(path, safe="/~")
        if query:
            url += '?' + urlencode(query, doseq=True, quote_via=quote)
        return url

    def base_headers(self, headers: dict = None) -> dict:
        headers = dict(headers) if headers else {}
        if not any(k.lower() == VERSION_HEADER for k in headers):
            headers[VERSION_HEADER] = self.api_version
        return headers

    def sign(self, method: str, path: str = '/', query: dict = None, headers: dict = None,
             payload: bytes = b'') -> (dict, str):
        url = self.build_url(path, query)
        req = Request(method=method, url=url, headers=self.base_headers(headers), body=payload)
        sign_request(req, self.identity, log_string_to_sign=self.log_string_to_sign)
        return dict(req.headers), url
