"""
Shared Key request signing.

The remote service rebuilds the same string to sign from the request it
receives, so every separator, casing rule and ordering below is part of
the wire contract.
https://learn.microsoft.com/rest/api/storageservices/authorize-with-shared-key
"""
import datetime
import logging
from email.utils import format_datetime
from urllib.parse import urlsplit, unquote

logger = logging.getLogger(__name__)

STORAGE_HEADER_PREFIX = 'x-ms-'
DATE_HEADER = 'x-ms-date'
CONTENT_LENGTH = 'Content-Length'
AUTHORIZATION = 'Authorization'

# Standard headers in the order they appear in the string to sign.
SIGNED_STANDARD_HEADERS = (
    'Content-Language',
    'Content-Encoding',
    CONTENT_LENGTH,
    'Content-MD5',
    'Content-Type',
    'Date',
    'If-Modified-Since',
    'If-Match',
    'If-None-Match',
    'If-Unmodified-Since',
    'Range',
)


def ordinal_key(text: str) -> bytes:
    """Sort key comparing strings byte by byte, independent of locale."""
    return text.encode('utf-8')


def _header_text(value) -> str:
    # requests sends bytes header names and values as-is, which is latin-1 on the wire.
    if value is None:
        return ''
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode('latin-1')
    return str(value)


def _header_items(headers) -> list:
    if headers is None:
        return []
    items = headers.items() if hasattr(headers, 'items') else headers
    return [(_header_text(k), _header_text(v)) for k, v in items]


def _get_header(headers, name: str) -> str:
    lname = name.lower()
    for k, v in _header_items(headers):
        if k.lower() == lname:
            return v
    return ''


def header_value_to_sign(headers, name: str) -> str:
    value = _get_header(headers, name)
    # From version 2015-02-21 a zero Content-Length is signed as empty.
    if name.lower() == CONTENT_LENGTH.lower() and value == '0':
        return ''
    return value


def canonicalized_headers(headers) -> str:
    """
    Every x-ms-* header as 'name:value\\n', names lowercased and sorted
    ordinally. When a name occurs more than once only the first survives.
    """
    storage_headers = [
        (k.lower(), v)
        for k, v in _header_items(headers)
        if k.lower().startswith(STORAGE_HEADER_PREFIX)
    ]
    storage_headers.sort(key=lambda item: ordinal_key(item[0]))

    lines = []
    seen = set()
    for name, value in storage_headers:
        if name in seen:
            continue
        seen.add(name)
        lines.append(f"{name.rstrip()}:{value.lstrip()}\n")
    return ''.join(lines)


def canonicalized_resource(url: str, account_name: str) -> str:
    parsed = urlsplit(url)
    path = parsed.path or '/'
    resource = f"/{account_name}{path}"

    queries = {}
    for param in parsed.query.split('&'):
        if not param:
            continue
        key, _, value = param.partition('=')
        queries[key.lower()] = value

    for key in sorted(queries, key=ordinal_key):
        resource += f"\n{key}:{unquote(queries[key])}"
    return resource


def string_to_sign(request, account_name: str) -> str:
    parts = [request.method.upper()]
    parts.extend(header_value_to_sign(request.headers, name)
                 for name in SIGNED_STANDARD_HEADERS)
    return ("\n".join(parts) + "\n"
            + canonicalized_headers(request.headers)
            + canonicalized_resource(request.url, account_name))


def _body_length(body):
    if isinstance(body, str):
        return len(body.encode('utf-8'))
    if isinstance(body, (bytes, bytearray)):
        return len(body)
    return None


def sign_request(request, identity, log_string_to_sign: bool = False):
    """
    Sign `request` in place with the identity's shared key and return it.

    Works on any object with `method`, `url`, a mutable case-insensitive
    `headers` mapping and `body`, including requests.PreparedRequest.
    """
    # 1) Freshness marker
    now = datetime.datetime.now(datetime.timezone.utc)
    request.headers[DATE_HEADER] = format_datetime(now, usegmt=True)

    # 2) Content-Length for in-memory bodies
    length = _body_length(request.body)
    if length:
        request.headers[CONTENT_LENGTH] = str(length)

    # 3) String to sign
    to_sign = string_to_sign(request, identity.account_name)
    if log_string_to_sign:
        logger.debug("String to sign for %s %s: %r", request.method, request.url, to_sign)

    # 4) HMAC-SHA256 + Base64
    signature = identity.compute_hmac_sha256(to_sign)

    # 5) Authorization header
    request.headers[AUTHORIZATION] = f"SharedKey {identity.account_name}:{signature}"
    return request
