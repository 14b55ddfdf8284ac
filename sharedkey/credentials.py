import base64
import binascii
import hashlib
import hmac
from dataclasses import dataclass, field

from .exceptions import ConfigError, InvalidAccountKeyError


@dataclass(frozen=True)
class AccountIdentity:
    """Storage account name and the raw bytes of its shared key."""
    account_name: str
    account_key: bytes = field(repr=False)

    @classmethod
    def from_base64(cls, account_name: str, encoded_key: str) -> 'AccountIdentity':
        try:
            key = base64.b64decode(encoded_key, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidAccountKeyError(
                f"Account key for '{account_name}' is not valid base64"
            ) from e
        return cls(account_name=account_name, account_key=key)

    @classmethod
    def from_connection_string(cls, conn_str: str) -> 'AccountIdentity':
        """
        Build an identity from 'AccountName=...;AccountKey=...;...'.
        Field names are matched case-insensitively; other fields are ignored.
        """
        fields = {}
        for part in conn_str.split(';'):
            if not part.strip():
                continue
            name, sep, value = part.partition('=')
            if not sep:
                raise ConfigError(f"Malformed connection string segment: '{name.strip()}'")
            fields[name.strip().lower()] = value.strip()

        for key in ('accountname', 'accountkey'):
            if not fields.get(key):
                raise ConfigError(f"Connection string is missing '{key}'")
        return cls.from_base64(fields['accountname'], fields['accountkey'])

    def compute_hmac_sha256(self, message: str) -> str:
        digest = hmac.new(self.account_key, message.encode('utf-8'), hashlib.sha256).digest()
        return base64.b64encode(digest).decode('utf-8')
