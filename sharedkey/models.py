from dataclasses import dataclass, field
from typing import Optional, Union

from requests.structures import CaseInsensitiveDict


@dataclass
class Request:
    """
    Outbound request as seen by the signer.
    Headers keep one value per case-insensitive name and remember the
    casing they were set with.
    """
    method: str
    url: str
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: Optional[Union[str, bytes]] = None

    def __post_init__(self):
        if not isinstance(self.headers, CaseInsensitiveDict):
            self.headers = CaseInsensitiveDict(self.headers or {})

    def copy(self) -> 'Request':
        return Request(method=self.method, url=self.url,
                       headers=self.headers.copy(), body=self.body)
