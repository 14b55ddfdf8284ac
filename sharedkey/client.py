import logging

import requests

logger = logging.getLogger(__name__)


class StorageClient:
    def __init__(self, auth, timeout: float = 30.0, session: requests.Session = None):
        self.auth = auth
        self.timeout = timeout
        self.session = session or requests.Session()

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> 'StorageClient':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def request(self, method: str, path: str = '/', query: dict = None, headers: dict = None,
                data=None) -> requests.Response:
        """
        Send a signed request. A 404 on GET or HEAD is returned to the caller;
        any other error status raises requests.HTTPError.
        """
        method = method.upper()
        url = self.auth.build_url(path, query)
        resp = self.session.request(
            method, url,
            headers=self.auth.base_headers(headers),
            data=data,
            auth=self.auth.auth,
            timeout=self.timeout,
        )
        logger.info("%s %s -> %s", method, url, resp.status_code)
        if resp.status_code == 404 and method in ('GET', 'HEAD'):
            return resp
        resp.raise_for_status()
        return resp
