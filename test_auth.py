import unittest

import requests
from freezegun import freeze_time

from sharedkey.auth import Authenticator, SharedKeyAuth
from sharedkey.credentials import AccountIdentity
from sharedkey.exceptions import ConfigError, InvalidAccountKeyError
from sharedkey.signer import canonicalized_headers, string_to_sign

FIXED_TIME = '2023-12-15 12:00:00'
ACCOUNT_NAME = 'devstoreaccount1'
ACCOUNT_KEY = 'Eby8vdM02xNOcqFlqUwJPLlmEtlCDXJ1OUzFT50uSRZ6IFsuFq2UVErCz4I6tq/K1SZFPTOtr/KBHBeksoGMGw=='
ENDPOINT = 'https://devstoreaccount1.blob.core.windows.net'
PUT_BLOCK_AUTH = 'SharedKey devstoreaccount1:1zp8ZbMlsYE6uL1QLCTY6P/kf2EXGxmc1CKs1fZnt0U='


class TestAccountIdentity(unittest.TestCase):

    def test_from_base64(self) -> None:
        identity = AccountIdentity.from_base64(ACCOUNT_NAME, ACCOUNT_KEY)
        self.assertEqual(identity.account_name, ACCOUNT_NAME)
        self.assertEqual(len(identity.account_key), 64)

    def test_invalid_key(self) -> None:
        with self.assertRaises(InvalidAccountKeyError):
            AccountIdentity.from_base64(ACCOUNT_NAME, 'not base64!')

    def test_repr_hides_key(self) -> None:
        identity = AccountIdentity.from_base64(ACCOUNT_NAME, ACCOUNT_KEY)
        self.assertNotIn(repr(identity.account_key), repr(identity))

    def test_is_immutable(self) -> None:
        identity = AccountIdentity.from_base64(ACCOUNT_NAME, ACCOUNT_KEY)
        with self.assertRaises(AttributeError):
            identity.account_name = 'other'

    def test_from_connection_string(self) -> None:
        conn_str = (
            'DefaultEndpointsProtocol=http;AccountName=devstoreaccount1;'
            f'AccountKey={ACCOUNT_KEY};'
            'BlobEndpoint=http://127.0.0.1:10000/devstoreaccount1;'
        )
        identity = AccountIdentity.from_connection_string(conn_str)
        self.assertEqual(identity, AccountIdentity.from_base64(ACCOUNT_NAME, ACCOUNT_KEY))

    def test_connection_string_missing_key(self) -> None:
        with self.assertRaises(ConfigError):
            AccountIdentity.from_connection_string('AccountName=devstoreaccount1')

    def test_compute_hmac_sha256(self) -> None:
        identity = AccountIdentity.from_base64(ACCOUNT_NAME, ACCOUNT_KEY)
        message = (
            'GET' + '\n' * 12
            + 'x-ms-date:Fri, 15 Dec 2023 12:00:00 GMT\n'
            + '/devstoreaccount1/container/blob'
        )
        self.assertEqual(identity.compute_hmac_sha256(message), 'BfHsNGDho9MRfp3wI/2XT/bwI4hw37bSPS8DyxsYUic=')


class TestAuthenticator(unittest.TestCase):

    def setUp(self) -> None:
        self.auth = Authenticator(ACCOUNT_NAME, ACCOUNT_KEY)

    def test_default_endpoint(self) -> None:
        self.assertEqual(self.auth.endpoint, ENDPOINT)

    def test_build_url(self) -> None:
        self.assertEqual(
            self.auth.build_url('container/my file.txt', {'comp': 'block', 'blockid': 'YWJj='}),
            f'{ENDPOINT}/container/my%20file.txt?comp=block&blockid=YWJj%3D'
        )

    def test_version_header_not_duplicated(self) -> None:
        headers = self.auth.base_headers({'X-MS-Version': '2020-04-08'})
        self.assertEqual(headers, {'X-MS-Version': '2020-04-08'})

    @freeze_time(FIXED_TIME)
    def test_sign(self) -> None:
        headers, url = self.auth.sign(
            'PUT', '/container/blob.txt',
            query={'comp': 'block', 'blockid': 'YWJj='},
            headers={'Content-Type': 'text/plain', 'x-ms-blob-type': 'BlockBlob'},
            payload=b'hello',
        )
        self.assertEqual(url, f'{ENDPOINT}/container/blob.txt?comp=block&blockid=YWJj%3D')
        self.assertEqual(headers['x-ms-version'], '2021-08-06')
        self.assertEqual(headers['Authorization'], PUT_BLOCK_AUTH)


class TestSharedKeyAuth(unittest.TestCase):

    @freeze_time(FIXED_TIME)
    def test_signs_prepared_request(self) -> None:
        identity = AccountIdentity.from_base64(ACCOUNT_NAME, ACCOUNT_KEY)
        prepared = requests.Request(
            'PUT',
            f'{ENDPOINT}/container/blob.txt?comp=block&blockid=YWJj%3D',
            headers={
                'Content-Type': 'text/plain',
                'x-ms-version': '2021-08-06',
                'x-ms-blob-type': 'BlockBlob',
            },
            data=b'hello',
            auth=SharedKeyAuth(identity),
        ).prepare()

        self.assertEqual(prepared.headers['Authorization'], PUT_BLOCK_AUTH)
        self.assertEqual(prepared.headers['Content-Length'], '5')

    @freeze_time(FIXED_TIME)
    def test_bytes_header_values_signed_as_sent(self) -> None:
        identity = AccountIdentity.from_base64(ACCOUNT_NAME, ACCOUNT_KEY)
        prepared = requests.Request(
            'GET',
            f'{ENDPOINT}/container',
            headers={'x-ms-meta-a': b'v', 'Content-Type': b'text/plain'},
            auth=SharedKeyAuth(identity),
        ).prepare()

        self.assertEqual(
            string_to_sign(prepared, ACCOUNT_NAME),
            'GET\n\n\n\n\ntext/plain' + '\n' * 7
            + 'x-ms-date:Fri, 15 Dec 2023 12:00:00 GMT\n'
            + 'x-ms-meta-a:v\n'
            + '/devstoreaccount1/container'
        )
        self.assertEqual(
            canonicalized_headers([('x-ms-meta-city', 'Z\xfcrich'.encode('latin-1'))]),
            'x-ms-meta-city:Z\xfcrich\n'
        )


if __name__ == '__main__':
    unittest.main(verbosity=2)
