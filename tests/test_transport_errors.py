import socket
import ssl
import unittest

import httpx
import requests
from fakes import handshake_failure, refused_failure, resolution_failure

from hello.fetch._transport_errors import translate_transport_error
from hello.fetch.errors import REFUSED, RESOLUTION, TIMEOUT, TRANSPORT, InvalidUrlError, NetworkError, TlsError
from hello.fetch.models import FetchRequest

REQUEST = FetchRequest("https://google.ca")


def _chained(outer: Exception, cause: BaseException) -> Exception:
    try:
        raise outer from cause
    except Exception as e:
        return e


class RequestsTranslationTest(unittest.TestCase):
    def test_handshake_failure(self):
        error = translate_transport_error(handshake_failure(), REQUEST)
        self.assertIsInstance(error, TlsError)
        self.assertIn("TLS handshake with google.ca failed", str(error))
        self.assertIn("HANDSHAKE_FAILURE", str(error))
        self.assertEqual(error.url, "https://google.ca")

    def test_bare_ssl_error(self):
        error = translate_transport_error(requests.exceptions.SSLError("certificate verify failed"), REQUEST)
        self.assertIsInstance(error, TlsError)

    def test_resolution_failure(self):
        error = translate_transport_error(resolution_failure(), REQUEST)
        self.assertIsInstance(error, NetworkError)
        self.assertNotIsInstance(error, TlsError)
        self.assertEqual(error.reason, RESOLUTION)
        self.assertIn("Could not resolve host google.ca", str(error))

    def test_connection_refused(self):
        error = translate_transport_error(refused_failure(), REQUEST)
        self.assertIsInstance(error, NetworkError)
        self.assertEqual(error.reason, REFUSED)

    def test_connect_timeout(self):
        error = translate_transport_error(requests.exceptions.ConnectTimeout("timed out"), REQUEST)
        self.assertIsInstance(error, NetworkError)
        self.assertEqual(error.reason, TIMEOUT)
        self.assertIn("timed out", str(error))

    def test_read_timeout(self):
        error = translate_transport_error(requests.exceptions.ReadTimeout("read timed out"), REQUEST)
        self.assertEqual(error.reason, TIMEOUT)

    def test_invalid_url(self):
        error = translate_transport_error(requests.exceptions.InvalidURL("Failed to parse"), REQUEST)
        self.assertIsInstance(error, InvalidUrlError)
        self.assertIn("Failed to parse", str(error))

    def test_other_failure(self):
        error = translate_transport_error(requests.exceptions.ChunkedEncodingError("broken"), REQUEST)
        self.assertIsInstance(error, NetworkError)
        self.assertEqual(error.reason, TRANSPORT)
        self.assertIn("https://google.ca", str(error))


class HttpxTranslationTest(unittest.TestCase):
    def test_handshake_failure(self):
        exc = _chained(
            httpx.ConnectError("[SSL: SSLV3_ALERT_HANDSHAKE_FAILURE] sslv3 alert handshake failure"),
            ssl.SSLError(1, "[SSL: SSLV3_ALERT_HANDSHAKE_FAILURE] sslv3 alert handshake failure"),
        )
        self.assertIsInstance(translate_transport_error(exc, REQUEST), TlsError)

    def test_certificate_failure(self):
        exc = _chained(
            httpx.ConnectError("certificate verify failed"),
            ssl.SSLCertVerificationError(1, "certificate verify failed: unable to get local issuer certificate"),
        )
        self.assertIsInstance(translate_transport_error(exc, REQUEST), TlsError)

    def test_resolution_failure(self):
        exc = _chained(
            httpx.ConnectError("[Errno -2] Name or service not known"),
            socket.gaierror(socket.EAI_NONAME, "Name or service not known"),
        )
        error = translate_transport_error(exc, REQUEST)
        self.assertEqual(error.reason, RESOLUTION)

    def test_nested_chain(self):
        inner = _chained(OSError("connect failed"), ConnectionRefusedError(111, "Connection refused"))
        exc = _chained(httpx.ConnectError("All connection attempts failed"), inner)
        self.assertEqual(translate_transport_error(exc, REQUEST).reason, REFUSED)

    def test_timeout(self):
        error = translate_transport_error(httpx.ConnectTimeout("timed out"), REQUEST)
        self.assertEqual(error.reason, TIMEOUT)

    def test_other_failure(self):
        error = translate_transport_error(httpx.RemoteProtocolError("Server disconnected"), REQUEST)
        self.assertEqual(error.reason, TRANSPORT)


if __name__ == "__main__":
    unittest.main()
