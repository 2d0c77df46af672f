import unittest
from unittest import mock

import requests

from resource_loader.request_engine import RequestEngine, RequestResult


def _response(status_code: int, body: bytes, content_type: str = "application/json") -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.headers["Content-Type"] = content_type
    return response


class RequestEngineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = RequestEngine(timeout_seconds=2.5)

    @mock.patch("resource_loader.request_engine.requests.request")
    def test_decodes_json_body(self, request_mock: mock.Mock) -> None:
        request_mock.return_value = _response(200, b'[{"id": 1}]')

        result = self.engine.get("http://api.test/posts")

        self.assertEqual(result.status_code, 200)
        self.assertEqual(result.body, [{"id": 1}])
        self.assertIsNone(result.error)
        request_mock.assert_called_once_with(
            method="GET",
            url="http://api.test/posts",
            headers={"Accept": "application/json"},
            timeout=2.5,
        )

    @mock.patch("resource_loader.request_engine.requests.request")
    def test_keeps_status_of_http_errors(self, request_mock: mock.Mock) -> None:
        request_mock.return_value = _response(404, b'{"message": "Users Not Found"}')

        result = self.engine.get("http://api.test/users")

        self.assertEqual(result.status_code, 404)
        self.assertEqual(result.body, {"message": "Users Not Found"})

    @mock.patch("resource_loader.request_engine.requests.request")
    def test_invalid_json_falls_back_to_text(self, request_mock: mock.Mock) -> None:
        request_mock.return_value = _response(200, b"not json")

        result = self.engine.get("http://api.test/posts")

        self.assertEqual(result.body, "not json")

    @mock.patch("resource_loader.request_engine.requests.request")
    def test_transport_failure_has_no_status(self, request_mock: mock.Mock) -> None:
        request_mock.side_effect = requests.ConnectionError("Connection refused")

        result = self.engine.get("http://api.test/posts")

        self.assertIsNone(result.status_code)
        self.assertIn("Connection refused", result.error)

    def test_extra_headers_are_merged(self) -> None:
        engine = RequestEngine(headers={"X-Trace": "abc"})
        self.assertEqual(engine.headers, {"Accept": "application/json", "X-Trace": "abc"})


class RequestEngineFetchTests(unittest.IsolatedAsyncioTestCase):
    async def test_fetch_runs_get_off_the_loop(self) -> None:
        engine = RequestEngine()
        expected = RequestResult(url="http://api.test/posts", status_code=200, body=[], latency_ms=1.0)

        with mock.patch.object(engine, "get", return_value=expected) as get_mock:
            result = await engine.fetch("http://api.test/posts")

        self.assertIs(result, expected)
        get_mock.assert_called_once_with("http://api.test/posts")


if __name__ == "__main__":
    unittest.main()
