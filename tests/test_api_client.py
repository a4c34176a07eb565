"""
Tests for the InfluxDB HTTP driver.

The HTTP session is replaced by a mock, no server is needed.
"""

import json
import unittest
from decimal import Decimal
from unittest.mock import Mock

import requests

from src.lter_browser.api import InfluxAPI
from src.lter_browser.core import Context, BackendError, QueryCancelledError


def http_response(body, status_error=None):
    response = Mock()
    response.text = json.dumps(body)
    response.json = Mock(return_value=body)
    response.raise_for_status = Mock(side_effect=status_error)
    return response


class TestInfluxAPI(unittest.TestCase):
    """Test cases for InfluxAPI."""

    def setUp(self):
        """Set up test fixtures."""
        self.api = InfluxAPI(base_url="http://localhost:8086/", timeout=10, logger=Mock())
        self.api.session = Mock()

    def test_query_decodes_numbers_as_decimal(self):
        self.api.session.request.return_value = http_response({"results": [{"statement_id": 0, "series": [
            {"name": "air_t_avg", "tags": {"station": "s1"}, "columns": ["time", "air_t_avg"],
             "values": [["2022-01-10T00:00:00+01:00", 1.5], ["2022-01-10T00:15:00+01:00", None]]}
        ]}]})

        response = self.api.query("SELECT air_t_avg FROM air_t_avg", "lter")

        serie = response.results[0].series[0]
        self.assertEqual(serie.name, "air_t_avg")
        self.assertEqual(serie.tags, {"station": "s1"})
        self.assertEqual(serie.values[0][1], Decimal("1.5"))
        self.assertIsNone(serie.values[1][1])

        kwargs = self.api.session.request.call_args[1]
        self.assertEqual(kwargs["method"], "GET")
        self.assertEqual(kwargs["url"], "http://localhost:8086/query")
        self.assertEqual(kwargs["params"], {"q": "SELECT air_t_avg FROM air_t_avg", "db": "lter"})
        self.assertEqual(kwargs["timeout"], 10)

    def test_result_error_raises(self):
        self.api.session.request.return_value = http_response(
            {"results": [{"statement_id": 0, "error": "measurement not found"}]}
        )

        with self.assertRaises(BackendError) as cm:
            self.api.query("SELECT x FROM x", "lter")

        self.assertEqual(str(cm.exception), "measurement not found")
        self.assertEqual(cm.exception.query, "SELECT x FROM x")

    def test_http_error_with_payload_raises_backend_error(self):
        error_body = {"error": "error parsing query: found EOF"}
        failed = Mock()
        failed.json = Mock(return_value=error_body)
        self.api.session.request.return_value = http_response(
            error_body, status_error=requests.exceptions.HTTPError("400", response=failed)
        )

        with self.assertRaises(BackendError) as cm:
            self.api.query("SELECT", "lter")

        self.assertIn("error parsing query", str(cm.exception))

    def test_transport_error_is_reraised(self):
        self.api.session.request.side_effect = requests.exceptions.ConnectionError("refused")

        with self.assertRaises(requests.exceptions.ConnectionError):
            self.api.query("SELECT x FROM x", "lter")

    def test_invalid_body(self):
        response = http_response({})
        response.text = "<html>proxy error</html>"
        self.api.session.request.return_value = response

        with self.assertRaises(BackendError):
            self.api.query("SELECT x FROM x", "lter")

    def test_body_of_wrong_shape(self):
        for body in ("null", "[]", '"ok"', '{"results": [null]}',
                     '{"results": [{"series": [5]}]}', '{"results": 5}'):
            with self.subTest(body=body):
                response = http_response({})
                response.text = body
                self.api.session.request.return_value = response

                with self.assertRaises(BackendError) as cm:
                    self.api.query("SELECT x FROM x", "lter")

                self.assertIn("invalid response body", str(cm.exception))
                self.assertEqual(cm.exception.query, "SELECT x FROM x")

    def test_cancelled_context_sends_nothing(self):
        ctx = Context()
        ctx.cancel()

        with self.assertRaises(QueryCancelledError):
            self.api.query("SELECT x FROM x", "lter", ctx=ctx)

        self.api.session.request.assert_not_called()

    def test_deadline_shortens_timeout(self):
        self.api.session.request.return_value = http_response({"results": []})

        self.api.query("SELECT x FROM x", "lter", ctx=Context(timeout=2))

        self.assertLessEqual(self.api.session.request.call_args[1]["timeout"], 2)

    def test_show_measurements(self):
        self.api.session.request.return_value = http_response({"results": [{"series": [
            {"name": "measurements", "columns": ["name"], "values": [["air_t_avg"], ["air_t_max"]]}
        ]}]})

        names = self.api.show_measurements("^air_t(.*)*$", "lter")

        self.assertEqual(names, ["air_t_avg", "air_t_max"])
        params = self.api.session.request.call_args[1]["params"]
        self.assertEqual(params["q"], "SHOW MEASUREMENTS WITH MEASUREMENT =~ /^air_t(.*)*$/")

    def test_show_measurements_empty_catalog(self):
        self.api.session.request.return_value = http_response({"results": [{"statement_id": 0}]})

        self.assertEqual(self.api.show_measurements("^sun", "lter"), [])


class TestInfluxAPISession(unittest.TestCase):
    """Session setup."""

    def test_basic_auth(self):
        api = InfluxAPI(base_url="http://localhost:8086", username="reader", password="secret")
        self.assertEqual(api.session.auth, ("reader", "secret"))
        api.close()

    def test_context_manager_closes_session(self):
        with InfluxAPI(base_url="http://localhost:8086") as api:
            api.session = Mock()
        api.session.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
