"""
Tests for measurement resolution.
"""

import unittest
from unittest.mock import Mock

import requests

from src.lter_browser.api import InfluxAPI
from src.lter_browser.core import Context, BackendError, QueryCancelledError
from src.lter_browser.services import MeasurementResolver
from src.lter_browser.taxonomy import Group, group_pattern


class TestMeasurementResolver(unittest.TestCase):
    """Test resolving groups against the catalog."""

    def setUp(self):
        """Set up test fixtures."""
        self.api_client = Mock()
        self.logger = Mock()
        self.resolver = MeasurementResolver(
            api_client=self.api_client,
            database="lter",
            logger=self.logger
        )

    def test_pattern_match(self):
        """Only names matching the group pattern are kept."""
        self.api_client.show_measurements = Mock(
            return_value=["air_t_avg", "air_rh_avg", "wind_dir"]
        )

        result = self.resolver.resolve([Group.AIR_TEMPERATURE])

        self.assertEqual(result, ["air_t_avg"])
        self.api_client.show_measurements.assert_called_once_with(
            "^air_t(.*)*$", "lter", ctx=None
        )

    def test_std_suppressed_by_default(self):
        self.api_client.show_measurements = Mock(return_value=["air_t_avg", "air_t_avg_std"])

        self.assertEqual(self.resolver.resolve([Group.AIR_TEMPERATURE]), ["air_t_avg"])

    def test_std_included_on_request(self):
        self.api_client.show_measurements = Mock(return_value=["air_t_avg", "air_t_avg_std"])

        result = self.resolver.resolve([Group.AIR_TEMPERATURE], include_std=True)

        self.assertEqual(result, ["air_t_avg", "air_t_avg_std"])

    def test_dedup_across_groups(self):
        catalog = {
            group_pattern(Group.SOIL_TEMPERATURE): ["st_05_avg", "swp_st_05_avg"],
            group_pattern(Group.SOIL_WATER_POTENTIAL): ["swp_st_05_avg", "swp_05_avg"],
        }
        self.api_client.show_measurements = Mock(
            side_effect=lambda pattern, database, ctx=None: catalog[pattern]
        )

        result = self.resolver.resolve([Group.SOIL_TEMPERATURE, Group.SOIL_WATER_POTENTIAL])

        self.assertEqual(result, ["st_05_avg", "swp_st_05_avg", "swp_05_avg"])

    def test_failed_group_is_skipped(self):
        """A catalog error for one group does not fail the others."""
        self.api_client.show_measurements = Mock(side_effect=[
            requests.exceptions.ConnectionError("connection refused"),
            ["wind_dir"],
            BackendError("error parsing query"),
        ])

        result = self.resolver.resolve(
            [Group.AIR_TEMPERATURE, Group.WIND_DIRECTION, Group.SNOW_HEIGHT]
        )

        self.assertEqual(result, ["wind_dir"])
        self.assertEqual(self.logger.error.call_count, 2)

    def test_groups_without_pattern_are_ignored(self):
        self.api_client.show_measurements = Mock(return_value=["air_t_avg"])

        result = self.resolver.resolve([Group.DEPTH_02, 99])

        self.assertEqual(result, [])
        self.api_client.show_measurements.assert_not_called()

    def test_cancelled_context_is_not_swallowed(self):
        self.api_client.show_measurements = Mock(return_value=["air_t_avg"])
        ctx = Context()
        ctx.cancel()

        with self.assertRaises(QueryCancelledError):
            self.resolver.resolve([Group.AIR_TEMPERATURE], ctx=ctx)

        self.api_client.show_measurements.assert_not_called()


class TestResolverWithDriver(unittest.TestCase):
    """Resolution against the real driver with a mocked HTTP session."""

    def catalog_response(self, text):
        response = Mock()
        response.text = text
        response.raise_for_status = Mock()
        return response

    def test_malformed_catalog_answer_is_skipped(self):
        api = InfluxAPI(base_url="http://localhost:8086", logger=Mock())
        api.session = Mock()
        api.session.request.side_effect = [
            self.catalog_response("null"),
            self.catalog_response(
                '{"results": [{"series": [{"name": "measurements", "columns": ["name"], '
                '"values": [["wind_dir"]]}]}]}'
            ),
        ]
        logger = Mock()
        resolver = MeasurementResolver(api_client=api, database="lter", logger=logger)

        result = resolver.resolve([Group.AIR_TEMPERATURE, Group.WIND_DIRECTION])

        self.assertEqual(result, ["wind_dir"])
        logger.error.assert_called_once()


if __name__ == "__main__":
    unittest.main()
