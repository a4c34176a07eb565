"""
Tests for the request, response and series models.
"""

import math
from datetime import date, datetime

import pytest
import pytz

from src.lter_browser.core import Context, QueryCancelledError, check_context
from src.lter_browser.models import Measurement, Message, Point, QueryResponse
from src.lter_browser.taxonomy import Group


class TestMeasurement:
    """Test cases for Measurement."""

    def test_name_strips_aggregation(self):
        m = Measurement(label="air_t_avg", aggregation="avg")
        assert m.name == "air_t"

    def test_name_strips_depth(self):
        m = Measurement(label="st_05_avg", aggregation="avg", depth=5)
        assert m.name == "st"

    def test_name_without_aggregation(self):
        m = Measurement(label="snow_height")
        assert m.name == "snow_height"

    def test_depth_to_string(self):
        assert Measurement(label="air_t_avg").depth_to_string() == ""
        assert Measurement(label="st_20_avg", depth=20).depth_to_string() == "20"
        assert Measurement(label="st_xx_avg", depth=-1).depth_to_string() == "-1"

    def test_defaults_are_sentinels(self):
        m = Measurement(label="air_t_avg")
        assert m.elevation == -1
        assert m.latitude == -1.0
        assert m.longitude == -1.0
        assert m.depth == 0
        assert m.points == []

    def test_missing_count(self):
        ts = datetime(2022, 1, 9, 23, 0, tzinfo=pytz.utc)
        m = Measurement(label="air_t_avg", points=[
            Point(ts, 1.0),
            Point(ts, math.nan),
        ])
        assert m.missing_count == 1
        assert m.points[1].is_missing


class TestMessage:
    """Test cases for Message.parse."""

    TODAY = date(2022, 6, 1)

    def test_valid(self):
        message = Message.parse(
            ["0", "2", "0"], ["s1", "s2"], "2022-01-10", "2022-01-12",
            landuse=["me"], today=self.TODAY
        )

        assert message.groups == (Group.AIR_TEMPERATURE, Group.SOIL_TEMPERATURE)
        assert message.stations == ("s1", "s2")
        assert message.start == date(2022, 1, 10)
        assert message.end == date(2022, 1, 12)
        assert message.landuse == ("me",)
        assert message.show_std is False

    def test_single_day(self):
        message = Message.parse(["0"], ["s1"], "2022-01-10", "2022-01-10", today=self.TODAY)
        assert message.start == message.end

    def test_end_in_future(self):
        with pytest.raises(ValueError, match="future"):
            Message.parse(["0"], ["s1"], "2022-05-01", "2022-06-02", today=self.TODAY)

    def test_start_after_end(self):
        with pytest.raises(ValueError, match="after"):
            Message.parse(["0"], ["s1"], "2022-01-12", "2022-01-10", today=self.TODAY)

    @pytest.mark.parametrize("start,end", [
        ("10.01.2022", "2022-01-12"),
        ("2022-01-10", ""),
        ("2022-02-30", "2022-03-01"),
    ])
    def test_bad_dates(self, start, end):
        with pytest.raises(ValueError, match="could not parse"):
            Message.parse(["0"], ["s1"], start, end, today=self.TODAY)

    def test_missing_stations(self):
        with pytest.raises(ValueError, match="station"):
            Message.parse(["0"], [], "2022-01-10", "2022-01-12", today=self.TODAY)

    def test_missing_measurements(self):
        with pytest.raises(ValueError, match="measurement"):
            Message.parse(None, ["s1"], "2022-01-10", "2022-01-12", today=self.TODAY)

    def test_unknown_groups_discarded(self):
        message = Message.parse(["99", "x", "0"], ["s1"], "2022-01-10", "2022-01-12", today=self.TODAY)
        assert message.groups == (Group.AIR_TEMPERATURE,)

    def test_single_string_values(self):
        message = Message.parse("10", "s1", "2022-01-10", "2022-01-12", landuse="me", today=self.TODAY)

        assert message.groups == (Group.WIND_DIRECTION,)
        assert message.stations == ("s1",)
        assert message.landuse == ("me",)

    def test_landuse_string_in_constructor(self):
        message = Message((Group.AIR_TEMPERATURE,), "s1", date(2022, 1, 10), date(2022, 1, 10), landuse="me")

        assert message.stations == ("s1",)
        assert message.landuse == ("me",)

    def test_hashable(self):
        message = Message([Group.AIR_TEMPERATURE], ["s1"], date(2022, 1, 10), date(2022, 1, 10))
        assert isinstance(message.groups, tuple)
        assert hash(message) == hash(Message(
            (Group.AIR_TEMPERATURE,), ("s1",), date(2022, 1, 10), date(2022, 1, 10)
        ))


class TestQueryResponse:
    """Test cases for QueryResponse."""

    def test_error_message(self):
        response = QueryResponse.from_dict({"results": [
            {"statement_id": 0, "series": []},
            {"statement_id": 1, "error": "boom"},
        ]})
        assert response.error_message() == "boom"

    def test_top_level_error(self):
        response = QueryResponse.from_dict({"error": "database not found"})
        assert response.error_message() == "database not found"
        assert response.results == []

    def test_values_flattened(self):
        response = QueryResponse.from_dict({"results": [{"series": [
            {"name": "measurements", "columns": ["name"], "values": [["a"], ["b"]]},
            {"name": "measurements", "columns": ["name"], "values": [["c"]]},
        ]}]})
        assert response.error_message() is None
        assert response.values() == ["a", "b", "c"]


class TestContext:
    """Test cases for Context."""

    def test_no_deadline(self):
        ctx = Context()
        assert ctx.remaining() is None
        assert not ctx.cancelled
        ctx.check()

    def test_cancel(self):
        ctx = Context()
        ctx.cancel()
        assert ctx.cancelled
        with pytest.raises(QueryCancelledError, match="cancelled"):
            ctx.check()

    def test_expired_deadline(self):
        ctx = Context(timeout=0)
        assert ctx.cancelled
        assert ctx.remaining() == 0.0
        with pytest.raises(QueryCancelledError, match="deadline"):
            check_context(ctx)

    def test_check_none(self):
        check_context(None)
