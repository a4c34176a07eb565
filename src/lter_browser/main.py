"""
Main entry point for the LTER station browser.

Prints the combined query of a request, or fetches the series and prints a
summary per measurement.
"""

import sys
from typing import List, Optional

from .core import Config, setup_logger, LoggerContext
from .api import InfluxAPI
from .browser import DataBrowser
from .models import Message, TimeSeries


class BrowserApp:
    """Command line application around DataBrowser."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
        """
        self.config = Config(config_file)

        self.logger = setup_logger(self.config.logging_settings)
        self.logger.info(f"Configuration: {self.config}")

        self.api_client = InfluxAPI(
            base_url=self.config.influx_base_url,
            username=self.config.influx_username,
            password=self.config.influx_password,
            timeout=self.config.influx_timeout,
            max_retries=self.config.influx_max_retries,
            verify_ssl=self.config.influx_verify_ssl,
            logger=self.logger
        )

        self.browser = DataBrowser(
            api_client=self.api_client,
            database=self.config.influx_database,
            timezone=self.config.query_timezone,
            logger=self.logger
        )

    def query(self, message: Message) -> str:
        """Get the combined statement of a request as printable text."""
        stmt = self.browser.query(message)
        return f"-- database: {stmt.database}\n{stmt.query}"

    def series(self, message: Message) -> List[str]:
        """Fetch the series of a request and summarize each measurement."""
        with LoggerContext(
            self.logger, "series request",
            groups=len(message.groups), stations=len(message.stations)
        ) as op:
            ts = self.browser.series(message)
            op.record(measurements=len(ts))
        return format_summary(ts)

    def close(self) -> None:
        self.api_client.close()


def format_summary(ts: TimeSeries) -> List[str]:
    """One line per measurement: label, station, depth, points, missing points."""
    lines = []
    for m in ts:
        depth = m.depth_to_string() or "-"
        lines.append(
            f"{m.label}\tstation={m.station}\tdepth={depth}\tunit={m.unit}\t"
            f"points={len(m.points)}\tmissing={m.missing_count}"
        )
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="LTER station time series browser"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "command",
        choices=["series", "query"],
        help="series: fetch and summarize data, query: print the export query"
    )
    parser.add_argument("--groups", nargs="+", required=True, help="Group identifiers")
    parser.add_argument("--stations", nargs="+", required=True, help="Station identifiers")
    parser.add_argument("--start", required=True, help="Start date (YYYY-MM-DD)")
    parser.add_argument("--end", required=True, help="End date (YYYY-MM-DD)")
    parser.add_argument("--landuse", nargs="*", default=None, help="Land use filter")
    parser.add_argument("--std", action="store_true", help="Include standard deviations")

    args = parser.parse_args(argv)

    app = None
    try:
        app = BrowserApp(config_file=args.config)

        try:
            message = Message.parse(
                measurements=args.groups,
                stations=args.stations,
                start=args.start,
                end=args.end,
                landuse=args.landuse,
                show_std=args.std or app.config.show_std,
            )
        except ValueError as e:
            print(f"Invalid request: {e}")
            return 1

        if args.command == "query":
            print(app.query(message))
        else:
            for line in app.series(message):
                print(line)
    except Exception as e:
        print(f"Application failed: {e}")
        return 1
    finally:
        if app is not None:
            app.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
