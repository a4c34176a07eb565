"""
Application-wide constants for the LTER station browser.

Backend tag names, sampling interval and sentinel values shared by the
query builder and the series reconstructor.
"""

from datetime import timedelta

# Interval with which LTER stations aggregate measured points
DEFAULT_COLLECTION_INTERVAL = timedelta(minutes=15)

# Stations record in UTC+1 all year round (no daylight saving)
LOCAL_UTC_OFFSET_MINUTES = 60

# Zone name handed to the backend for labelling returned timestamps
DEFAULT_QUERY_TIMEZONE = "Etc/GMT-1"

# Suffix of standard deviation measurements
STD_SUFFIX = "_std"

# Tag holding the station identifier
STATION_TAG = "snipeit_location_ref"

# Tags the per-measurement queries group their results by
SERIES_GROUP_BY = ("station", STATION_TAG, "landuse", "unit", "aggr")

# Metadata fields
ELEVATION_COLUMN = "altitude AS elevation"
METADATA_COLUMNS = (ELEVATION_COLUMN, "latitude", "longitude", "depth")

# Sentinels for metadata that could not be parsed
ELEVATION_UNKNOWN = -1
COORDINATE_UNKNOWN = -1.0
DEPTH_NONE = 0
DEPTH_PARSE_ERROR = -1
