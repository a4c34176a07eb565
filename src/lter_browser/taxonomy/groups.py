"""
Measurement groups.

A Group combines multiple raw measurements into a single semantic entity,
for example all air temperature measurements regardless of aggregation.
The integer value of a group is its wire format.
"""

from enum import IntEnum
from typing import Dict, Iterable, List, Tuple

NO_GROUP_LABEL = "No Group"


class Group(IntEnum):
    """Semantic category of a physical measurement."""

    AIR_TEMPERATURE = 0
    RELATIVE_HUMIDITY = 1
    SOIL_TEMPERATURE = 2
    SOIL_WATER_CONTENT = 3
    SOIL_ELECTRICAL_CONDUCTIVITY = 4
    SOIL_DIELECTRIC_PERMITTIVITY = 5
    SOIL_WATER_POTENTIAL = 6
    SOIL_HEAT_FLUX = 7
    SOIL_SURFACE_TEMPERATURE = 8
    WIND_SPEED = 9
    WIND_DIRECTION = 10
    PRECIPITATION = 11
    SNOW_HEIGHT = 12
    LEAF_WETNESS_DURATION = 13
    SUNSHINE_DURATION = 14
    PHOTOSYNTHETICALLY_ACTIVE_RADIATION = 15
    NDVI_RADIATIONS = 16
    PRI_RADIATIONS = 17
    SHORT_WAVE_RADIATION = 18
    LONG_WAVE_RADIATION = 19

    # Sub groups
    DEPTH_02 = 20
    DEPTH_05 = 21
    DEPTH_20 = 22
    DEPTH_50 = 23
    AVERAGE = 24
    GUST = 25
    TOTAL = 26
    INTENSITY = 27
    TOTAL_INCOMING = 28
    DIFFUSE_INCOMING = 29
    AT_SOIL_LEVEL_INCOMING = 30
    INCOMING = 31
    OUTGOING = 32

    @property
    def label(self) -> str:
        """Human readable name."""
        return _LABELS[self]

    def sub_groups(self) -> List["Group"]:
        """Sub groups this group decomposes into, empty if none."""
        return list(_SUB_GROUPS.get(self, ()))

    def __str__(self) -> str:
        return self.label


_LABELS: Dict[Group, str] = {
    Group.AIR_TEMPERATURE: "Air Temperature",
    Group.RELATIVE_HUMIDITY: "Relative Humidity",
    Group.SOIL_TEMPERATURE: "Soil Temperature",
    Group.SOIL_WATER_CONTENT: "Soil Water Content",
    Group.SOIL_ELECTRICAL_CONDUCTIVITY: "Soil Electrical Conductivity",
    Group.SOIL_DIELECTRIC_PERMITTIVITY: "Soil Dielectric Permittivity",
    Group.SOIL_WATER_POTENTIAL: "Soil Water Potential",
    Group.SOIL_HEAT_FLUX: "Soil Heat Flux",
    Group.SOIL_SURFACE_TEMPERATURE: "Soil Surface Temperature",
    Group.WIND_SPEED: "Wind Speed",
    Group.WIND_DIRECTION: "Wind Direction",
    Group.PRECIPITATION: "Precipitation",
    Group.SNOW_HEIGHT: "Snow Height",
    Group.LEAF_WETNESS_DURATION: "Leaf Wetness Duration",
    Group.SUNSHINE_DURATION: "Sunshine Duration",
    Group.PHOTOSYNTHETICALLY_ACTIVE_RADIATION: "Photosynthetically Active Radiation",
    Group.NDVI_RADIATIONS: "NDVI Radiations",
    Group.PRI_RADIATIONS: "PRI Radiations",
    Group.SHORT_WAVE_RADIATION: "Short Wave Radiation",
    Group.LONG_WAVE_RADIATION: "Long Wave Radiation",
    Group.DEPTH_02: "Depth: 2 cm",
    Group.DEPTH_05: "Depth: 5 cm",
    Group.DEPTH_20: "Depth: 20 cm",
    Group.DEPTH_50: "Depth: 50 cm",
    Group.AVERAGE: "Average",
    Group.GUST: "Gust",
    Group.TOTAL: "Total",
    Group.INTENSITY: "Intensity",
    Group.TOTAL_INCOMING: "Total Incoming",
    Group.DIFFUSE_INCOMING: "Diffuse Incoming",
    Group.AT_SOIL_LEVEL_INCOMING: "At Soil Level Incoming",
    Group.INCOMING: "Incoming",
    Group.OUTGOING: "Outgoing",
}

_DEPTHS = (Group.DEPTH_02, Group.DEPTH_05, Group.DEPTH_20, Group.DEPTH_50)
_RADIATION_DIRECTIONS = (Group.INCOMING, Group.OUTGOING)

# Several keys may share one list of sub groups
_SUB_GROUPS: Dict[Group, Tuple[Group, ...]] = {
    Group.SOIL_TEMPERATURE: _DEPTHS,
    Group.SOIL_ELECTRICAL_CONDUCTIVITY: _DEPTHS,
    Group.WIND_SPEED: (Group.AVERAGE, Group.GUST),
    Group.PRECIPITATION: (Group.TOTAL, Group.INTENSITY),
    Group.PHOTOSYNTHETICALLY_ACTIVE_RADIATION: (
        Group.TOTAL_INCOMING,
        Group.DIFFUSE_INCOMING,
        Group.AT_SOIL_LEVEL_INCOMING,
    ),
    Group.SHORT_WAVE_RADIATION: _RADIATION_DIRECTIONS,
    Group.LONG_WAVE_RADIATION: _RADIATION_DIRECTIONS,
}

DEFAULT_GROUPS: Tuple[Group, ...] = (
    Group.AIR_TEMPERATURE,
    Group.RELATIVE_HUMIDITY,
    Group.WIND_DIRECTION,
    Group.WIND_SPEED,
    Group.SHORT_WAVE_RADIATION,
    Group.PRECIPITATION,
    Group.SNOW_HEIGHT,
)

ALL_GROUPS: Tuple[Group, ...] = tuple(g for g in Group if g < Group.DEPTH_02)


def group_label(value) -> str:
    """
    Get the display label for a group or its wire value.

    Args:
        value: Group, integer or anything else

    Returns:
        Label, or "No Group" if the value names no group
    """
    try:
        return Group(value).label
    except (ValueError, TypeError):
        return NO_GROUP_LABEL


def sub_groups(group) -> List[Group]:
    """Get the sub groups of a group, empty for unknown values."""
    try:
        return Group(group).sub_groups()
    except (ValueError, TypeError):
        return []


def parse_groups(*tokens: str) -> List[Group]:
    """
    Parse wire identifiers into a list of unique groups.

    Tokens that are not base-10 integers in 0..255 naming a group are
    discarded. The order of first appearance is preserved.

    Args:
        *tokens: String identifiers, e.g. "2", "5"

    Returns:
        List of groups without duplicates
    """
    groups: List[Group] = []
    for token in _flatten(tokens):
        token = str(token).strip()
        if not token.isdigit() or not token.isascii():
            continue
        value = int(token)
        if value > 255:
            continue
        try:
            group = Group(value)
        except ValueError:
            continue
        if group not in groups:
            groups.append(group)
    return groups


def _flatten(tokens: Iterable) -> Iterable:
    for token in tokens:
        if isinstance(token, (list, tuple)):
            yield from token
        else:
            yield token
