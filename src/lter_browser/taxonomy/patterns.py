"""
Matching rules from groups to raw measurement names.

Raw measurement names in the backend are free-form strings. Each top-level
group owns one regular expression; every name it matches belongs to the
group. The table is read-only and each pattern is compiled once.
"""

import re
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Pattern

from .groups import Group

GROUP_PATTERNS: Mapping[Group, str] = MappingProxyType({
    Group.AIR_TEMPERATURE: r"^air_t(.*)*$",
    Group.RELATIVE_HUMIDITY: r"^air_rh(.*)*$",
    Group.SOIL_TEMPERATURE: r"^st_.*|_st_.*",
    Group.SOIL_WATER_CONTENT: r"^swc_[^dp_|ec_|st_]",
    Group.SOIL_ELECTRICAL_CONDUCTIVITY: r"^swc_ec_",
    Group.SOIL_DIELECTRIC_PERMITTIVITY: r"^swc_dp_",
    Group.SOIL_WATER_POTENTIAL: r"^swp.[^_st_]",
    Group.SOIL_HEAT_FLUX: r"^shf.*$",
    # TODO: also exclude the "mv" raw voltage variants of surf_t
    Group.SOIL_SURFACE_TEMPERATURE: r".*surf_t.*$",
    Group.WIND_SPEED: r"^wind_speed.*$",
    Group.WIND_DIRECTION: r"^wind_dir",
    Group.PRECIPITATION: r"^precip.*(_tot|_int).*$",
    Group.SNOW_HEIGHT: r"snow_height",
    Group.LEAF_WETNESS_DURATION: r"^lwm",
    Group.SUNSHINE_DURATION: r"^sun",
    Group.PHOTOSYNTHETICALLY_ACTIVE_RADIATION: r"^par_.*$",
    Group.NDVI_RADIATIONS: r"^ndvi_.*$",
    Group.PRI_RADIATIONS: r"^pri_.*$",
    Group.SHORT_WAVE_RADIATION: r"(^sr_|.*_sw_).*$",
    Group.LONG_WAVE_RADIATION: r".*_lw_.*$",
})

_COMPILED: Dict[Group, Pattern] = {
    group: re.compile(pattern) for group, pattern in GROUP_PATTERNS.items()
}


def group_pattern(group) -> Optional[str]:
    """Get the raw pattern of a group, None for groups without one."""
    try:
        return GROUP_PATTERNS.get(Group(group))
    except (ValueError, TypeError):
        return None


def compiled_pattern(group) -> Optional[Pattern]:
    """Get the compiled pattern of a group, None for groups without one."""
    try:
        return _COMPILED.get(Group(group))
    except (ValueError, TypeError):
        return None


def resolve_patterns(groups: Iterable) -> List[str]:
    """
    Map groups to their matching patterns.

    Groups without a pattern (sub groups, unknown values) are skipped.

    Args:
        groups: Groups or their wire values

    Returns:
        One pattern per known group, in input order
    """
    patterns = []
    for group in groups:
        pattern = group_pattern(group)
        if pattern is not None:
            patterns.append(pattern)
    return patterns


def matches(group, name: str) -> bool:
    """Check whether a raw measurement name belongs to a group."""
    pattern = compiled_pattern(group)
    return pattern is not None and pattern.search(name) is not None


def groups_for_identifier(name: str) -> List[Group]:
    """
    Classify a raw measurement name.

    Args:
        name: Raw measurement name, e.g. "air_t_avg"

    Returns:
        All groups whose pattern matches, in group order
    """
    return [group for group, pattern in _COMPILED.items() if pattern.search(name)]
