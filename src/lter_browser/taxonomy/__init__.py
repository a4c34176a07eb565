"""
Group taxonomy.

Fixed enumeration of measurement groups and the rules matching raw
measurement names to them.
"""

from .groups import (
    Group,
    DEFAULT_GROUPS,
    ALL_GROUPS,
    NO_GROUP_LABEL,
    group_label,
    sub_groups,
    parse_groups,
)
from .patterns import (
    GROUP_PATTERNS,
    group_pattern,
    compiled_pattern,
    resolve_patterns,
    matches,
    groups_for_identifier,
)

__all__ = [
    "Group",
    "DEFAULT_GROUPS",
    "ALL_GROUPS",
    "NO_GROUP_LABEL",
    "group_label",
    "sub_groups",
    "parse_groups",
    "GROUP_PATTERNS",
    "group_pattern",
    "compiled_pattern",
    "resolve_patterns",
    "matches",
    "groups_for_identifier",
]
