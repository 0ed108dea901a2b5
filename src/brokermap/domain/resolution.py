"""Field resolution and activity type matching."""

from typing import Optional, Sequence

from brokermap.domain.entities import ActivityMappings, ActivityType, ImportField, ImportMapping


def resolve_field(
    row: Sequence[str], import_field: ImportField, mapping: ImportMapping, headers: Sequence[str]
) -> str:
    """Return the raw cell value mapped to ``import_field``.

    Args:
        row: Data row
        import_field: Logical field to read
        mapping: Import mapping
        headers: Header row of the current file

    Returns:
        The cell value, or "" if the field is unmapped, its header is not in
        ``headers`` or the row is too short
    """
    header = mapping.field_mappings.get(import_field)
    if not header:
        return ""
    try:
        index = list(headers).index(header)
    except ValueError:
        return ""
    if index >= len(row):
        return ""
    return row[index]


def normalize_activity_value(value: str) -> str:
    """Normalize a CSV activity value for matching."""
    return value.strip().upper()


def find_activity_type(raw_type: str, activity_mappings: ActivityMappings) -> Optional[ActivityType]:
    """Find the activity type whose pattern prefixes ``raw_type``.

    The longest matching pattern wins, so "BUY - MARKET" can be told apart
    from "BUY" when both are configured. Patterns of equal length resolve to
    the earlier entry of ``activity_mappings``.

    Returns:
        Matched activity type, or None if no pattern matches
    """
    normalized = normalize_activity_value(raw_type)
    best_type = None
    best_length = 0
    for activity_type, patterns in activity_mappings:
        for pattern in patterns:
            normalized_pattern = normalize_activity_value(pattern)
            if not normalized_pattern:
                continue
            if normalized.startswith(normalized_pattern) and len(normalized_pattern) > best_length:
                best_type = activity_type
                best_length = len(normalized_pattern)
    return best_type


def match_activity_type(raw_type: str, activity_mappings: ActivityMappings) -> str:
    """Map a raw CSV activity value to an internal activity type.

    Falls back to the normalized raw value when nothing matches, so the row
    reaches validation instead of being dropped.
    """
    activity_type = find_activity_type(raw_type, activity_mappings)
    if activity_type is None:
        return normalize_activity_value(raw_type)
    return activity_type.value
