"""Snapshot gating for the publish step."""

SNAPSHOT_MARKER = "SNAPSHOT"


def is_snapshot(version: str) -> bool:
    """Check whether a version string marks an unreleased snapshot build."""
    return SNAPSHOT_MARKER in version


def should_publish(version: str, skip_snapshot: bool) -> bool:
    """
    Decide whether build data should be relayed.

    Only a snapshot version with skip_snapshot enabled is held back.

    Args:
        version: Project version string
        skip_snapshot: Whether snapshot versions should be skipped

    Returns:
        True if the publish step should proceed
    """
    return not (is_snapshot(version) and skip_snapshot)
