"""Input loading for the dependency mapper."""

from .snapshot import ReviewSnapshot, SnapshotError, load_snapshot

__all__ = ["ReviewSnapshot", "SnapshotError", "load_snapshot"]
