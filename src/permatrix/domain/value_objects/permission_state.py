"""Effective permission classification for one (user, permission) pair."""

from enum import StrEnum


class PermissionState(StrEnum):
    """Inherited wins over direct; direct wins over none."""

    INHERITED = "inherited"
    DIRECT = "direct"
    NONE = "none"
