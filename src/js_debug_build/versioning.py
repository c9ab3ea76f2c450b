"""Version numbers for nightly builds."""

from datetime import datetime
from zoneinfo import ZoneInfo

from .constants import VERSION_TIMEZONE

__all__ = ["get_version_number"]


def get_version_number(override: str | None = None, now: datetime | None = None) -> str:
    """
    Compute the version stamped into nightly builds.

    The version is ``YYYY.M.DHH`` in Pacific time: the month and day are not
    padded, the hour always has two digits. A build on 5 March 2024 at 7am
    is ``2024.3.507``.

    Args:
        override: Explicit version, usually from ``JS_DEBUG_VERSION``. Wins when set.
        now: Point in time to stamp. Defaults to the current time.

    Returns:
        The version string.
    """
    if override:
        return override

    tz = ZoneInfo(VERSION_TIMEZONE)
    date = now.astimezone(tz) if now is not None else datetime.now(tz)

    return ".".join(
        [
            str(date.year),
            str(date.month),
            f"{date.day}{date.hour:02d}",
        ]
    )
