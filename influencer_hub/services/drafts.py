# Copyright (c) 2026 Mohammed Hassan. All rights reserved.
# Proprietary and confidential. Unauthorized copying, modification, distribution, or use is prohibited.

from datetime import datetime, date
import pytz

DRAFT_PLATFORMS = ("instagram", "linkedin", "twitter", "facebook")

POST_STATUSES = ("draft", "scheduled", "published")

def toggle_platform(platforms: list[str] | None, platform: str) -> list[str]:
    """Add platform if missing, remove it if present. Order of the others is kept."""
    platforms = list(platforms or [])
    if platform in platforms:
        return [p for p in platforms if p != platform]
    return platforms + [platform]

def default_title(content: str, limit: int = 50) -> str:
    return content.strip()[:limit]

def schedule_to_utc(schedule: dict | None, default_tz: str = "UTC") -> datetime | None:
    """
    {"date": "2026-03-01", "time": "14:00", "timezone": "Europe/Berlin"} -> aware UTC datetime.
    Time defaults to 00:00. Returns None when there is no date.
    """
    if not schedule or not schedule.get("date"):
        return None

    day = date.fromisoformat(str(schedule["date"])[:10])
    hour, minute = map(int, (schedule.get("time") or "00:00").split(":")[:2])

    tz = pytz.timezone(schedule.get("timezone") or default_tz)
    local = tz.localize(datetime(day.year, day.month, day.day, hour, minute))
    return local.astimezone(pytz.utc)

def derive_status(schedule: dict | None) -> str:
    return "scheduled" if schedule and schedule.get("date") else "draft"
