"""Water module mock data."""

import random
from datetime import datetime, timedelta, timezone

from mockdata.common import iso, now_iso, rand_float
from schemas.water import PurificationGuide, WaterQualityReading, WaterStats

PURIFICATION_GUIDES = [
    PurificationGuide(
        title="Boiling Water",
        content="Boiling water is one of the most effective methods to kill harmful microorganisms.",
        steps=[
            "Fill a clean pot with water",
            "Bring water to a rolling boil",
            "Let it boil for at least 1 minute",
            "Cool the water before drinking",
        ],
    ),
    PurificationGuide(
        title="Chlorination",
        content="Using chlorine tablets or liquid chlorine to disinfect water.",
        steps=[
            "Add the recommended amount of chlorine",
            "Wait for 30 minutes",
            "Test the water quality",
            "Store in a clean container",
        ],
    ),
    PurificationGuide(
        title="Solar Disinfection",
        content="Using sunlight to kill harmful microorganisms in water.",
        steps=[
            "Fill a clear plastic bottle with water",
            "Place in direct sunlight for 6 hours",
            "Store in a clean container",
            "Use within 24 hours",
        ],
    ),
]


def generate_quality_reading(timestamp: str | None = None) -> dict:
    return WaterQualityReading(
        ph=rand_float(6.5, 8.5),
        turbidity=rand_float(0, 5),
        dissolvedOxygen=rand_float(5, 10),
        temperature=rand_float(20, 30),
        timestamp=timestamp or now_iso(),
    ).model_dump()


def generate_quality_trends(count: int = 24) -> list[dict]:
    """Readings at random instants within the last 24 hours."""
    now = datetime.now(timezone.utc)
    return [
        generate_quality_reading(iso(now - timedelta(seconds=random.uniform(0, 86400))))
        for _ in range(count)
    ]


def generate_stats() -> dict:
    return WaterStats(
        qualityReports=random.randint(200, 300),
        leaksFixed=random.randint(50, 70),
        villagesCovered=random.randint(15, 20),
    ).model_dump()


def purification_guides() -> list[dict]:
    return [g.model_dump() for g in PURIFICATION_GUIDES]
