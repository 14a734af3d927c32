"""Shared helpers for the randomly generated module data."""

import random
import uuid
from datetime import datetime, timedelta, timezone

CITIES = [
    "Pune", "Nagpur", "Nashik", "Indore", "Bhopal", "Jaipur", "Udaipur",
    "Lucknow", "Patna", "Ranchi", "Raipur", "Cuttack", "Guntur", "Mysuru",
    "Madurai", "Kochi", "Vadodara", "Rajkot", "Amritsar", "Dehradun",
]

STREETS = [
    "Gandhi Road", "Station Road", "Temple Street", "Market Lane", "Nehru Nagar",
    "Canal Road", "School Street", "Panchayat Road", "Mill Road", "Bazaar Path",
]

_WORDS = (
    "village water supply crop field rain harvest well pump pipe clinic health "
    "camp market price soil seed tank canal road school farmer district block "
    "report alert season monsoon storage quality community service update"
).split()


def new_id() -> str:
    return str(uuid.uuid4())


def iso(dt: datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso() -> str:
    return iso(datetime.now(timezone.utc))


def recent_iso(days: float = 1) -> str:
    return iso(datetime.now(timezone.utc) - timedelta(seconds=random.uniform(0, days * 86400)))


def soon_iso(days: float = 3) -> str:
    return iso(datetime.now(timezone.utc) + timedelta(seconds=random.uniform(0, days * 86400)))


def future_iso(days: float = 365) -> str:
    return iso(datetime.now(timezone.utc) + timedelta(seconds=random.uniform(86400, days * 86400)))


def rand_float(low: float, high: float, ndigits: int = 1) -> float:
    return round(random.uniform(low, high), ndigits)


def pick_some(items: list, low: int, high: int) -> list:
    return random.sample(items, random.randint(low, min(high, len(items))))


def sentence(n_words: int | None = None) -> str:
    words = random.choices(_WORDS, k=n_words or random.randint(5, 10))
    return " ".join(words).capitalize() + "."


def paragraph() -> str:
    return " ".join(sentence() for _ in range(random.randint(3, 5)))


def street_address() -> str:
    return f"{random.randint(1, 999)} {random.choice(STREETS)}"
