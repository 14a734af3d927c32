"""Health module mock data: stats, advisories, facility search, symptom check."""

from __future__ import annotations

import math
import random

from mockdata.common import CITIES, new_id, now_iso, paragraph, pick_some, rand_float, sentence, street_address
from schemas.health import Coordinates, HealthcareFacility, PossibleCondition, SymptomCheckResult

CITY_COORDINATES: dict[str, tuple[float, float]] = {
    "mumbai": (19.0760, 72.8777),
    "delhi": (28.6139, 77.2090),
    "bangalore": (12.9716, 77.5946),
    "hyderabad": (17.3850, 78.4867),
    "chennai": (13.0827, 80.2707),
    "kolkata": (22.5726, 88.3639),
    "bhubaneswar": (20.2961, 85.8245),
    "current": (19.0760, 72.8777),
}
# Geographic centre of India, used for unknown place names
DEFAULT_COORDINATES = (20.5937, 78.9629)

SPECIALTIES = [
    "General Medicine", "Emergency Care", "Pediatrics", "Cardiology",
    "Orthopedics", "Neurology", "Dental Care", "Eye Care",
    "Physiotherapy", "Mental Health",
]

CONDITIONS = [
    {
        "name": "Common Cold",
        "description": "Viral infection of the nose and throat",
        "recommendations": ["Rest", "Stay hydrated", "Take over-the-counter medications"],
    },
    {
        "name": "Flu",
        "description": "Influenza virus infection",
        "recommendations": ["Rest", "Stay hydrated", "Take antiviral medications if prescribed"],
    },
    {
        "name": "COVID-19",
        "description": "Coronavirus disease",
        "recommendations": ["Isolate", "Get tested", "Monitor symptoms"],
    },
]

NEXT_STEPS = [
    "Monitor symptoms",
    "Stay hydrated",
    "Get adequate rest",
    "Seek medical attention if symptoms worsen",
]


def generate_stats() -> dict:
    return {
        "healthChecks": random.randint(2000, 3000),
        "medicalCamps": random.randint(15, 25),
    }


def generate_advisory() -> dict:
    return {
        "id": new_id(),
        "type": random.choice(["alert", "warning", "info"]),
        "title": sentence(),
        "message": paragraph(),
        "severity": random.choice(["low", "medium", "high"]),
        "timestamp": now_iso(),
        "affectedAreas": [random.choice(CITIES) for _ in range(random.randint(1, 3))],
    }


def generate_advisories() -> list[dict]:
    return [generate_advisory() for _ in range(random.randint(0, 3))]


def resolve_base_coordinates(
    location: str | None = None,
    lat: str | None = None,
    lng: str | None = None,
) -> tuple[float, float]:
    """Centre point for a facility search.

    Explicit coordinates win when both are given; otherwise the location name
    is looked up in CITY_COORDINATES. Raises ValueError on unparsable
    coordinates.
    """
    if lat and lng:
        try:
            parsed = (float(lat), float(lng))
        except ValueError:
            raise ValueError("Invalid coordinates format") from None
        if not all(math.isfinite(v) for v in parsed):
            raise ValueError("Invalid coordinates format")
        return parsed

    key = location.lower() if location else "current"
    return CITY_COORDINATES.get(key, DEFAULT_COORDINATES)


def _phone() -> str:
    return f"+91 {random.randint(10, 99)} {random.randint(1000, 9999)} {random.randint(1000, 9999)}"


def generate_facilities(
    location: str | None = None,
    lat: str | None = None,
    lng: str | None = None,
) -> list[dict]:
    base_lat, base_lng = resolve_base_coordinates(location, lat, lng)

    def offset() -> float:
        # ~5 km either side
        return (random.random() - 0.5) * 0.1

    facilities = []
    for _ in range(random.randint(5, 15)):
        distance = math.sqrt(
            (offset() * 111) ** 2 + (offset() * 111 * math.cos(math.radians(base_lat))) ** 2
        )
        facility = HealthcareFacility(
            id=new_id(),
            name=f"{random.choice(CITIES)} {random.choice(['Hospital', 'Clinic', 'Medical Center'])}",
            type=random.choice(["Hospital", "Clinic", "Pharmacy", "Diagnostic Center"]),
            address=f"{street_address()}, {location or random.choice(CITIES)}",
            phone=_phone(),
            operatingHours="9:00 AM - 9:00 PM",
            rating=rand_float(3.5, 5),
            specialties=pick_some(SPECIALTIES, 2, 5),
            distance=round(distance, 1),
            coordinates=Coordinates(lat=base_lat + offset(), lng=base_lng + offset()),
        )
        facilities.append(facility.model_dump())
    return facilities


def generate_symptom_check(symptoms: list[str]) -> dict:
    """Random assessment; the symptom list only gates the request."""
    conditions = [
        PossibleCondition(probability=rand_float(0.1, 0.9), **condition)
        for condition in pick_some(CONDITIONS, 1, 3)
    ]
    return SymptomCheckResult(
        possibleConditions=conditions,
        severity=random.choice(["low", "medium", "high"]),
        nextSteps=list(NEXT_STEPS),
    ).model_dump()
