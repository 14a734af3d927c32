"""Farmer module mock data: market prices, weather alerts, recommendations."""

import random
from datetime import datetime, timedelta, timezone

from mockdata.common import CITIES, future_iso, iso, new_id, pick_some, rand_float, recent_iso, sentence, soon_iso

MARKET_CROPS = ["Wheat", "Rice", "Corn", "Soybeans", "Pulses"]
RECOMMENDED_CROPS = ["Wheat", "Rice", "Corn", "Cotton", "Sugarcane"]
TREND_CROPS = ["Wheat", "Rice", "Pulses"]
SEASONS = ["Kharif", "Rabi", "Zaid"]
DEFAULT_SOIL_TYPE = "Black Soil"


def generate_crop_price() -> dict:
    return {
        "id": new_id(),
        "cropName": random.choice(MARKET_CROPS),
        "price": rand_float(1000, 5000, 2),
        "unit": "per quintal",
        "market": random.choice(CITIES),
        "timestamp": recent_iso(),
    }


def generate_weather_alert() -> dict:
    return {
        "id": new_id(),
        "type": random.choice(["rain", "drought", "frost", "storm"]),
        "severity": random.choice(["low", "medium", "high"]),
        "message": sentence(),
        "startDate": soon_iso(),
        "endDate": future_iso(),
    }


def generate_crop_recommendation(soil_type: str = DEFAULT_SOIL_TYPE) -> dict:
    return {
        "id": new_id(),
        "cropName": random.choice(RECOMMENDED_CROPS),
        "confidence": rand_float(0.6, 0.95, 2),
        "expectedYield": rand_float(20, 40),
        "waterRequirement": rand_float(500, 2000),
        "seasonality": pick_some(SEASONS, 1, 2),
        "soilType": [soil_type],
    }


def generate_market_trends(days: int = 7) -> list[dict]:
    """Daily price series for each trend crop, oldest first, ending today."""
    now = datetime.now(timezone.utc)
    return [
        {
            "cropName": crop,
            "data": [
                {"date": iso(now - timedelta(days=days - 1 - i)), "price": rand_float(1000, 5000, 2)}
                for i in range(days)
            ],
        }
        for crop in TREND_CROPS
    ]


def generate_farmer_stats() -> dict:
    return {
        "farmersRegistered": random.randint(1000, 2000),
        "marketUpdates": "Daily",
        "cropVarieties": random.randint(30, 50),
        "totalArea": random.randint(5000, 10000),
        "activeMarkets": random.randint(10, 20),
    }
