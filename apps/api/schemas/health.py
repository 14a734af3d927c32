from pydantic import BaseModel


class Coordinates(BaseModel):
    lat: float
    lng: float


class HealthcareFacility(BaseModel):
    id: str
    name: str
    type: str
    address: str
    phone: str
    operatingHours: str
    rating: float
    specialties: list[str]
    distance: float | None = None
    coordinates: Coordinates


class PossibleCondition(BaseModel):
    name: str
    probability: float
    description: str
    recommendations: list[str]


class SymptomCheckResult(BaseModel):
    possibleConditions: list[PossibleCondition]
    severity: str
    nextSteps: list[str]
