from schemas.water import (
    LeakStatus,
    LeakReport,
    LeakReportCreate,
    WaterQualityReading,
    WaterStats,
    PurificationGuide,
)
from schemas.health import Coordinates, HealthcareFacility, PossibleCondition, SymptomCheckResult
from schemas.prediction import PredictionStatus, PredictionServerInfo
