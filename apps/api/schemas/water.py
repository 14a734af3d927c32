from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class LeakStatus(str, Enum):
    pending = "pending"
    in_progress = "in_progress"
    resolved = "resolved"


class LeakReportCreate(BaseModel):
    location: str = ""
    description: str = ""

    @field_validator("location", "description", mode="before")
    @classmethod
    def _loose_text(cls, value: object) -> str:
        # Missing, null or empty become ""; anything else is kept as text.
        if not value:
            return ""
        text = value if isinstance(value, str) else str(value)
        # Lone surrogates cannot be written to the log or the UTF-8 response
        return text.encode("utf-8", "replace").decode("utf-8")


class LeakReport(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    location: str
    description: str
    status: LeakStatus = LeakStatus.pending
    created_at: str
    updated_at: str | None = None

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class WaterQualityReading(BaseModel):
    ph: float
    turbidity: float
    dissolvedOxygen: float
    temperature: float
    timestamp: str


class WaterStats(BaseModel):
    qualityReports: int
    leaksFixed: int
    villagesCovered: int


class PurificationGuide(BaseModel):
    title: str
    content: str
    steps: list[str]
