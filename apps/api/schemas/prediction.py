from pydantic import BaseModel


class PredictionStatus(BaseModel):
    status: str


class PredictionServerInfo(BaseModel):
    state: str
    base_url: str
    pid: int | None = None
    last_error: str | None = None
