from pydantic import BaseModel, Field
from typing import List, Optional

class PredictionRow(BaseModel):
    Row: int
    Summary: str
    Description: str
    Priority: str
    StoryPoints: int
    EstimateHours: int
    Confidence: float
    Rationale: str

class PredictMeta(BaseModel):
    count: int

class PredictResponse(BaseModel):
    ok: bool = True
    meta: PredictMeta
    data: List[PredictionRow]
    csv: str

class ChatRequest(BaseModel):
    message: Optional[str] = Field(default=None)

class ChatResponse(BaseModel):
    reply: str

class ClearResponse(BaseModel):
    success: bool = True
    message: str = "Dataset cleared"

class HealthResponse(BaseModel):
    status: str
    modelReady: bool
    modelVersion: str
    datasetRows: int
