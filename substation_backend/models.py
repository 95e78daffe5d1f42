# substation_backend/models.py
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Priority = Literal["High", "Medium", "Low"]
Phase = Literal["preparation", "maintenance", "verification"]
ChatRole = Literal["technician", "assistant"]


class _StoreRecord(BaseModel):
    # Store columns are camelCase, Python attributes are snake_case
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class StationInfo(_StoreRecord):
    number: str
    voltage: str
    commission_date: str = Field(alias="commissionDate")
    capacity: str
    location: str
    status: str


class Weather(_StoreRecord):
    temperature: str
    wind: str
    visibility: str
    condition: str
    suggestion: str = ""


class Part(_StoreRecord):
    name: str
    stock: str
    priority: Priority


class Alert(_StoreRecord):
    id: str
    message: str
    time: str
    station_info: StationInfo = Field(alias="stationInfo")
    weather: Weather
    tools: List[str] = Field(default_factory=list)
    parts: List[Part] = Field(default_factory=list)
    maintenance_steps: List[str] = Field(default_factory=list, alias="maintenanceSteps")
    used_parts: str = Field(default="", alias="usedParts")

    @property
    def high_priority_parts(self) -> List[Part]:
        return [part for part in self.parts if part.priority == "High"]


class ChecklistItem(BaseModel):
    id: str
    label: str
    checked: bool = False


class MaintenanceChecklistItem(ChecklistItem):
    phase: Phase


class ChatMessage(BaseModel):
    role: ChatRole
    message: str
    timestamp: str


# --- Request bodies ---
class StartTaskRequest(BaseModel):
    alert_id: Optional[str] = None


class OutcomeSchema(BaseModel):
    result: str = ""
    notes: str = ""


class ChatRequest(BaseModel):
    message: str
