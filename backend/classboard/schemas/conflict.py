from pydantic import BaseModel
from typing import Literal, List

class ConflictDetail(BaseModel):
    id: str
    conflict_type: Literal["teacher_double_booking"]
    description: str
    severity: Literal["hard", "soft"]
    affected_slots: List[str]  # ids of the entries sharing teacher, day and start time

class ConflictReport(BaseModel):
    conflicts: List[ConflictDetail]
