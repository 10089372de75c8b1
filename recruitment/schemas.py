from pydantic import BaseModel
from typing import Dict, Any, List, Optional


class PasswordPayload(BaseModel):
    password: str = ""


class EvaluationLoginPayload(BaseModel):
    team: str = ""
    password: str = ""


class RollNumberPayload(BaseModel):
    roll_number: Optional[str] = None


class CandidateRef(BaseModel):
    full_name: str = ""
    roll_number: str
    branch: str = ""


class EvaluationPayload(BaseModel):
    candidate: CandidateRef
    team: str
    scores: Dict[str, Any] = {}
    remarks: str = ""
    evaluator: str = ""


class ReviewAction(BaseModel):
    action: str  # view | accept | reject


class ResponsesEnvelope(BaseModel):
    success: bool
    data: List[Dict[str, Any]] = []
