from pydantic import BaseModel
from typing import Any, Dict, List, Optional, Literal

from authaudit.ir.graph import SchemaGraph


class AuditRequest(BaseModel):
    supergraph: SchemaGraph
    interface_policy: Optional[Literal["strict", "lenient"]] = None  # falls back to env
    check_renamed_markers: Optional[bool] = None


class FindingResponse(BaseModel):
    severity: str
    code: str
    message: str
    coordinates: List[str] = []
    detail: Optional[str] = None


class AuditResponse(BaseModel):
    status: str  # secure | insecure
    is_secure: bool
    error_count: int
    warning_count: int
    findings: List[FindingResponse]
    stats: Dict[str, Any] = {}
