from fastapi import APIRouter

from authaudit.config import AuditSettings, InterfacePolicy
from authaudit.pipeline.controller import AuditController
from authaudit.schemas import AuditRequest, AuditResponse

router = APIRouter(
    prefix="",
    tags=["audit"],
)


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/audit", response_model=AuditResponse)
def audit_supergraph(request: AuditRequest):
    settings = AuditSettings.from_env()
    if request.interface_policy is not None:
        settings.interface_policy = InterfacePolicy(request.interface_policy)
    if request.check_renamed_markers is not None:
        settings.check_renamed_markers = request.check_renamed_markers

    report = AuditController(settings=settings).run(request.supergraph)
    payload = report.to_dict()

    return AuditResponse(
        status="secure" if report.is_secure else "insecure",
        is_secure=payload["is_secure"],
        error_count=payload["error_count"],
        warning_count=payload["warning_count"],
        findings=payload["findings"],
        stats=payload["stats"],
    )
