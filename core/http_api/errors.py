"""
Pyramid Books HTTP API - Error Mapping
======================================
Stable transport mapping for workflow errors and rejections.

Status codes:
- UNAUTHORIZED                     -> 401
- FORBIDDEN                        -> 403
- INVALID_REFERENCE (path lookup)  -> 404
- everything else                  -> 400
"""

from __future__ import annotations

from typing import Any, Optional

from core.commands.errors import OrderWorkflowError
from core.commands.rejection import ReasonCode, RejectionReason
from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse, HttpApiResult

_STATUS_BY_CODE = {
    ReasonCode.UNAUTHORIZED: 401,
    ReasonCode.FORBIDDEN: 403,
}


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(data: Any) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data).to_dict()


def map_rejection_reason(reason: RejectionReason) -> HttpApiErrorBody:
    details = dict(reason.details or {})
    details["policy_name"] = reason.policy_name
    return HttpApiErrorBody(
        code=reason.code,
        message=reason.message,
        details=details,
    )


def rejection_response(reason: RejectionReason) -> dict[str, Any]:
    mapped = map_rejection_reason(reason)
    return error_response(
        code=mapped.code,
        message=mapped.message,
        details=mapped.details,
    )


def status_for_code(code: str, *, path_lookup: bool = False) -> int:
    if code == ReasonCode.INVALID_REFERENCE and path_lookup:
        return 404
    return _STATUS_BY_CODE.get(code, 400)


# ── Handler results ───────────────────────────────────────────

def success_result(data: Any, *, status: int = 200) -> HttpApiResult:
    return HttpApiResult(status=status, body=success_response(data))


def rejection_result(
    reason: RejectionReason,
    *,
    path_lookup: bool = False,
) -> HttpApiResult:
    return HttpApiResult(
        status=status_for_code(reason.code, path_lookup=path_lookup),
        body=rejection_response(reason),
    )


def workflow_error_result(
    error: OrderWorkflowError,
    *,
    path_lookup: bool = False,
) -> HttpApiResult:
    return rejection_result(error.reason, path_lookup=path_lookup)


def validation_error_result(message: str) -> HttpApiResult:
    return HttpApiResult(
        status=400,
        body=error_response(code=ReasonCode.VALIDATION_ERROR, message=message),
    )
