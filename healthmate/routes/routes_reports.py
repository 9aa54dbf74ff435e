from typing import Any

from fastapi import APIRouter, Body

from ..services.content import report_store


router = APIRouter(prefix="/api/health-reports", tags=["reports"])


@router.post("/western")
def western_report(criteria: Any = Body(default=None)) -> dict:
    """Western-medicine report: body composition, exercise and diet sections."""
    return {"code": 200, "message": "success", "data": report_store.get_western_report(criteria)}


@router.post("/tcm")
def tcm_report(criteria: Any = Body(default=None)) -> dict:
    """Traditional Chinese medicine constitution report."""
    return {
        "message": "数据接收成功",
        "code": 200,
        "data": report_store.get_tcm_report(criteria),
        "status": "success",
    }
