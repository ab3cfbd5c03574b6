from __future__ import annotations

from functools import lru_cache
from typing import NoReturn

from fastapi import HTTPException, status

from ..services.reports_service import ReportsService, ReportsServiceError


@lru_cache(maxsize=1)
def _build_service() -> ReportsService:
    return ReportsService()


def get_reports_service() -> ReportsService:
    try:
        return _build_service()
    except ReportsServiceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"code": "configuration_error", "message": str(exc)},
        ) from exc


def raise_upstream_error(message: str) -> NoReturn:
    raise HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail={"code": "upstream_error", "message": message},
    )
