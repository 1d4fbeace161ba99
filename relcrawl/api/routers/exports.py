import logging
from typing import Literal, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from relcrawl.domain.page_location import PageLocation
from relcrawl.exceptions import OwnerNotResolvedError, SettingsError
from relcrawl.services.export_service import ExportService
from relcrawl.services.notifier import ExportTracker

logger = logging.getLogger(__name__)


class ExportRequest(BaseModel):
    format: Literal["csv", "json"] = "csv"
    url: str
    title: Optional[str] = None


def create_exports_router(export_service: ExportService, export_tracker: Optional[ExportTracker] = None):
    router = APIRouter(prefix="/exports", tags=["Exports"])

    @router.post("", status_code=202)
    def start_export(req: ExportRequest):
        try:
            location = PageLocation.from_url(req.url, title=req.title)
        except ValueError:
            raise HTTPException(status_code=400, detail="missing url")

        try:
            started = export_service.start(req.format, location, page_title=req.title)
        except OwnerNotResolvedError:
            raise HTTPException(status_code=400, detail="could not find the owning user id in url")
        except SettingsError:
            logger.exception("Invalid crawl settings")
            raise HTTPException(status_code=500, detail="invalid crawl settings")

        if not started:
            raise HTTPException(status_code=409, detail="an export is already running")
        return {"status": "started", "format": req.format}

    @router.get("/status")
    def status():
        snapshot = export_tracker.snapshot() if export_tracker is not None else {}
        snapshot["busy"] = export_service.busy
        return snapshot

    return router
