from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel

from lendingwise.errors import AnalysisInProgressError, UnsupportedFileError
from lendingwise.routes.audits import pdf_response
from lendingwise.services.dashboard import DashboardView, build_dashboard
from lendingwise.services.session import AuditSession, get_session

router = APIRouter(prefix="/session", tags=["Session"])


class NoteUpdate(BaseModel):
    context_note: str = ""


@router.get("", response_model=DashboardView)
def get_state(session: AuditSession = Depends(get_session)):
    return build_dashboard(session)


@router.post("/files", response_model=DashboardView)
async def add_files(files: List[UploadFile] = File(...), session: AuditSession = Depends(get_session)):
    try:
        await session.add_files(files)
    except UnsupportedFileError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return build_dashboard(session)


@router.delete("/files/{index}", response_model=DashboardView)
def remove_file(index: int, session: AuditSession = Depends(get_session)):
    try:
        session.remove_attachment(index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return build_dashboard(session)


@router.put("/note", response_model=DashboardView)
def set_note(update: NoteUpdate, session: AuditSession = Depends(get_session)):
    session.set_context_note(update.context_note)
    return build_dashboard(session)


@router.post("/analyze", response_model=DashboardView)
async def run_analysis(session: AuditSession = Depends(get_session)):
    try:
        await session.run_analysis()
    except AnalysisInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return build_dashboard(session)


@router.post("/reset", response_model=DashboardView)
def reset(session: AuditSession = Depends(get_session)):
    session.reset()
    return build_dashboard(session)


@router.get("/report")
def download_report(session: AuditSession = Depends(get_session)):
    if session.result is None:
        raise HTTPException(status_code=404, detail="No audit result to export")
    return pdf_response(session.result)
