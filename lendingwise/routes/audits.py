import logging
import time
from io import BytesIO
from typing import List

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse, StreamingResponse

from lendingwise.errors import ConfigurationError, ExportError, ProviderError, UnsupportedFileError
from lendingwise.models import AnalysisResult
from lendingwise.services.analysis import analyze
from lendingwise.services.intake import encode_uploads
from lendingwise.services.pdf_generation import export_report, report_filename
from lendingwise.services.session import GENERIC_FAILURE

logger = logging.getLogger("lendingwise.routes.audits")

EXPORT_ALERT = "Failed to export PDF. Check console for details."

router = APIRouter(prefix="/audits", tags=["Audits"])


def pdf_response(result: AnalysisResult):
    timestamp_ms = int(time.time() * 1000)
    try:
        content = export_report(result, timestamp_ms)
    except ExportError as e:
        logger.error(f"PDF Export failed: {e}")
        return JSONResponse(status_code=500, content={"detail": EXPORT_ALERT})

    return StreamingResponse(
        BytesIO(content),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{report_filename(timestamp_ms)}"'},
    )


@router.post("/analyze", response_model=AnalysisResult)
async def analyze_documents(
    files: List[UploadFile] = File(...),
    context_note: str = Form(""),
):
    """One-shot audit: upload documents, get the report model back."""
    try:
        attachments = await encode_uploads(files)
    except UnsupportedFileError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        return await analyze(attachments, context_note)
    except ConfigurationError as e:
        logger.error(f"Analysis not configured: {e}")
        raise HTTPException(status_code=503, detail=str(e))
    except ProviderError as e:
        logger.error(f"Provider returned no usable report: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error(f"Provider call failed: {e}")
        raise HTTPException(status_code=502, detail=str(e) or GENERIC_FAILURE)


@router.post("/report")
def download_report(result: AnalysisResult):
    return pdf_response(result)
