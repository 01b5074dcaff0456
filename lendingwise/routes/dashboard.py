from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from lendingwise.config.settings import settings
from lendingwise.services.dashboard import build_dashboard
from lendingwise.services.session import AuditSession, get_session

router = APIRouter(tags=["Dashboard"])

templates = Jinja2Templates(directory=str(settings.TEMPLATES_DIR))


@router.get("/", response_class=HTMLResponse)
def dashboard(request: Request, session: AuditSession = Depends(get_session)):
    return templates.TemplateResponse(request, "dashboard.html", {"dash": build_dashboard(session)})
