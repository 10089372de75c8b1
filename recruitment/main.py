import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from fastapi import Body, Depends, FastAPI, Form, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from recruitment.conditions import Condition

from recruitment.aggregator import SCORE_TRACKS, aggregate_candidates, score_field
from recruitment.auth import (
    SESSION_COOKIE,
    Session,
    current_session,
    decode_session_token,
    evaluation_scope,
    login_dashboard,
    login_evaluation,
    require_dashboard_session,
)
from recruitment.config import Settings, get_settings
from recruitment.dashboard import (
    ALL_TAB,
    OVERVIEW_TAB,
    TABS,
    DashboardView,
    ReviewStatusStore,
    overview,
    public_results,
)
from recruitment.errors import (
    AuthenticationError,
    IntakeError,
    NotFoundError,
    SubmissionClosedError,
    ValidationError,
)
from recruitment.evaluation import build_evaluation_row, tab_keyword, team_parameters
from recruitment.fields import field_for
from recruitment.form_structure import FORM_STRUCTURE
from recruitment.intake import append_to_primary, append_to_track, roll_number_exists
from recruitment.processor import build_submission_row
from recruitment.schemas import (
    EvaluationLoginPayload,
    EvaluationPayload,
    PasswordPayload,
    ResponsesEnvelope,
    ReviewAction,
    RollNumberPayload,
)
from recruitment.sheets import open_store
from recruitment.validator import parse_answers, prune_hidden, validate, validate_or_raise

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s:%(name)s:%(message)s",
)
logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

app = FastAPI(
    title="Dev Catalyst Recruitment",
    description="Multi-track application intake and review dashboard backed by Google Sheets",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


# ==================== DEPENDENCIES ====================
def get_store(settings: Settings = Depends(get_settings)):
    settings.require_sheet_credentials()
    return open_store(settings)


def get_review_store(settings: Settings = Depends(get_settings)) -> ReviewStatusStore:
    return ReviewStatusStore(settings.review_status_path)


def ensure_accepting(settings: Settings) -> None:
    deadline = settings.submission_deadline
    if deadline is None:
        return
    if deadline.tzinfo is None:
        deadline = deadline.replace(tzinfo=timezone.utc)
    if datetime.now(timezone.utc) >= deadline:
        raise SubmissionClosedError("Applications closed on " + deadline.isoformat())


def store_application(store, answers: Dict[str, Any]) -> None:
    """Validate, drop answers from hidden sections and append the flat row"""
    validate_or_raise(FORM_STRUCTURE, answers)
    row = build_submission_row(prune_hidden(FORM_STRUCTURE, answers))
    append_to_primary(store, row)


# ==================== ERROR HANDLERS ====================
@app.exception_handler(IntakeError)
async def intake_error_handler(request: Request, exc: IntakeError):
    body: Dict[str, Any] = {"success": False, "message": exc.message}
    if isinstance(exc, ValidationError):
        body["errors"] = exc.errors
    return JSONResponse(body, status_code=exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"success": False, "message": str(exc.detail)}, status_code=exc.status_code)


# ==================== HEALTH ====================
@app.get("/")
async def root():
    return RedirectResponse(url="/form")


@app.get("/health")
def health_check(settings: Settings = Depends(get_settings)):
    """Sheet reachability check"""
    try:
        store = get_store(settings)
        tabs = [tab.title for tab in store.worksheets()]
        return {"status": "healthy", "tabs": tabs, "timestamp": datetime.now(timezone.utc).isoformat()}
    except IntakeError as e:
        raise HTTPException(status_code=e.status_code, detail=f"Unhealthy: {e.message}")


# ==================== APPLICATION FORM ====================
def _render_sections(answers: Dict[str, Any], errors: Dict[str, str]) -> List[Dict[str, Any]]:
    visible_ids = {s.id for s in FORM_STRUCTURE.visible_sections(answers)}
    sections = []
    for section in FORM_STRUCTURE:
        sections.append({
            "section": section,
            "visible": section.id in visible_ids,
            # Simple conditions are toggled client-side as the applicant answers
            "condition": section.condition if isinstance(section.condition, Condition) else None,
            "fields": [
                field_for(q).render(q, answers.get(q.id), errors.get(q.id)) for q in section.questions
            ],
        })
    return sections


@app.get("/form", response_class=HTMLResponse)
def form_page(request: Request, settings: Settings = Depends(get_settings)):
    try:
        ensure_accepting(settings)
    except SubmissionClosedError as e:
        return templates.TemplateResponse(request, "closed.html", {"message": e.message}, status_code=403)
    return templates.TemplateResponse(request, "form.html", {"sections": _render_sections({}, {}), "errors": {}})


@app.post("/form", response_class=HTMLResponse)
async def submit_form_page(request: Request, settings: Settings = Depends(get_settings)):
    """Server-rendered form submission; re-renders with errors on failure"""
    try:
        ensure_accepting(settings)
    except SubmissionClosedError as e:
        return templates.TemplateResponse(request, "closed.html", {"message": e.message}, status_code=403)

    form = await request.form()
    answers = parse_answers(FORM_STRUCTURE, {key: form.getlist(key) for key in form.keys()})
    errors = validate(FORM_STRUCTURE, answers)
    if errors:
        return templates.TemplateResponse(
            request, "form.html",
            {"sections": _render_sections(answers, errors), "errors": errors},
            status_code=400,
        )

    try:
        await run_in_threadpool(lambda: store_application(get_store(settings), answers))
    except IntakeError as e:
        logger.error("❌ Form submission failed: %s", e.message)
        return templates.TemplateResponse(
            request, "form.html",
            {
                "sections": _render_sections(answers, {}),
                "errors": {},
                "failure": "There was an error submitting your form. Please try again.",
            },
            status_code=e.status_code,
        )
    return templates.TemplateResponse(request, "thank_you.html", {})


# ==================== INTAKE API ====================
@app.post("/submit")
def submit_application(raw: Dict[str, Any] = Body(...), settings: Settings = Depends(get_settings)):
    """Validate an answer map keyed by question id and append it to the responses tab"""
    ensure_accepting(settings)
    try:
        store = get_store(settings)
        store_application(store, parse_answers(FORM_STRUCTURE, raw))
        return {"success": True, "message": "Submitted successfully"}
    except IntakeError:
        raise
    except Exception as e:
        logger.exception("❌ Sheet error: %s", e)
        raise HTTPException(status_code=500, detail="Failed to submit")


@app.post("/check-roll-number")
def check_roll_number(payload: RollNumberPayload, store=Depends(get_store)):
    if not payload.roll_number:
        raise HTTPException(status_code=400, detail="Roll number is required")
    if roll_number_exists(store, payload.roll_number):
        return {"exists": True, "message": "Application already exists"}
    return {"exists": False}


@app.get("/responses", response_model=ResponsesEnvelope)
def list_responses(store=Depends(get_store)):
    """All candidates with their per-track scores; never cached"""
    try:
        data = aggregate_candidates(store)
    except IntakeError:
        raise
    except Exception as e:
        logger.exception("❌ Fetch error: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch data")
    return JSONResponse(
        {"success": True, "data": data},
        headers={"Cache-Control": "no-store, no-cache, must-revalidate", "Pragma": "no-cache"},
    )


# ==================== AUTH ====================
def _session_response(token: str, settings: Settings) -> JSONResponse:
    response = JSONResponse({"success": True, "token": token})
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        httponly=True,
        samesite="lax",
        max_age=settings.access_token_expire_minutes * 60,
    )
    return response


@app.post("/auth/check")
def auth_check(payload: PasswordPayload, settings: Settings = Depends(get_settings)):
    token = login_dashboard(payload.password, settings)
    return _session_response(token, settings)


@app.post("/auth/evaluation")
def auth_evaluation(payload: EvaluationLoginPayload, settings: Settings = Depends(get_settings)):
    token = login_evaluation(payload.team, payload.password, settings)
    return _session_response(token, settings)


# ==================== EVALUATION ====================
@app.get("/evaluation/{team}/parameters")
def evaluation_parameters(team: str):
    if tab_keyword(team) is None:
        raise HTTPException(status_code=404, detail=f"Unknown team '{team}'")
    return {"success": True, "team": team, "parameters": team_parameters(team)}


@app.post("/evaluation/submit")
def submit_evaluation(
    payload: EvaluationPayload,
    session: Session = Depends(current_session),
    settings: Settings = Depends(get_settings),
):
    if not session.allows(evaluation_scope(payload.team)):
        raise AuthenticationError("Evaluation access required for this team")
    keyword = tab_keyword(payload.team)
    if keyword is None:
        raise NotFoundError(f"Unknown team '{payload.team}'")

    row = build_evaluation_row(
        payload.candidate.model_dump(), payload.scores, payload.remarks, payload.evaluator
    )
    try:
        append_to_track(get_store(settings), keyword, row)
    except IntakeError:
        raise
    except Exception as e:
        logger.exception("❌ Evaluation submit error: %s", e)
        raise HTTPException(status_code=500, detail="Failed to submit evaluation")
    return {"success": True, "message": "Evaluation saved successfully"}


# ==================== DASHBOARD ====================
def _dashboard_session(request: Request, settings: Settings):
    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        return None
    try:
        session = decode_session_token(token, settings)
    except AuthenticationError:
        return None
    return session if session.allows("dashboard") else None


@app.get("/dashboard", response_class=HTMLResponse)
def dashboard_page(
    request: Request,
    tab: str = Query(OVERVIEW_TAB),
    q: str = Query(""),
    sort: str = Query(""),
    desc: bool = Query(False),
    settings: Settings = Depends(get_settings),
):
    if _dashboard_session(request, settings) is None:
        return templates.TemplateResponse(request, "login.html", {"error": None}, status_code=401)

    records = aggregate_candidates(get_store(settings))
    # Newest first unless a sort column is chosen
    records.reverse()
    statuses = ReviewStatusStore(settings.review_status_path).all()
    rows = DashboardView(records, statuses).apply(tab=tab, query=q, sort_key=sort or None, descending=desc)
    return templates.TemplateResponse(request, "dashboard.html", {
        "tabs": TABS,
        "active_tab": tab if tab in TABS else ALL_TAB,
        "query": q,
        "sort": sort,
        "desc": desc,
        "rows": rows,
        "score_columns": [score_field(track) for track in SCORE_TRACKS],
        "overview": overview(records) if tab == OVERVIEW_TAB else None,
    })


@app.post("/dashboard/login", response_class=HTMLResponse)
def dashboard_login(request: Request, password: str = Form(""), settings: Settings = Depends(get_settings)):
    try:
        token = login_dashboard(password, settings)
    except IntakeError as e:
        return templates.TemplateResponse(request, "login.html", {"error": e.message}, status_code=e.status_code)
    response = RedirectResponse(url="/dashboard", status_code=303)
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        httponly=True,
        samesite="lax",
        max_age=settings.access_token_expire_minutes * 60,
    )
    return response


@app.get("/dashboard/logout")
def dashboard_logout():
    response = RedirectResponse(url="/dashboard", status_code=303)
    response.delete_cookie(SESSION_COOKIE)
    return response


@app.post("/dashboard/review/{timestamp}")
def review_candidate(
    timestamp: str,
    payload: ReviewAction,
    session: Session = Depends(require_dashboard_session),
    reviews: ReviewStatusStore = Depends(get_review_store),
):
    actions = {"view": reviews.open, "accept": reviews.accept, "reject": reviews.reject}
    if payload.action not in actions:
        raise HTTPException(status_code=400, detail=f"Unknown action '{payload.action}'")
    status = actions[payload.action](timestamp)
    return {"success": True, "status": status}


# ==================== PUBLIC RESULTS ====================
@app.get("/results", response_class=HTMLResponse)
def results_page(request: Request, q: str = Query(""), store=Depends(get_store)):
    rows = public_results(aggregate_candidates(store), q)
    return templates.TemplateResponse(request, "results.html", {"rows": rows, "query": q})


@app.on_event("startup")
async def startup_event():
    settings = get_settings()
    logger.info("🚀 Recruitment intake starting up (sheet backend: %s)", settings.sheets_backend)
    if settings.sheets_backend != "memory" and not settings.google_sheet_id:
        logger.warning("⚠️ GOOGLE_SHEET_ID is not set; submissions will fail until it is configured")
    if not settings.dashboard_password:
        logger.warning("⚠️ DASHBOARD_PASSWORD is not set; the dashboard cannot be opened")
    logger.info("✅ Startup complete. System ready to receive requests.")


if __name__ == "__main__":
    import uvicorn
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))
    reload_enabled = os.getenv("DEV_RELOAD", "false").lower() == "true"
    uvicorn.run(app, host=host, port=port, reload=reload_enabled)
