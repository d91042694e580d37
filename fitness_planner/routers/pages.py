"""Server-rendered pages: landing, login, dashboard and plan history."""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from fitness_planner.config import PACKAGE_DIR, get_settings
from fitness_planner.dependencies import get_plan_service
from fitness_planner.models.schemas import ErrorKind
from fitness_planner.rendering import render_markdown
from fitness_planner.services.plan_service import PlanService
from fitness_planner.session import SessionContext, get_session_context, new_session_token


logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])
templates = Jinja2Templates(directory=str(PACKAGE_DIR / "templates"))
templates.env.filters["markdown"] = render_markdown

FEATURES = [
    {
        "title": "AI-Powered Plans",
        "description": "Get a fitness plan tailored to your body and goals, powered by Claude.",
    },
    {
        "title": "Goal-Oriented",
        "description": "Whether you want to lose weight, gain muscle, or just stay fit, we've got you covered.",
    },
    {
        "title": "Personalized For You",
        "description": "Your plan adapts to your age, weight, height, and exercise preferences.",
    },
]

FORM_FIELDS = ("name", "age", "weight", "height", "fitnessGoals", "exercisePreference")


@router.get("/", response_class=HTMLResponse)
async def landing(
    request: Request,
    session: Annotated[SessionContext, Depends(get_session_context)],
) -> HTMLResponse:
    """Marketing landing page."""
    return templates.TemplateResponse(
        request, "index.html", {"session": session, "features": FEATURES}
    )


@router.get("/login", response_class=HTMLResponse)
async def login_page(
    request: Request,
    session: Annotated[SessionContext, Depends(get_session_context)],
) -> HTMLResponse:
    return templates.TemplateResponse(request, "login.html", {"session": session})


@router.post("/login")
async def login(request: Request) -> Response:
    """Start a session and continue to the dashboard."""

    form = await request.form()
    email = str(form.get("email") or "").strip()
    if not email:
        return templates.TemplateResponse(
            request,
            "login.html",
            {"session": SessionContext(), "error": "Please enter your email."},
            status_code=400,
        )

    response = RedirectResponse(url="/dashboard", status_code=303)
    response.set_cookie(
        get_settings().session_cookie_name,
        new_session_token(),
        httponly=True,
        samesite="lax",
    )
    logger.info("Session started")
    return response


@router.get("/logout")
async def logout() -> RedirectResponse:
    response = RedirectResponse(url="/", status_code=303)
    response.delete_cookie(get_settings().session_cookie_name)
    return response


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(
    request: Request,
    session: Annotated[SessionContext, Depends(get_session_context)],
) -> HTMLResponse:
    """Plan request form."""
    return templates.TemplateResponse(
        request, "dashboard.html", {"session": session, "values": {}, "outcome": None}
    )


@router.post("/dashboard", response_class=HTMLResponse)
async def submit_plan_request(
    request: Request,
    session: Annotated[SessionContext, Depends(get_session_context)],
    service: Annotated[PlanService, Depends(get_plan_service)],
) -> HTMLResponse:
    """Generate a plan from the submitted form and render it with any warnings."""

    form = await request.form()
    values = {field: str(form.get(field) or "") for field in FORM_FIELDS}
    outcome = await service.create_plan(values)

    field_errors: dict[str, str] = {}
    if outcome.error is not None and outcome.error.kind == ErrorKind.INVALID_INPUT:
        for issue in outcome.error.issues:
            field_errors.setdefault(issue.field.split(".")[0], issue.message)

    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "session": session,
            "values": values,
            "outcome": outcome,
            "field_errors": field_errors,
            "not_saved": outcome.error is not None
            and outcome.error.kind == ErrorKind.PERSISTENCE_FAILED,
        },
    )


@router.get("/dashboard/history", response_class=HTMLResponse)
async def history(
    request: Request,
    session: Annotated[SessionContext, Depends(get_session_context)],
    service: Annotated[PlanService, Depends(get_plan_service)],
) -> HTMLResponse:
    """Most recent plans, or an error banner when the store cannot be read."""

    outcome = await service.get_history()
    return templates.TemplateResponse(
        request, "history.html", {"session": session, "outcome": outcome}
    )
