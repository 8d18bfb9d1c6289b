from pathlib import Path
from typing import Optional

from fastapi import Form, Request
from fastapi.templating import Jinja2Templates

from catalog.core.config import Settings
from catalog.errors import MalformedInputError
from catalog.repos.base import ServiceStore
from catalog.schemas.services import FIELD_LABELS, SERVICE_FIELDS, ServiceCreate


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))
templates.env.globals["SERVICE_FIELDS"] = SERVICE_FIELDS
templates.env.globals["FIELD_LABELS"] = FIELD_LABELS


def get_store(request: Request) -> ServiceStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def service_form(
    app_code: str = Form(""),
    app_name: str = Form(""),
    env: str = Form(""),
    cloud: str = Form(""),
    region: str = Form(""),
    team_name: str = Form(""),
    pm_contact: str = Form(""),
    team_contact: str = Form(""),
) -> ServiceCreate:
    """Collect the service form; missing inputs come through blank for the validator."""
    return ServiceCreate(
        app_code=app_code.strip(),
        app_name=app_name.strip(),
        env=env.strip(),
        cloud=cloud.strip(),
        region=region.strip(),
        team_name=team_name.strip(),
        pm_contact=pm_contact.strip(),
        team_contact=team_contact.strip(),
    )


def parse_service_id(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        raise MalformedInputError("Service id is required")
    try:
        return int(raw.strip())
    except ValueError:
        raise MalformedInputError(f"Service id must be an integer, got {raw!r}", value=raw)
