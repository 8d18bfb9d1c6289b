from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from catalog.api.deps import get_settings, get_store, parse_service_id, service_form, templates
from catalog.core.config import Settings
from catalog.errors import MalformedInputError, ServiceNotFoundError, ServiceValidationError
from catalog.repos.base import ServiceStore
from catalog.schemas.services import ServiceCreate, ServiceUpdate


router = APIRouter(tags=["Pages"])


def accept_quality(accept: str, media_type: str) -> float:
    """q-value the Accept header gives ``media_type``, using its most specific match."""
    main_type = media_type.split("/", 1)[0]
    best_rank, best_q = -1, 0.0
    for entry in accept.split(","):
        parts = [part.strip() for part in entry.split(";")]
        pattern = parts[0].lower()
        if pattern == media_type:
            rank = 2
        elif pattern == f"{main_type}/*":
            rank = 1
        elif pattern == "*/*":
            rank = 0
        else:
            continue

        q = 1.0
        for param in parts[1:]:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    q = float(value)
                except ValueError:
                    q = 0.0
        if rank > best_rank:
            best_rank, best_q = rank, q
    return best_q


def wants_html(request: Request, output_format: Optional[str]) -> bool:
    """Explicit ?format= wins, otherwise HTML only when Accept strictly prefers it."""
    if output_format:
        fmt = output_format.lower()
        if fmt not in ("html", "json"):
            raise MalformedInputError(f"Unsupported format {output_format!r}", value=output_format)
        return fmt == "html"
    accept = request.headers.get("accept", "")
    return accept_quality(accept, "text/html") > accept_quality(accept, "application/json")


@router.get("/", response_class=HTMLResponse)
def home(request: Request):
    return templates.TemplateResponse(
        request, "index.html", {"service": ServiceCreate(), "errors": []}
    )


@router.post("/add")
def add_service(
    request: Request,
    fields: ServiceCreate = Depends(service_form),
    store: ServiceStore = Depends(get_store),
):
    try:
        store.add(fields)
    except ServiceValidationError as e:
        return templates.TemplateResponse(
            request, "index.html", {"service": fields, "errors": e.problems}, status_code=400
        )
    return RedirectResponse("/view", status_code=303)


@router.api_route("/view", methods=["GET", "POST"], response_class=HTMLResponse)
async def view_services(
    request: Request,
    store: ServiceStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    query = request.query_params.get("query")
    if request.method == "POST":
        form = await request.form()
        query = form.get("query", query)

    if settings.reload_on_view:
        store.load()

    return templates.TemplateResponse(
        request,
        "view.html",
        {"services": store.search(query), "query": query or ""},
    )


@router.get("/search", response_model=None)
def search_services(
    request: Request,
    query: Optional[str] = Query(None),
    output_format: Optional[str] = Query(None, alias="format"),
    store: ServiceStore = Depends(get_store),
):
    results = store.search(query)
    if wants_html(request, output_format):
        return templates.TemplateResponse(
            request, "view.html", {"services": results, "query": query or ""}
        )
    return results


@router.get("/edit", response_class=HTMLResponse)
def edit_service(
    request: Request,
    raw_id: Optional[str] = Query(None, alias="id"),
    store: ServiceStore = Depends(get_store),
):
    service_id = parse_service_id(raw_id)
    service = store.find_by_id(service_id)
    if service is None:
        raise ServiceNotFoundError(service_id)

    return templates.TemplateResponse(
        request, "edit.html", {"service": service, "service_id": service.id, "errors": []}
    )


@router.post("/update")
def update_service(
    request: Request,
    raw_id: Optional[str] = Form(None, alias="id"),
    fields: ServiceCreate = Depends(service_form),
    store: ServiceStore = Depends(get_store),
):
    service_id = parse_service_id(raw_id)
    try:
        store.update(service_id, ServiceUpdate(**fields.model_dump()))
    except ServiceValidationError as e:
        return templates.TemplateResponse(
            request,
            "edit.html",
            {"service": fields, "service_id": service_id, "errors": e.problems},
            status_code=400,
        )
    return RedirectResponse("/view", status_code=303)
