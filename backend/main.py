import json
import logging

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, configure_logging, get_settings
from .storage import JsonFileStore, LinkStore, PersistenceError, reject_constant
from .validation import validate_collection

logger = logging.getLogger(__name__)

HTTP_BAD_REQUEST = 400
HTTP_INTERNAL_SERVER_ERROR = 500

router = APIRouter()


def get_store(request: Request) -> LinkStore:
    return request.app.state.store


@router.get("/api/links")
def get_links(store: LinkStore = Depends(get_store)):
    try:
        return store.load_all()
    except PersistenceError:
        logger.exception("Could not read links")
        raise HTTPException(HTTP_INTERNAL_SERVER_ERROR, "Error reading links")


@router.post("/api/links")
async def save_links(request: Request, store: LinkStore = Depends(get_store)):
    try:
        links = json.loads(await request.body(), parse_constant=reject_constant)
    except ValueError:
        raise HTTPException(HTTP_BAD_REQUEST, "Invalid input: malformed JSON body")

    violation = validate_collection(links)
    if violation is not None:
        logger.info("Rejected links: %s (%s)", violation.message, violation.reason.value)
        raise HTTPException(HTTP_BAD_REQUEST, violation.message)

    try:
        store.save_all(links)
    except PersistenceError as exc:
        logger.exception("Could not save links")
        raise HTTPException(HTTP_INTERNAL_SERVER_ERROR, f"Error saving links: {exc}")

    logger.info("Saved %d links", len(links))
    return {"message": "Links saved successfully"}


async def render_http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def create_app(settings: Settings | None = None, store: LinkStore | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title=settings.app_name)
    app.state.store = store or JsonFileStore(settings.links_file)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, render_http_error)

    # Serve static assets (JS, CSS)
    if settings.frontend_dir.is_dir():
        app.mount("/static", StaticFiles(directory=settings.frontend_dir), name="static")

    @app.on_event("startup")
    def startup_event():
        app.state.store.ensure_initialized()

    @app.get("/")
    def serve_index():
        return FileResponse(settings.frontend_dir / "index.html")

    app.include_router(router)
    return app


app = create_app()
