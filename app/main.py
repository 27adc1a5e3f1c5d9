from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from timing_asgi import TimingMiddleware, TimingClient  # type: ignore
from timing_asgi.integrations import StarletteScopeToName  # type: ignore

from app.core import config
from app.core.database.engine import init_db
from app.core.limiter import limiter
from app.features.authorization.exceptions import AccessError, Unauthenticated
from app.features.users.routes import router as user_router
from app.features.regions.routes import router as region_router
from app.features.contacts.routes import router as contact_router
from app.features.students.routes import router as student_router
from app.features.dashboard.routes import router as dashboard_router
from app.utils import get_logger


log = get_logger(__name__)

TIMING_PREFIX = "flock"

log.info("Initializing Flock Tracker")
app = FastAPI(
    title="Flock Tracker",
    description="Evangelism contact and discipleship tracking with hierarchical access control",
    version="0.1.0",
    docs_url="/docs" if config.ENABLE_DOCS else None,
    redoc_url="/redoc" if config.ENABLE_DOCS else None,
    openapi_url="/openapi.json" if config.ENABLE_DOCS else None
)
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)


class RouteTimings(TimingClient):
    def timing(self, metric_name, timing, tags):
        log.debug(dict(route=metric_name.removeprefix(f"{TIMING_PREFIX}.app.features."), timing=timing, tags=tags))


app.add_middleware(TimingMiddleware, client=RouteTimings(), metric_namer=StarletteScopeToName(TIMING_PREFIX, app))

if config.ENABLE_DOCS:
    log.warning("Docs enabled")
if config.ALLOW_ORIGIN:
    log.warning("Setting allow origin to %s", config.ALLOW_ORIGIN)
    origins = [config.ALLOW_ORIGIN]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_request: Request, exc: RequestValidationError):
    errors = dict()
    for error in exc.errors():
        if "loc" not in error or "msg" not in error:
            continue
        key = error["loc"][-1]
        if key == "__root__":
            key = "root"
        errors[key] = error["msg"]
    log.info("Request validation error %s", errors)
    return JSONResponse(status_code=400, content=jsonable_encoder(errors))


@app.exception_handler(AccessError)
async def access_error_handler(request: Request, exc: AccessError) -> Response:
    """Map authorization outcomes to HTTP status codes."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    else:
        log.debug("%s %s denied (%s): %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse({"detail": exc.detail}, status_code=exc.status_code, headers=headers)


@app.exception_handler(RateLimitExceeded)
def rate_limit_exceeded_handler(_request: Request, _exc: RateLimitExceeded) -> Response:
    return JSONResponse({"error": "You are going too fast"}, status_code=429)


@app.on_event("startup")
async def startup():
    """Create missing tables before serving requests."""
    log.info("Creating database tables")
    await init_db()
    log.info("Database ready")


@app.get("/")
async def root():
    """Service banner listing the feature areas; needs no token."""
    return {
        "message": "Flock Tracker API",
        "version": "0.1.0",
        "status": "online",
        "docs": "/docs" if config.ENABLE_DOCS else None,
        "authentication": {
            "info": "All endpoints except / and /health require a Bearer token in the Authorization header",
        },
        "features": {
            "users": "Users with DIRECTOR, REGION_LEADER, GROUP_LEADER or GROUP_MEMBER roles",
            "regions": "Regions and the groups inside them",
            "contacts": "Evangelism contacts, visible and editable down the hierarchy",
            "students": "Discipleship student records, visible and editable down the hierarchy",
            "dashboard": "Totals over the records visible to the caller",
        }
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


# Include routers
app.include_router(user_router, prefix="/users", tags=["users"])
# Alias for singular form (if frontend uses /user/me)
app.include_router(user_router, prefix="/user", tags=["users"], include_in_schema=False)

app.include_router(region_router, prefix="/regions", tags=["regions"])

app.include_router(contact_router, prefix="/contacts", tags=["contacts"])

app.include_router(student_router, prefix="/students", tags=["students"])

app.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
