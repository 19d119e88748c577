import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from reseller_orders.config import settings
from reseller_orders.database import get_engine
from reseller_orders.domain.exceptions import RequestValidationFailed
from reseller_orders.infrastructure.db_schema import metadata
from reseller_orders.presentation.api import router
from reseller_orders.presentation.schemas import ProblemDetails

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    if settings.CREATE_TABLES_ON_STARTUP:
        async with get_engine().begin() as conn:
            await conn.run_sync(metadata.create_all)
        logger.info("Tables created")

    yield

    logger.info("Shutting down, disposing database engine")
    await get_engine().dispose()


app = FastAPI(
    title="Orders API",
    description="Reseller order management",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(router, prefix="/api")


def _problem_response(request: Request, errors) -> JSONResponse:
    problem = ProblemDetails(instance=request.url.path, errors=errors)
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(),
        media_type="application/problem+json"
    )


def _field_name(loc) -> str:
    """('body', 'items', 0, 'quantity') -> 'items[0].quantity'"""
    parts = list(loc[1:]) if loc and loc[0] in ("body", "path", "query") else list(loc)
    if not parts:
        return str(loc[0]) if loc else "request"
    name = ""
    for part in parts:
        if isinstance(part, int):
            name += f"[{part}]"
        else:
            name += f".{part}" if name else str(part)
    return name


@app.exception_handler(RequestValidationFailed)
async def request_validation_failed_handler(request: Request, exc: RequestValidationFailed):
    return _problem_response(request, exc.errors)


@app.exception_handler(RequestValidationError)
async def malformed_request_handler(request: Request, exc: RequestValidationError):
    errors = {}
    for error in exc.errors():
        errors.setdefault(_field_name(error["loc"]), []).append(error["msg"])
    logger.warning(f"Malformed request to {request.url.path}: {errors}")
    return _problem_response(request, errors)


@app.get("/")
async def root():
    return {"message": "Orders API is running"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
