import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from db import init_db
from routers import transactions, incomes, expenses, summary

logger = logging.getLogger(__name__)

_LOGGING_CONFIGURED = False


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=level.upper(),
        format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    _LOGGING_CONFIGURED = True


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


async def plain_text_http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code < 500:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.detail)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


def create_app(with_lifespan: bool = True) -> FastAPI:
    configure_logging()
    app = FastAPI(title="Money Tracker API", lifespan=lifespan if with_lifespan else None)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, plain_text_http_error)

    app.include_router(transactions.router, prefix="/api/tx", tags=["transactions"])
    app.include_router(incomes.router, prefix="/api/incomes", tags=["incomes"])
    app.include_router(expenses.router, prefix="/api/expenses", tags=["expenses"])
    app.include_router(summary.router, prefix="/api/summary", tags=["summary"])

    @app.get("/")
    def root():
        return {"message": "Money Tracker API running"}

    return app


app = create_app()
