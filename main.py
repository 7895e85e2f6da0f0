import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.routes.interview import router as interview_router
from api.routes.learning import router as learning_router
from api.routes.projects import router as projects_router
from api.routes.usage import router as usage_router
from core.database import init_db
from core.errors import AppError
from core.logging_config import setup_logging
from schemas.common import CommonResponse
from stores.documents import DocumentStore
from stores.interview import QuestionStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_db()
    QuestionStore(DocumentStore()).seed_defaults()
    yield


app = FastAPI(title="ProjectForge LLM", version="1.0.0", lifespan=lifespan)

app.include_router(projects_router, tags=["projects"])
app.include_router(learning_router, tags=["learning"])
app.include_router(interview_router, tags=["interview"])
app.include_router(usage_router, tags=["usage"])


@app.exception_handler(AppError)
def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    body = CommonResponse(success=False, code=exc.code, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(RequestValidationError)
def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg", "invalid request")
    body = CommonResponse(success=False, code="ValidationError", message=f"{where}: {msg}" if where else msg)
    return JSONResponse(status_code=422, content=body.model_dump())


@app.get("/health")
def health():
    return {"ok": True}
