import uuid

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from crisp.core.config import settings
from crisp.core.db import engine, Base
from crisp.core.errors import CrispError
from crisp.core.logging import configure_logging, set_request_id
from crisp.api.users import router as users_router
from crisp.api.assessments import router as assessments_router
from crisp.api.submissions import router as submissions_router

logger = configure_logging(settings.log_level)

app = FastAPI(title="CRISP Assessment API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    rid = request.headers.get("x-request-id") or uuid.uuid4().hex
    set_request_id(rid)
    try:
        response = await call_next(request)
    finally:
        set_request_id(None)
    response.headers["X-Request-ID"] = rid
    return response

@app.exception_handler(CrispError)
async def crisp_error_handler(request: Request, exc: CrispError):
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # malformed answers are bad requests like any other rejected answer
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})

# Create tables on startup
Base.metadata.create_all(bind=engine)

app.include_router(users_router)
app.include_router(assessments_router)
app.include_router(submissions_router)

@app.get("/health")
def health():
    return {"ok": True}
