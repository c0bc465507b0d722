import logging
import os
import uuid

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import API_PREFIX, CORS_ORIGINS, HOST, PORT, UPLOAD_DIR, UPLOAD_URL_PREFIX, WEB_CLIENT_DIR
from database import Base, engine
from logging_config import correlation_id_var, setup_logging
from routers import auth, owner, police, reports
from uploads import ensure_upload_dir

setup_logging()
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Community Traffic Violation Reporting API")

app.include_router(auth.auth_router, prefix=API_PREFIX)
app.include_router(reports.router, prefix=API_PREFIX)
app.include_router(police.router, prefix=API_PREFIX)
app.include_router(owner.router, prefix=API_PREFIX)


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    # "error" is what the browser pages read, "detail" is FastAPI's own key
    return JSONResponse(status_code=status_code, content={"detail": message, "error": message}, headers=headers)


@app.middleware("http")
async def correlation_id_middleware(request: Request, call_next):
    """
    Ensures every request has a correlation ID, makes it available to log
    records and returns it in the response headers, including on server errors.
    """
    correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
    token = correlation_id_var.set(correlation_id)
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        response = error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")
    finally:
        correlation_id_var.reset(token)
    response.headers["X-Correlation-ID"] = correlation_id
    return response


# add cors midddleware, registered last so it wraps error responses too
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    fields = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path", "form")]
        name = ".".join(loc) or "body"
        if name not in fields:
            fields.append(name)
    return error_response(status.HTTP_400_BAD_REQUEST, f"Missing or invalid fields: {', '.join(fields)}")


@app.get(f"{API_PREFIX}/health")
def health():
    return {"status": "ok", "message": "Community Traffic Violation Reporting API running"}


app.mount(UPLOAD_URL_PREFIX, StaticFiles(directory=ensure_upload_dir(UPLOAD_DIR)), name="uploads")

# Static pages go last so they never shadow the API
if WEB_CLIENT_DIR and os.path.isdir(WEB_CLIENT_DIR):
    app.mount("/", StaticFiles(directory=WEB_CLIENT_DIR, html=True), name="web-client")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=HOST, port=PORT)
