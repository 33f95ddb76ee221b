from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.engine import make_url
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.database import DATABASE_URL, get_db, init_db
from app.routers import auth, user, order, franchise
from app.core.config import settings
from app.core.logging_config import logger


@asynccontextmanager
async def lifespan(_: FastAPI):
    if init_db():
        logger.info("Database schema created")
    yield


app = FastAPI(
    title="JWT Pizza Service",
    version=settings.VERSION,
    lifespan=lifespan,
    docs_url="/swagger",
    redirect_slashes=False  # Disable automatic redirects to prevent PUT/POST data loss
)

# Echo the caller's origin so browser clients can send credentials
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=".*",
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"message": f"{location}: {first.get('msg', 'invalid request')}"},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": str(exc)},
    )


# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(user.router, prefix="/api/user", tags=["Users"])
app.include_router(order.router, prefix="/api/order", tags=["Orders"])
app.include_router(franchise.router, prefix="/api/franchise", tags=["Franchises"])


@app.get("/")
def home():
    return {"message": "welcome to JWT Pizza", "version": settings.VERSION}


@app.get("/api/docs")
def api_docs():
    """Endpoint listing plus the external services this instance talks to."""
    endpoints = []
    for route in app.routes:
        if not isinstance(route, APIRoute) or not route.path.startswith("/api/"):
            continue
        description = (route.endpoint.__doc__ or "").strip().splitlines()
        for method in sorted(route.methods):
            endpoints.append({
                "method": method,
                "path": route.path,
                "description": description[0] if description else route.name,
            })
    return {
        "version": settings.VERSION,
        "endpoints": endpoints,
        "config": {
            "factory": settings.FACTORY_URL,
            "db": make_url(DATABASE_URL).host,
        },
    }


@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "database": "connected"
        }
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy"
        )


@app.api_route("/{path:path}", methods=["GET", "POST", "PUT", "DELETE"], include_in_schema=False)
def unknown_endpoint(path: str):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": "unknown endpoint"})
