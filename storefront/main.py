import logging
from fastapi import FastAPI, status, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.core.config import settings
from storefront.schemas.cart import CartValidationError
from storefront.api.responses import error_response
from storefront.api import auth, cart, navigation, vendors

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=f"{settings.SHOP_NAME} Storefront",
    description="Multi-vendor storefront API",
    version="1.0.0",
    openapi_url="/api/openapi.json",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(vendors.router)
app.include_router(cart.router)
app.include_router(navigation.router)


@app.get("/health")
async def health_check():
    return {"status": "ok"}


@app.exception_handler(CartValidationError)
async def cart_validation_exception_handler(request: Request, exc: CartValidationError):
    logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
    return error_response(
        exc.message,
        status_code=status.HTTP_400_BAD_REQUEST,
        details=[{"field": e.field, "message": e.message} for e in exc.errors],
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    return error_response(
        errors[0]["msg"] if errors else "Invalid request",
        status_code=status.HTTP_400_BAD_REQUEST,
        details=[
            {"field": ".".join(str(part) for part in e["loc"]), "message": e["msg"]}
            for e in errors
        ],
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(str(exc.detail), status_code=exc.status_code)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response("Internal server error")


@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting {settings.SHOP_NAME} storefront")


@app.on_event("shutdown")
async def shutdown_event():
    from storefront.db.session import engine
    logger.info("Shutting down storefront")
    await engine.dispose()
