from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi.middleware import SlowAPIMiddleware

from shared.config import settings
from shared.config.database import AsyncSessionLocal, connect_db, disconnect_db
from shared.config.memory_store import MemoryStore
from shared.errors import register_exception_handlers
from shared.observability import setup_observability
from shared.security import limiter

# IMPORTANT: import models so they register with Base
from services.auth_service import models as auth_models  # noqa: F401
from services.cart_service import models as cart_models  # noqa: F401
from services.order_service import models as order_models  # noqa: F401
from services.product_service import models as product_models  # noqa: F401

from services.auth_service.router import router as auth_router
from services.cart_service.router import router as cart_router
from services.order_service.router import router as order_router
from services.product_service.repository import InMemoryProductRepository, ProductRepository
from services.product_service.router import router as product_router
from services.product_service.service import ProductService

logger = structlog.get_logger(__name__)

app = FastAPI(title="Storefront API", version="1.0.0")
app.state.db_connected = False
app.state.memory_store = MemoryStore()

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(app, "storefront_api")

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Cross-Origin-Opener-Policy": "same-origin",
}
CONTENT_SECURITY_POLICY = "default-src 'self'; img-src 'self' data: https:; frame-ancestors 'none'"
# Swagger UI pulls its assets from a CDN
CSP_EXEMPT_PATHS = ("/docs", "/redoc", "/openapi.json")


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    for header, value in SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    if not request.url.path.startswith(CSP_EXEMPT_PATHS):
        response.headers.setdefault("Content-Security-Policy", CONTENT_SECURITY_POLICY)
    if settings.IS_PRODUCTION:
        response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
    return response


health_router = APIRouter(tags=["Health"])


@health_router.get("/health")
async def health(request: Request):
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.ENVIRONMENT,
        "database": "connected" if request.app.state.db_connected else "disconnected",
    }


for router in (auth_router, product_router, cart_router, order_router, health_router):
    app.include_router(router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    app.state.db_connected = await connect_db()
    if app.state.db_connected:
        async with AsyncSessionLocal() as session:
            loaded = await ProductService.ensure_catalog(ProductRepository(session))
    else:
        loaded = await ProductService.ensure_catalog(InMemoryProductRepository(app.state.memory_store))
    logger.info("storefront_started", environment=settings.ENVIRONMENT, db_connected=app.state.db_connected, catalog_loaded=loaded)


@app.on_event("shutdown")
async def shutdown_event():
    await disconnect_db()
