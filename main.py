from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from shared.config.database import engine, Base
from shared.config.settings import CORS_ORIGINS
from shared.errors import register_error_handlers
from shared.observability import setup_observability

# IMPORTANT: import models so they register with Base
from services.catalog_service import models as catalog_models
from services.order_service import models as order_models

from services.catalog_service.router import product_router, category_router
from services.order_service.router import router as order_router
from services.demo_control_service.router import router as demo_control_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


app = FastAPI(title="Storefront Demo API", version="1.0.0", lifespan=lifespan)

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(app, "storefront_api")
register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(product_router, prefix="/api")
app.include_router(category_router, prefix="/api")
app.include_router(order_router, prefix="/api")
app.include_router(demo_control_router, prefix="/api")


@app.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "storefront", "status": "running"}
