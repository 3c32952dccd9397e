"""
Training Back Office API
"""
import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from core.settings import settings
from connections.file_store import FileStore
from routers.leads import router as leads_router
from routers.quotations import router as quotations_router
from routers.orders import router as orders_router
from routers.trainers import router as trainers_router
from routers.trainer_pos import router as trainer_pos_router
from routers.trainings import router as trainings_router
from routers.reports import router as reports_router

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(f"Starting {settings.APP_NAME}...")
    try:
        FileStore.initialize()
        logger.info("Storage initialized successfully")
    except Exception as e:
        logger.error(f"Storage initialization failed: {e}", exc_info=True)

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")


app = FastAPI(
    title=settings.APP_NAME,
    description="Leads, quotations, orders, trainers and trainer purchase orders",
    version=API_VERSION,
    lifespan=lifespan
)

app.include_router(leads_router)
app.include_router(quotations_router)
app.include_router(orders_router)
app.include_router(trainers_router)
app.include_router(trainer_pos_router)
app.include_router(trainings_router)
app.include_router(reports_router)

@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": f"{settings.APP_NAME} v{API_VERSION}",
        "version": API_VERSION,
        "docs": "/docs",
        "endpoints": {
            "leads": "/api/leads - Create and track sales leads",
            "quotations": {
                "crud": "/api/quotations - Create, list, update quotations",
                "totals": "/api/quotations/totals - Preview subtotal, GST and total",
                "profit": "/api/quotations/{id}/profit - Cost and margin analysis",
                "download": "/api/quotations/{id}/download - Quotation PDF",
                "convert": "/api/quotations/{id}/convert - Convert to order",
            },
            "orders": "/api/orders - Create and track orders",
            "trainers": "/api/trainers - Trainer records",
            "trainer_pos": "/api/trainer-pos - Purchase orders to trainers (emailed with PDF)",
            "trainings": "/api/trainings - Confirmed trainings",
            "reports": "/api/reports/monthly - Six-month statistics (Excel: /monthly/export)",
        },
    }

@app.get("/health")
async def health():
    """Health check endpoint."""
    storage_ok = FileStore.check_storage()
    return {
        "status": "healthy" if storage_ok else "degraded",
        "storage": "readable" if storage_ok else "error",
        "api_version": API_VERSION
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=3000, reload=False)
