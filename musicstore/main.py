from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from musicstore.core.config import settings
from musicstore.core.exceptions import MusicStoreError
from musicstore.core.logging import configure_logging, get_logger
from musicstore.db.session import create_db_and_tables

# Import models to ensure they are registered with SQLModel metadata
from musicstore.models import Product, CartItem, Order, OrderLine

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    create_db_and_tables()
    logger.info("Music store API started", environment=settings.ENVIRONMENT)
    yield

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    lifespan=lifespan,
    description="Shopping cart and checkout API for the Music Store"
)

@app.get("/")
def read_root():
    return {"message": "Welcome to the Music Store API. Visit /docs for Swagger UI."}

@app.exception_handler(MusicStoreError)
async def music_store_error_handler(request: Request, exc: MusicStoreError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database failure", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=503, content={"detail": "Database unavailable"})

from musicstore.routers import cart, checkout

app.include_router(cart.router, prefix="/api/v1/cart", tags=["cart"])
app.include_router(checkout.router, prefix="/api/v1/checkout", tags=["checkout"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "musicstore.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower()
    )
