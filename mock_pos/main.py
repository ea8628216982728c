"""
Mock POS Application

Serves the cart and payment status endpoints read by the customer
display, backed by in-memory state that can be edited over HTTP.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routes import admin_router, cart_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Mock POS starting up...")
    yield
    logger.info("Mock POS shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Mock POS",
    description="Simulated POS cart API for the customer display",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(cart_router)
app.include_router(admin_router)


@app.get("/")
async def home():
    return {
        "message": "Mock POS API",
        "docs": "/docs",
        "endpoints": {
            "cart": "/api/cart",
            "payment": "/api/cart/payment",
            "admin": "/api/admin",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "mock-pos"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mock_pos.main:app",
        host="0.0.0.0",
        port=8001,
        reload=True,
    )
