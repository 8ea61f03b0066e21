"""
Chain Analytics Agent API
Real-time blockchain analytics - TVL, stablecoins, bridges, L2 comparisons
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import LOG_LEVEL, PORT
from api.analytics_router import router as analytics_router
from api.metrics_router import router as metrics_router

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger("ChainAnalyticsAPI")

app = FastAPI(
    title="Chain Analytics Agent",
    description="Real-time blockchain analytics - TVL, stablecoins, bridges, L2 comparisons",
    version="1.0.0"
)

app.include_router(analytics_router)
app.include_router(metrics_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint for deployment platforms"""
    return {"status": "healthy", "service": "chain-analytics-agent"}


# ============================================
# RUN
# ============================================

if __name__ == "__main__":
    import uvicorn
    logger.info(f"🔗 Chain Analytics Agent running on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
