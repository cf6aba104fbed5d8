import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rmf_screener.core.config import settings
from rmf_screener.routers import funds

logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)

app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, debug=settings.DEBUG)

# ✅ Enable CORS for the screener frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
def read_root():
    return {"message": f"{settings.APP_NAME} is live!"}

# ✅ Register the router under a clean prefix
app.include_router(funds.router, prefix="/funds")
