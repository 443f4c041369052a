# src/streamavg/app/main.py
from fastapi import FastAPI
from dotenv import load_dotenv

# Load .env before anything reads LOG_LEVEL / AVG_TRACE
load_dotenv()

from streamavg import __version__
from streamavg.app.core.logging import setup_logging
setup_logging("INFO")

from .api.routes.average import router as average_router

app = FastAPI(title="streamavg API", version=__version__)

# 1) Health check (open)
@app.get("/healthz")
def health():
    return {"status": "ok"}

# 2) Averaging routes
app.include_router(average_router)
