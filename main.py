from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import os
import logging
from dotenv import load_dotenv

load_dotenv()

from db import Base, engine
import ranking.models  # noqa: F401 (registers tables on Base.metadata)
from ranking.routes import router as ranking_router

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]

logging.basicConfig(level=LOG_LEVEL)
logging.info("App starting with DATABASE_URL")

app = FastAPI(title="Influencer Ranking Engine")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Base.metadata.create_all(bind=engine)

app.include_router(ranking_router)


@app.get("/health", tags=["meta"], summary="Health check")
def health():
    return {"status": "ok"}
