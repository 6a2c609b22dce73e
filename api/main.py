import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from api.routers import analyze, chat

logging.basicConfig(level=config.LOG_LEVEL, format='%(asctime)s - %(levelname)s - %(message)s')

app = FastAPI(
    title="NutriSift API",
    description="Food label safety analysis: health score, halal status, allergens and sugar alerts",
    version="1.0.0"
)

# Configure CORS for frontend - allow all origins for development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,  # Must be False when using wildcard origins
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(analyze.router)
app.include_router(chat.router)


@app.get("/")
async def root():
    return {"message": "NutriSift API is running", "docs": "/docs"}


@app.get("/api/health")
async def health():
    return {"status": "healthy"}
