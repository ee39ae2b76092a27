"""
Question Paper Generator API — Main Application
FastAPI application behind the question paper wizard.
Extracts study material text, generates questions with GPT, exports PDFs.
"""

from dotenv import load_dotenv
load_dotenv()

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from generation.config import get_settings
from routers import documents, export, generation, health

logging.basicConfig(level=logging.INFO, format="%(asctime)s  %(levelname)s  %(message)s")
log = logging.getLogger("paper_api")

settings = get_settings()

app = FastAPI(
    title="Question Paper Generator API",
    description="PDF study material → AI-generated MCQ / short / long answer exam papers",
    version="1.0.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list or ["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ─── Error bodies: always {"error": "..."} ─────────────────────────────────────

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={"error": f"Invalid request: {location}: {message}" if location else f"Invalid request: {message}"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    log.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ─── Routers ───────────────────────────────────────────────────────────────────

app.include_router(health.router)        # /health
app.include_router(documents.router)     # /documents/*
app.include_router(generation.router)    # /generate-questions
app.include_router(export.router)        # /export/*


@app.get("/")
def root():
    return {
        "name": "Question Paper Generator API",
        "version": "1.0.0",
        "endpoints": {
            "docs": "/docs",
            "health": "/health",
            "extract_text": "/documents/extract-text",
            "generate": "/generate-questions",
            "export": "/export",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
