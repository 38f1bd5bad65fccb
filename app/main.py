import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv

load_dotenv()

from app.config import Settings, get_settings

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("comconnect-ai")

# Import routers
from app.routers import companion, roadmap, summarize, progress, events

app = FastAPI(
    title="ComConnect-AI API",
    description="AI companion, learning roadmaps with progress tracking, text summarization and tech events.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Every error body has the shape {"error": "..."}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {str(exc)}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.include_router(companion.router, prefix="/api", tags=["AI Companion"])
app.include_router(roadmap.router, prefix="/api", tags=["Roadmap Generation"])
app.include_router(summarize.router, prefix="/api", tags=["Summarizer"])
app.include_router(progress.router, prefix="/api", tags=["Roadmap Progress"])
app.include_router(events.router, prefix="/api", tags=["Tech Events"])


@app.get("/")
async def root():
    return {"message": "ComConnect-AI API is running. Use endpoints under /api/"}


@app.get("/health")
async def health(settings: Settings = Depends(get_settings)):
    return {
        "status": "ok",
        "gemini_configured": settings.gemini_configured,
        "progress_backend": settings.progress_backend,
    }


# Local development runner
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="127.0.0.1", port=8000, reload=True)
