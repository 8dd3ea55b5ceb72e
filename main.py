import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import get_settings
from presentation.api import audit_router

settings = get_settings()

logging.basicConfig(level=settings.log_level)

app = FastAPI(title="Energy Audit Writing Assistant API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Include routers
app.include_router(audit_router)


@app.get("/")
async def root():
    return {"message": "Energy Audit Writing Assistant API"}


@app.get("/health")
async def health_check():
    # Missing credentials are reported, not fatal: search degrades to soft failures
    current = get_settings()
    return {
        "status": "healthy",
        "llm_configured": bool(current.openai_api_key),
        "search_configured": bool(current.search_api_key and current.search_engine_id),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
