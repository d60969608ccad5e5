import uvicorn
from fastapi import FastAPI
from docreview.app.core.logging import configure_logging
from docreview.app.core.config import settings
from docreview.app.core.errors import register_error_handlers
from docreview.app.api.v1.doc_review_routes import router as doc_review_router

configure_logging(settings.LOG_LEVEL)
app = FastAPI(title="Document Review Service")
register_error_handlers(app)

@app.get("/health")
def health():
    return {
        "status": "ok",
        "api_prefix": settings.API_PREFIX or "/",
        "header_identity": settings.ALLOW_HEADER_IDENTITY,
    }

app.include_router(doc_review_router, prefix=settings.API_PREFIX)

def run():
    """Console entry point: serve the API with uvicorn on HOST:PORT."""
    uvicorn.run("docreview.main:app", host=settings.HOST, port=settings.PORT)
