from fastapi import FastAPI
from fastapi.openapi.docs import get_swagger_ui_html

from app.core.config import settings
from app.core.logging_config import setup_logging
from app.routers import accounts, health, locations, members

setup_logging(settings.log_level, settings.log_format)

app = FastAPI(
    title="Membership API",
    version="1.0.0",
    description="API for locations, membership accounts, and their members.",
    # Served behind a path prefix at the edge; Swagger needs the prefixed openapi URL.
    docs_url=None,
    root_path=settings.root_path,
)


@app.get("/docs", include_in_schema=False)
def swagger_ui():
    prefix = (settings.root_path or "").rstrip("/")
    openapi_url = f"{prefix}{app.openapi_url}"
    return get_swagger_ui_html(openapi_url=openapi_url, title=f"{app.title} - Docs")


app.include_router(health.router)
app.include_router(locations.router)
app.include_router(accounts.router)
app.include_router(members.router)
