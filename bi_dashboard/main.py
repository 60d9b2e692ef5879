"""
FastAPI Production Application

Main entry point for the BI Dashboard API.

    uvicorn bi_dashboard.main:app
"""

from bi_dashboard.config import get_settings
from bi_dashboard.serving.api import create_api_app

app = create_api_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "bi_dashboard.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.monitoring.log_level.lower(),
    )


if __name__ == "__main__":
    run()
