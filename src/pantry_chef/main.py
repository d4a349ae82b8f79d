"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn pantry_chef.main:app --reload
"""

from pantry_chef.factory import create_app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    from pantry_chef.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "pantry_chef.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )
