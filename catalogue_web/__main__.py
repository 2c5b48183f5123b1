"""Entry point for running the web service as a module."""

import uvicorn

from catalogue_web.config import settings


def main() -> None:
    """Run the application server."""
    uvicorn.run(
        "catalogue_web.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
