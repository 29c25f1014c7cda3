"""Run the site with uvicorn: ``python -m devsite``."""

import uvicorn

from devsite.config import settings


def main() -> None:
    uvicorn.run(
        "devsite.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
