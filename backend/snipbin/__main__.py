"""Run the server: `python -m snipbin` or the `snipbin` console script."""

import uvicorn

from snipbin.config import settings


def main() -> None:
    uvicorn.run(
        "snipbin.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
