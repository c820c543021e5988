"""Run the API with uvicorn: ``python -m gdp_records``."""

import uvicorn

from gdp_records.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "gdp_records.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
