"""Run the proxy with uvicorn: python -m storefront_proxy."""

import uvicorn

from storefront_proxy.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "storefront_proxy.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
