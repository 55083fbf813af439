"""Run the API with uvicorn: python -m account_store"""

import uvicorn

from account_store.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "account_store.main:app", host=settings.host, port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
