"""
Run the service with uvicorn: `python -m hwid_api`.
"""
import uvicorn

from hwid_api.core.config import settings


def main():
    uvicorn.run(
        "hwid_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
