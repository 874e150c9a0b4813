import uvicorn

from sharex_uploader.config.settings import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "sharex_uploader.interfaces.http.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
