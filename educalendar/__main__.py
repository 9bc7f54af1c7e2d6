import uvicorn

from educalendar.core.config import load_settings


def main() -> None:
    settings = load_settings()
    uvicorn.run("educalendar.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
