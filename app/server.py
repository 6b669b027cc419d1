import uvicorn

from app.config import get_settings
from app.main import create_app


def main():
    settings = get_settings()
    app = create_app(settings)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
