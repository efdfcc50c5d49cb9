# main_api.py
import uvicorn

from infra.config import EngineSettings
from infra.logging_config import setup_logging

from api.app import create_app


def main():
    settings = EngineSettings.from_env()
    setup_logging(settings)
    app = create_app(settings)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_config=None)


if __name__ == "__main__":
    main()
