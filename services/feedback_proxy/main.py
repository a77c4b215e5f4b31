"""FastAPI application entry point."""

import uvicorn
from ddtrace import patch_all

from feedback_proxy.app import create_app
from feedback_proxy.config import load_config

patch_all()

app = create_app()


def main():
    """Serves the proxy with uvicorn."""
    config = load_config()
    uvicorn.run(app, host=config.server.host, port=config.server.port, log_config=None)


if __name__ == "__main__":
    main()
