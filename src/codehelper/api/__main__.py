"""Run the proxy with Uvicorn on the configured host and port."""

import uvicorn

from .main import app


def main() -> None:
    config = app.state.config
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
