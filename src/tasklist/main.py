"""Application entry point for the Tasklist backend server."""

from tasklist.app import App
from tasklist.config import Config
from tasklist.logging import setup_logging
from tasklist.web.runner import run_server


def main() -> None:
    config = Config()  # type: ignore[call-arg]
    setup_logging(config)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
