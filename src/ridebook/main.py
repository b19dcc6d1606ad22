"""Application entry point for the Ridebook identifier server."""

from ridebook.app import App
from ridebook.config import Config
from ridebook.logging import setup_logging
from ridebook.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
