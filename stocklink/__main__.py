"""Entry point: python -m stocklink (or the `stocklink` console script)."""
import logging
import sys

import uvicorn

from stocklink.config import load_settings
from stocklink.errors import ConfigurationError
from stocklink.main import create_app


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        settings = load_settings()
    except ConfigurationError as e:
        logging.error(str(e))
        sys.exit(1)

    logging.info(f"Listening on http://localhost:{settings.port}")
    uvicorn.run(create_app(settings=settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
