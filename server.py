import argparse
import logging

from config.settings import config
from topvan_server.app import create_app
from topvan_server.repository.registry import STORE_BACKENDS, create_store

logger = logging.getLogger(__name__)


def parse_args():
    """Parse simple CLI arguments for running the server.

    Supports overriding the port and the document store backend.
    """
    parser = argparse.ArgumentParser(description='Run TopVan Manager backend server')
    parser.add_argument('--port', type=int, default=config.PORT, help='TCP port to bind (default: PORT env or config)')
    parser.add_argument('--store', choices=STORE_BACKENDS, default=None,
                        help='Document store backend (default: STORE_BACKEND env or config)')
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    app = create_app(store=create_store(config, backend=args.store))
    app.run(host='0.0.0.0', port=args.port, debug=config.DEBUG)
