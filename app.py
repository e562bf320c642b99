#!/usr/bin/env python3
"""
Run script for the Asset Lifecycle Engine API
"""

import argparse

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from itam_engine import create_app
from itam_engine.utils.logger import get_logger

logger = get_logger("itam_engine.run")


def parse_arguments():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='Asset Lifecycle Engine API')
    parser.add_argument('--host', default='127.0.0.1',
                        help='Interface to bind (default: 127.0.0.1)')
    parser.add_argument('--port', type=int, default=5000,
                        help='Port to listen on (default: 5000)')
    parser.add_argument('--debug', action='store_true',
                        help='Run the Flask development server in debug mode')
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_arguments()

    app = create_app()
    logger.info(f"Starting Asset Lifecycle Engine API on {args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=args.debug)
