#!/usr/bin/env python3
"""
manage.py - project entry point

Usage:
    python manage.py                    # start the web server (default)
    python manage.py web                # start the web server
    python manage.py web --port 9000    # start the web server on another port
    python manage.py client             # terminal client against TODO_API_URL
    python manage.py client --url http://host:8000
"""

import argparse
import logging
import sys


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_web_server(host: str = "127.0.0.1", port: int = 8000, debug: bool = False):
    """Start the API server"""
    import uvicorn

    from backend.src.web.config import config

    print("\n" + "=" * 50)
    print(f"  {config.app_name} API Server")
    print("=" * 50)
    print(f"  URL: http://{host}:{port}")
    print(f"  Database: {config.database_url}")
    print(f"  Rate limit: {config.rate_limit if config.rate_limit_enabled else 'OFF'}")
    print(f"  Debug: {'ON' if debug else 'OFF'}")
    print("\nPress Ctrl+C to stop.\n")

    if debug:
        uvicorn.run("backend.src.web.main:app", host=host, port=port, reload=True)
    else:
        from backend.src.web.main import app

        uvicorn.run(app, host=host, port=port)


def run_client(url: str):
    """Start the terminal client"""
    import cli_menu

    cli_menu.main(url)


def main(argv=None):
    from backend.src.web.config import config

    parser = argparse.ArgumentParser(
        description="Todo tracker - management entry point",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python manage.py                       # start the web server
  python manage.py web --port 9000       # start on port 9000
  python manage.py client                # open the terminal client
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="commands")

    parser_web = subparsers.add_parser("web", help="start the web server")
    parser_web.add_argument("--host", default=config.host, help="bind address")
    parser_web.add_argument("--port", type=int, default=config.port, help="port")
    parser_web.add_argument("--debug", action="store_true", help="auto-reload on code changes")

    parser_client = subparsers.add_parser("client", help="open the terminal client")
    parser_client.add_argument("--url", default=config.api_url, help="server root URL")

    args = parser.parse_args(argv)
    setup_logging(config.log_level)

    if not args.command:
        run_web_server(host=config.host, port=config.port, debug=config.debug)
        return

    if args.command == "web":
        run_web_server(host=args.host, port=args.port, debug=args.debug or config.debug)
    elif args.command == "client":
        run_client(args.url)
    else:
        parser.print_help()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\nStopped")
        sys.exit(0)
