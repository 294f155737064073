# pyCatalog Module - Command Line
# -*- coding: utf-8 -*-
"""
 Python module to aggregate public REST catalogs behind a small HTTP service

 Command Line:
    python -m pycatalog serve [-host HOST] [-port PORT]
    python -m pycatalog fetch {stars,pokemon,starwars}
    python -m pycatalog radar "a1X|b2Y|"
    python -m pycatalog version

 Settings are read from the environment and from a local .env file.
"""

import argparse
import json
import sys

from dotenv import load_dotenv

from pycatalog import version, set_debug
from pycatalog.radar import format_grid, parse_radar

DOMAINS = ("stars", "pokemon", "starwars")


def build_parser():
    p = argparse.ArgumentParser(prog="pyCatalog", description=f"pyCatalog Module v{version}")
    subparsers = p.add_subparsers(dest="command", title='commands (run <command> -h to see usage information)',
                                  required=True)

    serve_args = subparsers.add_parser("serve", help='Run the HTTP server')
    serve_args.add_argument("-host", type=str, default=None, help="Bind address [Default from settings]")
    serve_args.add_argument("-port", type=int, default=None, help="Port [Default from settings]")

    fetch_args = subparsers.add_parser("fetch", help='Warm the cache for one catalog and print its summary')
    fetch_args.add_argument("domain", choices=DOMAINS, help="Catalog to fetch")

    radar_args = subparsers.add_parser("radar", help='Decode radar coordinates and print the grid')
    radar_args.add_argument("coordinates", type=str, help="Pipe-delimited cells, e.g. a1X|b2Y|")

    subparsers.add_parser("version", help='Print version information')

    p.add_argument("-debug", action="store_true", default=False, help="Enable debug output")
    return p


def run_fetch(domain):
    from pycatalog.server.config import get_settings
    from pycatalog.server.core import CatalogManager

    manager = CatalogManager()
    manager.initialize(get_settings())
    try:
        if domain == "stars":
            summary = manager.stars.summary()
            result = {k: v for k, v in summary.items() if k != "data"}
        elif domain == "pokemon":
            result = manager.pokedex.heights()
        else:
            summary = manager.starwars.summary()
            result = {k: v for k, v in summary.items() if k != "planets"}
            result["ibf"] = {p["name"]: p["ibf"] for p in summary["planets"]}
    finally:
        manager.shutdown()
    print(json.dumps(result, indent=2))
    return 0


def main(argv=None):
    load_dotenv()
    args = build_parser().parse_args(argv)

    if args.debug:
        set_debug(True)

    if args.command == 'serve':
        import uvicorn
        from pycatalog.server.main import app

        settings = app.state.settings
        uvicorn.run(app, host=args.host or settings.server_host, port=args.port or settings.server_port)
        return 0

    if args.command == 'fetch':
        return run_fetch(args.domain)

    if args.command == 'radar':
        print(format_grid(parse_radar(args.coordinates)))
        return 0

    if args.command == 'version':
        print("pyCatalog [%s]" % version)
        return 0

    return 1


if __name__ == "__main__":
    sys.exit(main())
