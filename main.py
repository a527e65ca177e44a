import argparse
import logging
import sys

from sentry_gateway.constants import COMMIT, DEBUG_MODE, LISTEN_ADDR, VERSION, build_settings
from sentry_gateway.errors import GatewayError
from sentry_gateway.gateway import run_gateway


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="sentry-gateway", description="Sentry gateway for Alertmanager")
    parser.add_argument("-d", "--dsn", default=None, help="Sentry DSN (env: SENTRY_DSN)")
    parser.add_argument("-t", "--template", default=None, help="Path of the template file of event message (env: TEMPLATE_PATH)")
    parser.add_argument("-a", "--addr", default=None, help=f"Address to listen on for WebHook (default: {LISTEN_ADDR})")
    parser.add_argument("--version", action="store_true", help="Display version information and exit")
    return parser.parse_args(argv)


def configure_logging():
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if DEBUG_MODE else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.version:
        print(f"Version: {VERSION} ({COMMIT})")
        return 0

    configure_logging()
    try:
        settings = build_settings(dsn=args.dsn, template_path=args.template, listen_addr=args.addr)
        run_gateway(settings)
    except (GatewayError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def cli():
    sys.exit(main())


if __name__ == '__main__':
    cli()
