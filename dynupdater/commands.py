import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

from .config import Settings, settings
from .dynu import ConfigurationError, DynuClient, DynuUpdater, NetworkProbe
from .logger import logger

API_KEY_ENV = "DYNU_API_KEY"


def get_api_key(explicit: Optional[str], app_settings: Settings) -> str:
    """The --api-key argument wins over the configured DYNU_API_KEY"""
    if explicit:
        return explicit
    if app_settings.api_key:
        return app_settings.api_key
    raise ConfigurationError(
        f"provide 'api-key' argument or define environment variable {API_KEY_ENV}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dynupdater",
        description="Update a dynu domain using the public ip",
    )
    parser.add_argument(
        "--api-key",
        type=str,
        help=f"API KEY for dynu, used with priority over the {API_KEY_ENV} environment variable",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    subparsers = parser.add_subparsers(dest="command", required=True)

    refresh_parser = subparsers.add_parser(
        "refresh", help="publish the public ipv4/ipv6 of this host on the domain"
    )
    refresh_parser.add_argument("domain", type=str)

    upsert_parser = subparsers.add_parser(
        "upsert-txt", help="create or update the TXT record of a node name"
    )
    upsert_parser.add_argument("domain", type=str)
    upsert_parser.add_argument("key", type=str, help="node name of the TXT record")
    upsert_parser.add_argument("value", type=str, help="text data of the TXT record")
    upsert_parser.add_argument("--ttl", type=int, default=settings.default_ttl)

    delete_parser = subparsers.add_parser(
        "delete-txt", help="delete the TXT record of a node name"
    )
    delete_parser.add_argument("domain", type=str)
    delete_parser.add_argument("key", type=str, help="node name of the TXT record")

    records_parser = subparsers.add_parser(
        "records", help="print the DNS records of the domain as JSON"
    )
    records_parser.add_argument("domain", type=str)

    return parser


async def run(args: argparse.Namespace, api_key: str, app_settings: Settings):
    async with (
        DynuClient(
            api_key, base_url=app_settings.api_base_url, timeout=app_settings.request_timeout
        ) as client,
        NetworkProbe(
            ipv4_api=app_settings.ipv4_api,
            ipv6_api=app_settings.ipv6_api,
            timeout=app_settings.request_timeout,
        ) as probe,
    ):
        updater = DynuUpdater(client, probe)

        if args.command == "refresh":
            await updater.refresh(args.domain)
        elif args.command == "upsert-txt":
            await updater.upsert_text(args.domain, args.key, args.value, args.ttl)
        elif args.command == "delete-txt":
            await updater.delete_text(args.domain, args.key)
        elif args.command == "records":
            records = await updater.list_records(args.domain)
            print(json.dumps([record.to_wire() for record in records], indent=2))


def main(argv: Optional[list[str]] = None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        logger.setLevel(logging.DEBUG)

    try:
        api_key = get_api_key(args.api_key, settings)
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(2)

    try:
        asyncio.run(run(args, api_key, settings))
    except Exception as e:
        logger.error(f"{args.command} failed: {type(e).__name__}: {e}")
        logger.debug("traceback", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
