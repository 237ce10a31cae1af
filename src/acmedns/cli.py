"""Command line entry point — register an ACME DNS account for a domain and store it."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from acmedns.client import Client
from acmedns.config import AppConfig, load_config
from acmedns.errors import AcmeDnsError
from acmedns.models import Account
from acmedns.storage.file import FileStorage

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="acmedns-register",
        description="Register an ACME DNS account for a domain and save it to a JSON storage file.",
    )
    parser.add_argument("--api", help="ACME DNS server API URL (env: ACMEDNS_API_URL)")
    parser.add_argument("--domain", required=True, help="Domain to register an account for")
    parser.add_argument("--storage", help="Path to the JSON storage file to create/update (env: ACMEDNS_STORAGE_PATH)")
    parser.add_argument(
        "--allow-from",
        help="Comma separated CIDR networks the account is allowed to be used from (env: ACMEDNS_ALLOW_FROM)",
    )
    parser.add_argument("--timeout", help="Request timeout in seconds (env: ACMEDNS_TIMEOUT)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def run(config: AppConfig, domain: str) -> Account:
    """Register an account, store it under ``domain`` and return it."""
    storage = FileStorage(config.storage_path, config.storage_mode)

    with Client(config.api_url, timeout=config.timeout) as client:
        account = client.register_account(config.allow_from)

    storage.put(domain, account)
    storage.save()

    logger.info(
        "New account created for %r. To complete setup for %r you must provision "
        "the following CNAME in your DNS zone:\n%s CNAME %s.",
        domain,
        domain,
        f"_acme-challenge.{domain}",
        account.full_domain,
    )
    return account


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.domain:
        parser.error("You must provide a non-empty --domain flag")

    try:
        config = load_config(
            api_url=args.api,
            storage_path=args.storage,
            allow_from=args.allow_from,
            timeout=args.timeout,
        )
        run(config, args.domain)
    except AcmeDnsError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
