"""Command line entry point: provision-storage.

Prints the storage account name on stdout when the account exists after the
run. Logs and errors go to stderr.

Usage:
    provision-storage --subscription-id SUB --name ProjectName \\
        --resource-group-name RGName --location "North Europe"
    provision-storage ... --sku Standard_GRS --kind BlobStorage --tag team=data
"""

import argparse
import logging
import sys
from collections.abc import Callable, Sequence

from azure.core.exceptions import AzureError
from pydantic import ValidationError

from provisioner.config import get_config
from provisioner.connections.azure import AzureSession
from provisioner.errors import ProvisioningError
from provisioner.models import ProvisionRequest, StorageKind, StorageSku
from provisioner.routine import StorageProvisioner

logger = logging.getLogger(__name__)

_SDK_HTTP_LOGGER = "azure.core.pipeline.policies.http_logging_policy"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _parse_tag(value: str) -> tuple[str, str]:
    key, sep, tag_value = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {value!r}")
    return key, tag_value


def build_parser() -> argparse.ArgumentParser:
    cfg = get_config()
    az = cfg.get("azure", {})
    storage = cfg.get("storage", {})

    parser = argparse.ArgumentParser(
        prog="provision-storage",
        description="Ensure an Azure resource group and storage account exist",
    )
    parser.add_argument(
        "--subscription-id",
        default=az.get("subscription_id") or None,
        help="Target subscription ID (default: azure.subscription_id)",
    )
    parser.add_argument(
        "--name",
        required=True,
        help="Project name the storage account name is derived from",
    )
    parser.add_argument(
        "--resource-group-name",
        required=True,
        help="Resource group to use or create",
    )
    parser.add_argument(
        "--location",
        default=az.get("location") or None,
        help="Region for newly created resources (default: azure.location)",
    )
    parser.add_argument(
        "--sku",
        choices=[s.value for s in StorageSku],
        default=storage.get("default_sku", StorageSku.STANDARD_LRS.value),
        help="Replication SKU (default: %(default)s)",
    )
    parser.add_argument(
        "--kind",
        choices=[k.value for k in StorageKind],
        default=storage.get("default_kind", StorageKind.STORAGE_V2.value),
        help="Account kind (default: %(default)s)",
    )
    parser.add_argument(
        "--tag",
        action="append",
        type=_parse_tag,
        default=[],
        metavar="KEY=VALUE",
        help="Tag for newly created resources; repeatable",
    )
    parser.add_argument(
        "--log-level",
        default=str(cfg.get("logging", {}).get("level", "INFO")).upper(),
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log verbosity (default: %(default)s)",
    )
    return parser


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    logging.getLogger(_SDK_HTTP_LOGGER).setLevel(logging.WARNING)


def main(
    argv: Sequence[str] | None = None,
    session_factory: Callable[[], AzureSession] = AzureSession,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.subscription_id:
        parser.error("--subscription-id is required (or set PROVISIONER_AZURE__SUBSCRIPTION_ID)")
    if not args.location:
        parser.error("--location is required (or set PROVISIONER_AZURE__LOCATION)")
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid log level {args.log_level!r} (choose from {', '.join(LOG_LEVELS)})")

    setup_logging(args.log_level)

    tags = {str(k): str(v) for k, v in dict(get_config().get("tags", {}) or {}).items()}
    tags.update(dict(args.tag))

    try:
        request = ProvisionRequest(
            subscription_id=args.subscription_id,
            name=args.name,
            resource_group_name=args.resource_group_name,
            location=args.location,
            sku=args.sku,
            kind=args.kind,
            tags=tags,
        )
    except ValidationError as e:
        logger.error("Invalid parameters: %s", e)
        return 1

    provisioner = StorageProvisioner(session_factory())
    try:
        result = provisioner.provision(request)
    except ProvisioningError as e:
        logger.error("%s", e)
        return 1
    except AzureError as e:
        logger.error("Azure request failed: %s", e)
        return 1

    print(result.message, file=sys.stderr)
    print(result.account_name)
    return 0


def run() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    run()
