"""Idempotent storage account provisioning."""

import logging
from typing import Any

from azure.core.exceptions import HttpResponseError, ResourceNotFoundError
from azure.mgmt.storage import StorageManagementClient
from azure.mgmt.storage.models import Sku, StorageAccountCreateParameters

from provisioner.errors import StorageAccountCreationError
from provisioner.models import (
    Found,
    ResourceState,
    StorageAccountSpec,
    StorageKind,
    StorageSku,
    ToCreate,
)

logger = logging.getLogger(__name__)


def lookup_storage_account(
    client: StorageManagementClient, resource_group_name: str, account_name: str
) -> Any | None:
    """Return the storage account, or None if it does not exist."""
    try:
        return client.storage_accounts.get_properties(resource_group_name, account_name)
    except ResourceNotFoundError:
        return None
    except HttpResponseError as e:
        logger.error("Storage account %s lookup failed: %s", account_name, e.message)
        raise


def decide_storage_account(existing: Any | None, spec: StorageAccountSpec) -> Found | ToCreate:
    """Reuse an existing account without comparing its SKU or kind."""
    if existing is not None:
        return Found(existing)
    return ToCreate(spec)


def build_create_parameters(spec: StorageAccountSpec) -> StorageAccountCreateParameters:
    return StorageAccountCreateParameters(
        sku=Sku(name=spec.sku.value),
        kind=spec.kind.value,
        location=spec.location,
        tags=dict(spec.tags) or None,
    )


def apply_storage_account(
    client: StorageManagementClient, decision: Found | ToCreate
) -> tuple[Any, ResourceState]:
    if isinstance(decision, Found):
        account = decision.resource
        logger.info("Storage account %s already exists", account.name)
        return account, ResourceState.FOUND

    spec: StorageAccountSpec = decision.spec
    logger.info(
        "Creating storage account %s in %s (sku=%s, kind=%s)",
        spec.account_name,
        spec.resource_group_name,
        spec.sku.value,
        spec.kind.value,
    )
    try:
        poller = client.storage_accounts.begin_create(
            spec.resource_group_name,
            spec.account_name,
            build_create_parameters(spec),
        )
        account = poller.result()
    except HttpResponseError as e:
        logger.error("Storage account %s creation failed: %s", spec.account_name, e.message)
        raise StorageAccountCreationError(spec.account_name, e.message) from e
    logger.info("Created storage account %s", account.name)
    return account, ResourceState.CREATED


def ensure_storage_account(
    client: StorageManagementClient,
    resource_group_name: str,
    account_name: str,
    location: str,
    sku: StorageSku = StorageSku.STANDARD_LRS,
    kind: StorageKind = StorageKind.STORAGE_V2,
    tags: dict[str, str] | None = None,
) -> tuple[Any, ResourceState]:
    existing = lookup_storage_account(client, resource_group_name, account_name)
    spec = StorageAccountSpec(
        resource_group_name=resource_group_name,
        account_name=account_name,
        location=location,
        sku=sku,
        kind=kind,
        tags=tags or {},
    )
    return apply_storage_account(client, decide_storage_account(existing, spec))
