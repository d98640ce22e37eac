"""Idempotent resource group provisioning."""

import logging
from typing import Any

from azure.core.exceptions import HttpResponseError, ResourceNotFoundError
from azure.mgmt.resource import ResourceManagementClient

from provisioner.errors import ResourceGroupCreationError
from provisioner.models import Found, ResourceGroupSpec, ResourceState, ToCreate

logger = logging.getLogger(__name__)


def lookup_resource_group(client: ResourceManagementClient, name: str) -> Any | None:
    """Return the resource group, or None if it does not exist."""
    try:
        return client.resource_groups.get(name)
    except ResourceNotFoundError:
        return None


def decide_resource_group(existing: Any | None, spec: ResourceGroupSpec) -> Found | ToCreate:
    """Reuse an existing group unchanged, even if it lives in another region."""
    if existing is not None:
        return Found(existing)
    return ToCreate(spec)


def apply_resource_group(
    client: ResourceManagementClient, decision: Found | ToCreate
) -> tuple[Any, ResourceState]:
    if isinstance(decision, Found):
        group = decision.resource
        logger.info("Using existing resource group %s (%s)", group.name, group.location)
        return group, ResourceState.FOUND

    spec: ResourceGroupSpec = decision.spec
    logger.info("Creating resource group %s in %s", spec.name, spec.location)
    params: dict[str, Any] = {"location": spec.location}
    if spec.tags:
        params["tags"] = dict(spec.tags)
    try:
        group = client.resource_groups.create_or_update(spec.name, params)
    except HttpResponseError as e:
        logger.error("Resource group %s creation failed: %s", spec.name, e.message)
        raise ResourceGroupCreationError(spec.name, e.message) from e
    logger.info("Created resource group %s", group.name)
    return group, ResourceState.CREATED


def ensure_resource_group(
    client: ResourceManagementClient,
    name: str,
    location: str,
    tags: dict[str, str] | None = None,
) -> tuple[Any, ResourceState]:
    """Return the named resource group, creating it in ``location`` if absent.

    Lookup errors other than not-found propagate unchanged.
    """
    existing = lookup_resource_group(client, name)
    decision = decide_resource_group(existing, ResourceGroupSpec(name, location, tags or {}))
    return apply_resource_group(client, decision)
