"""Provisioning routine: resource group, storage account, verification."""

import logging

from provisioner.connections.azure import AzureSession
from provisioner.errors import VerificationError
from provisioner.models import ProvisionRequest, ProvisionResult, ProvisionStatus, ResourceState
from provisioner.naming import derive_storage_account_name
from provisioner.resources.resource_group import ensure_resource_group
from provisioner.resources.storage_account import ensure_storage_account, lookup_storage_account

logger = logging.getLogger(__name__)


class StorageProvisioner:
    """Ensures one storage account and its resource group exist.

    Steps run strictly in order and every failure other than a not-found
    lookup aborts the run. Nothing created earlier in the run is rolled back.
    """

    def __init__(self, session: AzureSession):
        self.session = session

    def provision(self, request: ProvisionRequest) -> ProvisionResult:
        self.session.authenticate()
        clients = self.session.connect(request.subscription_id)

        _, rg_state = ensure_resource_group(
            clients.resources,
            request.resource_group_name,
            request.location,
            tags=request.tags,
        )

        account_name = derive_storage_account_name(request.name)
        logger.info("Storage account name for project %s: %s", request.name, account_name)

        _, sa_state = ensure_storage_account(
            clients.storage,
            request.resource_group_name,
            account_name,
            request.location,
            sku=request.sku,
            kind=request.kind,
            tags=request.tags,
        )

        account = lookup_storage_account(clients.storage, request.resource_group_name, account_name)
        if account is None:
            logger.error(
                "Storage account %s not found in %s after provisioning",
                account_name,
                request.resource_group_name,
            )
            raise VerificationError(account_name)

        result = ProvisionResult(
            account_name=account.name,
            resource_group_name=request.resource_group_name,
            status=(
                ProvisionStatus.CREATED
                if sa_state == ResourceState.CREATED
                else ProvisionStatus.VERIFIED
            ),
            resource_group_state=rg_state,
            storage_account_state=sa_state,
        )
        logger.info("%s", result.message)
        return result
