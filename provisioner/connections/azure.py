"""Azure credential and Resource Manager clients for provisioning."""

import logging
from dataclasses import dataclass

from azure.core.credentials import TokenCredential
from azure.identity import ClientSecretCredential, DefaultAzureCredential
from azure.mgmt.resource import ResourceManagementClient
from azure.mgmt.storage import StorageManagementClient

from provisioner.config import get_config

logger = logging.getLogger(__name__)

MANAGEMENT_SCOPE = "https://management.azure.com/.default"
STORAGE_PROVIDER_NAMESPACE = "Microsoft.Storage"


@dataclass
class ManagementClients:
    """Resource Manager clients bound to one subscription."""

    subscription_id: str
    resources: ResourceManagementClient
    storage: StorageManagementClient


def build_credential() -> TokenCredential:
    """Service principal if fully configured, else the ambient identity."""
    cfg = get_config()
    az = cfg.get("azure", {})

    client_id = az.get("client_id", "")
    client_secret = az.get("client_secret", "")
    tenant_id = az.get("tenant_id", "")

    if client_id and client_secret and tenant_id:
        logger.info("Using service principal credential (client_id=%s)", client_id)
        return ClientSecretCredential(tenant_id, client_id, client_secret)

    logger.info("Using ambient Azure identity")
    return DefaultAzureCredential()


class AzureSession:
    """Authentication capability handed to the provisioning routine."""

    def __init__(self, credential: TokenCredential | None = None):
        self._credential = credential

    @property
    def credential(self) -> TokenCredential:
        if self._credential is None:
            self._credential = build_credential()
        return self._credential

    def authenticate(self) -> None:
        """Acquire a Resource Manager token; raises ClientAuthenticationError on failure."""
        self.credential.get_token(MANAGEMENT_SCOPE)
        logger.info("Authenticated to Azure Resource Manager")

    def connect(self, subscription_id: str) -> ManagementClients:
        """Select the subscription context.

        Reading the storage resource provider fails with the provider's error
        when the subscription is unknown or not accessible to the identity.
        """
        resources = ResourceManagementClient(self.credential, subscription_id)
        provider = resources.providers.get(STORAGE_PROVIDER_NAMESPACE)
        if provider.registration_state != "Registered":
            logger.warning(
                "%s is %s in subscription %s; account creation may fail",
                STORAGE_PROVIDER_NAMESPACE,
                provider.registration_state,
                subscription_id,
            )
        logger.info("Selected subscription %s", subscription_id)
        return ManagementClients(
            subscription_id=subscription_id,
            resources=resources,
            storage=StorageManagementClient(self.credential, subscription_id),
        )
