"""Fatal provisioning errors.

Authentication and subscription failures are not wrapped here; they surface
as the azure-core exception raised by the credential or the SDK client.
"""


class ProvisioningError(Exception):
    """Base class for failures that abort a provisioning run."""


class ResourceGroupCreationError(ProvisioningError):
    def __init__(self, resource_group_name: str, reason: str):
        self.resource_group_name = resource_group_name
        super().__init__(f"Failed to create resource group '{resource_group_name}': {reason}")


class StorageAccountCreationError(ProvisioningError):
    def __init__(self, account_name: str, reason: str):
        self.account_name = account_name
        super().__init__(f"Failed to create storage account '{account_name}': {reason}")


class VerificationError(ProvisioningError):
    """The account could not be read back after the ensure step."""

    def __init__(self, account_name: str):
        self.account_name = account_name
        super().__init__(
            f"Storage account '{account_name}' was not found after provisioning. "
            "Check the logs for details."
        )
