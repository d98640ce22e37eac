import logging

import pytest
from azure.core.exceptions import ClientAuthenticationError, HttpResponseError

from provisioner.errors import StorageAccountCreationError, VerificationError
from provisioner.models import ProvisionRequest, ProvisionStatus, ResourceState
from provisioner.routine import StorageProvisioner


@pytest.fixture
def request_():
    return ProvisionRequest(
        subscription_id="sub-1",
        name="ProjectName",
        resource_group_name="RGName",
        location="North Europe",
    )


def test_empty_environment_creates_everything(cloud, session, request_):
    result = StorageProvisioner(session).provision(request_)

    assert result.account_name == "projectnamestorage"
    assert result.status == ProvisionStatus.CREATED
    assert result.resource_group_state == ResourceState.CREATED
    assert result.storage_account_state == ResourceState.CREATED
    assert cloud.resource_groups["RGName"].location == "North Europe"

    (_, rg, name, params) = cloud.creates("create_storage_account")[0]
    assert (rg, name) == ("RGName", "projectnamestorage")
    assert params.sku.name == "Standard_LRS"
    assert params.kind == "StorageV2"
    assert params.location == "North Europe"
    assert session.connected_to == ["sub-1"]


def test_second_run_only_verifies(cloud, session, request_):
    provisioner = StorageProvisioner(session)
    provisioner.provision(request_)
    creates_after_first_run = len(cloud.creates())

    result = provisioner.provision(request_)

    assert len(cloud.creates()) == creates_after_first_run
    assert result.account_name == "projectnamestorage"
    assert result.status == ProvisionStatus.VERIFIED
    assert result.resource_group_state == ResourceState.FOUND
    assert "Verified" in result.message


def test_created_message_differs_from_verified(session, request_):
    result = StorageProvisioner(session).provision(request_)
    assert result.message.startswith("Created storage account 'projectnamestorage'")


def test_existing_group_in_other_region_is_reused(cloud, session, request_):
    cloud.add_resource_group("RGName", "eastus")

    result = StorageProvisioner(session).provision(request_)

    assert result.resource_group_state == ResourceState.FOUND
    assert cloud.resource_groups["RGName"].location == "eastus"
    assert cloud.creates("create_resource_group") == []


def test_existing_account_is_verified(cloud, session, request_):
    cloud.add_resource_group("RGName", "North Europe")
    cloud.add_storage_account("RGName", "projectnamestorage")

    result = StorageProvisioner(session).provision(request_)

    assert result.account_name == "projectnamestorage"
    assert result.storage_account_state == ResourceState.FOUND


def test_authentication_failure_stops_before_resource_access(cloud, session, request_):
    cloud.auth_error = ClientAuthenticationError(message="no identity available")

    with pytest.raises(ClientAuthenticationError):
        StorageProvisioner(session).provision(request_)
    assert cloud.calls == []


def test_unknown_subscription_stops_before_resource_access(cloud, session, request_):
    request = ProvisionRequest(**{**request_.model_dump(), "subscription_id": "sub-unknown"})

    with pytest.raises(HttpResponseError, match="sub-unknown"):
        StorageProvisioner(session).provision(request)
    assert cloud.calls == []


def test_storage_failure_keeps_created_group(cloud, session, request_):
    cloud.storage_create_error = HttpResponseError(message="AccountNameInvalid")

    with pytest.raises(StorageAccountCreationError, match="projectnamestorage"):
        StorageProvisioner(session).provision(request_)
    assert "RGName" in cloud.resource_groups


def test_account_missing_after_create_fails_verification(cloud, session, request_, caplog):
    cloud.accounts_visible_after_create = False

    with caplog.at_level(logging.ERROR), pytest.raises(VerificationError) as exc:
        StorageProvisioner(session).provision(request_)

    assert exc.value.account_name == "projectnamestorage"
    assert "Check the logs" in str(exc.value)
    assert "not found in RGName" in caplog.text


def test_sku_and_kind_are_passed_through(cloud, session, request_):
    request = ProvisionRequest(
        **{**request_.model_dump(), "sku": "Standard_GZRS", "kind": "BlobStorage"}
    )

    StorageProvisioner(session).provision(request)

    (_, _, _, params) = cloud.creates("create_storage_account")[0]
    assert params.sku.name == "Standard_GZRS"
    assert params.kind == "BlobStorage"


def test_result_uses_name_returned_by_provider(cloud, session, request_):
    cloud.add_resource_group("RGName", "North Europe")
    cloud.add_storage_account("RGName", "projectnamestorage")
    cloud.storage_accounts[("RGName", "projectnamestorage")].name = "projectnamestorage01"

    result = StorageProvisioner(session).provision(request_)

    assert result.account_name == "projectnamestorage01"


def test_storage_lookup_failure_stops_the_run(cloud, session, request_):
    cloud.storage_get_error = HttpResponseError(message="AuthorizationFailed")

    with pytest.raises(HttpResponseError, match="AuthorizationFailed"):
        StorageProvisioner(session).provision(request_)
    assert cloud.creates("create_storage_account") == []
