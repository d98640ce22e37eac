"""Storage account naming.

Storage account names are global across Azure and limited to 3-24 lower-case
alphanumerics. Names longer than the limit are cut to 23 characters, one
short of the limit; existing accounts were named that way and must keep
resolving to the same name.
"""

STORAGE_ACCOUNT_SUFFIX = "storage"
STORAGE_ACCOUNT_NAME_LIMIT = 24
_TRUNCATED_LENGTH = 23


def derive_storage_account_name(project_name: str) -> str:
    """Derive the storage account name for a project.

    No sanitization happens here; characters Azure rejects are reported by
    the create call.
    """
    candidate = f"{project_name}{STORAGE_ACCOUNT_SUFFIX}".lower()
    if len(candidate) > STORAGE_ACCOUNT_NAME_LIMIT:
        candidate = candidate[:_TRUNCATED_LENGTH]
    return candidate
