"""Dynaconf settings for provision-storage.

Settings files are resolved against the project root so the CLI reads the
same ``config/`` directory whatever the working directory is. Environment
variables use the ``PROVISIONER_`` prefix with ``__`` for nesting, e.g.
``PROVISIONER_AZURE__SUBSCRIPTION_ID``.
"""

import os

from dynaconf import Dynaconf

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

config = Dynaconf(
    envvar_prefix="PROVISIONER",
    root_path=PROJECT_ROOT,
    settings_files=[
        os.path.join("config", "config.yaml"),
        os.path.join("config", "config.local.yaml"),
    ],
    environments=False,
    load_dotenv=False,
    merge_enabled=True,
)


def get_config() -> Dynaconf:
    """Return the process-wide settings object."""
    return config
