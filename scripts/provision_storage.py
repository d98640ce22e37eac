#!/usr/bin/env python3
"""Ensure an Azure storage account (and its resource group) exist.

Runs provision-storage from a checkout without installing the package.

Usage:
    python3 scripts/provision_storage.py --subscription-id SUB --name ProjectName \\
        --resource-group-name RGName --location "North Europe"
"""

import os
import sys

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(SCRIPT_DIR)

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from provisioner.cli import run  # noqa: E402

if __name__ == "__main__":
    run()
