# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""REST API for fire risk survey scoring (optional ``api`` extra)."""

API_INSTALL_HINT = "pip install -e '.[api]'"


def check_dependency(package: str, install_hint: str = API_INSTALL_HINT) -> None:
    """Raise *ImportError* with a helpful message if *package* is missing."""
    try:
        __import__(package)
    except ImportError:
        raise ImportError(
            f"API feature requires '{package}'. Install with: {install_hint}"
        ) from None
