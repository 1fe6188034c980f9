"""pyipsas - Async Python client for the IPSAS note preparation backend."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyipsas")
except PackageNotFoundError:
    __version__ = "0+local"
from pyipsas.app import App, configure_logging
from pyipsas.client import IpsasClient
from pyipsas.config import IpsasConfig
from pyipsas.exceptions import (
    IpsasApiError,
    IpsasAuthenticationError,
    IpsasConfigError,
    IpsasError,
    IpsasTransportError,
    SyncFailure,
)
from pyipsas.formatting import format_currency, format_date, format_number
from pyipsas.models import LoginResponse, NoteSaveRequest, SyncTarget
from pyipsas.movements import calculate_ppe_movement
from pyipsas.sync import PeriodicSyncCoordinator, SyncHandle, SyncResult, SyncState
from pyipsas.validation import validate_email, validate_number, validate_required

__all__ = [
    "__version__",
    "App",
    "IpsasApiError",
    "IpsasAuthenticationError",
    "IpsasClient",
    "IpsasConfig",
    "IpsasConfigError",
    "IpsasError",
    "IpsasTransportError",
    "LoginResponse",
    "NoteSaveRequest",
    "PeriodicSyncCoordinator",
    "SyncFailure",
    "SyncHandle",
    "SyncResult",
    "SyncState",
    "SyncTarget",
    "calculate_ppe_movement",
    "configure_logging",
    "format_currency",
    "format_date",
    "format_number",
    "validate_email",
    "validate_number",
    "validate_required",
]
