"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DispatchError              (dispatch.py)
    │   ├── CommandNotFoundError   (also a KeyError)
    │   ├── ConsistencyFaultError
    │   ├── InvalidSignalError
    │   └── SubmitError
    └── ConfigError                (comas.config.validation)
"""

from comas.kernel.errors.base import BaseError
from comas.kernel.errors.dispatch import (
    CommandNotFoundError,
    ConsistencyFaultError,
    DispatchError,
    InvalidSignalError,
    SubmitError,
)

__all__ = [
    "BaseError",
    "CommandNotFoundError",
    "ConsistencyFaultError",
    "DispatchError",
    "InvalidSignalError",
    "SubmitError",
]
