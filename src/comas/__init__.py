"""
comas – in-process command management system.

Import path convention::

    from comas.dispatch import Dispatcher
    from comas.commands import Command, command
    from comas.kernel.errors import CommandNotFoundError
    from comas.config import DispatcherSettings
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
