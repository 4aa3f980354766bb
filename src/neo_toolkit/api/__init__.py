"""FastAPI integration for neo-toolkit."""

from .exception_handlers import ExceptionHandlerRegistry, register_exception_handlers
from .dependencies import get_toolkit

__all__ = [
    "ExceptionHandlerRegistry",
    "register_exception_handlers",
    "get_toolkit",
]
