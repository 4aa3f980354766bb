"""FastAPI dependencies for neo-toolkit."""

from functools import lru_cache

from ..config.settings import get_settings
from ..toolkit import Toolkit


@lru_cache()
def get_toolkit() -> Toolkit:
    """Get the shared toolkit built from environment settings.

    Use with ``Depends(get_toolkit)``; override it in tests through
    ``app.dependency_overrides``.
    """
    return Toolkit(get_settings())
