"""
Catstronauts GraphQL gateway
GraphQL API over the Catstronauts tracks REST service
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
