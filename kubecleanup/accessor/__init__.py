"""Read-only access to cluster resources.

Submodules:
    base        -- ResourceAccessor protocol and AccessorError.
    kubernetes  -- kubernetes-asyncio backed accessor and connection bootstrap.
"""

from kubecleanup.accessor.base import AccessorError, ResourceAccessor

__all__ = ["AccessorError", "ResourceAccessor"]
