"""Registry document encoders."""

from .serializer import serialize_registry, write_registry

__all__ = [
    "serialize_registry",
    "write_registry",
]
