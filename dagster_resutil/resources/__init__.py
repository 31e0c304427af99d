"""Resources package

Place resource factories and instances here.
"""

from .connection_factory_resource import ConnectionFactoryResource

__all__ = [
    "ConnectionFactoryResource",
]
