"""
Taggable Module

This module provides the Taggable capability: a service whose class
implements it receives the instances of every service tagged with its own
service name right after it is constructed.
"""

from abc import ABC, abstractmethod
from typing import Any, List


class Taggable(ABC):
    """Capability of services that collect tagged services.

    When the factory creates a service whose instance is a ``Taggable``,
    it looks up every non-abstract definition carrying a tag equal to the
    service name, resolves each one through the container and passes the
    list to :meth:`process_tagged_services`.

    Example::

        class SearchService(Taggable):
            def __init__(self, engine_name):
                self.engine_name = engine_name
                self.engines = {}

            def process_tagged_services(self, services):
                for engine in services:
                    self.engines[engine.get_name()] = engine

        module.register_services({
            "search": {"className": "app.SearchService", "arguments": ["%engine%"]},
            "mysql_engine": {"className": "app.MysqlEngine", "tags": ["search"]},
        })
    """

    @abstractmethod
    def process_tagged_services(self, services: List[Any]) -> None:
        """Receive the instances of the services tagged with this service's name.

        Args:
            services: Service instances in tag discovery order
        """
        pass
