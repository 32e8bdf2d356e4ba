"""
Test Configuration and Utilities

Common base classes and helper functions for SvcInjection tests
"""

import unittest
from typing import Any, Dict, Mapping, Optional

from svcinjection import ServiceModule

from fixtures import (
    Collector,
    CounterService,
    FailEngine,
    FailingService,
    Logger,
    Member,
    MySearch,
    MysqlEngine,
    Recorder,
    SearchService,
    SolrEngine,
    SphinxEngine,
)

FIXTURE_CLASSES: Dict[str, type] = {
    "LoggerClass": Logger,
    "Recorder": Recorder,
    "Counter": CounterService,
    "Failing": FailingService,
    "Collector": Collector,
    "Member": Member,
    "Search/SearchService": SearchService,
    "Search/Engine/FailEngine": FailEngine,
    "Search/Engine/MysqlEngine": MysqlEngine,
    "Search/Engine/SolrEngine": SolrEngine,
    "Search/Engine/SphinxEngine": SphinxEngine,
    "Custom/MySearch": MySearch,
}


class SvcInjectionTestCase(unittest.TestCase):
    """
    Base test case class for SvcInjection tests.

    Provides module builders with every fixture class registered.
    """

    def setUp(self):
        """Reset the constructor counter of the logger fixture"""
        Logger.instances = 0

    def create_module(
        self,
        services: Optional[Mapping[str, Any]] = None,
        parameters: Optional[Mapping[str, Any]] = None,
        name: str = "app",
    ) -> ServiceModule:
        """Create a module in configuration phase."""
        return create_module(services, parameters, name)

    def create_container(
        self,
        services: Optional[Mapping[str, Any]] = None,
        parameters: Optional[Mapping[str, Any]] = None,
    ):
        """Create a ready module and return a container for it."""
        module = create_module(services, parameters)
        module.ready()
        return module.create_container()


def create_module(
    services: Optional[Mapping[str, Any]] = None,
    parameters: Optional[Mapping[str, Any]] = None,
    name: str = "app",
) -> ServiceModule:
    """
    Create a module with all fixture classes registered.

    Args:
        services: Service configurations keyed by name
        parameters: Parameter values keyed by name
        name: Module name

    Example:
        >>> module = create_module({"counter": {"className": "Counter"}})
        >>> module.ready()
    """
    return ServiceModule(name, config={
        "classes": FIXTURE_CLASSES,
        "parameters": dict(parameters or {}),
        "services": dict(services or {}),
    })


def search_app_config() -> Dict[str, Any]:
    """Configuration of a small search application with tagged engines."""
    return {
        "classes": FIXTURE_CLASSES,
        "parameters": {
            "mode": "dev",
            "engine": "mysql",
            "searchClass": "Search/SearchService",
            "searchFailEngine": "Search/Engine/FailEngine",
            "searchMysqlEngine": "Search/Engine/MysqlEngine",
            "searchSolrEngine": "Search/Engine/SolrEngine",
            "searchSphinxEngine": "Search/Engine/SphinxEngine",
            "mySearchClass": "Custom/MySearch",
        },
        "services": {
            "search": {
                "className": "%searchClass%",
                "arguments": ["%engine%"],
            },
            "search_engine": {
                "abstract": True,
                "arguments": ["%mode%"],
                "tags": ["search"],
            },
            "search_fail_engine": {
                "extends": "search_engine",
                "className": "%searchFailEngine%",
            },
            "search_mysql_engine": {
                "extends": "search_engine",
                "className": "%searchMysqlEngine%",
            },
            "search_solr_engine": {
                "extends": "search_engine",
                "className": "%searchSolrEngine%",
            },
            "search_sphinx_engine": {
                "extends": "search_engine",
                "className": "%searchSphinxEngine%",
            },
            "my_search": {
                "className": "%mySearchClass%",
                "arguments": ["@search"],
                "calls": {"set_used_engine": ["solr"]},
            },
        },
    }
