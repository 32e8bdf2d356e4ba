"""
Search Application Tests

End-to-end scenario: a search service collecting tagged engines that
extend one abstract definition, and a custom search built on top of it.
"""

import unittest

from svcinjection import AbstractServiceError, ServiceModule

from conftest import SvcInjectionTestCase, search_app_config
from fixtures import FailEngine, MySearch, SearchService


class TestSearchApp(SvcInjectionTestCase):
    """Test the search application wiring."""

    def setUp(self):
        super().setUp()
        self.module = ServiceModule("app", config=search_app_config())
        self.module.ready()
        self.container = self.module.create_container()

    def test_search_is_singleton(self):
        search = self.container.get("search")

        self.assertIsInstance(search, SearchService)
        self.assertIs(self.container.get("search"), search)

    def test_engines_are_injected(self):
        search = self.container.get("search")

        self.assertEqual(set(search.engines), {"mysql", "solr", "sphinx"})
        self.assertTrue(search.error)
        self.assertEqual(search.engines["mysql"].mode, "dev")

    def test_search_with_configured_engine(self):
        search = self.container.get("search")

        self.assertEqual(search.get_used_engine().get_name(), "mysql")
        self.assertEqual(search.search(["word"]), 'Mysql search results of keywords: "word"')

    def test_switch_engine(self):
        search = self.container.get("search")

        search.set_used_engine("solr")

        self.assertEqual(search.search(["word"]), 'Solr search results of keywords: "word"')

    def test_custom_search(self):
        my_search = self.container.get("my_search")

        self.assertIsInstance(my_search, MySearch)
        self.assertIs(my_search.search_service, self.container.get("search"))
        self.assertEqual(
            my_search.search(["word"]),
            'Search words "word" using engine "solr". (custom search)',
        )

    def test_abstract_engine_cannot_be_created(self):
        with self.assertRaises(AbstractServiceError):
            self.container.get("search_engine")

    def test_find_by_tag(self):
        engines = self.container.find_by_tag("search")

        self.assertEqual(len(engines), 4)
        self.assertIsInstance(engines[0], FailEngine)
        self.assertEqual(
            [engine.get_name() for engine in engines],
            ["fail", "mysql", "solr", "sphinx"],
        )

    def test_engine_definitions_are_merged(self):
        definition = self.module.registry.get("search_solr_engine")

        self.assertEqual(definition.get_arguments(), ["%mode%"])
        self.assertEqual(definition.get_tags(), ["search"])
        self.assertEqual(definition.get_class_name(), "Search/Engine/SolrEngine")

    def test_isset(self):
        self.assertTrue(self.container.isset("search"))
        self.assertTrue(self.container.isset("search_engine"))
        self.assertFalse(self.container.isset("search_elastic_engine"))


if __name__ == '__main__':
    unittest.main()
