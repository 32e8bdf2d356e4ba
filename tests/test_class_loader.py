"""
Class Loader Tests

Tests for resolving class names by alias and by import path.
"""

import unittest
from collections import OrderedDict

from svcinjection import ClassLoader, ClassNotFoundError, InvalidArgumentError

from fixtures import Logger, Recorder


class TestAliases(unittest.TestCase):
    """Test classes registered under an alias."""

    def setUp(self):
        self.loader = ClassLoader()
        self.loader.register("Recorder", Recorder)

    def test_get_alias(self):
        descriptor = self.loader.get("Recorder")

        self.assertIs(descriptor.cls, Recorder)
        self.assertEqual(descriptor.name, "Recorder")
        self.assertIs(self.loader.get("Recorder"), descriptor)

    def test_create_instance(self):
        recorder = self.loader.get("Recorder").create_instance(1, 2)

        self.assertIsInstance(recorder, Recorder)
        self.assertEqual(recorder.args, [1, 2])

    def test_has_method(self):
        descriptor = self.loader.get("Recorder")

        self.assertTrue(descriptor.has_method("first"))
        self.assertFalse(descriptor.has_method("missing"))

    def test_attribute_is_not_method(self):
        self.loader.register("LoggerClass", Logger)

        self.assertFalse(self.loader.get("LoggerClass").has_method("instances"))

    def test_register_rejects_non_class(self):
        with self.assertRaises(InvalidArgumentError):
            self.loader.register("thing", object())
        with self.assertRaises(InvalidArgumentError):
            self.loader.register("", Recorder)

    def test_update_does_not_overwrite(self):
        other = ClassLoader()
        other.register("Recorder", Logger)
        other.register("LoggerClass", Logger)

        self.loader.update(other)

        self.assertIs(self.loader.get("Recorder").cls, Recorder)
        self.assertIs(self.loader.get("LoggerClass").cls, Logger)


class TestImportPaths(unittest.TestCase):
    """Test classes loaded by import path."""

    def setUp(self):
        self.loader = ClassLoader()

    def test_dotted_path(self):
        self.assertIs(self.loader.get("collections.OrderedDict").cls, OrderedDict)

    def test_colon_path(self):
        self.assertIs(self.loader.get("collections:OrderedDict").cls, OrderedDict)

    def test_missing_module(self):
        with self.assertRaises(ClassNotFoundError):
            self.loader.get("no_such_package_xyz.Thing")

    def test_missing_attribute(self):
        with self.assertRaises(ClassNotFoundError) as ctx:
            self.loader.get("collections.NoSuchThing")

        self.assertIn("does not define", str(ctx.exception))

    def test_attribute_is_not_class(self):
        with self.assertRaises(ClassNotFoundError) as ctx:
            self.loader.get("os.path:join")

        self.assertIn("is not a class", str(ctx.exception))

    def test_unregistered_alias(self):
        with self.assertRaises(ClassNotFoundError):
            self.loader.get("Search/Unknown")


class TestRequestedClasses(unittest.TestCase):
    """Test classes requested ahead of loading."""

    def test_load_requested(self):
        loader = ClassLoader()
        loader.loadable("collections.OrderedDict")

        loader.load_requested()

        self.assertIs(loader.get("collections.OrderedDict").cls, OrderedDict)

    def test_load_requested_fails_fast(self):
        loader = ClassLoader()
        loader.loadable("no_such_package_xyz.Thing")

        with self.assertRaises(ClassNotFoundError):
            loader.load_requested()

    def test_placeholders_are_not_requested(self):
        loader = ClassLoader()
        loader.loadable("%searchClass%")

        loader.load_requested()


if __name__ == '__main__':
    unittest.main()
