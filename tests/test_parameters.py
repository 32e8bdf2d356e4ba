"""
Parameter Tests

Tests for ParameterStore.
"""

import unittest

from svcinjection import InvalidArgumentError, ParameterNotFoundError, ParameterStore


class TestParameterStore(unittest.TestCase):
    """Test getting and setting parameters."""

    def test_get_and_set(self):
        parameters = ParameterStore({"mode": "dev"})
        parameters.set("port", 8080)

        self.assertEqual(parameters.get("mode"), "dev")
        self.assertEqual(parameters.get("port"), 8080)
        self.assertTrue(parameters.isset("port"))
        self.assertFalse(parameters.isset("host"))

    def test_missing_parameter(self):
        with self.assertRaises(ParameterNotFoundError) as ctx:
            ParameterStore().get("mode")

        self.assertEqual(ctx.exception.argument, "mode")

    def test_falsy_values_are_kept(self):
        parameters = ParameterStore({"debug": False, "retries": 0, "prefix": ""})

        self.assertIs(parameters.get("debug"), False)
        self.assertEqual(parameters.get("retries"), 0)
        self.assertEqual(parameters.get("prefix"), "")

    def test_update_without_overwrite(self):
        parameters = ParameterStore({"mode": "dev"})

        parameters.update({"mode": "prod", "host": "localhost"}, overwrite=False)

        self.assertEqual(parameters.get("mode"), "dev")
        self.assertEqual(parameters.get("host"), "localhost")

    def test_invalid_input(self):
        parameters = ParameterStore()

        with self.assertRaises(InvalidArgumentError):
            parameters.set("", 1)
        with self.assertRaises(InvalidArgumentError):
            parameters.update(["mode"])

    def test_all_returns_copy(self):
        parameters = ParameterStore({"mode": "dev"})

        values = parameters.all()
        values["mode"] = "prod"

        self.assertEqual(parameters.get("mode"), "dev")
        self.assertEqual(list(parameters), ["mode"])
        self.assertEqual(len(parameters), 1)


if __name__ == '__main__':
    unittest.main()
