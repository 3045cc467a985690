from __future__ import annotations

import unittest

from chopsticks.keys import KeyBinding, KeyRegistry


class KeyRegistryTests(unittest.TestCase):
    def test_dispatch_runs_bound_action_and_ignores_unbound_keys(self) -> None:
        registry = KeyRegistry[str]().register(
            KeyBinding(("ESC", "CTRL_C"), lambda: "close"),
            KeyBinding(("ENTER",), lambda: "run"),
        )

        self.assertEqual(registry.dispatch("CTRL_C"), "close")
        self.assertEqual(registry.dispatch("ENTER"), "run")
        self.assertIsNone(registry.dispatch("x"))
        self.assertTrue(registry.bound("ESC"))
        self.assertFalse(registry.bound("TAB"))

    def test_later_binding_overrides_earlier_one(self) -> None:
        registry = KeyRegistry[str]()
        registry.register(KeyBinding(("UP",), lambda: "first"))
        registry.register(KeyBinding(("UP",), lambda: "second"))

        self.assertEqual(registry.dispatch("UP"), "second")


if __name__ == "__main__":
    unittest.main()
