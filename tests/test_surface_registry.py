from __future__ import annotations

import unittest

from wireframe_core.platform.in_memory import InMemorySurfaceRegistry
from wireframe_ui.element_schema import Element, Rect


def _surface(element_id: str) -> Element:
    return Element(element_id=element_id, bounds=Rect(0, 0, 4, 4))


class InMemorySurfaceRegistryTests(unittest.TestCase):
    def test_lists_surfaces_in_registration_order(self) -> None:
        a, b, c = _surface("a"), _surface("b"), _surface("c")
        registry = InMemorySurfaceRegistry([a, b])
        registry.add_surface(c)
        self.assertEqual(registry.list_active_root_surfaces(), [a, b, c])

    def test_stopped_surfaces_are_hidden_until_resumed(self) -> None:
        a, b = _surface("a"), _surface("b")
        registry = InMemorySurfaceRegistry([a, b])
        registry.stop_surface(a)
        self.assertEqual(registry.list_active_root_surfaces(), [b])
        registry.resume_surface(a)
        self.assertEqual(registry.list_active_root_surfaces(), [a, b])

    def test_remove_surface(self) -> None:
        a, b = _surface("a"), _surface("b")
        registry = InMemorySurfaceRegistry([a, b])
        registry.stop_surface(b)
        registry.remove_surface(b)
        self.assertEqual(registry.list_active_root_surfaces(), [a])
        with self.assertRaises(ValueError):
            registry.resume_surface(b)

    def test_duplicate_and_unknown_surfaces_raise(self) -> None:
        a = _surface("a")
        registry = InMemorySurfaceRegistry([a])
        with self.assertRaises(ValueError):
            registry.add_surface(a)
        with self.assertRaises(ValueError):
            registry.stop_surface(_surface("ghost"))


if __name__ == "__main__":
    unittest.main()
