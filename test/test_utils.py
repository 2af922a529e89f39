"""
Utilities behavioral tests.

Scope
- Validate the Unset sentinel (singleton, falsy, repr, sealed).
- Validate coalesce(), the rename() decorator and mirror() views.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from types import MappingProxyType
from unittest import TestCase

from specopts.utils import *


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsyAndRepr(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testSealed(self):
        with self.assertRaises(TypeError):
            class Sub(UnsetType):
                pass


class TestCoalesce(TestCase):

    def testKeepsProvidedValues(self):
        self.assertEqual(coalesce("name", "fallback"), "name")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)

    def testReplacesUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))


class TestRename(TestCase):

    def testSetsNameAndQualname(self):
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testRejectsBadArguments(self):
        with self.assertRaises(TypeError):
            rename(1)
        with self.assertRaises(TypeError):
            rename("name")(1)


class Holder:
    items = mirror("items")
    table = mirror("table")
    value = mirror("value")

    def __init__(self):
        self._items = ["a", "b"]
        self._table = {"a": 1}
        self._value = "text"


class TestMirror(TestCase):

    def testViews(self):
        holder = Holder()
        self.assertEqual(holder.items, ("a", "b"))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.value, "text")

    def testReadOnly(self):
        with self.assertRaises(AttributeError):
            Holder().items = []

    def testViewsTrackBackingField(self):
        holder = Holder()
        holder._items.append("c")
        self.assertEqual(holder.items, ("a", "b", "c"))

    def testRequiresString(self):
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == "__main__":
    unittest.main()
