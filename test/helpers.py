"""
Tests for the internal helpers in cmdargs.utils.

This module verifies:
- The Unset sentinel (singleton identity, falsy semantics, finality) and coalesce().
- mirror() read-only snapshots.
- ordinal() and pluralize() message helpers.
- wglob() never raising and sorting matches.
"""
import os
import tempfile
import unittest
from types import MappingProxyType
from unittest import TestCase

from cmdargs.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` singleton and `coalesce()`.
    """

    def testSingleton(self) -> None:
        self.assertIs(Unset, UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(bool(Unset))

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        # None is a legitimate value and is preserved.
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")


class MirrorTest(TestCase):
    """
    Test suite for `mirror()` read-only properties.
    """

    class Holder:
        items = mirror("items")
        table = mirror("table")
        label = mirror("label")

        def __init__(self):
            self._items = [1, 2]
            self._table = {"a": 1}
            self._label = "x"

    def testSnapshots(self) -> None:
        holder = self.Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.label, "x")

    def testSnapshotDoesNotAlias(self) -> None:
        holder = self.Holder()
        items = holder.items
        holder._items.append(3)
        self.assertEqual(items, (1, 2))

    def testReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            self.Holder().items = ()

    def testRejectsNonString(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)


class MessageHelpersTest(TestCase):
    """
    Test suite for `ordinal()` and `pluralize()`.
    """

    def testOrdinalWords(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")

    def testOrdinalSuffixes(self) -> None:
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(112), "112th")

    def testPluralize(self) -> None:
        self.assertEqual(pluralize("value", 1), "1 value")
        self.assertEqual(pluralize("value", 2), "2 values")
        self.assertEqual(pluralize("argument", 0), "0 arguments")
        self.assertEqual(pluralize("match", 3), "3 matches")
        self.assertEqual(pluralize("entry", 2), "2 entries")


class WglobTest(TestCase):
    """
    Test suite for `wglob()`.
    """

    def testSortedMatches(self) -> None:
        with tempfile.TemporaryDirectory() as directory:
            for name in ("z.py", "a.py", "m.txt"):
                with open(os.path.join(directory, name), "w"):
                    pass
            self.assertEqual(
                wglob(os.path.join(directory, "*.py")),
                [os.path.join(directory, "a.py"), os.path.join(directory, "z.py")],
            )

    def testNoMatch(self) -> None:
        with tempfile.TemporaryDirectory() as directory:
            self.assertEqual(wglob(os.path.join(directory, "*")), [])

    def testRejectsNonString(self) -> None:
        with self.assertRaises(TypeError):
            wglob(None)


if __name__ == '__main__':
    unittest.main()
