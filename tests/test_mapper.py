from __future__ import annotations

import os
import threading
import unittest
from unittest import mock

from pydantic import BaseModel

from modelmapper import Mapper, Registry, Transformation, Token, map_function, DuplicateMappingError, MappingNotFoundError


class Foo(BaseModel):
    name: str

class Bar(BaseModel):
    title: str

def foo_to_bar(foo: Foo) -> Bar:
    return Bar(title=foo.name)

class TestMapper(unittest.TestCase):
    def setUp(self):
        Mapper.set_default_registry(None)

    def tearDown(self):
        Mapper.set_default_registry(None)

    def test_map(self):
        Mapper.register(Transformation(Foo, Bar, foo_to_bar))

        self.assertEqual(Mapper.map(Foo, Bar, Foo(name="x")).title, "x")

        with self.assertRaises(MappingNotFoundError):
            Mapper.map(Bar, Foo, Bar(title="x"))

    def test_duplicate(self):
        Mapper.register(Transformation(Foo, Bar, foo_to_bar))

        with self.assertRaises(DuplicateMappingError):
            Mapper.register_many([Transformation(Foo, Bar, lambda foo: Bar(title="g"))])

        self.assertEqual(Mapper.map(Foo, Bar, Foo(name="x")).title, "x")

    def test_delete_and_clear(self):
        Mapper.register(
            Transformation(Foo, Bar, foo_to_bar),
            Transformation(Bar, Foo, lambda bar: Foo(name=bar.title))
        )

        Mapper.delete_mapping(Foo, Bar)
        self.assertFalse(Mapper.has_mapping(Foo, Bar))
        self.assertIsNotNone(Mapper.find_mapping(Bar, Foo))

        Mapper.clear()
        with self.assertRaises(MappingNotFoundError):
            Mapper.map(Bar, Foo, Bar(title="x"))

    def test_map_all(self):
        Mapper.register(Transformation(Foo, Bar, foo_to_bar))

        bars = Mapper.map_all(Foo, Bar, [Foo(name="a"), Foo(name="b")])

        self.assertEqual([bar.title for bar in bars], ["a", "b"])

    def test_default_is_shared(self):
        self.assertIs(Mapper.default_registry(), Mapper.default_registry())
        self.assertIs(Mapper.current(), Mapper.default_registry())

    def test_new_registry_does_not_replace_default(self):
        default = Mapper.default_registry()

        isolated = Registry()
        isolated.register(Transformation(Foo, Bar, foo_to_bar))

        self.assertIs(Mapper.default_registry(), default)
        self.assertFalse(Mapper.has_mapping(Foo, Bar))

    def test_set_default_registry(self):
        previous = Mapper.default_registry()
        registry = Registry()

        self.assertIs(Mapper.set_default_registry(registry), previous)
        Mapper.register(Transformation(Foo, Bar, foo_to_bar))

        self.assertTrue(registry.has_mapping(Foo, Bar))
        self.assertFalse(previous.has_mapping(Foo, Bar))

    def test_reset_creates_fresh_default(self):
        Mapper.register(Transformation(Foo, Bar, foo_to_bar))

        Mapper.set_default_registry(None)

        self.assertFalse(Mapper.has_mapping(Foo, Bar))

    def test_lazy_default_is_created_once(self):
        barrier = threading.Barrier(8)
        registries = []

        def fetch():
            barrier.wait()
            registries.append(Mapper.default_registry())

        threads = [threading.Thread(target=fetch) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len({id(registry) for registry in registries}), 1)

    def test_default_from_environment(self):
        with mock.patch.dict(os.environ, {"mapper.atomic": "true"}):
            self.assertTrue(Mapper.default_registry().atomic)

        Mapper.set_default_registry(None)

        with mock.patch.dict(os.environ, {"mapper.atomic": "false"}):
            self.assertFalse(Mapper.default_registry().atomic)

class TestScopes(unittest.TestCase):
    def setUp(self):
        Mapper.set_default_registry(Registry())

    def tearDown(self):
        Mapper.set_default_registry(None)

    def test_use(self):
        isolated = Registry()

        with Mapper.use(isolated) as registry:
            self.assertIs(registry, isolated)
            self.assertIs(Mapper.current(), isolated)

            Mapper.register(Transformation(Foo, Bar, foo_to_bar))

        self.assertTrue(isolated.has_mapping(Foo, Bar))
        self.assertFalse(Mapper.has_mapping(Foo, Bar))
        self.assertIs(Mapper.current(), Mapper.default_registry())

    def test_nested(self):
        outer = Registry()
        inner = Registry()

        with Mapper.use(outer):
            with Mapper.use(inner):
                self.assertIs(Mapper.current(), inner)

            self.assertIs(Mapper.current(), outer)

    def test_restored_on_error(self):
        isolated = Registry()

        with self.assertRaises(MappingNotFoundError):
            with Mapper.use(isolated):
                Mapper.map(Foo, Bar, Foo(name="x"))

        self.assertIs(Mapper.current(), Mapper.default_registry())

    def test_scope_is_thread_local(self):
        isolated = Registry()
        seen = []

        def other_thread():
            seen.append(Mapper.current())

        with Mapper.use(isolated):
            thread = threading.Thread(target=other_thread)
            thread.start()
            thread.join()

        self.assertIs(seen[0], Mapper.default_registry())

class TestMapFunction(unittest.TestCase):
    def setUp(self):
        Mapper.set_default_registry(Registry())

    def tearDown(self):
        Mapper.set_default_registry(None)

    def test_decorator(self):
        @map_function(Foo, Bar)
        def convert(foo: Foo) -> Bar:
            return Bar(title=foo.name.upper())

        self.assertEqual(Mapper.map(Foo, Bar, Foo(name="x")).title, "X")

        # the function itself is untouched

        self.assertEqual(convert(Foo(name="y")).title, "Y")

    def test_decorator_with_registry(self):
        registry = Registry()
        source = Token("foo")

        @map_function(source, Bar, registry=registry)
        def convert(value: dict) -> Bar:
            return Bar(title=value["name"])

        self.assertEqual(registry.map(source, Bar, {"name": "x"}).title, "x")
        self.assertFalse(Mapper.has_mapping(source, Bar))

    def test_decorator_duplicate(self):
        Mapper.register(Transformation(Foo, Bar, foo_to_bar))

        with self.assertRaises(DuplicateMappingError):
            @map_function(Foo, Bar)
            def convert(foo: Foo) -> Bar:
                return Bar(title="")


if __name__ == '__main__':
    unittest.main()
