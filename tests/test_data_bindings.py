from __future__ import annotations

import unittest
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from jsembed import (
    Bindings,
    InvalidBindingName,
    MalformedValue,
    Raw,
    Safe,
    Template,
    TemplateNotRegistered,
    TemplateRenderer,
    bindings_from,
    default_template,
    get_template,
    raw_field,
    register_template,
    render_data,
    render_default,
    unregister_template,
)
from jsembed.rendering.data import RAW_METADATA_KEY

FIXTURES = Path(__file__).resolve().parent / "fixtures"
KEYGEN_TEMPLATE = (FIXTURES / "keygen.js").read_text(encoding="utf-8")


@dataclass
class Keygen:
    key: str
    length: int
    optional_script: str = raw_field(default="")


@dataclass
class Settings:
    theme: str
    flags: List[str] = field(default_factory=list)


@dataclass
class Page:
    settings: Settings
    boot: str = raw_field(default="start();", metadata={"doc": "entry point"})


class BindingsFromTests(unittest.TestCase):
    def test_dataclass_fields(self) -> None:
        b = bindings_from(Keygen("asdf", 4, "init()"))
        self.assertEqual(dict(b), {
            "key": Safe.of("asdf"),
            "length": Safe.of(4),
            "optional_script": Raw("init()"),
        })

    def test_nested_dataclass_is_serialized(self) -> None:
        b = bindings_from(Page(Settings("dark", ["a"])))
        self.assertEqual(b["settings"], Safe.of({"theme": "dark", "flags": ["a"]}))
        self.assertEqual(b["boot"], Raw("start();"))

    def test_raw_field_keeps_user_metadata(self) -> None:
        from dataclasses import fields

        boot = [f for f in fields(Page) if f.name == "boot"][0]
        self.assertEqual(boot.metadata["doc"], "entry point")
        self.assertTrue(boot.metadata[RAW_METADATA_KEY])

    def test_raw_field_must_hold_text(self) -> None:
        @dataclass
        class Bad:
            script: int = raw_field(default=1)

        with self.assertRaises(TypeError):
            bindings_from(Bad())

    def test_mapping_values(self) -> None:
        b = bindings_from({"a": 1, "b": Raw("x"), "c": Safe.of("y")})
        self.assertEqual(dict(b), {"a": Safe.of(1), "b": Raw("x"), "c": Safe.of("y")})

    def test_bindings_pass_through(self) -> None:
        b = Bindings(a=Raw("x"))
        self.assertIs(bindings_from(b), b)

    def test_unsupported_objects(self) -> None:
        for obj in (42, "text", Keygen):
            with self.subTest(obj=obj):
                with self.assertRaises(TypeError):
                    bindings_from(obj)

    def test_unserializable_field(self) -> None:
        @dataclass
        class Holder:
            value: object

        with self.assertRaises(MalformedValue):
            bindings_from(Holder(object()))

    def test_fields_without_placeholder_names_are_skipped(self) -> None:
        @dataclass
        class Cfg:
            key: str
            _cache: object = field(default_factory=object)
            tail_: str = raw_field(default="x")

        cfg = Cfg("a")
        self.assertEqual(sorted(bindings_from(cfg)), ["key"])
        self.assertEqual(render_data(cfg, "k=__TEMPLATE_key__"), "k=JSON.parse('\"a\"')")

    def test_mapping_keys_are_still_validated(self) -> None:
        with self.assertRaises(InvalidBindingName):
            bindings_from({"_hidden": 1})


class RenderDataTests(unittest.TestCase):
    def test_keygen_fixture(self) -> None:
        out = render_data(Keygen("asdf", 4, "console.log('extra')"), KEYGEN_TEMPLATE)
        self.assertIn("const keygenKey = JSON.parse('\"asdf\"')\n", out)
        self.assertIn("const keygenLength = JSON.parse('4')\n", out)
        self.assertIn("\nconsole.log('extra')\n", out)
        self.assertNotIn("__TEMPLATE_", out)
        self.assertNotIn("__RAW_", out)

    def test_custom_renderer(self) -> None:
        renderer = TemplateRenderer()
        out = render_data({"v": [1]}, "x=__TEMPLATE_v__", renderer=renderer)
        self.assertEqual(out, "x=JSON.parse('[1]')")


class RegistryTests(unittest.TestCase):
    def setUp(self) -> None:
        self._registered: List[type] = []

    def tearDown(self) -> None:
        for cls in self._registered:
            unregister_template(cls)

    def _track(self, cls: type) -> type:
        self._registered.append(cls)
        return cls

    def test_decorator_with_source(self) -> None:
        @default_template("var v = __TEMPLATE_v__;")
        @dataclass
        class Value:
            v: int

        self._track(Value)
        self.assertEqual(render_default(Value(3)), "var v = JSON.parse('3');")
        self.assertEqual(get_template(Value).name, Value.__qualname__)

    def test_decorator_with_relative_path(self) -> None:
        @default_template(path="fixtures/keygen.js")
        @dataclass
        class KeygenWithFile(Keygen):
            pass

        self._track(KeygenWithFile)
        tpl = get_template(KeygenWithFile)
        self.assertEqual(tpl.text, KEYGEN_TEMPLATE)
        self.assertEqual(Path(tpl.name).name, "keygen.js")
        out = render_default(KeygenWithFile("k", 1))
        self.assertIn("const keygenKey = JSON.parse('\"k\"')", out)

    def test_subclasses_inherit_template(self) -> None:
        @dataclass
        class Base:
            a: int

        @dataclass
        class Child(Base):
            pass

        self._track(Base)
        register_template(Base, "__TEMPLATE_a__")
        self.assertEqual(render_default(Child(5)), "JSON.parse('5')")

    def test_register_template_object(self) -> None:
        @dataclass
        class Thing:
            a: int

        self._track(Thing)
        tpl = Template("__TEMPLATE_a__", name="thing.js")
        self.assertIs(register_template(Thing, tpl), tpl)
        self.assertIs(get_template(Thing), tpl)

    def test_unregistered_type(self) -> None:
        @dataclass
        class Nothing:
            a: int = 0

        self.assertIsNone(get_template(Nothing))
        with self.assertRaises(TemplateNotRegistered):
            render_default(Nothing())

    def test_register_requires_class(self) -> None:
        with self.assertRaises(TypeError):
            register_template(Keygen("a", 1), "x")  # type: ignore[arg-type]

    def test_decorator_requires_exactly_one_source(self) -> None:
        with self.assertRaises(ValueError):
            default_template()
        with self.assertRaises(ValueError):
            default_template("x", path="y.js")
