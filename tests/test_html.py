from __future__ import annotations

import unittest
from pathlib import Path

import lxml.html

from jsembed import (
    EscapeOptions,
    Raw,
    Safe,
    UnsafeScript,
    render,
    render_data,
    script_tag,
)
from tools.sample_data import Keygen

XSS = "</script><script>alert(1)</script>"
KEYGEN_TEMPLATE = (Path(__file__).resolve().parent / "fixtures" / "keygen.js").read_text(encoding="utf-8")


def _scripts_in_page(markup: str):
    doc = lxml.html.document_fromstring(f"<html><body>{markup}<p id='after'>after</p></body></html>")
    return doc.xpath("//script"), doc


class ScriptTagTests(unittest.TestCase):
    def test_rendered_keygen_stays_in_one_element(self) -> None:
        script = render_data(Keygen(XSS, len(XSS), "console.log('ready')"), KEYGEN_TEMPLATE)
        markup = script_tag(script)
        scripts, doc = _scripts_in_page(markup)
        self.assertEqual(len(scripts), 1)
        self.assertEqual(scripts[0].text, script)
        self.assertEqual(len(doc.xpath("//p[@id='after']")), 1)

    def test_attributes(self) -> None:
        markup = script_tag("run()", nonce='n"1', script_type="module", attrs={"id": "boot"})
        scripts, _ = _scripts_in_page(markup)
        self.assertEqual(scripts[0].get("nonce"), 'n"1')
        self.assertEqual(scripts[0].get("type"), "module")
        self.assertEqual(scripts[0].get("id"), "boot")

    def test_empty_script(self) -> None:
        markup = script_tag("")
        scripts, _ = _scripts_in_page(markup)
        self.assertEqual(len(scripts), 1)
        self.assertFalse(scripts[0].text)

    def test_safe_value_with_script_close_is_embeddable(self) -> None:
        for opts in (EscapeOptions.default(), EscapeOptions(escape_html_sensitive=False)):
            with self.subTest(opts=opts):
                script = render("window.x = __TEMPLATE_v__;", {"v": Safe.of(XSS)}, options=opts)
                scripts, _ = _scripts_in_page(script_tag(script))
                self.assertEqual(len(scripts), 1)
                self.assertEqual(scripts[0].text, script)

    def test_unescaped_value_is_rejected(self) -> None:
        script = render("window.x = __TEMPLATE_v__;", {"v": Safe.of(XSS)}, options=EscapeOptions.minimal())
        with self.assertRaises(UnsafeScript):
            script_tag(script)

    def test_raw_fragment_breaking_out_is_rejected(self) -> None:
        script = render("__RAW_s__", {"s": Raw("x()</script><img src=x onerror=alert(1)>")})
        with self.assertRaises(UnsafeScript):
            script_tag(script)

    def test_unserializable_characters_are_rejected(self) -> None:
        with self.assertRaises(UnsafeScript):
            script_tag("a\x00b")
