import json

import pytest

from lockset.emitters.json_emitter import JsonEmitter
from lockset.emitters.source_emitter import SourceEmitter
from lockset.lockset_ast import Identifier, NumericLiteral, Program, VarDeclaration
from lockset.lockset_emit import Renderer, format_source
from lockset.lockset_parser import parse

PROGRAM = Program((VarDeclaration("x", constant=True, value=NumericLiteral(1.0)),))


def test_renderer_selects_source_emitter() -> None:
    assert isinstance(Renderer("source").emitter, SourceEmitter)
    assert isinstance(Renderer("LOCKSET").emitter, SourceEmitter)


def test_renderer_selects_json_emitter_with_indent() -> None:
    renderer = Renderer("json", json_indent=4)
    assert isinstance(renderer.emitter, JsonEmitter)
    assert renderer.emitter.indent == 4


def test_renderer_unknown_target() -> None:
    with pytest.raises(ValueError, match="Unknown render target"):
        Renderer("py")


def test_render_source() -> None:
    assert Renderer("source").render(PROGRAM) == "lock x = 1;"


def test_render_json() -> None:
    text = Renderer("json").render(PROGRAM)
    decoded = json.loads(text)
    assert decoded["kind"] == "Program"
    assert decoded["body"][0] == {
        "kind": "VarDeclaration",
        "identifier": "x",
        "constant": True,
        "value": {"kind": "NumericLiteral", "value": 1.0},
    }


def test_render_json_single_line() -> None:
    text = Renderer("json", json_indent=None).render(PROGRAM)
    assert "\n" not in text


def test_render_rejects_non_program() -> None:
    with pytest.raises(TypeError):
        Renderer("source").render(Identifier("x"))  # type: ignore[arg-type]


def test_render_missing_emit_method(monkeypatch: pytest.MonkeyPatch) -> None:
    renderer = Renderer("json")

    class Bare:
        def get_output(self) -> str:
            return ""

    monkeypatch.setattr(renderer, "_make_emitter", Bare)
    with pytest.raises(NotImplementedError, match="Program"):
        renderer.render(PROGRAM)


def test_format_source_of_parsed_program() -> None:
    source = "fun f(a) { a.b = { c, d: 1 } }"
    assert format_source(parse(source)) == "fun f(a) {\n    a.b = { c, d: 1 }\n}"


def test_empty_program_renders_empty() -> None:
    assert format_source(Program(())) == ""
    assert json.loads(Renderer("json").render(Program(()))) == {
        "kind": "Program",
        "body": [],
    }


def test_renderer_can_be_reused() -> None:
    renderer = Renderer("source")
    assert renderer.render(parse("a")) == "a"
    assert renderer.render(parse("b")) == "b"


def test_json_renderer_can_be_reused() -> None:
    renderer = Renderer("json", json_indent=None)
    renderer.render(parse("a"))
    assert json.loads(renderer.render(parse("b")))["body"][0]["symbol"] == "b"
