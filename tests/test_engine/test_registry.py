"""Tests for the stage registry."""

import pytest

from archsketch.engine.context import GenerationContext
from archsketch.engine.registry import Layer, StageRegistry, StageSpec, get_registry


def _noop(ctx: GenerationContext) -> None:
    pass


def test_register_and_lookup():
    reg = StageRegistry()
    reg.register(StageSpec(id="G0.01", layer=Layer.GRAMMAR, fn=_noop))
    assert "G0.01" in reg
    assert "G0.02" not in reg
    assert len(reg) == 1
    assert reg.ids() == {"G0.01"}


def test_duplicate_id_rejected():
    reg = StageRegistry()
    reg.register(StageSpec(id="G0.01", layer=Layer.GRAMMAR, fn=_noop))
    with pytest.raises(ValueError, match="Duplicate"):
        reg.register(StageSpec(id="G0.01", layer=Layer.GRAMMAR, fn=_noop))


def test_get_layer():
    reg = StageRegistry()
    reg.register(StageSpec(id="R1.01", layer=Layer.RESOLUTION, fn=_noop))
    reg.register(StageSpec(id="G0.01", layer=Layer.GRAMMAR, fn=_noop))
    layer0 = reg.get_layer(Layer.GRAMMAR)
    assert [s.id for s in layer0] == ["G0.01"]


def test_resolve_order_with_deps():
    reg = StageRegistry()
    reg.register(StageSpec(id="G0.02", layer=Layer.GRAMMAR, fn=_noop))
    reg.register(StageSpec(id="G0.01", layer=Layer.GRAMMAR, fn=_noop, dependencies=["G0.02"]))
    reg.register(StageSpec(id="C2.01", layer=Layer.COMPOSITION, fn=_noop, dependencies=["G0.01"]))
    ids = [s.id for s in reg.resolve_order()]
    assert ids == ["G0.02", "G0.01", "C2.01"]


def test_resolve_order_tie_break_is_lexicographic():
    reg = StageRegistry()
    for sid in ("G0.03", "G0.01", "G0.02"):
        reg.register(StageSpec(id=sid, layer=Layer.GRAMMAR, fn=_noop))
    assert [s.id for s in reg.resolve_order(None)] == ["G0.01", "G0.02", "G0.03"]


def test_resolve_order_leaves_unrequested_dependencies_out():
    reg = StageRegistry()
    reg.register(StageSpec(id="R1.01", layer=Layer.RESOLUTION, fn=_noop))
    reg.register(StageSpec(id="C2.02", layer=Layer.COMPOSITION, fn=_noop, dependencies=["R1.01"]))
    assert [s.id for s in reg.resolve_order({"C2.02"})] == ["C2.02"]


def test_cycle_detected():
    reg = StageRegistry()
    reg.register(StageSpec(id="A", layer=Layer.GRAMMAR, fn=_noop, dependencies=["B"]))
    reg.register(StageSpec(id="B", layer=Layer.GRAMMAR, fn=_noop, dependencies=["A"]))
    with pytest.raises(ValueError, match="Circular"):
        reg.resolve_order()


def test_all_stages_registered():
    ids = {s.id for s in get_registry().all()}
    assert ids == {
        "G0.01", "G0.02", "G0.03", "G0.04", "G0.05", "G0.06", "G0.07", "G0.08",
        "R1.01", "R1.02", "R1.03",
        "C2.01", "C2.02",
    }


def test_grammar_stages_are_required():
    for spec in get_registry().get_layer(Layer.GRAMMAR):
        assert spec.required
    for spec in get_registry().get_layer(Layer.RESOLUTION):
        assert not spec.required


def test_resolve_order_diamond():
    reg = StageRegistry()
    reg.register(StageSpec(id="G0.01", layer=Layer.GRAMMAR, fn=_noop))
    reg.register(StageSpec(id="R1.02", layer=Layer.RESOLUTION, fn=_noop, dependencies=["G0.01"]))
    reg.register(StageSpec(id="R1.01", layer=Layer.RESOLUTION, fn=_noop, dependencies=["G0.01"]))
    reg.register(
        StageSpec(id="C2.01", layer=Layer.COMPOSITION, fn=_noop, dependencies=["R1.01", "R1.02"])
    )
    assert [s.id for s in reg.resolve_order()] == ["G0.01", "R1.01", "R1.02", "C2.01"]


def test_check_rejects_unknown_dependency():
    reg = StageRegistry()
    reg.register(StageSpec(id="R1.01", layer=Layer.RESOLUTION, fn=_noop, dependencies=["G0.99"]))
    with pytest.raises(ValueError, match="unknown stage G0.99"):
        reg.check()


def test_check_rejects_later_layer_dependency():
    reg = StageRegistry()
    reg.register(StageSpec(id="C2.01", layer=Layer.COMPOSITION, fn=_noop))
    reg.register(StageSpec(id="G0.02", layer=Layer.GRAMMAR, fn=_noop, dependencies=["C2.01"]))
    with pytest.raises(ValueError, match="later-layer"):
        reg.check()


def test_registered_stages_pass_check():
    get_registry().check()
