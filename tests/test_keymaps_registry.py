import pytest

from kilo_engine.keymaps import (
    DEFAULT_BINDINGS,
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
    WhenClause,
    load_default_keymaps,
)


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    mode: str = "edit",
    key: str = "ctrl+s",
    action_id: str = "core.test",
    when: tuple[WhenClause, ...] = (),
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        key=key,
        action_id=action_id,
        when=when,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="edit.save")
    before = registry.revision()

    registry.register_binding(binding)

    assert list(registry.iter_bindings(mode="edit")) == [binding]
    assert registry.revision() == before + 1


def test_binding_keys_are_normalized() -> None:
    binding = make_binding(binding_id="edit.save", key="  Ctrl+S ")

    assert binding.key == "ctrl+s"


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="edit.save"))


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    binding = make_binding(binding_id="edit.save")
    registry.register_binding(binding)

    with pytest.raises(KeymapConflictError) as info:
        registry.register_binding(make_binding(binding_id="edit.save.duplicate"))
    assert info.value.conflicts == (binding,)


def test_ungated_binding_conflicts_with_gated_one() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    gated = make_binding(binding_id="dirty", when=(WhenClause("dirty"),))
    registry.register_binding(gated)

    assert registry.detect_conflicts(make_binding(binding_id="plain")) == [gated]


def test_register_binding_non_overlapping_when() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    binding_dirty = make_binding(binding_id="dirty", when=(WhenClause("dirty"),))
    binding_clean = make_binding(
        binding_id="clean",
        when=(WhenClause.parse("!dirty"),),
    )

    registry.register_binding(binding_dirty)
    registry.register_binding(binding_clean)

    assert list(registry.iter_bindings(key="ctrl+s")) == [binding_clean, binding_dirty]


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="binding", key="ctrl+w")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]
    assert list(registry.iter_bindings(mode="edit", key="ctrl+s")) == []


def test_replace_evicts_conflicting_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="old"))

    new = make_binding(binding_id="new")
    registry.register_binding(new, replace=True)

    assert list(registry.iter_bindings()) == [new]


def test_register_duplicate_action_requires_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())
    registry.register_action(make_action(), replace=True)


def test_when_clause_parsing() -> None:
    clause = WhenClause.parse(" !dirty ")

    assert clause == WhenClause("dirty", False)
    assert clause.evaluate({"dirty": False})
    assert not clause.evaluate({"dirty": True})
    assert WhenClause("named").evaluate({}) is False
    with pytest.raises(ValueError):
        WhenClause.parse("  ")


def test_load_default_keymaps_registers_everything() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    bindings = list(registry.iter_bindings())
    assert len(bindings) == len(DEFAULT_BINDINGS)
    assert {b.mode for b in bindings} == {"edit", "quit_confirm"}
    quit_ids = {b.id for b in registry.iter_bindings(mode="edit", key="ctrl+q")}
    assert quit_ids == {"edit.ctrl+q.dirty", "edit.ctrl+q.not_dirty"}


def test_load_default_keymaps_twice_requires_replace() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)

    with pytest.raises(ValueError):
        load_default_keymaps(registry)
    load_default_keymaps(registry, replace=True)

    assert len(list(registry.iter_bindings())) == len(DEFAULT_BINDINGS)
