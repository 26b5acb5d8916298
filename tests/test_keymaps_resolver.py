from __future__ import annotations

from kilo_engine.keymaps import (
    ActionRef,
    Binding,
    KeymapRegistry,
    KeymapResolver,
    WhenClause,
    load_default_keymaps,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
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


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    action_ids = {binding.action_id for binding in bindings}
    for action_id in action_ids:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_token() -> None:
    binding = make_binding("edit.save")
    registry = build_registry([binding])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("edit", "ctrl+s")

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.match.action.id == "core.test"


def test_resolver_misses_other_mode_and_token() -> None:
    registry = build_registry([make_binding("edit.save")])
    resolver = KeymapResolver(registry)

    assert resolver.resolve("edit", "ctrl+w").status == "miss"
    assert resolver.resolve("prompt", "ctrl+s").status == "miss"


def test_resolver_honors_when_clauses() -> None:
    gating = make_binding(
        "edit.save.named",
        when=(WhenClause("named"),),
        action_id="core.named",
    )
    registry = build_registry([gating])
    resolver = KeymapResolver(registry)

    miss = resolver.resolve("edit", "ctrl+s", context={})
    assert miss.status == "miss"

    hit = resolver.resolve("edit", "ctrl+s", context={"named": True})
    assert hit.status == "match"
    assert hit.match is not None
    assert hit.match.binding.id == gating.id


def test_resolver_skips_bindings_whose_flags_fail() -> None:
    dirty = make_binding("edit.a", action_id="core.dirty", when=(WhenClause("dirty"),))
    clean = make_binding("edit.b", action_id="core.clean", when=(WhenClause("!dirty"),))
    registry = build_registry([dirty, clean])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("edit", "ctrl+s", context={"dirty": False})

    assert result.match is not None
    assert result.match.binding.id == "edit.b"
    assert result.match.action.id == "core.clean"


def test_resolver_cache_refreshes_on_revision() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    miss = resolver.resolve("edit", "x")
    assert miss.status == "miss"

    new_binding = make_binding("edit.x", key="x", action_id="core.x")
    registry.register_action(make_action("core.x"))
    registry.register_binding(new_binding)

    match = resolver.resolve("edit", "x")
    assert match.status == "match"
    assert match.match is not None
    assert match.match.binding.id == new_binding.id


def test_default_quit_binding_depends_on_dirty() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)

    clean = resolver.resolve("edit", "ctrl+q", context={"dirty": False})
    dirty = resolver.resolve("edit", "ctrl+q", context={"dirty": True})

    assert clean.match is not None and clean.match.action.id == "editor.quit"
    assert dirty.match is not None and dirty.match.action.id == "editor.request_quit"
