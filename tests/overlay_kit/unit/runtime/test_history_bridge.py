from __future__ import annotations

from overlay_kit.api.overlays import AlertOptions, ConfirmOptions, CustomOptions
from overlay_kit.runtime.config import load_overlay_config
from overlay_kit.runtime.history_bridge import HistoryBridge
from overlay_kit.runtime.history_platform import InMemoryHistory
from overlay_kit.runtime.overlay_store import RuntimeOverlayStore

KEY = "__modal_state__"


def test_bridge_stays_idle_until_first_open(config, history) -> None:
    store = RuntimeOverlayStore(config=config, history=history)
    assert store.history.state == "idle"
    assert history.listener_count == 0

    store.alert(AlertOptions(message="x"))
    assert store.history.state == "listening"
    assert history.listener_count == 1


def test_open_pushes_one_tagged_entry_per_overlay(store, history) -> None:
    a = store.alert(AlertOptions(message="a"))
    b = store.confirm(ConfirmOptions(message="b"))
    assert history.length == 3
    assert [entry.state[KEY] for entry in history.entries()[1:]] == [a, b]
    assert history.entries()[-1].url == "/projects"


def test_pushed_state_preserves_existing_entry_state() -> None:
    history = InMemoryHistory()
    history.push_state({"scroll": 120})
    store = RuntimeOverlayStore(config=load_overlay_config(env={}), history=history)
    overlay_id = store.alert(AlertOptions(message="x"))
    state = history.current_state()
    assert state is not None
    assert state["scroll"] == 120
    assert state[KEY] == overlay_id


def test_explicit_close_of_top_steps_history_back(store, history) -> None:
    store.alert(AlertOptions(message="a"))
    b = store.alert(AlertOptions(message="b"))
    store.close(b)
    assert history.cursor == 1
    assert store.count() == 1
    assert store.history.pending_pops == 0


def test_user_back_closes_only_the_top_overlay(store, history, counter_factory) -> None:
    on_close = counter_factory()
    a = store.alert(AlertOptions(message="a"))
    store.custom(CustomOptions(on_close=on_close))

    history.back()

    assert [record.id for record in store.get_all()] == [a]
    assert on_close.count == 1
    assert history.cursor == 1

    history.back()
    assert store.get_all() == ()
    assert history.cursor == 0


def test_back_navigation_does_not_push_history(store, history) -> None:
    store.alert(AlertOptions(message="a"))
    history.back()
    assert history.length == 2
    assert history.cursor == 0


def test_back_with_empty_store_is_ignored(store, history) -> None:
    overlay_id = store.alert(AlertOptions(message="a"))
    store.close(overlay_id)
    history.back()
    assert store.get_all() == ()


def test_close_all_rewinds_one_entry_per_overlay(store, history) -> None:
    for n in range(3):
        store.confirm(ConfirmOptions(message=str(n)))
    assert history.cursor == 3

    store.close_all()

    assert history.cursor == 0
    assert store.history.pending_pops == 0


def test_out_of_order_close_leaves_history_one_entry_longer(store, history) -> None:
    a = store.alert(AlertOptions(message="a"))
    b = store.alert(AlertOptions(message="b"))
    store.close(a)
    assert history.cursor == 2

    # The next back lands on the orphaned entry and closes the remaining top.
    history.back()
    assert store.get(b) is None
    assert history.cursor == 1


def test_deferred_pop_delivery_matches_synchronous_outcome(config) -> None:
    history = InMemoryHistory(deferred=True)
    store = RuntimeOverlayStore(config=config, history=history)
    a = store.alert(AlertOptions(message="a"))
    b = store.alert(AlertOptions(message="b"))

    store.close(b)
    assert store.history.pending_pops == 1
    assert history.flush() == 1
    assert store.history.pending_pops == 0
    assert [record.id for record in store.get_all()] == [a]

    history.back()
    assert store.count() == 1
    history.flush()
    assert store.count() == 0


def test_history_disabled_by_config_makes_bridge_inert(history) -> None:
    config = load_overlay_config(env={"OVERLAY_HISTORY_ENABLED": "false"})
    store = RuntimeOverlayStore(config=config, history=history)
    store.alert(AlertOptions(message="a"))
    assert history.length == 1
    assert store.history.available is False
    store.close_top()
    assert store.get_all() == ()


def test_custom_state_key_is_used(history) -> None:
    config = load_overlay_config(env={"OVERLAY_HISTORY_STATE_KEY": "dialog"})
    store = RuntimeOverlayStore(config=config, history=history)
    overlay_id = store.alert(AlertOptions(message="a"))
    state = history.current_state()
    assert state is not None
    assert state["dialog"] == overlay_id


def test_bridge_without_platform_is_noop() -> None:
    closed: list[str] = []
    bridge = HistoryBridge(None, top_id=lambda: "x", on_back=lambda: closed.append("x"))
    bridge.track("x")
    assert bridge.release("x", was_top=True) is False
    assert bridge.release_all(3) == 0
    assert bridge.current_tag() is None
    bridge.detach()
    assert bridge.state == "idle"
    assert closed == []


def test_release_skips_non_top_and_untagged_entries() -> None:
    history = InMemoryHistory()
    bridge = HistoryBridge(history, top_id=lambda: None, on_back=lambda: None)
    bridge.track("a")
    assert bridge.release("a", was_top=False) is False
    assert bridge.release("other", was_top=True) is False
    assert bridge.release("a", was_top=True) is True
    assert history.cursor == 0


def test_back_onto_entry_tagged_with_current_top_is_ignored(store, history) -> None:
    a = store.alert(AlertOptions(message="a"))
    b = store.alert(AlertOptions(message="b"))
    store.alert(AlertOptions(message="c"))
    store.close(b)
    assert history.length == 4

    history.back()
    assert [record.id for record in store.get_all()] == [a]

    history.back()
    assert [record.id for record in store.get_all()] == [a]
    assert history.current_state()[KEY] == a


def test_forward_onto_stale_entry_closes_current_top(store, history, counter_factory) -> None:
    on_close = counter_factory()
    store.custom(CustomOptions(on_close=on_close))
    b = store.alert(AlertOptions(message="b"))

    history.back()
    assert store.count() == 1

    history.forward()
    assert history.current_state()[KEY] == b
    assert store.get_all() == ()
    assert on_close.count == 1
