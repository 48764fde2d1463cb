# tests/test_state.py
import pytest

from state import Checkpoint, WorldState, render, restore, snapshot


class Inventory(WorldState):
    def __init__(self, gold=0, items=None):
        self.gold = gold
        self.items = list(items or [])


def test_copy_is_independent_of_original():
    state = Inventory(gold=5, items=["rope"])
    clone = state.copy()

    clone.gold = 0
    clone.items.append("torch")

    assert state.gold == 5
    assert state.items == ["rope"]


def test_restore_keeps_object_identity():
    state = Inventory(gold=5, items=["rope"])
    saved = state.copy()
    same_object = state

    state.gold = 99
    state.items.clear()
    state.restore(saved)

    assert same_object is state
    assert state == Inventory(gold=5, items=["rope"])
    # restoring twice from the same snapshot must not share its lists
    state.items.append("torch")
    assert saved.items == ["rope"]


def test_equality_and_rendering():
    assert Inventory(gold=1) == Inventory(gold=1)
    assert Inventory(gold=1) != Inventory(gold=2)
    assert Inventory(gold=3, items=["a"]).to_string() == "gold: 3, items: ['a']"
    assert "Inventory(" in repr(Inventory())


def test_dict_states_are_supported():
    state = {"gold": 5, "items": ["rope"]}
    saved = snapshot(state)

    state["gold"] = 0
    state["extra"] = True
    restore(state, saved)

    assert state == {"gold": 5, "items": ["rope"]}
    assert render(state) == "gold: 5, items: ['rope']"


def test_checkpoint_rolls_back_unless_committed():
    state = Inventory(gold=10)

    with Checkpoint(state):
        state.gold = 0
    assert state.gold == 10

    with Checkpoint(state) as cp:
        state.gold = 3
        cp.commit()
    assert state.gold == 3


def test_checkpoint_rolls_back_on_exception():
    state = Inventory(gold=10)

    with pytest.raises(RuntimeError):
        with Checkpoint(state):
            state.gold = -1
            raise RuntimeError("boom")

    assert state.gold == 10


def test_checkpoint_explicit_rollback_can_repeat():
    state = Inventory(gold=1)
    with Checkpoint(state) as cp:
        state.gold = 2
        cp.rollback()
        assert state.gold == 1
        state.gold = 3
        cp.rollback()
        assert state.gold == 1
        cp.commit()
    assert state.gold == 1
