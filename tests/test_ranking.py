from __future__ import annotations

import pytest

from scout_dashboard.aggregate.ranking import top_n


def test_top_scorers_stable_under_ties(make_player) -> None:
    players = [
        make_player(name="Uno", goals=10),
        make_player(name="Dos", goals=10),
        make_player(name="Tres", goals=7),
        make_player(name="Cuatro", goals=3),
        make_player(name="Cinco", goals=0),
    ]
    ranked = top_n(players, "goals")
    assert len(ranked) == 5
    assert [r.name for r in ranked] == ["Uno", "Dos", "Tres", "Cuatro", "Cinco"]
    assert [r.value for r in ranked] == [10, 10, 7, 3, 0]


def test_tie_order_follows_input_not_value_position(make_player) -> None:
    players = [
        make_player(name="Bajo", assists=1),
        make_player(name="Primero", assists=9),
        make_player(name="Medio", assists=5),
        make_player(name="Segundo", assists=9),
    ]
    ranked = top_n(players, "assists")
    assert [r.name for r in ranked] == ["Primero", "Segundo", "Medio", "Bajo"]


def test_capped_at_n_and_skips_undefined(make_player) -> None:
    players = [make_player(market_value=float(i)) for i in range(15)]
    players += [make_player(market_value=None) for _ in range(3)]
    ranked = top_n(players, "market_value", 10)
    assert len(ranked) == 10
    assert ranked[0].value == 14.0
    assert ranked[-1].value == 5.0


def test_fewer_defined_than_n(make_player) -> None:
    players = [make_player(goals=None), make_player(goals=2)]
    assert len(top_n(players, "goals")) == 1


def test_projection_shape(make_player) -> None:
    p = make_player(name="Nico", team="Athletic", position="Extremo Izquierdo", goals=11)
    (ranked,) = top_n([p], "goals")
    assert ranked.model_dump(by_alias=True) == {
        "id": p.id,
        "name": "Nico",
        "team": "Athletic",
        "position": "Extremo Izquierdo",
        "goals": 11,
    }


def test_invalid_arguments(make_player) -> None:
    with pytest.raises(ValueError):
        top_n([make_player(goals=1)], "goals", 0)
    with pytest.raises(ValueError):
        top_n([make_player(goals=1)], "name")
