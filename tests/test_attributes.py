from __future__ import annotations

from scout_dashboard.aggregate.attributes import attributes_by_position_items, average_attributes


def test_only_rated_players_are_averaged(make_player, make_attrs) -> None:
    players = [
        make_player(position="Forward", attributes=make_attrs(pace=80, shooting=90)),
        make_player(position="Forward", attributes=make_attrs(pace=60, shooting=71)),
        make_player(position="Forward"),
    ]
    result = average_attributes(players)
    assert result["Forward"].pace == 70
    assert result["Forward"].shooting == 81  # 80.5 rounds up
    assert result["Forward"].defending == 50


def test_position_without_rated_players_omitted(make_player, make_attrs) -> None:
    players = [
        make_player(position="Portero", attributes=make_attrs(reflexes=88)),
        make_player(position="Defensa Central"),
        make_player(position=None, attributes=make_attrs()),
    ]
    result = average_attributes(players)
    assert list(result) == ["Portero"]


def test_averages_stay_in_scale(make_player, make_attrs) -> None:
    players = [
        make_player(position="Mediocentro", attributes=make_attrs(pace=1, physical=100)),
        make_player(position="Mediocentro", attributes=make_attrs(pace=2, physical=99)),
    ]
    core = average_attributes(players)["Mediocentro"]
    for value in core.model_dump().values():
        assert 1 <= value <= 100


def test_items_carry_player_counts_in_first_seen_order(make_player, make_attrs) -> None:
    players = [
        make_player(position="Lateral Izquierdo", attributes=make_attrs(pace=85)),
        make_player(position="Portero", attributes=make_attrs(pace=40)),
        make_player(position="Lateral Izquierdo", attributes=make_attrs(pace=75)),
    ]
    items = attributes_by_position_items(players)
    assert [(i.position, i.player_count) for i in items] == [
        ("Lateral Izquierdo", 2),
        ("Portero", 1),
    ]
    assert items[0].attributes.pace == 80
    assert items[0].model_dump(by_alias=True)["playerCount"] == 2


def test_no_rated_players(make_player) -> None:
    assert average_attributes([make_player(position="Portero")]) == {}
    assert attributes_by_position_items([]) == []
