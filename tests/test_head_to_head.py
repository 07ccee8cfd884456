from caster.head_to_head import calculate_head_to_head


def _map(team1: str, team2: str, score1: int, score2: int, name: str = "dm3", date: str = "") -> dict:
    return {"team1": team1, "team2": team2, "score1": score1, "score2": score2, "map": name, "date": date}


def test_single_map_and_mixed_case_mirror() -> None:
    maps = [_map("Alpha", "Beta", 10, 5, date="2024-01-01")]

    h2h = calculate_head_to_head("Alpha", "Beta", maps)
    assert h2h.total_maps == 1
    assert h2h.team_a_wins == 1
    assert h2h.team_b_wins == 0
    assert (h2h.team_a_frags, h2h.team_b_frags) == (10, 5)

    mirrored = calculate_head_to_head("beta", " ALPHA ", maps)
    assert mirrored.total_maps == 1
    assert mirrored.team_a_wins == 0
    assert mirrored.team_b_wins == 1
    assert (mirrored.per_map[0].score1, mirrored.per_map[0].score2) == (5, 10)


def test_symmetry_across_orientations() -> None:
    maps = [
        _map("Alpha", "Beta", 10, 5, "dm3"),
        _map("beta", "alpha", 12, 3, "dm2"),
        _map("Alpha", "Gamma", 1, 9, "e1m2"),
        _map("BETA", "Alpha", 4, 4, "dm4"),
    ]
    ab = calculate_head_to_head("Alpha", "Beta", maps)
    ba = calculate_head_to_head("Beta", "Alpha", maps)

    assert ab.total_maps == ba.total_maps == 3
    assert ab.team_a_wins == ba.team_b_wins == 1
    assert ab.team_b_wins == ba.team_a_wins == 1
    assert [(m.score1, m.score2) for m in ab.per_map] == [(m.score2, m.score1) for m in ba.per_map]


def test_draw_is_listed_but_not_credited() -> None:
    h2h = calculate_head_to_head("Alpha", "Beta", [_map("Alpha", "Beta", 7, 7)])
    assert h2h.total_maps == 1
    assert h2h.team_a_wins == 0
    assert h2h.team_b_wins == 0
    assert len(h2h.per_map) == 1


def test_per_map_keeps_input_order() -> None:
    maps = [
        _map("Alpha", "Beta", 1, 0, "dm6", date="2024-03-01"),
        _map("Alpha", "Beta", 1, 0, "dm2", date="2024-01-01"),
        _map("Alpha", "Beta", 1, 0, "dm4", date="2024-02-01"),
    ]
    h2h = calculate_head_to_head("Alpha", "Beta", maps)
    assert [m.map for m in h2h.per_map] == ["dm6", "dm2", "dm4"]


def test_no_meetings() -> None:
    h2h = calculate_head_to_head("Alpha", "Beta", [_map("Alpha", "Gamma", 3, 1)])
    assert h2h.total_maps == 0
    assert h2h.per_map == []


def test_repeated_calls_are_identical() -> None:
    maps = [_map("Alpha", "Beta", 10, 5), _map("Beta", "Alpha", 2, 9)]
    assert calculate_head_to_head("Alpha", "Beta", maps) == calculate_head_to_head("Alpha", "Beta", maps)
