import pytest

from hexcells_solver.coords import Coords, n_choose_k


@pytest.mark.parametrize(
    "n, k, expected",
    [
        (0, 0, 1),
        (1, 0, 1),
        (2, 0, 1),
        (1, 1, 1),
        (2, 1, 2),
        (3, 1, 3),
        (7, 1, 7),
        (7, 2, 21),
        (7, 3, 35),
        (7, 4, 35),
        (7, 5, 21),
        (7, 6, 7),
        (7, 7, 1),
    ],
)
def test_n_choose_k(n, k, expected):
    assert n_choose_k(n, k) == expected


def test_n_choose_k_rejects_k_above_n():
    with pytest.raises(ValueError):
        n_choose_k(2, 3)


def test_n_choose_k_overflow_gives_none():
    assert n_choose_k(200, 100) is None


def test_of_cube_requires_zero_sum():
    with pytest.raises(ValueError):
        Coords.of_cube(1, 1, 1)


def test_of_cube_and_s():
    c = Coords.of_cube(3, -1, -2)
    assert (c.q, c.r, c.s) == (3, -1, -2)


def test_out_of_range_rejected():
    with pytest.raises(ValueError):
        Coords(40000, 0)


def test_neighbors6_are_distinct_and_adjacent():
    center = Coords.of_cube(2, -1, -1)
    neigh = center.neighbors6()
    assert len(set(neigh)) == 6
    assert center not in neigh
    for n in neigh:
        assert center in n.neighbors6()


def test_neighbors6_order_top_first():
    center = Coords(0, 0)
    assert center.neighbors6()[0] == Coords.of_cube(0, -1, 1)
    assert center.neighbors6()[3] == Coords.of_cube(0, 1, -1)


def test_neighbors18_contains_ring_of_six():
    center = Coords(5, -3)
    n18 = center.neighbors18()
    assert len(set(n18)) == 18
    assert set(center.neighbors6()) <= set(n18)
    assert center not in n18
    for n in n18:
        d = n - center
        assert max(abs(d.q), abs(d.r), abs(d.s)) in (1, 2)


def test_add_sub_round_trip():
    a = Coords.of_cube(4, -7, 3)
    b = Coords.of_cube(-2, 5, -3)
    assert (a + b) - b == a
    assert a - a == Coords(0, 0)


def test_ordering_is_by_q_then_r():
    assert sorted([Coords(1, -5), Coords(0, 3), Coords(1, -6)]) == [
        Coords(0, 3),
        Coords(1, -6),
        Coords(1, -5),
    ]