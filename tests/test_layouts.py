from seat_allocator.layouts import build_grid, generate_seats


def test_grid_dimensions_and_capacity(make_hall):
    grid = build_grid(make_hall(rows=3, columns=4, seats_per_bench=2))
    assert grid.width == 8
    assert grid.capacity == 24
    assert all(cell is None for row in grid.cells for cell in row)


def test_flattened_column_maps_to_bench_and_position(make_hall):
    grid = build_grid(make_hall(rows=1, columns=3, seats_per_bench=3))
    assert grid.bench_of(0) == (0, 0)
    assert grid.bench_of(4) == (1, 1)
    assert grid.bench_of(8) == (2, 2)


def test_assignments_are_one_indexed_and_row_major(make_hall):
    grid = build_grid(make_hall(rows=2, columns=2, seats_per_bench=2, id=7))
    grid.place(1, 3, "12", 4)
    grid.place(0, 2, "11", 4)

    assignments = grid.assignments(7)
    assert [a.key() for a in assignments] == [(7, 1, 2, 1), (7, 2, 2, 2)]
    assert [a.student_roll_number for a in assignments] == ["11", "12"]


def test_seat_inventory_is_row_major(make_hall):
    seats = generate_seats(make_hall(rows=2, columns=2, seats_per_bench=2))
    assert len(seats) == 8
    assert [(s.row, s.column, s.bench_position) for s in seats[:5]] == [
        (1, 1, 1), (1, 1, 2), (1, 2, 1), (1, 2, 2), (2, 1, 1),
    ]
    assert seats[-1].label == "R2-B2-S2"
