from seat_allocator.models import Seat, SeatAssignment


class SeatGrid:
    """Rows by flattened columns; a hall's benches laid out seat by seat."""

    def __init__(self, rows, columns, seats_per_bench):
        self.rows = rows
        self.columns = columns
        self.seats_per_bench = seats_per_bench
        self.width = columns * seats_per_bench
        self.capacity = rows * self.width
        self.cells = [[None] * self.width for _ in range(rows)]

    def bench_of(self, flat_column):
        """0-indexed (bench column, bench position) of a flattened column."""
        return divmod(flat_column, self.seats_per_bench)

    def place(self, row, flat_column, roll_number, department_id):
        self.cells[row][flat_column] = (roll_number, department_id)

    def column_values(self, flat_column):
        return [self.cells[row][flat_column] for row in range(self.rows)]

    def assignments(self, hall_id):
        result = []
        for row in range(self.rows):
            for flat_column in range(self.width):
                cell = self.cells[row][flat_column]
                if cell is None:
                    continue
                bench, position = self.bench_of(flat_column)
                result.append(
                    SeatAssignment(
                        hall_id=hall_id,
                        row=row + 1,
                        column=bench + 1,
                        bench_position=position + 1,
                        student_roll_number=cell[0],
                        department_id=cell[1],
                    )
                )
        return result


def build_grid(hall):
    return SeatGrid(hall.rows, hall.columns, hall.seats_per_bench)


def generate_seats(hall):
    """Row-major seat inventory, 1-indexed: row, then bench column, then position."""
    seats = []

    for row in range(1, hall.rows + 1):
        for column in range(1, hall.columns + 1):
            for position in range(1, hall.seats_per_bench + 1):
                seats.append(Seat(row=row, column=column, bench_position=position))

    return seats
