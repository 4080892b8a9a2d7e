MANUAL_DEPARTMENT_ID = 0


class Department:
    def __init__(self, id, name, roll_number_start, roll_number_end):
        self.id = id
        self.name = name
        self.roll_number_start = roll_number_start
        self.roll_number_end = roll_number_end


class Hall:
    def __init__(self, id, name, rows, columns, seats_per_bench, floor=None, faculty_assigned=()):
        self.id = id
        self.name = name
        self.rows = rows
        self.columns = columns
        self.seats_per_bench = seats_per_bench
        self.floor = floor
        self.faculty_assigned = list(faculty_assigned)

    @property
    def capacity(self):
        return self.rows * self.columns * self.seats_per_bench


class Seat:
    def __init__(self, row, column, bench_position):
        self.row = row
        self.column = column
        self.bench_position = bench_position

    @property
    def label(self):
        return f"R{self.row}-B{self.column}-S{self.bench_position}"


class SeatAssignment:
    def __init__(self, hall_id, row, column, bench_position, student_roll_number, department_id):
        self.hall_id = hall_id
        self.row = row
        self.column = column
        self.bench_position = bench_position
        self.student_roll_number = student_roll_number
        self.department_id = department_id

    def key(self):
        return (self.hall_id, self.row, self.column, self.bench_position)

    def __repr__(self):
        return (
            f"SeatAssignment(hall={self.hall_id}, row={self.row}, column={self.column}, "
            f"pos={self.bench_position}, roll={self.student_roll_number!r}, dept={self.department_id})"
        )


class AllocationResult:
    def __init__(self, success, assignments=None, unallocated=None, warnings=None):
        self.success = success
        self.assignments = assignments or []
        self.unallocated = unallocated or []
        self.warnings = warnings or []
