"""Department roll-number ranges.

Parsing and overlap checks for department ranges, and the lazy queues the
allocators consume.
"""
from collections import deque

from seat_allocator.models import MANUAL_DEPARTMENT_ID


class InvalidRangeError(ValueError):
    pass


class RangeOverlapError(ValueError):
    def __init__(self, department):
        self.department = department
        super().__init__(
            f"This range overlaps with {department.name} "
            f"({department.roll_number_start} - {department.roll_number_end})."
        )


def parse_roll_number(value):
    try:
        return int(str(value).strip())
    except ValueError:
        raise InvalidRangeError(f"Roll number bound {value!r} is not an integer") from None


def parse_range(start, end):
    start, end = parse_roll_number(start), parse_roll_number(end)
    if start > end:
        raise InvalidRangeError(f"Range start {start} is greater than range end {end}")
    return start, end


def ranges_overlap(a, b, c, d):
    return not (b < c or d < a)


def check_overlap(start, end, existing_departments):
    """Return the first department whose range intersects [start, end], else None."""
    start, end = parse_roll_number(start), parse_roll_number(end)

    for dept in existing_departments:
        dept_start = parse_roll_number(dept.roll_number_start)
        dept_end = parse_roll_number(dept.roll_number_end)
        if ranges_overlap(start, end, dept_start, dept_end):
            return dept
    return None


class RollNumberQueue:
    """FIFO over a department's inclusive range with skip-listed values removed.

    The interval is never materialized: the queue keeps a cursor into a
    ``range`` and the set of skipped numbers that fall inside it.
    """

    def __init__(self, department_id, start, end, skip=()):
        self.department_id = department_id
        self._range = range(start, end + 1)
        self._skip = set()
        for value in skip:
            try:
                number = int(value)
            except (TypeError, ValueError):
                continue
            # "0102" does not skip 102
            if str(number) == str(value) and number in self._range:
                self._skip.add(number)
        self._cursor = 0
        self._remaining = len(self._range) - len(self._skip)

    @classmethod
    def for_department(cls, department, skip=()):
        start, end = parse_range(department.roll_number_start, department.roll_number_end)
        return cls(department.id, start, end, skip)

    def __len__(self):
        return self._remaining

    def __iter__(self):
        for number in self._range[self._cursor:]:
            if number not in self._skip:
                yield str(number)

    def popleft(self):
        if not self._remaining:
            raise IndexError("pop from an empty roll number queue")
        while True:
            number = self._range[self._cursor]
            self._cursor += 1
            if number not in self._skip:
                self._remaining -= 1
                return str(number)

    def reset(self):
        self._cursor = 0
        self._remaining = len(self._range) - len(self._skip)


class ManualQueue(deque):
    """Manually entered roll numbers, grouped under department 0."""

    department_id = MANUAL_DEPARTMENT_ID
