import logging

from seat_allocator.layouts import build_grid, generate_seats
from seat_allocator.models import AllocationResult, SeatAssignment
from seat_allocator.ranges import ManualQueue, RollNumberQueue

logger = logging.getLogger(__name__)


def column_group(column, group_count):
    """Index of the department group seated in a flattened column.

    One group fills only even columns (odd ones stay empty as a gap), two
    groups alternate, three or more cycle. ``None`` means the column is left
    empty.
    """
    if group_count < 1:
        return None
    if group_count == 1:
        return 0 if column % 2 == 0 else None
    return column % group_count


def build_queues(departments, skip_roll_numbers=(), manual_roll_numbers=()):
    skip = {str(value).strip() for value in skip_roll_numbers}
    queues = [RollNumberQueue.for_department(dept, skip) for dept in departments]
    if manual_roll_numbers:
        queues.append(ManualQueue(str(r) for r in manual_roll_numbers))
    return queues


def allocate_hall(hall, departments, skip_roll_numbers=(), manual_roll_numbers=()):
    """Fill one hall column by column, each column taken by a single department."""
    warnings = []
    queues = build_queues(departments, skip_roll_numbers, manual_roll_numbers)
    grid = build_grid(hall)

    total_requested = sum(len(queue) for queue in queues)
    if total_requested > grid.capacity:
        overflow = total_requested - grid.capacity
        warnings.append(
            f"Warning: {overflow} students cannot be allocated due to limited hall "
            f"capacity ({grid.capacity} seats available)."
        )

    groups = [queue for queue in queues if len(queue)]

    for column in range(grid.width):
        index = column_group(column, len(groups))
        if index is None:
            continue
        queue = groups[index]
        for row in range(grid.rows):
            if not queue:
                break
            grid.place(row, column, queue.popleft(), queue.department_id)

    unallocated = []
    for queue in queues:
        unallocated.extend(queue)

    if unallocated:
        warnings.append(
            f"Some seat numbers are missing due to limited space: {', '.join(unallocated)}"
        )

    assignments = grid.assignments(hall.id)
    logger.info(
        "Hall %s: placed %d of %d students (capacity %d), %d unallocated",
        hall.id, len(assignments), total_requested, grid.capacity, len(unallocated),
    )
    return AllocationResult(True, assignments, unallocated, warnings)


def allocate_all_halls(halls, departments):
    """Fill every hall seat by seat, taking one student from each department per round."""
    queues = [queue for queue in build_queues(departments) if len(queue)]
    assignments = []

    for hall in halls:
        seats = generate_seats(hall)
        cursor = 0
        placed_in_round = True

        while cursor < len(seats) and placed_in_round:
            placed_in_round = False
            for queue in queues:
                if not queue or cursor >= len(seats):
                    continue
                seat = seats[cursor]
                assignments.append(
                    SeatAssignment(
                        hall_id=hall.id,
                        row=seat.row,
                        column=seat.column,
                        bench_position=seat.bench_position,
                        student_roll_number=queue.popleft(),
                        department_id=queue.department_id,
                    )
                )
                cursor += 1
                placed_in_round = True

        logger.debug("Hall %s: filled %d of %d seats", hall.id, cursor, len(seats))

    unallocated = []
    for queue in queues:
        unallocated.extend(queue)

    logger.info(
        "Placed %d students across %d halls, %d unallocated",
        len(assignments), len(halls), len(unallocated),
    )
    return AllocationResult(True, assignments, unallocated)
