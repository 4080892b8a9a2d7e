from sqlalchemy.orm import Session

from seat_allocator.db_models import SeatAssignmentDB


def _to_row(assignment):
    return SeatAssignmentDB(
        hall_id=assignment.hall_id,
        row=assignment.row,
        column=assignment.column,
        bench_position=assignment.bench_position,
        student_roll_number=assignment.student_roll_number,
        department_id=assignment.department_id,
    )


class AssignmentRepository:
    """Seat assignments keyed by hall. Every write replaces, never patches."""

    def __init__(self, db: Session):
        self.db = db

    def replace_for_hall(self, hall_id, assignments):
        self.db.query(SeatAssignmentDB).filter(SeatAssignmentDB.hall_id == hall_id).delete()
        self.db.add_all(_to_row(a) for a in assignments if a.hall_id == hall_id)
        self.db.commit()

    def replace_all(self, assignments):
        self.db.query(SeatAssignmentDB).delete()
        self.db.add_all(_to_row(a) for a in assignments)
        self.db.commit()

    def list_for_hall(self, hall_id):
        return (
            self.db.query(SeatAssignmentDB)
            .filter(SeatAssignmentDB.hall_id == hall_id)
            .order_by(SeatAssignmentDB.row, SeatAssignmentDB.column, SeatAssignmentDB.bench_position)
            .all()
        )

    def list_all(self):
        return (
            self.db.query(SeatAssignmentDB)
            .order_by(
                SeatAssignmentDB.hall_id,
                SeatAssignmentDB.row,
                SeatAssignmentDB.column,
                SeatAssignmentDB.bench_position,
            )
            .all()
        )

    def find_by_roll_number(self, roll_number):
        return (
            self.db.query(SeatAssignmentDB)
            .filter(SeatAssignmentDB.student_roll_number == roll_number)
            .first()
        )
