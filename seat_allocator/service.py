"""Seat allocation entry points.

Generation runs read departments and halls, run an allocator and write the
result through :class:`AssignmentRepository` while holding
``generation_lock``, so only one run writes assignments at a time.
Department writes hold ``department_lock`` across the overlap check and the
commit.
"""
import logging
import threading

from sqlalchemy.orm import Session

from seat_allocator.allocator import allocate_all_halls, allocate_hall
from seat_allocator.db_models import DepartmentDB, HallDB
from seat_allocator.ranges import RangeOverlapError, check_overlap, parse_range
from seat_allocator.repository import AssignmentRepository

logger = logging.getLogger(__name__)

generation_lock = threading.Lock()

# overlap check and insert must not interleave
department_lock = threading.Lock()


def list_departments(db: Session):
    return db.query(DepartmentDB).order_by(DepartmentDB.id).all()


def list_halls(db: Session):
    return db.query(HallDB).order_by(HallDB.id).all()


def validate_department_range(db: Session, start, end, exclude_id=None):
    start, end = parse_range(start, end)
    departments = [d for d in list_departments(db) if d.id != exclude_id]
    return check_overlap(start, end, departments)


def create_department(db: Session, name, start, end):
    with department_lock:
        start, end = parse_range(start, end)

        conflict = validate_department_range(db, start, end)
        if conflict:
            logger.warning("Rejected department %r: range %s-%s overlaps %r", name, start, end, conflict.name)
            raise RangeOverlapError(conflict)

        department = DepartmentDB(name=name, roll_number_start=start, roll_number_end=end)
        db.add(department)
        db.commit()
        db.refresh(department)
    return department


def update_department(db: Session, department, name, start, end):
    with department_lock:
        start, end = parse_range(start, end)

        conflict = validate_department_range(db, start, end, exclude_id=department.id)
        if conflict:
            logger.warning("Rejected update of department %s: overlaps %r", department.id, conflict.name)
            raise RangeOverlapError(conflict)

        department.name = name
        department.roll_number_start = start
        department.roll_number_end = end
        db.commit()
        db.refresh(department)
    return department


def generate_for_hall(db: Session, hall_id, skip_roll_numbers=(), manual_roll_numbers=()):
    with generation_lock:
        hall = db.get(HallDB, hall_id)
        departments = list_departments(db)

        if not hall or not departments:
            logger.warning("Cannot generate seating for hall %s: hall or departments missing", hall_id)
            return {"success": False, "unallocated": [], "warnings": ["Hall or departments not found"]}

        manual = [str(r).strip() for r in manual_roll_numbers if str(r).strip()]
        result = allocate_hall(hall, departments, skip_roll_numbers, manual)
        AssignmentRepository(db).replace_for_hall(hall.id, result.assignments)

    return {"success": True, "unallocated": result.unallocated, "warnings": result.warnings}


def generate_for_all_halls(db: Session):
    with generation_lock:
        halls = list_halls(db)
        departments = list_departments(db)

        if not halls:
            logger.warning("Cannot regenerate seating plans: no halls")
            return {"success": False, "unallocated": []}

        result = allocate_all_halls(halls, departments)
        AssignmentRepository(db).replace_all(result.assignments)

    return {"success": True, "unallocated": result.unallocated}
