"""Report data for seating plans and its Excel/PDF renditions."""
import logging
from datetime import datetime

import pandas as pd
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from seat_allocator import config
from seat_allocator.db_models import DepartmentDB, FacultyDB, HallDB
from seat_allocator.models import MANUAL_DEPARTMENT_ID
from seat_allocator.repository import AssignmentRepository

logger = logging.getLogger(__name__)

CONSOLIDATED_HEADERS = ["Dept.", "Reg. No. From", "Reg. No. To", "No. of Candidates", "Hall No", "Floor"]
HALL_HEADERS = ["Roll No", "Dept.", "Row", "Bench", "Seat", "Label"]
FACULTY_HEADERS = ["Faculty Name", "Department", "Assigned Halls"]


def roll_sort_key(roll_number):
    if roll_number.isdigit():
        return (0, int(roll_number), roll_number)
    return (1, 0, roll_number)


def department_label(department_id, departments):
    dept = departments.get(department_id)
    if dept:
        return dept.name
    return "Manual Entry" if department_id == MANUAL_DEPARTMENT_ID else "Unknown"


def floor_for(hall):
    if hall is None:
        return "GROUND FLOOR"
    if hall.floor:
        return hall.floor
    name = hall.name.lower()
    if "second" in name:
        return "SECOND FLOOR"
    if "third" in name:
        return "THIRD FLOOR"
    if "first" in name:
        return "FIRST FLOOR"
    return "GROUND FLOOR"


def consolidated_plan_rows(db):
    """One row per (hall, department): roll number span and candidate count."""
    departments = {d.id: d for d in db.query(DepartmentDB).all()}
    halls = {h.id: h for h in db.query(HallDB).all()}

    groups = {}
    for a in AssignmentRepository(db).list_all():
        groups.setdefault((a.hall_id, a.department_id), []).append(a.student_roll_number)

    rows = []
    for (hall_id, department_id), roll_numbers in groups.items():
        roll_numbers.sort(key=roll_sort_key)
        hall = halls.get(hall_id)
        rows.append([
            department_label(department_id, departments),
            roll_numbers[0],
            roll_numbers[-1],
            len(roll_numbers),
            hall.name if hall else str(hall_id),
            floor_for(hall),
        ])
    return rows


def hall_seat_rows(db, hall):
    departments = {d.id: d for d in db.query(DepartmentDB).all()}
    return [
        [
            a.student_roll_number,
            department_label(a.department_id, departments),
            a.row,
            a.column,
            a.bench_position,
            f"R{a.row}-B{a.column}-S{a.bench_position}",
        ]
        for a in AssignmentRepository(db).list_for_hall(hall.id)
    ]


def faculty_allocation_rows(db):
    rows = []
    for member in db.query(FacultyDB).order_by(FacultyDB.id).all():
        hall_names = ", ".join(h.name for h in sorted(member.halls, key=lambda h: h.id))
        rows.append([member.name, member.department or "N/A", hall_names or "None"])
    return rows


def _export_path(filename):
    export_dir = config.EXPORT_DIR
    export_dir.mkdir(parents=True, exist_ok=True)
    return export_dir / filename


def write_excel(headers, rows, filename):
    file_path = _export_path(filename)
    pd.DataFrame(rows, columns=headers).to_excel(file_path, index=False)
    logger.info("Wrote %d rows to %s", len(rows), file_path)
    return file_path


def write_pdf(title, headers, rows, filename, footer=None):
    file_path = _export_path(filename)

    c = canvas.Canvas(str(file_path), pagesize=A4)
    width, height = A4
    x_step = (width - 100) / len(headers)

    y = height - 50
    c.setFont("Helvetica-Bold", 14)
    for line in title.split("\n"):
        c.drawCentredString(width / 2, y, line)
        y -= 18

    c.setFont("Helvetica", 9)
    c.drawCentredString(width / 2, y, f"Generated: {datetime.now():%d/%m/%Y %H:%M}")
    y -= 25

    c.setFont("Helvetica-Bold", 9)
    for i, header in enumerate(headers):
        c.drawString(50 + i * x_step, y, header)
    y -= 15

    c.line(50, y, width - 50, y)
    y -= 15

    c.setFont("Helvetica", 9)
    for row in rows:
        if y < 60:
            c.showPage()
            c.setFont("Helvetica", 9)
            y = height - 50

        for i, value in enumerate(row):
            c.drawString(50 + i * x_step, y, str(value)[:22])
        y -= 15

    if footer:
        c.setFont("Helvetica", 10)
        c.drawString(50, max(y - 15, 40), footer)

    c.save()
    logger.info("Wrote %d rows to %s", len(rows), file_path)
    return file_path
