import logging
from datetime import date
from typing import List, Optional, Union

from fastapi import FastAPI, Depends, Body, HTTPException
from fastapi.responses import FileResponse
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from seat_allocator import config
from seat_allocator.database import Base, engine, get_db
from seat_allocator.db_models import DepartmentDB, FacultyDB, HallDB
from seat_allocator.department_import import import_departments_excel
from seat_allocator import exports
from seat_allocator.ranges import InvalidRangeError, RangeOverlapError
from seat_allocator.repository import AssignmentRepository
from seat_allocator import service

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title = "Seat Allocator API")

Base.metadata.create_all(bind = engine)


class DepartmentIn(BaseModel):
    name: str = Field(min_length=1)
    roll_number_start: Union[int, str]
    roll_number_end: Union[int, str]


class RangeCheck(BaseModel):
    roll_number_start: Union[int, str]
    roll_number_end: Union[int, str]
    exclude_id: Optional[int] = None


class HallIn(BaseModel):
    name: str = Field(min_length=1)
    rows: int = Field(ge=1)
    columns: int = Field(ge=1)
    seats_per_bench: int = Field(1, ge=1)
    floor: Optional[str] = None
    faculty_assigned: List[int] = []


class HallUpdate(BaseModel):
    name: Optional[str] = None
    floor: Optional[str] = None
    faculty_assigned: Optional[List[int]] = None


class FacultyIn(BaseModel):
    name: str = Field(min_length=1)
    department: Optional[str] = None


class GenerateRequest(BaseModel):
    skip_roll_numbers: List[str] = []
    manual_roll_numbers: List[str] = []

    @field_validator("skip_roll_numbers", "manual_roll_numbers", mode="before")
    @classmethod
    def split_comma_separated(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        return [str(v).strip() for v in value if str(v).strip()]


def department_out(d):
    return {
        "id": d.id,
        "name": d.name,
        "roll_number_start": d.roll_number_start,
        "roll_number_end": d.roll_number_end,
    }


def hall_out(h):
    return {
        "id": h.id,
        "name": h.name,
        "rows": h.rows,
        "columns": h.columns,
        "seats_per_bench": h.seats_per_bench,
        "capacity": h.capacity,
        "floor": h.floor,
        "faculty_assigned": h.faculty_assigned,
    }


def assignment_out(a):
    return {
        "hall_id": a.hall_id,
        "row": a.row,
        "column": a.column,
        "bench_position": a.bench_position,
        "student_roll_number": a.student_roll_number,
        "department_id": a.department_id,
    }


def get_hall_or_404(db, hall_id):
    hall = db.get(HallDB, hall_id)
    if not hall:
        raise HTTPException(status_code=404, detail="Hall not found")
    return hall


def load_faculty(db, faculty_ids):
    members = db.query(FacultyDB).filter(FacultyDB.id.in_(faculty_ids)).all() if faculty_ids else []
    missing = set(faculty_ids) - {f.id for f in members}
    if missing:
        raise HTTPException(status_code=400, detail=f"Unknown faculty ids: {sorted(missing)}")
    return members


def overlap_detail(exc):
    return {"message": str(exc), "department": department_out(exc.department)}


@app.get("/")
def root():
    return {"message": "Seat Allocator API is running !"}


# departments

@app.get("/departments")
def get_departments(db: Session = Depends(get_db)):
    return [department_out(d) for d in service.list_departments(db)]


@app.post("/departments", status_code=201)
def create_department(req: DepartmentIn, db: Session = Depends(get_db)):
    try:
        department = service.create_department(db, req.name, req.roll_number_start, req.roll_number_end)
    except InvalidRangeError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except RangeOverlapError as e:
        raise HTTPException(status_code=409, detail=overlap_detail(e))

    logger.info("Created department %s (%s-%s)", department.name,
                department.roll_number_start, department.roll_number_end)
    return department_out(department)


@app.post("/departments/check-range")
def check_department_range(req: RangeCheck, db: Session = Depends(get_db)):
    try:
        conflict = service.validate_department_range(
            db, req.roll_number_start, req.roll_number_end, exclude_id=req.exclude_id
        )
    except InvalidRangeError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {"overlaps": conflict is not None, "department": department_out(conflict) if conflict else None}


@app.post("/departments/import")
def import_departments_from_excel(file_path: Optional[str] = Body(None, embed=True), db: Session = Depends(get_db)):
    file_path = file_path or config.DEPARTMENTS_FILE

    try:
        rows = import_departments_excel(file_path)
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Excel read failed: {str(e)}")

    inserted = []
    skipped = []

    for row in rows:
        try:
            department = service.create_department(db, row["name"], row["roll_number_start"], row["roll_number_end"])
        except (InvalidRangeError, RangeOverlapError) as e:
            logger.warning("Skipped department %r from %s: %s", row["name"], file_path, e)
            skipped.append({"name": row["name"], "reason": str(e)})
            continue
        inserted.append(department_out(department))

    return {
        "message": "Department import completed",
        "inserted": len(inserted),
        "skipped": skipped,
        "departments": inserted,
    }


@app.put("/departments/{department_id}")
def update_department(department_id: int, req: DepartmentIn, db: Session = Depends(get_db)):
    department = db.get(DepartmentDB, department_id)
    if not department:
        raise HTTPException(status_code=404, detail="Department not found")

    try:
        department = service.update_department(
            db, department, req.name, req.roll_number_start, req.roll_number_end
        )
    except InvalidRangeError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except RangeOverlapError as e:
        raise HTTPException(status_code=409, detail=overlap_detail(e))

    return department_out(department)


@app.delete("/departments/{department_id}")
def delete_department(department_id: int, db: Session = Depends(get_db)):
    department = db.get(DepartmentDB, department_id)
    if not department:
        raise HTTPException(status_code=404, detail="Department not found")

    # existing seat assignments are kept and reported as "Unknown"
    db.delete(department)
    db.commit()
    return {"message": "Department deleted", "id": department_id}


# halls

@app.get("/halls")
def get_halls(db: Session = Depends(get_db)):
    return [hall_out(h) for h in service.list_halls(db)]


@app.post("/halls", status_code=201)
def create_hall(req: HallIn, db: Session = Depends(get_db)):
    members = load_faculty(db, req.faculty_assigned)
    notices = []

    if req.faculty_assigned:
        selected = next(f for f in members if f.id == req.faculty_assigned[0])
        if selected.department:
            assigned_in_dept = [
                f for h in service.list_halls(db) for f in h.faculty
                if f.department == selected.department
            ]
            if len(assigned_in_dept) >= 2:
                notices.append(
                    f"Two faculty from {selected.department} department are already assigned. "
                    f"You may still continue if needed."
                )

    hall = HallDB(
        name=req.name,
        rows=req.rows,
        columns=req.columns,
        seats_per_bench=req.seats_per_bench,
        floor=req.floor,
    )
    hall.faculty = members
    db.add(hall)
    db.commit()
    db.refresh(hall)

    return {**hall_out(hall), "notices": notices}


@app.get("/halls/{hall_id}")
def get_hall(hall_id: int, db: Session = Depends(get_db)):
    return hall_out(get_hall_or_404(db, hall_id))


@app.put("/halls/{hall_id}")
def update_hall(hall_id: int, req: HallUpdate, db: Session = Depends(get_db)):
    hall = get_hall_or_404(db, hall_id)

    # geometry is fixed once a hall exists
    if req.name is not None:
        hall.name = req.name
    if req.floor is not None:
        hall.floor = req.floor
    if req.faculty_assigned is not None:
        hall.faculty = load_faculty(db, req.faculty_assigned)

    db.commit()
    db.refresh(hall)
    return hall_out(hall)


@app.delete("/halls/{hall_id}")
def delete_hall(hall_id: int, db: Session = Depends(get_db)):
    with service.generation_lock:
        hall = get_hall_or_404(db, hall_id)
        db.delete(hall)
        db.commit()
    return {"message": "Hall deleted", "id": hall_id}


@app.get("/halls/{hall_id}/capacity-check")
def capacity_check(hall_id: int, db: Session = Depends(get_db)):
    hall = get_hall_or_404(db, hall_id)

    total_students = sum(
        d.roll_number_end - d.roll_number_start + 1 for d in service.list_departments(db)
    )
    shortage = max(0, total_students - hall.capacity)

    return {
        "hall_id": hall.id,
        "total_students": total_students,
        "total_seats": hall.capacity,
        "seats_per_bench": hall.seats_per_bench,
        "shortage_students": shortage,
    }


@app.post("/halls/{hall_id}/generate")
def generate_hall_plan(hall_id: int, req: Optional[GenerateRequest] = None, db: Session = Depends(get_db)):
    req = req or GenerateRequest()
    return service.generate_for_hall(db, hall_id, req.skip_roll_numbers, req.manual_roll_numbers)


@app.get("/halls/{hall_id}/assignments")
def get_hall_assignments(hall_id: int, db: Session = Depends(get_db)):
    hall = get_hall_or_404(db, hall_id)
    return [assignment_out(a) for a in AssignmentRepository(db).list_for_hall(hall.id)]


# seating plans

@app.post("/seating-plans/generate")
def generate_all_plans(db: Session = Depends(get_db)):
    return service.generate_for_all_halls(db)


@app.get("/seating-plans")
def get_all_assignments(db: Session = Depends(get_db)):
    return [assignment_out(a) for a in AssignmentRepository(db).list_all()]


@app.get("/public/seat-lookup")
def seat_lookup(roll_number: str, db: Session = Depends(get_db)):
    assignment = AssignmentRepository(db).find_by_roll_number(roll_number.strip())
    if not assignment:
        raise HTTPException(status_code=404, detail="Seat not allocated yet")

    hall = assignment.hall
    return {
        **assignment_out(assignment),
        "hall_name": hall.name,
        "floor": exports.floor_for(hall),
        "label": f"R{assignment.row}-B{assignment.column}-S{assignment.bench_position}",
    }


# faculty

@app.get("/faculty")
def get_faculty(db: Session = Depends(get_db)):
    return [
        {"id": f.id, "name": f.name, "department": f.department, "halls": [h.id for h in f.halls]}
        for f in db.query(FacultyDB).order_by(FacultyDB.id).all()
    ]


@app.post("/faculty", status_code=201)
def create_faculty(req: FacultyIn, db: Session = Depends(get_db)):
    member = FacultyDB(name=req.name, department=req.department)
    db.add(member)
    db.commit()
    db.refresh(member)
    return {"id": member.id, "name": member.name, "department": member.department, "halls": []}


@app.delete("/faculty/{faculty_id}")
def delete_faculty(faculty_id: int, db: Session = Depends(get_db)):
    member = db.get(FacultyDB, faculty_id)
    if not member:
        raise HTTPException(status_code=404, detail="Faculty not found")

    db.delete(member)
    db.commit()
    return {"message": "Faculty deleted", "id": faculty_id}


@app.get("/faculty/{faculty_id}/halls")
def get_faculty_halls(faculty_id: int, db: Session = Depends(get_db)):
    member = db.get(FacultyDB, faculty_id)
    if not member:
        raise HTTPException(status_code=404, detail="Faculty not found")
    return [hall_out(h) for h in sorted(member.halls, key=lambda h: h.id)]


# exports

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def file_response(file_path, media_type):
    return FileResponse(path=str(file_path), filename=file_path.name, media_type=media_type)


def consolidated_rows_or_404(db):
    rows = exports.consolidated_plan_rows(db)
    if not rows:
        raise HTTPException(status_code=404, detail="No seating assignments found. Generate seating plans first.")
    return rows


def hall_rows_or_404(db, hall_id):
    hall = get_hall_or_404(db, hall_id)
    rows = exports.hall_seat_rows(db, hall)
    if not rows:
        raise HTTPException(status_code=404, detail="No allocation found. Generate the hall plan first.")
    return hall, rows


@app.get("/export/consolidated/excel")
def export_consolidated_excel(db: Session = Depends(get_db)):
    rows = consolidated_rows_or_404(db)
    file_path = exports.write_excel(
        exports.CONSOLIDATED_HEADERS, rows, f"consolidated-hall-plan-{date.today():%d-%m-%Y}.xlsx"
    )
    return file_response(file_path, XLSX_MEDIA_TYPE)


@app.get("/export/consolidated/pdf")
def export_consolidated_pdf(db: Session = Depends(get_db)):
    rows = consolidated_rows_or_404(db)
    file_path = exports.write_pdf(
        "OFFICE OF EXAMINATION CELL\nCONSOLIDATED HALL PLAN",
        exports.CONSOLIDATED_HEADERS,
        rows,
        f"consolidated-hall-plan-{date.today():%d-%m-%Y}.pdf",
        footer="Examcell Coordinator",
    )
    return file_response(file_path, "application/pdf")


@app.get("/export/halls/{hall_id}/excel")
def export_hall_excel(hall_id: int, db: Session = Depends(get_db)):
    hall, rows = hall_rows_or_404(db, hall_id)
    file_path = exports.write_excel(exports.HALL_HEADERS, rows, f"allocation_hall_{hall.id}.xlsx")
    return file_response(file_path, XLSX_MEDIA_TYPE)


@app.get("/export/halls/{hall_id}/pdf")
def export_hall_pdf(hall_id: int, db: Session = Depends(get_db)):
    hall, rows = hall_rows_or_404(db, hall_id)
    file_path = exports.write_pdf(
        f"Seating Arrangement - {hall.name}", exports.HALL_HEADERS, rows, f"allocation_hall_{hall.id}.pdf"
    )
    return file_response(file_path, "application/pdf")


@app.get("/export/faculty/pdf")
def export_faculty_pdf(db: Session = Depends(get_db)):
    rows = exports.faculty_allocation_rows(db)
    if not rows:
        raise HTTPException(status_code=404, detail="No faculty found")

    file_path = exports.write_pdf(
        "Faculty - Hall Allocation", exports.FACULTY_HEADERS, rows, f"faculty-hall-allocation-{date.today()}.pdf"
    )
    return file_response(file_path, "application/pdf")
