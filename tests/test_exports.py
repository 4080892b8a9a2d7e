import pandas as pd
import pytest

from seat_allocator import config, exports, service
from seat_allocator.db_models import HallDB
from seat_allocator.models import Hall


@pytest.fixture
def export_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "EXPORT_DIR", tmp_path / "exports")
    return tmp_path / "exports"


@pytest.fixture
def planned(db):
    hall = HallDB(name="Second Floor Hall", rows=2, columns=2, seats_per_bench=1)
    db.add(hall)
    db.commit()
    cse = service.create_department(db, "CSE", 8, 11)
    service.generate_for_hall(db, hall.id, manual_roll_numbers=["900"])
    return hall, cse


@pytest.mark.parametrize("name,floor,expected", [
    ("Main Hall", "Annex", "Annex"),
    ("Second Floor Hall", None, "SECOND FLOOR"),
    ("third block", None, "THIRD FLOOR"),
    ("Hall 1", None, "GROUND FLOOR"),
])
def test_floor_for(name, floor, expected):
    assert exports.floor_for(Hall(1, name, 1, 1, 1, floor=floor)) == expected


def test_roll_numbers_sort_numerically():
    assert sorted(["10", "9", "A1", "100"], key=exports.roll_sort_key) == ["9", "10", "100", "A1"]


def test_consolidated_rows(db, planned):
    hall, cse = planned
    rows = exports.consolidated_plan_rows(db)
    assert rows == [
        ["CSE", "8", "9", 2, "Second Floor Hall", "SECOND FLOOR"],
        ["Manual Entry", "900", "900", 1, "Second Floor Hall", "SECOND FLOOR"],
    ]

    db.delete(cse)
    db.commit()
    assert exports.consolidated_plan_rows(db)[0][0] == "Unknown"


def test_hall_seat_rows(db, planned):
    hall, _ = planned
    assert exports.hall_seat_rows(db, hall)[0] == ["8", "CSE", 1, 1, 1, "R1-B1-S1"]


def test_write_excel_and_pdf(db, planned, export_dir):
    rows = exports.consolidated_plan_rows(db)

    xlsx = exports.write_excel(exports.CONSOLIDATED_HEADERS, rows, "plan.xlsx")
    df = pd.read_excel(xlsx)
    assert list(df.columns) == exports.CONSOLIDATED_HEADERS
    assert len(df) == 2

    pdf = exports.write_pdf("CONSOLIDATED\nHALL PLAN", exports.CONSOLIDATED_HEADERS, rows * 40, "plan.pdf",
                            footer="Examcell Coordinator")
    assert pdf.read_bytes().startswith(b"%PDF")


def test_export_endpoints(client, export_dir):
    assert client.get("/export/consolidated/pdf").status_code == 404

    hall = client.post("/halls", json={"name": "H", "rows": 2, "columns": 2}).json()
    client.post("/departments", json={"name": "CSE", "roll_number_start": 1, "roll_number_end": 4})
    client.post(f"/halls/{hall['id']}/generate")

    res = client.get("/export/consolidated/excel")
    assert res.status_code == 200
    assert res.content.startswith(b"PK")

    assert client.get("/export/consolidated/pdf").content.startswith(b"%PDF")
    assert client.get(f"/export/halls/{hall['id']}/excel").status_code == 200
    assert client.get(f"/export/halls/{hall['id']}/pdf").content.startswith(b"%PDF")
    assert client.get("/export/faculty/pdf").status_code == 404

    client.post("/faculty", json={"name": "Ravi"})
    assert client.get("/export/faculty/pdf").content.startswith(b"%PDF")
