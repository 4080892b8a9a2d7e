from sqlalchemy import Column, Integer, String, ForeignKey, Table, UniqueConstraint
from sqlalchemy.orm import relationship
from seat_allocator.database import Base


hall_faculty = Table(
    "hall_faculty",
    Base.metadata,
    Column("hall_id", Integer, ForeignKey("halls.id"), primary_key=True),
    Column("faculty_id", Integer, ForeignKey("faculty.id"), primary_key=True),
)


class DepartmentDB(Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key = True, index = True)
    name = Column(String, nullable = False)
    roll_number_start = Column(Integer, nullable = False)
    roll_number_end = Column(Integer, nullable = False)


class FacultyDB(Base):
    __tablename__ = "faculty"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    department = Column(String, nullable=True)

    halls = relationship("HallDB", secondary=hall_faculty, back_populates="faculty")


class HallDB(Base):
    __tablename__ = "halls"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    rows = Column(Integer, nullable=False)
    columns = Column(Integer, nullable=False)
    seats_per_bench = Column(Integer, nullable=False, default=1)
    floor = Column(String, nullable=True)

    faculty = relationship("FacultyDB", secondary=hall_faculty, back_populates="halls")
    assignments = relationship("SeatAssignmentDB", back_populates="hall", cascade="all, delete")

    @property
    def faculty_assigned(self):
        return [f.id for f in self.faculty]

    @property
    def capacity(self):
        return self.rows * self.columns * self.seats_per_bench


class SeatAssignmentDB(Base):
    __tablename__ = "seat_assignments"
    __table_args__ = (
        UniqueConstraint("hall_id", "row", "column", "bench_position", name="uq_hall_seat"),
    )

    id = Column(Integer, primary_key=True, index=True)

    hall_id = Column(Integer, ForeignKey("halls.id"), nullable=False, index=True)
    row = Column(Integer, nullable=False)
    column = Column(Integer, nullable=False)
    bench_position = Column(Integer, nullable=False)
    student_roll_number = Column(String, nullable=False, index=True)

    # not a foreign key: 0 marks manual entries and deleted departments stay referenced
    department_id = Column(Integer, nullable=False)

    hall = relationship("HallDB", back_populates="assignments")
