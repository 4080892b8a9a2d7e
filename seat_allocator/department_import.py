import logging

import pandas as pd

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"name", "roll_number_start", "roll_number_end"}


def import_departments_excel(file_path):
    """Read department definitions from the first sheet of an Excel file."""
    df = pd.read_excel(file_path, dtype=str)

    if not REQUIRED_COLUMNS.issubset(df.columns):
        missing = REQUIRED_COLUMNS - set(df.columns)
        raise ValueError(f"Missing columns: {sorted(missing)}")

    departments = []
    for _, row in df.dropna(how="all").iterrows():
        departments.append({
            "name": str(row["name"]).strip(),
            "roll_number_start": str(row["roll_number_start"]).strip(),
            "roll_number_end": str(row["roll_number_end"]).strip(),
        })

    logger.info("Read %d departments from %s", len(departments), file_path)
    return departments
