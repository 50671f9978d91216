"""CSV trace export for the cell growth simulation."""

import csv
from pathlib import Path
from typing import Optional, TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from ..model.state import SimulationState

FIELDNAMES = [
    "step", "cell_uid", "parent_uid", "x", "y", "z",
    "diameter", "can_divide", "category",
]


class CSVWriter:
    """
    Streams per-step cell rows to a CSV file.

    Output format:
        step,cell_uid,parent_uid,x,y,z,diameter,can_divide,category
        1,1,,12.5,-3.1,-2250.0,6.02,1,0
        ...

    With every > 1 only steps divisible by every are written.
    """

    def __init__(self, output_path: Path, every: int = 1):
        if every < 1:
            raise ValueError("every must be at least 1")
        self.output_path = Path(output_path)
        self.every = every
        self.rows_written = 0
        self.file: Optional[TextIO] = None
        self.writer: Optional[csv.DictWriter] = None

    @property
    def is_open(self) -> bool:
        return self.file is not None

    def open(self) -> None:
        """Create the file and write the header."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.file = open(self.output_path, 'w', newline='')
        self.writer = csv.DictWriter(self.file, fieldnames=FIELDNAMES)
        self.writer.writeheader()

    def append(self, state: "SimulationState") -> None:
        """Write every cell of a step."""
        if state.step % self.every != 0:
            return
        if not self.is_open:
            self.open()
        rows = state.to_csv_rows()
        self.writer.writerows(rows)
        self.rows_written += len(rows)
        self.file.flush()

    def close(self) -> None:
        if self.file:
            self.file.close()
            self.file = None
            self.writer = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
