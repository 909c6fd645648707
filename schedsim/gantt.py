from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

CELL_WIDTH = 8

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


@dataclass
class GanttCell:
    """
    One box of the chart: a slice, or an idle stretch when ``pid`` is None.
    """

    pid: Optional[int]
    start_time: int
    end_time: int

    @property
    def label(self) -> str:
        return "idle" if self.pid is None else str(self.pid)


def gantt_cells(slices: List[ScheduledSlice]) -> List[GanttCell]:
    """
    Order slices chronologically and fill gaps from time 0 with idle cells.
    """
    cells: List[GanttCell] = []
    last_time = 0

    for sl in sorted(slices, key=lambda s: (s.start_time, s.end_time)):
        if sl.start_time > last_time:
            cells.append(GanttCell(pid=None, start_time=last_time, end_time=sl.start_time))
        cells.append(GanttCell(pid=sl.pid, start_time=sl.start_time, end_time=sl.end_time))
        last_time = sl.end_time

    return cells


def _time_marks(cells: List[GanttCell]) -> str:
    # Each mark sits under the left edge of its cell.
    marks = "".join(f"{c.start_time:<{CELL_WIDTH + 1}}" for c in cells)
    return marks + str(cells[-1].end_time)


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart: one boxed cell per slice, start times below.
    """
    if not slices:
        return "(no execution)"

    cells = gantt_cells(slices)
    line = "|" + "".join(c.label.center(CELL_WIDTH) + "|" for c in cells)

    return "\n".join(["Gantt schedule", line, _time_marks(cells)])


def build_rich_gantt(slices: List[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel with the same boxed cells as :func:`render_gantt`,
    each process in its own color, plus the matching time marks.
    """
    if not slices:
        return Panel("No execution", title="Gantt schedule"), ""

    cells = gantt_cells(slices)
    pid_to_color: Dict[int, str] = {}

    table = Table(box=box.SQUARE, show_header=False, show_edge=True, padding=(0, 0))
    row: List[Text] = []

    for cell in cells:
        table.add_column(width=CELL_WIDTH, justify="center", no_wrap=True)
        if cell.pid is None:
            row.append(Text(cell.label, style="dim"))
            continue
        color = pid_to_color.setdefault(cell.pid, COLORS[len(pid_to_color) % len(COLORS)])
        row.append(Text(cell.label, style=f"bold on {color}"))

    table.add_row(*row)

    panel = Panel.fit(table, title="Gantt schedule")
    return panel, _time_marks(cells)
