from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import ALGORITHMS, QUANTUM_ALGORITHMS, STANDARD_REPORT, run_algorithm
from .gantt import build_rich_gantt, render_gantt
from .metrics import summarize_process_metrics
from .models import Process, ScheduleResult
from .policies import DEFAULT_QUANTUM
from .workload_io import load_workload

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="Single-processor scheduling simulator (FCFS, SJF, Priority, Round Robin).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    report_parser = subparsers.add_parser(
        "report",
        help="Run FCFS, SJF, Priority and Round Robin on a workload and print each schedule.",
    )
    report_parser.add_argument(
        "workload",
        help="Path to CSV or JSON workload file.",
    )
    report_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for Round Robin (default: {DEFAULT_QUANTUM}).",
    )
    report_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print plain-text Gantt charts instead of colored panels.",
    )

    run_parser = subparsers.add_parser("run", help="Run a single scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHMS)}).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to CSV or JSON workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help=f"Time quantum for the round-robin variants (default: {DEFAULT_QUANTUM}).",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print a plain-text Gantt chart instead of a colored panel.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to CSV or JSON workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(STANDARD_REPORT),
        help=f"Algorithms to compare (default: {' '.join(STANDARD_REPORT)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for round-robin variants (default: {DEFAULT_QUANTUM}).",
    )

    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
    )


def _print_title(console: Console, title: str) -> None:
    console.rule(f"[bold]{title}[/bold]")


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    _print_title(console, result.algorithm)
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    if plain:
        console.print(render_gantt(result.timeline), highlight=False, markup=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()

    system = result.system
    footers = {}
    if system is not None:
        footers = {
            "Wait": f"Average\n{system.avg_waiting:.2f}",
            "Turnaround": f"Average\n{system.avg_turnaround:.2f}",
            "Exit": f"Throughput\n{system.throughput:.2f}/t",
        }

    headers = ["ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"]

    proc_table = Table(title="Schedule table", box=box.SIMPLE_HEAVY, show_footer=system is not None)
    for h in headers:
        justify = "center" if h in {"ID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify, footer=footers.get(h, ""))

    for p in result.processes:
        proc_table.add_row(
            str(p.pid),
            str(p.priority),
            str(p.burst_time),
            str(p.arrival_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.completion_time),
        )

    console.print(proc_table)
    console.print()


def _print_comparison(processes: List[Process], algorithms: Sequence[str], quantum: int, console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("Throughput", justify="right")

    for alg in algorithms:
        q = quantum if alg.lower() in QUANTUM_ALGORITHMS else None
        result = run_algorithm(alg, processes, quantum=q)
        summary = summarize_process_metrics(result.processes)
        throughput = result.system.throughput if result.system else 0.0
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            f"{summary['avg_response']:.2f}",
            f"{throughput:.3f}",
        )

    console.print(summary_table)


def _dispatch(args: argparse.Namespace, console: Console) -> int:
    if args.command == "report":
        processes = load_workload(Path(args.workload))
        for alg in STANDARD_REPORT:
            q = args.quantum if alg in QUANTUM_ALGORITHMS else None
            _print_result(run_algorithm(alg, processes, quantum=q), console, plain=args.plain)
        return 0

    if args.command == "run":
        processes = load_workload(Path(args.workload))
        result = run_algorithm(args.algorithm, processes, quantum=args.quantum)
        _print_result(result, console, plain=args.plain)
        return 0

    if args.command == "compare":
        processes = load_workload(Path(args.workload))
        _print_comparison(processes, args.algorithms, args.quantum, console)
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    console = Console()

    try:
        return _dispatch(args, console)
    except (ValueError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        console.print(f"Error: {exc}", style="red", markup=False, highlight=False)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
