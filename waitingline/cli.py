import argparse
import json
import logging
import sys
from collections.abc import Sequence

from waitingline import KERNELS
from waitingline.check import check_kernel
from waitingline.config import Settings
from waitingline.errors import PreconditionError
from waitingline.load import load_lines_from_file
from waitingline.order import natural_order, reverse_order
from waitingline.report import format_report, report_json
from waitingline.result import Err, Ok
from waitingline.secondary import WaitingLineSecondary


def parse_entry(raw: str) -> int | str:
    """Entries that look like integers are integers; everything else is a string."""
    try:
        return int(raw)
    except ValueError:
        return raw


def handle_impls() -> int:
    for name, cls in KERNELS.items():
        doc = (sys.modules[cls.__module__].__doc__ or "").strip()
        summary = doc.splitlines()[0] if doc else ""
        print(f"{name:<8} {cls.__name__:<20} {summary}")
    return 0


def handle_check(
    files: Sequence[str],
    impl: str | None,
    *,
    verbose: bool,
    as_json: bool,
) -> int:
    """Run the conformance suite on shipped kernels or kernels loaded from files."""
    targets: list[type[WaitingLineSecondary]] = []
    load_failures: list[tuple[str, str]] = []

    for path in files:
        loaded = load_lines_from_file(path)
        match loaded:
            case str(err):
                load_failures.append((path, err))
            case list(classes):
                targets.extend(classes)

    if impl is not None:
        targets.append(KERNELS[impl])
    elif not files:
        targets.extend(KERNELS.values())

    results = [check_kernel(cls) for cls in targets]

    if as_json:
        payload = {
            "results": [report_json(r) for r in results],
            "load_failures": [{"file": p, "error": e} for p, e in load_failures],
        }
        print(json.dumps(payload, indent=2))
    else:
        for path, err in load_failures:
            print(f"{path}: {err}")
        for r in results:
            if verbose or not r.is_conforming:
                print(format_report(r))
            else:
                print(f"{r.impl_name:<24} ✓ {len(r.checks_run)} checks passed")

    any_failure = bool(load_failures) or any(not r.is_conforming for r in results)
    return 1 if any_failure else 0


def apply_op(line: WaitingLineSecondary, op: str) -> str | None:
    """Apply one textual operation to ``line``; return what it reports, if anything."""
    match op.split(maxsplit=1):
        case ["front"]:
            return str(line.front())
        case ["dequeue"]:
            return str(line.dequeue())
        case ["flip"]:
            line.flip()
        case ["sort"]:
            line.sort(natural_order)
        case ["sort-desc"]:
            line.sort(reverse_order(natural_order))
        case ["rotate", n]:
            line.rotate(int(n))
        case ["enqueue", x]:
            line.enqueue(parse_entry(x))
        case ["remove", x]:
            return str(line.remove(parse_entry(x)))
        case ["position", x]:
            return str(line.position(parse_entry(x)))
        case ["replace-front", x]:
            return str(line.replace_front(parse_entry(x)))
        case ["length"]:
            return str(line.length())
        case _:
            raise ValueError(f"Unknown operation: {op!r}")
    return None


def handle_run(entries: Sequence[str], impl: str, ops: Sequence[str]) -> int:
    line = KERNELS[impl]()
    try:
        for raw in entries:
            line.enqueue(parse_entry(raw))
        print(line)
        for op in ops:
            reported = apply_op(line, op)
            suffix = f" -> {reported}" if reported is not None else ""
            print(f"{op}{suffix}: {line}")
    except PreconditionError as e:
        print(f"Precondition violated: {e}", file=sys.stderr)
        return 2
    except (ValueError, TypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="waitingline",
        description="CLI for the layered FIFO waiting line",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Command: impls
    subparsers.add_parser("impls", help="List the shipped kernel implementations.")

    # Command: check
    check_parser = subparsers.add_parser(
        "check",
        help="Run the conformance checks on shipped kernels or kernels defined in .py files.",
    )
    check_parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Python file(s) defining WaitingLineSecondary subclasses.",
    )
    check_parser.add_argument(
        "--impl",
        choices=sorted(KERNELS),
        help="Check one shipped kernel (default: all of them when no FILE is given).",
    )
    check_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Print the full report for conforming kernels too.",
    )
    check_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print machine-readable results.",
    )

    # Command: run
    run_parser = subparsers.add_parser(
        "run", help="Build a line from ENTRY arguments and apply operations to it."
    )
    run_parser.add_argument("entries", nargs="*", metavar="ENTRY")
    run_parser.add_argument(
        "--impl",
        choices=sorted(KERNELS),
        default="deque",
        help="Kernel to build the line on (default: deque).",
    )
    run_parser.add_argument(
        "--op",
        action="append",
        default=[],
        metavar="OP",
        help=(
            "Operation to apply, repeatable: front, dequeue, length, flip, sort, "
            "sort-desc, 'rotate N', 'enqueue X', 'remove X', 'position X', "
            "'replace-front X'."
        ),
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    match Settings.from_env():
        case Ok(settings):
            logging.basicConfig(level=settings.log_level)
        case Err() as err:
            print(f"Error in environment settings: {err.describe()}", file=sys.stderr)
            return 1

    match args.command:
        case "impls":
            return handle_impls()
        case "check":
            return handle_check(
                args.files, args.impl, verbose=args.verbose, as_json=args.json
            )
        case "run":
            return handle_run(args.entries, args.impl, args.op)
        case None:
            parser.print_help()
            return 1
        case _:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            parser.print_help()
            return 1


if __name__ == "__main__":
    sys.exit(main())
