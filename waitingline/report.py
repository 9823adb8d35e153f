from __future__ import annotations

from typing import Any

from .check import CheckResult, Severity


def format_report(result: CheckResult) -> str:
    """Human-readable report for terminal output."""
    lines = []
    passed = len(result.checks_run) - len(result.failed_checks)
    lines.append(f"{result.impl_name} — {passed}/{len(result.checks_run)} checks passed")

    if result.is_conforming:
        lines.append("  ✓ Conforming (0 errors)")
    else:
        lines.append(f"  × Non-conforming ({len(result.errors)} errors)")

    for diag in result.diagnostics:
        if diag.severity == Severity.ERROR:
            lines.append(f"    - [{diag.check}] {diag.message} (ERROR)")

    if result.warnings:
        n = len(result.warnings)
        lines.append(f"  ⚠ {n} warning{'s' if n > 1 else ''}")
        for diag in result.warnings:
            lines.append(f"    - [{diag.check}] {diag.message} (WARNING)")

    return "\n".join(lines)


def report_json(result: CheckResult) -> dict[str, Any]:
    """Machine-readable report for pipeline integration."""
    return {
        "impl_name": result.impl_name,
        "conforming": result.is_conforming,
        "checks_run": list(result.checks_run),
        "failed_checks": list(result.failed_checks),
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
        "diagnostics": [
            {
                "check": d.check,
                "severity": d.severity.value,
                "message": d.message,
            }
            for d in result.diagnostics
        ],
    }
