"""
Validation report generation for rastervec.

Writes JSON and plain-text summaries of validation results.
"""

import os

from rastervec.io.save_artifacts import ensure_dir, save_json
from rastervec.tracer import get_tracer, trace


@trace(label="generate_report")
def generate_report(validation, out_dir, debug_writer=None):
    """
    Generate validation report files.

    Creates:
    - validation_report.json: Full check results
    - validation_summary.txt: Human-readable summary
    """
    tracer = get_tracer()

    report_path = os.path.join(out_dir, "validation_report.json")
    save_json(validation, report_path)

    passed = [c for c in validation.checks if c.passed]
    failed = [c for c in validation.checks if not c.passed]

    summary_lines = ["rastervec Validation Report", "=" * 40, ""]
    summary_lines.append(f"Total checks: {len(validation.checks)}")
    summary_lines.append(f"Passed: {len(passed)}")
    summary_lines.append(f"Failed: {len(failed)}")
    summary_lines.append("")

    if failed:
        summary_lines.append("ISSUES:")
        summary_lines.append("-" * 40)
        for check in failed:
            summary_lines.append(format_check_result(check))
        summary_lines.append("")

    summary_lines.append("ALL CHECKS:")
    summary_lines.append("-" * 40)
    for check in validation.checks:
        status = "PASS" if check.passed else "FAIL"
        summary_lines.append(f"[{status}] {check.rule_id}: {check.message}")

    summary_path = os.path.join(out_dir, "validation_summary.txt")
    ensure_dir(os.path.dirname(summary_path))
    with open(summary_path, "w", encoding="utf-8") as f:
        f.write("\n".join(summary_lines) + "\n")

    tracer.event(f"Report saved: {len(validation.checks)} checks, {validation.error_count} errors")

    if debug_writer:
        metrics = {
            "total_checks": len(validation.checks),
            "passed": len(passed),
            "failed": len(failed),
            "errors": validation.error_count,
            "warnings": validation.warning_count,
        }
        debug_writer.save_json(metrics, "validate", "validate_metrics.json")

    return report_path, summary_path


def format_check_result(check):
    """Format a single check result for display."""
    status = "PASS" if check.passed else "FAIL"
    severity = check.severity.value.upper()
    return f"[{status}][{severity}] {check.rule_id}: {check.message}"
