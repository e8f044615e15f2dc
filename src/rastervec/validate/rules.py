"""
Validation rules for rastervec.

Checks an extraction against the bitmap it came from.
"""

import numpy as np

from rastervec.models import CheckResult, Severity, ValidationReport
from rastervec.tracer import get_tracer, trace


@trace(label="run_validation")
def run_validation(mask, report):
    """
    Run all validation checks on an extraction report.

    mask is the [x, y] foreground array the report was extracted from.
    Returns ValidationReport with all check results.
    """
    tracer = get_tracer()

    mask = np.asarray(mask, dtype=bool)
    checks = []

    checks.append(check_round_trip(mask, report.segments))
    checks.append(check_no_overlap(report.segments))
    checks.append(check_full_coverage(mask, report.segments))
    checks.append(check_degenerate(report.segments))

    validation = ValidationReport(checks=checks)

    tracer.event(
        f"Validation complete: {validation.error_count} errors, {validation.warning_count} warnings"
    )

    return validation


def _pixels_of(segment):
    return segment.rasterize()


def check_round_trip(mask, segments):
    """
    Check that every segment redraws onto foreground pixels only.
    """
    size_x, size_y = mask.shape if mask.ndim == 2 else (0, 0)
    stray = []

    for index, segment in enumerate(segments):
        for x, y in _pixels_of(segment):
            if not (0 <= x < size_x and 0 <= y < size_y) or not mask[x, y]:
                stray.append(index)
                break

    if stray:
        return CheckResult(
            rule_id="round_trip",
            severity=Severity.ERROR,
            passed=False,
            message=f"{len(stray)} segments draw pixels outside the foreground",
            evidence={"segment_indices": stray[:5]},
        )

    return CheckResult(
        rule_id="round_trip",
        severity=Severity.ERROR,
        passed=True,
        message="Every segment redraws onto foreground pixels",
        evidence={"segments": len(segments)},
    )


def check_no_overlap(segments):
    """
    Check that no pixel is drawn by two segments.
    """
    owners = {}
    shared = []

    for index, segment in enumerate(segments):
        for pixel in _pixels_of(segment):
            if pixel in owners and owners[pixel] != index:
                shared.append([pixel.x, pixel.y])
            owners[pixel] = index

    if shared:
        return CheckResult(
            rule_id="no_overlap",
            severity=Severity.ERROR,
            passed=False,
            message=f"{len(shared)} pixels are drawn by more than one segment",
            evidence={"pixels": shared[:5]},
        )

    return CheckResult(
        rule_id="no_overlap",
        severity=Severity.ERROR,
        passed=True,
        message="Segments are pixel-disjoint",
        evidence={},
    )


def check_full_coverage(mask, segments):
    """
    Check that segments cover the whole foreground.

    Isolated pixels cannot form a segment, so gaps are warnings.
    """
    covered = np.zeros_like(mask, dtype=bool)
    size_x, size_y = mask.shape if mask.ndim == 2 else (0, 0)

    for segment in segments:
        for x, y in _pixels_of(segment):
            if 0 <= x < size_x and 0 <= y < size_y:
                covered[x, y] = True

    missing = np.argwhere(mask & ~covered)

    if len(missing):
        return CheckResult(
            rule_id="full_coverage",
            severity=Severity.WARN,
            passed=False,
            message=f"{len(missing)} foreground pixels are not covered by any segment",
            evidence={"pixels": missing[:5].tolist(), "count": int(len(missing))},
        )

    return CheckResult(
        rule_id="full_coverage",
        severity=Severity.WARN,
        passed=True,
        message="All foreground pixels are covered",
        evidence={"foreground_pixels": int(mask.sum())},
    )


def check_degenerate(segments):
    """
    Check that no segment collapses to a single point.
    """
    degenerate = [index for index, segment in enumerate(segments) if segment.is_degenerate]

    if degenerate:
        return CheckResult(
            rule_id="no_degenerate",
            severity=Severity.ERROR,
            passed=False,
            message=f"{len(degenerate)} segments have identical endpoints",
            evidence={"segment_indices": degenerate[:5]},
        )

    return CheckResult(
        rule_id="no_degenerate",
        severity=Severity.ERROR,
        passed=True,
        message="No degenerate segments",
        evidence={},
    )
