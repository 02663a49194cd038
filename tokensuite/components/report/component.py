"""
Report component - Console lines and JUnit XML for suite results.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from tokensuite.components.operator.models import ScenarioResult, SuiteResult

SUITE_NAME = "operator"

_STATUS_LABELS = {
    "passed": "PASS",
    "failed": "FAIL",
    "error": "ERROR",
}


def render_line(result: ScenarioResult) -> str:
    """One console line per scenario."""
    line = f"{_STATUS_LABELS[result.status]:<5} {result.description}"
    if result.message:
        line += f"\n      {result.message}"
    if result.isolation_error and result.isolation_error != result.message:
        line += f"\n      {result.isolation_error}"
    return line


def render_summary(suite: SuiteResult) -> str:
    """Closing summary line."""
    summary = (
        f"{suite.total} scenario(s): {suite.passed} passed, "
        f"{suite.failed} failed, {suite.errored} error(s) "
        f"in {suite.duration_ms / 1000:.2f}s"
    )
    if suite.aborted:
        summary += f" (aborted: {suite.aborted})"
    return summary


def build_junit(suite: SuiteResult, suite_name: str = SUITE_NAME) -> ET.ElementTree:
    """Build the JUnit tree; failures and errors are kept apart."""
    ts = ET.Element("testsuite", name=suite_name)
    for result in suite.results:
        tc = ET.SubElement(
            ts,
            "testcase",
            name=result.description,
            classname=f"{suite_name}.{result.name}",
            time=f"{result.duration_ms / 1000:.3f}",
        )
        if result.status == "failed":
            failure = ET.SubElement(tc, "failure", message=result.message)
            failure.text = result.message
        elif result.status == "error":
            error = ET.SubElement(tc, "error", message=result.message)
            error.text = result.message

    if suite.aborted:
        ET.SubElement(ts, "system-err").text = f"aborted: {suite.aborted}"

    ts.set("tests", str(suite.total))
    ts.set("failures", str(suite.failed))
    ts.set("errors", str(suite.errored))
    ts.set("time", f"{suite.duration_ms / 1000:.3f}")
    return ET.ElementTree(ts)


def write_junit(suite: SuiteResult, path: Path, suite_name: str = SUITE_NAME) -> Path:
    """Write the suite as JUnit XML to path."""
    tree = build_junit(suite, suite_name)
    path.parent.mkdir(parents=True, exist_ok=True)
    tree.write(path, encoding="utf-8", xml_declaration=True)
    return path
