"""Mutation testing analysis.

Wraps ``mutmut`` results and maps surviving mutants back to the codec
or search module they live in, so each survivor points at a missing
test scenario.

Workflow::

    pip install mutmut
    mutmut run --paths-to-mutate=int_format.py,int_parse.py,bit_ops.py,text_search.py --tests-dir=tests/
    python -m validation.mutation_analysis

The goal: every mutant should be *killed* by at least one test.
"""
from __future__ import annotations

import re
import subprocess
import sys
from dataclasses import dataclass, field

MUTATED_PATHS = ("int_format.py", "int_parse.py", "bit_ops.py", "text_search.py")

_DIFF_HEADER = re.compile(r"^(?:---|\+\+\+) (?:[ab]/)?(?P<path>\S+\.py)")


@dataclass
class Mutant:
    id: int
    status: str          # killed | survived | timeout | suspicious
    source_file: str
    description: str


@dataclass
class MutationReport:
    total: int = 0
    killed: int = 0
    survived: int = 0
    timeout: int = 0
    suspicious: int = 0
    survivors: list[Mutant] = field(default_factory=list)

    @property
    def score(self) -> float:
        if self.total == 0:
            return 0.0
        return self.killed / self.total

    def survivors_by_file(self) -> dict[str, list[Mutant]]:
        grouped: dict[str, list[Mutant]] = {}
        for m in self.survivors:
            grouped.setdefault(m.source_file, []).append(m)
        return grouped

    def summary(self) -> str:
        lines = [
            "Mutation Testing Report",
            "=" * 40,
            f"Total mutants:   {self.total}",
            f"Killed:          {self.killed}",
            f"Survived:        {self.survived}",
            f"Timeout:         {self.timeout}",
            f"Suspicious:      {self.suspicious}",
            f"Mutation score:  {self.score:.1%}",
        ]
        if self.survivors:
            lines.append("")
            lines.append("Surviving mutants (test gaps):")
            for source_file, mutants in sorted(self.survivors_by_file().items()):
                lines.append(f"  {source_file}")
                for m in mutants:
                    lines.append(f"    [mutant {m.id}]")
                    lines.append(f"       {m.description}")
                    lines.append("       -> Add a test that detects this mutation")
        else:
            lines.append("\nAll mutants killed, test suite is thorough.")
        return "\n".join(lines)


def _run(cmd: list[str]) -> subprocess.CompletedProcess:
    return subprocess.run(cmd, capture_output=True, text=True, cwd=".")


def source_file_of(diff: str) -> str:
    """File a ``mutmut show`` diff applies to, or ``"unknown"``."""
    for line in diff.splitlines():
        m = _DIFF_HEADER.match(line)
        if m:
            return m.group("path")
    return "unknown"


def parse_counts(output: str, report: MutationReport) -> None:
    """Fill the status counters from ``mutmut results`` output."""
    for line in output.strip().splitlines():
        line = line.strip()
        if not line:
            continue
        # mutmut results prints lines like "Killed 42" or "Survived 3"
        parts = line.split()
        if len(parts) >= 2 and parts[-1].isdigit():
            count = int(parts[-1])
            label = parts[0].lower()
            if "killed" in label:
                report.killed = count
            elif "survived" in label:
                report.survived = count
            elif "timeout" in label:
                report.timeout = count
            elif "suspicious" in label:
                report.suspicious = count

    report.total = (
        report.killed + report.survived + report.timeout + report.suspicious
    )


def parse_mutmut_results() -> MutationReport:
    """Parse ``mutmut results`` output into a structured report."""
    report = MutationReport()

    try:
        result = _run(["mutmut", "results"])
    except FileNotFoundError:
        print("mutmut not installed.  Install with: pip install mutmut")
        sys.exit(1)

    parse_counts(result.stdout, report)

    if report.survived > 0:
        try:
            ids_result = _run(["mutmut", "results", "--survived"])
        except (OSError, subprocess.SubprocessError) as e:
            print(f"Could not list surviving mutants: {e}")
            return report
        for line in ids_result.stdout.strip().splitlines():
            line = line.strip()
            if not line.isdigit():
                continue
            mutant_id = int(line)
            detail = _run(["mutmut", "show", str(mutant_id)]).stdout.strip()
            report.survivors.append(Mutant(
                id=mutant_id,
                status="survived",
                source_file=source_file_of(detail),
                description=detail[:200],
            ))

    return report


def main() -> None:
    print("Analyzing mutation testing results ...\n")
    report = parse_mutmut_results()
    print(report.summary())

    if report.total == 0:
        print("\nNo mutmut results found.  Run mutmut first:")
        print(
            "  mutmut run --paths-to-mutate="
            + ",".join(MUTATED_PATHS)
            + " --tests-dir=tests/"
        )
        sys.exit(1)

    if report.score < 1.0:
        print("\nTarget:  100% mutation score")
        print(f"Current: {report.score:.1%}")
        print(f"Action:  Add tests for the {report.survived} surviving mutant(s)")
        sys.exit(1)
    else:
        print("\nMutation score target met!")


if __name__ == "__main__":
    main()
