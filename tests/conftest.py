"""Shared fixtures: blackboards built under tmp_path."""

from pathlib import Path

import pytest

TOOL_PROJECT = """name: test-tool
maintainer: alice
status: shipped
created: 2026-01-15
license: MIT
type: tool
source:
  repo: alice/test-tool
  branch: main
tests: pytest

contributors:
  alice:
    zone: maintainer
    since: 2026-01-15
"""

UPSTREAM_PROJECT = """name: Test Upstream
maintainer: bob
status: building
created: 2026-01-20
license: MIT
type: skill
upstream: org/repo
fork: bob/repo
contrib_branch: contrib/v1
source_branch: feature/main
paths:
  - src/
  - hooks/
tests: pytest

contributors:
  bob:
    zone: maintainer
    since: 2026-01-20
  alice:
    zone: trusted
    since: 2026-01-25
"""

CONTRIBUTORS = """contributors:
  alice:
    zone: maintainer
    since: 2026-01-15
    timezone: PST
    tags: [infra, tooling]
    availability: open
  bob:
    zone: trusted
    since: 2026-01-20
    promoted_by: alice
    timezone: CET
    tags: [security]
    availability: limited
  charlie:
    zone: untrusted
    since: 2026-01-25
"""

TOOL_JOURNAL = """# test-tool — Journey Log

**Maintainer:** @alice

---

## 2026-01-20 — Feature Complete

**Author:** @alice (agent: TestBot)
**Phase:** Build
**Status:** All features implemented
**Issues:** #10, #12

### What Happened
- Implemented core parsing
- Added test coverage

### What Emerged
- The YAML library handles edge cases well

---

## 2026-01-15 — Project Started

**Author:** @alice (agent: TestBot)
**Phase:** Specify
**Status:** Project registered
**Issues:** #5

### What Happened
- Created repo and registered on blackboard

---
"""

REGISTRY = """# Community Registry

## Active Projects

| Project | Maintainer | Status | Source | Contributors |
|---------|-----------|--------|--------|-------------|
| test-tool | @alice | shipped | [PROJECT.yaml](projects/test-tool/PROJECT.yaml) | @alice |
| test-upstream | @bob | building | [PROJECT.yaml](projects/test-upstream/PROJECT.yaml) | @bob, @alice |

## Agent Registry (Daemon Entries)

| Agent | Operator | Platform | Skills | Availability | Current Work |
|-------|----------|----------|--------|-------------|-------------|
| TestBot | @alice | PAI + Claude | TypeScript, testing | open | test-tool |
| BuildBot | @bob | PAI + Maestro | Security | busy | test-upstream |
"""


def write(path: Path, text: str) -> Path:
    """Write ``text`` to ``path``, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def blackboard(tmp_path):
    """A consistent blackboard with two projects and one manifest-less directory."""
    root = tmp_path / "blackboard"
    write(root / "CONTRIBUTING.md", "# Contributing\n")
    write(root / "CONTRIBUTORS.yaml", CONTRIBUTORS)
    write(root / "REGISTRY.md", REGISTRY)
    write(root / "projects" / "test-tool" / "PROJECT.yaml", TOOL_PROJECT)
    write(root / "projects" / "test-tool" / "JOURNAL.md", TOOL_JOURNAL)
    write(root / "projects" / "test-upstream" / "PROJECT.yaml", UPSTREAM_PROJECT)
    (root / "projects" / "no-yaml").mkdir(parents=True)
    return root


@pytest.fixture
def write_file():
    """The ``write`` helper, for tests that build their own artifacts."""
    return write


def replace_line(path: Path, prefix: str, new: str | None) -> Path:
    """Replace the first line starting with ``prefix``; ``None`` deletes it."""
    lines = path.read_text(encoding="utf-8").splitlines(keepends=True)
    for index, line in enumerate(lines):
        if line.startswith(prefix):
            if new is None:
                del lines[index]
            else:
                lines[index] = new + "\n"
            break
    else:
        raise AssertionError(f"No line starting with {prefix!r} in {path}")
    path.write_text("".join(lines), encoding="utf-8")
    return path


@pytest.fixture
def edit_line():
    """The ``replace_line`` helper."""
    return replace_line
