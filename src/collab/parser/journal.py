"""JOURNAL.md extractor.

The journal is human-authored Markdown, so extraction is a line-oriented
state machine rather than a set of whole-document regular expressions:

* ``SEEKING_HEADING`` - before the first entry, or inside a block whose
  heading could not be parsed. Only the preamble ``**Maintainer:**`` line is
  read here.
* ``IN_METADATA`` - inside an entry, outside any subsection. Bold-labeled
  fields are collected.
* ``IN_SECTION`` - inside a level-3 subsection. Lines are captured when the
  subsection is one of the named ones; fields are still collected.

Entry boundaries are level-2 headings starting with a four digit year. Any
other level-2 heading is ordinary text.
"""

import logging
import re
from enum import Enum
from pathlib import Path

from collab.models.journal import Journal, JournalEntry
from collab.parser.errors import ArtifactParseError, MissingArtifactError
from collab.parser.policy import FailurePolicy, apply_policy

logger = logging.getLogger(__name__)

JOURNAL_FILE = "JOURNAL.md"

ENTRY_BOUNDARY_RE = re.compile(r"^## \d{4}")
ENTRY_HEADING_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})\s*[—–-]\s*(.+)$")
FIELD_RE = re.compile(r"^\*\*(?P<label>[^*]+):\*\*(?P<value>.*)$")
ISSUE_RE = re.compile(r"#(\d+)")
SUBSECTION_RE = re.compile(r"^###(?!#)\s*(?P<name>.*?)\s*$")
HORIZONTAL_RULE_RE = re.compile(r"^(-{3,}|\*{3,}|_{3,})\s*$")

MAINTAINER_LABEL = "Maintainer"
ENTRY_FIELDS = ("Author", "Phase", "Status", "Issues")
SECTION_NAMES = ("What Happened", "What Emerged")


class ParserState(str, Enum):
    """Position of the journal state machine."""
    SEEKING_HEADING = "seeking_heading"
    IN_METADATA = "in_metadata"
    IN_SECTION = "in_section"


def parse_field(line: str) -> tuple[str, str] | None:
    """Split a ``**Label:** value`` line into its label and trimmed value."""
    match = FIELD_RE.match(line)
    if not match:
        return None
    return match.group("label").strip(), match.group("value").strip()


def parse_issue_refs(text: str) -> list[str]:
    """All ``#<digits>`` references in ``text``, left to right."""
    return [f"#{number}" for number in ISSUE_RE.findall(text)]


class _EntryBuilder:
    """Accumulates one entry while its block is being read."""

    def __init__(self, date: str, title: str):
        self.date = date
        self.title = title
        self.fields: dict[str, str] = {}
        self.sections: dict[str, list[str]] = {}
        self.open_section: str | None = None

    def read_field(self, line: str) -> None:
        parsed = parse_field(line)
        if parsed is None:
            return
        label, value = parsed
        if label in ENTRY_FIELDS and value and label not in self.fields:
            self.fields[label] = value

    def start_section(self, name: str) -> None:
        # First occurrence of a named subsection wins
        if name in SECTION_NAMES and name not in self.sections:
            self.sections[name] = []
            self.open_section = name
        else:
            self.open_section = None

    def close_section(self) -> None:
        self.open_section = None

    def capture(self, line: str) -> None:
        if self.open_section is not None:
            self.sections[self.open_section].append(line)

    def section_text(self, name: str) -> str:
        return "\n".join(self.sections.get(name, [])).strip()

    def build(self) -> JournalEntry:
        return JournalEntry(
            date=self.date,
            title=self.title,
            author=self.fields.get("Author", ""),
            phase=self.fields.get("Phase", ""),
            status=self.fields.get("Status", ""),
            issues=parse_issue_refs(self.fields.get("Issues", "")),
            what_happened=self.section_text("What Happened"),
            what_emerged=self.section_text("What Emerged"),
        )


class JournalParser:
    """Parser for JOURNAL.md files."""

    # A journal is optional; a project without one simply has no entries
    missing_policy = FailurePolicy.EMPTY
    # A block whose heading is not ``YYYY-MM-DD - title`` is not an entry
    entry_policy = FailurePolicy.SKIP

    @classmethod
    def parse(cls, text: str) -> Journal:
        """Parse journal Markdown into a ``Journal`` in document order."""
        state = ParserState.SEEKING_HEADING
        in_preamble = True
        maintainer = ""
        builder: _EntryBuilder | None = None
        entries: list[JournalEntry] = []

        for line in text.splitlines():
            if ENTRY_BOUNDARY_RE.match(line):
                if builder is not None:
                    entries.append(builder.build())
                in_preamble = False
                builder = cls._start_entry(line)
                state = ParserState.IN_METADATA if builder else ParserState.SEEKING_HEADING
                continue

            if state is ParserState.SEEKING_HEADING:
                if in_preamble and not maintainer:
                    parsed = parse_field(line)
                    if parsed and parsed[0] == MAINTAINER_LABEL:
                        maintainer = parsed[1]
                continue

            builder.read_field(line)

            if line.startswith("###"):
                builder.close_section()
                subsection = SUBSECTION_RE.match(line)
                if subsection:
                    builder.start_section(subsection.group("name"))
                state = ParserState.IN_SECTION
            elif HORIZONTAL_RULE_RE.match(line):
                builder.close_section()
                state = ParserState.IN_METADATA
            elif state is ParserState.IN_SECTION:
                builder.capture(line)

        if builder is not None:
            entries.append(builder.build())

        return Journal(maintainer=maintainer, entries=entries)

    @classmethod
    def _start_entry(cls, boundary_line: str) -> _EntryBuilder | None:
        heading = boundary_line[len("## "):].strip()
        match = ENTRY_HEADING_RE.match(heading)
        if not match:
            error = ArtifactParseError(f"Unparseable journal heading: {heading!r}")
            apply_policy(cls.entry_policy, error, logger, "journal block")
            return None
        date, title = match.groups()
        return _EntryBuilder(date, title.strip())

    @classmethod
    def load_journal(cls, project_dir: Path) -> Journal:
        """Parse JOURNAL.md from a project directory.

        A missing journal yields ``Journal(maintainer="", entries=[])``.

        Raises:
            ArtifactParseError: If JOURNAL.md exists but cannot be read
        """
        journal_file = Path(project_dir) / JOURNAL_FILE
        if not journal_file.exists():
            error = MissingArtifactError(f"{JOURNAL_FILE} not found in {project_dir}", journal_file)
            apply_policy(cls.missing_policy, error, logger, "journal")
            return Journal()

        try:
            text = journal_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ArtifactParseError(f"Failed to read {journal_file}: {e}", journal_file) from e

        return cls.parse(text)


parse_journal = JournalParser.parse
load_journal = JournalParser.load_journal
