"""Models for JOURNAL.md entries."""

from enum import Enum

from pydantic import BaseModel, Field


class JournalPhase(str, Enum):
    """Stage of project work recorded per journal entry."""
    SPECIFY = "Specify"
    BUILD = "Build"
    HARDEN = "Harden"
    CONTRIB_PREP = "Contrib Prep"
    REVIEW = "Review"
    RELEASE = "Release"
    EVOLVE = "Evolve"


class JournalEntry(BaseModel):
    """One dated entry of a project journal."""
    date: str
    title: str
    author: str = ""
    phase: str = ""
    status: str = ""
    issues: list[str] = Field(default_factory=list)
    what_happened: str = Field(alias="whatHappened", default="")
    what_emerged: str = Field(alias="whatEmerged", default="")

    model_config = {"populate_by_name": True}

    @property
    def heading(self) -> str:
        return f"{self.date} — {self.title}"


class Journal(BaseModel):
    """Parsed JOURNAL.md: maintainer line plus entries in document order."""
    maintainer: str = ""
    entries: list[JournalEntry] = Field(default_factory=list)

    @property
    def latest(self) -> JournalEntry | None:
        """First entry in the document, which is the most recent by convention."""
        return self.entries[0] if self.entries else None
