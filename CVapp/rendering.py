"""
Display tree for a CV record.

``render_cv`` is the single rendering rule set for CV records.  The
extracted CV and the enhanced CV go through the same function and the
same template (``cv/_cv_record.html``); only the record differs.

The function is pure: sequences keep their order, nothing is mutated,
and empty sequences become empty tuples.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple
from urllib.parse import urlsplit

from .schemas import CVRecord, serialize_cv

SAFE_LINK_SCHEMES = ("http", "https")
EXTERNAL_LINK_REL = "noopener noreferrer"


def safe_external_url(url: str) -> Optional[str]:
    """Return ``url`` if it may be used as a link target, else ``None``.

    Only absolute ``http``/``https`` URLs with a host are accepted, which
    rules out ``javascript:`` and ``data:`` targets.
    """
    candidate = (url or "").strip()
    if not candidate:
        return None
    try:
        parts = urlsplit(candidate)
    except ValueError:
        return None
    if parts.scheme.lower() not in SAFE_LINK_SCHEMES or not parts.netloc:
        return None
    return candidate


@dataclass(frozen=True)
class LinkNode:
    text: str
    href: Optional[str]
    target: str = "_blank"
    rel: str = EXTERNAL_LINK_REL


@dataclass(frozen=True)
class EntryNode:
    """One experience or education entry as ``(label, value)`` pairs."""

    fields: Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class CVDisplay:
    name: str
    email: str
    phone: str
    linkedin: LinkNode
    skills: Tuple[str, ...] = ()
    technologies: Tuple[str, ...] = ()
    experience: Tuple[EntryNode, ...] = ()
    education: Tuple[EntryNode, ...] = ()
    serialized: str = field(default="", repr=False)


def render_cv(record: CVRecord) -> CVDisplay:
    """Map ``record`` to its display tree."""
    contact = record.contact
    return CVDisplay(
        name=record.name,
        email=contact.email,
        phone=contact.phone,
        linkedin=LinkNode(text=contact.linkedin, href=safe_external_url(contact.linkedin)),
        skills=tuple(record.skills),
        technologies=tuple(record.technologies),
        experience=tuple(
            EntryNode(fields=(("Title", exp.title), ("Company", exp.company), ("Years", exp.years)))
            for exp in record.experience
        ),
        education=tuple(
            EntryNode(fields=(("Degree", edu.degree), ("School", edu.school), ("Year", edu.year)))
            for edu in record.education
        ),
        serialized=serialize_cv(record),
    )


def cv_to_text(display: CVDisplay) -> str:
    """Lay out a display tree as plain text with markdown-like headings."""
    lines = [f"# {display.name}", "", "## Contact Information"]
    lines.append(f"- Email: {display.email}")
    lines.append(f"- LinkedIn: {display.linkedin.text}")
    lines.append(f"- Phone: {display.phone}")
    for title, items in (("Skills", display.skills), ("Technologies", display.technologies)):
        lines.extend(["", f"## {title}"])
        lines.extend(f"- {item}" for item in items)
    for title, entries in (("Experience", display.experience), ("Education", display.education)):
        lines.extend(["", f"## {title}"])
        for entry in entries:
            lines.append(f"**{entry.fields[0][1]}**")
            lines.extend(f"- {label}: {value}" for label, value in entry.fields[1:])
    return "\n".join(lines) + "\n"
