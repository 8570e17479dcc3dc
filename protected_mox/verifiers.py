"""Verification helpers for :class:`~protected_mox.mock.Mock`."""

from __future__ import annotations

import typing as t
from textwrap import indent

from .errors import VerificationError

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .descriptors import CallDescriptor, CallRecord
    from .setups import SequenceSetup, Setup
    from .times import Times


def _numbered(entries: t.Sequence[str], *, start: int = 1) -> str:
    if not entries:
        return "(none)"
    lines: list[str] = []
    for index, entry in enumerate(entries, start=start):
        entry_lines = entry.splitlines() or [""]
        lines.append(f"{index}. {entry_lines[0]}")
        lines.extend(f"   {extra}" for extra in entry_lines[1:])
    return "\n".join(lines)


def _format_sections(title: str, sections: list[tuple[str, str]]) -> str:
    parts = [title]
    for label, body in sections:
        if not body:
            continue
        parts.append("")
        parts.append(f"{label}:")
        parts.append(indent(body, "  "))
    return "\n".join(parts)


def _describe_records(records: t.Iterable[CallRecord]) -> str:
    return _numbered([str(record) for record in records])


class CountVerifier:
    """Check that a descriptor matched the journal an expected number of times."""

    def verify(
        self,
        descriptor: CallDescriptor,
        times: Times,
        journal: t.Iterable[CallRecord],
    ) -> int:
        """Return the match count, raising if it falls outside *times*."""
        records = list(journal)
        actual = sum(1 for record in records if descriptor.matches(record))
        if times.verify(actual):
            return actual
        msg = _format_sections(
            "Unexpected invocation count.",
            [
                ("Expected", f"{descriptor}\nexpected calls: {times}"),
                ("Observed calls", str(actual)),
                ("Performed invocations", _describe_records(records)),
            ],
        )
        raise VerificationError(msg)


class SetupVerifier:
    """Check that configured setups were exercised."""

    def verify(
        self,
        setups: t.Iterable[Setup | SequenceSetup],
        journal: t.Iterable[CallRecord],
        *,
        only_verifiable: bool = False,
    ) -> None:
        """Raise when a (verifiable) setup never matched a call."""
        unmatched = [
            str(setup.descriptor)
            for setup in setups
            if setup.match_count == 0 and (setup.is_verifiable or not only_verifiable)
        ]
        if not unmatched:
            return
        msg = _format_sections(
            "Unfulfilled setups.",
            [
                ("Never invoked", _numbered(unmatched)),
                ("Performed invocations", _describe_records(journal)),
            ],
        )
        raise VerificationError(msg)


__all__ = ["CountVerifier", "SetupVerifier"]
