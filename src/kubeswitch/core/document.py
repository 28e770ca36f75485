"""In-memory kubeconfig document.

Only the fields the switcher reads or writes are modelled: the contexts
(cluster, user, namespace) and the current-context pointer. Everything else
in the file is kept verbatim in ``raw`` so saving never loses data.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import InvariantViolation


@dataclass
class Entry:
    """A named kubeconfig context.

    Attributes:
        cluster: Cluster reference, never interpreted
        credential: User (auth info) reference, never interpreted
        sub_selection: Default namespace of the context ("" when unset)
    """

    cluster: str
    credential: str
    sub_selection: str = ""


@dataclass
class ConfigDocument:
    entries: dict[str, Entry]
    current_entry: str = ""
    order: tuple[str, ...] = ()
    raw: dict = field(default_factory=dict)

    def __post_init__(self):
        # Display order is fixed once for the whole session
        if not self.order:
            self.order = tuple(sorted(self.entries))

    def check_invariant(self) -> None:
        if self.entries and self.current_entry not in self.entries:
            raise InvariantViolation(
                f"current context {self.current_entry!r} is not a known context"
            )

    def set_current(self, name: str) -> None:
        self.current_entry = name
        self.check_invariant()

    def set_sub_selection(self, name: str, value: str) -> None:
        try:
            entry = self.entries[name]
        except KeyError:
            raise InvariantViolation(f"unknown context {name!r}") from None
        entry.sub_selection = value
        self.check_invariant()


def context_info(entry: Entry | None) -> str:
    """One-line summary of a context for list rows and the details pane."""
    if entry is None:
        return "No context information available"
    return f"Cluster: {entry.cluster} | User: {entry.credential} | Namespace: {entry.sub_selection}"
