from __future__ import annotations

from enum import Enum
from typing import Dict, Iterator, Mapping, Sequence, Tuple

from tailor_store.core.domain.model.errors import InvalidConstraint
from tailor_store.core.domain.model.stock import Category

NOT_ORDERING = "N/A"

# role label -> size, e.g. {"Father": "XL", "Son 1": "4-5", "Son 2": "N/A"}
FamilySelection = Mapping[str, str]


class MemberKind(str, Enum):
    FATHER = "Father"
    MOTHER = "Mother"
    SON = "Son"
    DAUGHTER = "Daughter"

    @property
    def category(self) -> Category:
        return _CATEGORY_BY_KIND[self]


_CATEGORY_BY_KIND: Mapping[MemberKind, Category] = {
    MemberKind.FATHER: Category.MEN,
    MemberKind.MOTHER: Category.WOMEN,
    MemberKind.SON: Category.BOYS,
    MemberKind.DAUGHTER: Category.GIRLS,
}

_PREFIXES: Tuple[Tuple[str, MemberKind], ...] = (
    ("father", MemberKind.FATHER),
    ("mother", MemberKind.MOTHER),
    ("daughter", MemberKind.DAUGHTER),
    ("son", MemberKind.SON),
)


def member_kind(role: str) -> MemberKind:
    """Canonicalize a free-form role label ("Father", "son 2", ...)."""
    label = role.strip().lower()
    for prefix, kind in _PREFIXES:
        if label.startswith(prefix):
            return kind
    raise InvalidConstraint("unknown family member", value=role)


def category_for_role(role: str) -> Category:
    return member_kind(role).category


def is_ordering(size: str | None) -> bool:
    return size is not None and size.strip() != "" and size != NOT_ORDERING


def ordered_members(selection: FamilySelection) -> Iterator[Tuple[str, str]]:
    """(role, size) pairs that are actually being ordered, in selection order."""
    for role, size in selection.items():
        if is_ordering(size):
            yield role, size


def has_any_member(selection: FamilySelection) -> bool:
    return any(True for _ in ordered_members(selection))


def build_selection(
    father: str = NOT_ORDERING,
    mother: str = NOT_ORDERING,
    sons: Sequence[str] = (),
    daughters: Sequence[str] = (),
) -> Dict[str, str]:
    """Flatten picker state into the role-labelled map stored on an order.

    Members left at N/A are dropped. A lone son is "Son", several are
    "Son 1".."Son n"; daughters likewise.
    """
    out: Dict[str, str] = {}
    if is_ordering(father):
        out[MemberKind.FATHER.value] = father
    if is_ordering(mother):
        out[MemberKind.MOTHER.value] = mother
    for kind, sizes in ((MemberKind.SON, sons), (MemberKind.DAUGHTER, daughters)):
        active = [s for s in sizes if is_ordering(s)]
        for i, size in enumerate(active, start=1):
            label = kind.value if len(active) == 1 else f"{kind.value} {i}"
            out[label] = size
    return out
