from __future__ import annotations

from typing import FrozenSet, Mapping

from tailor_store.core.domain.model.family import (
    FamilySelection,
    MemberKind,
    member_kind,
    ordered_members,
)
from tailor_store.core.domain.model.order import ComboType
from tailor_store.core.domain.model.stock import Category

_MEMBERS: Mapping[ComboType, FrozenSet[MemberKind]] = {
    ComboType.FULL_FAMILY: frozenset(MemberKind),
    ComboType.FATHER_SON: frozenset({MemberKind.FATHER, MemberKind.SON}),
    ComboType.MOTHER_DAUGHTER: frozenset({MemberKind.MOTHER, MemberKind.DAUGHTER}),
    ComboType.COUPLE: frozenset({MemberKind.FATHER, MemberKind.MOTHER}),
    ComboType.CUSTOM: frozenset(),
}


def present_members(selection: FamilySelection) -> FrozenSet[MemberKind]:
    return frozenset(member_kind(role) for role, _ in ordered_members(selection))


def classify(selection: FamilySelection) -> ComboType:
    """Label a selection by which kinds of family member have a size.

    Only the four exact patterns get a named combo; anything else,
    including an empty selection, is Custom.
    """
    present = present_members(selection)
    for combo in (
        ComboType.FULL_FAMILY,
        ComboType.FATHER_SON,
        ComboType.MOTHER_DAUGHTER,
        ComboType.COUPLE,
    ):
        if present == _MEMBERS[combo]:
            return combo
    return ComboType.CUSTOM


def members_for(combo: ComboType) -> FrozenSet[MemberKind]:
    return _MEMBERS[combo]


def categories_for(combo: ComboType) -> FrozenSet[Category]:
    return frozenset(m.category for m in _MEMBERS[combo])
