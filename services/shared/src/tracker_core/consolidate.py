"""Post-hoc merging of era aliases."""

import logging
from collections.abc import Sequence

from pydantic import BaseModel

from tracker_core.models import Era

logger = logging.getLogger(__name__)


class EraAlias(BaseModel):
    """Any era whose name contains ``match`` (case-insensitive) merges into ``canonical``."""

    match: str
    canonical: str

    def applies_to(self, name: str) -> bool:
        return self.match.lower() in name.lower()


DEFAULT_ERA_ALIASES: tuple[EraAlias, ...] = (EraAlias(match="donda 2", canonical="Donda 2"),)


def _merge_text(existing: str | None, addition: str | None) -> str | None:
    if not addition:
        return existing
    if not existing:
        return addition
    if addition in existing:
        return existing
    return f"{existing}\n{addition}"


def _absorb(target: Era, source: Era) -> None:
    for track in source.tracks:
        track.era = target.name
        target.tracks.append(track)
    target.description = _merge_text(target.description, source.description)
    target.notes = _merge_text(target.notes, source.notes)
    for alternate in (source.name, *source.alternate_names):
        if alternate != target.name and alternate not in target.alternate_names:
            target.alternate_names.append(alternate)
    target.metadata = target.metadata.merged_with(source.metadata)
    if not target.picture and source.picture:
        target.picture = source.picture


def consolidate_eras(eras: Sequence[Era], aliases: Sequence[EraAlias] = DEFAULT_ERA_ALIASES) -> list[Era]:
    """Merge aliased eras into their canonical era, keeping first-seen order.

    Eras matching no alias pass through untouched; there is no fuzzy merging.
    """
    merged: dict[str, Era] = {}
    for era in eras:
        alias = next((a for a in aliases if a.applies_to(era.name)), None)
        if alias is None:
            if era.name in merged:
                _absorb(merged[era.name], era)
            else:
                merged[era.name] = era
            continue

        target = merged.get(alias.canonical)
        if target is None:
            target = Era(name=alias.canonical, picture=era.picture)
            merged[alias.canonical] = target
        logger.debug("Merging era %r into %r", era.name, alias.canonical)
        _absorb(target, era)

    return list(merged.values())
