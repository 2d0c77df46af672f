from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from resource_loader.loader import LoaderStatus, ResourceLoader

LOADING_CLASS = "loading"
ERROR_CLASS = "error"


@dataclass(frozen=True)
class StatusSummary:
    text: str
    css_class: Optional[str]
    # None when the section has no trigger control at all.
    trigger_enabled: Optional[bool]


@dataclass(frozen=True)
class SectionView:
    name: str
    status: LoaderStatus
    text: str
    css_class: Optional[str]
    trigger_enabled: Optional[bool]
    items: Tuple[str, ...]

    def has_class(self, css_class: str) -> bool:
        return self.css_class == css_class


def project_status(
    resource_name: str,
    status: LoaderStatus,
    error_message: Optional[str],
    has_trigger: bool,
) -> StatusSummary:
    if status is LoaderStatus.LOADING:
        return StatusSummary(
            text=f"Loading {resource_name}...",
            css_class=LOADING_CLASS,
            trigger_enabled=False if has_trigger else None,
        )

    enabled = True if has_trigger else None
    if status is LoaderStatus.ERROR:
        return StatusSummary(text=error_message or "", css_class=ERROR_CLASS, trigger_enabled=enabled)

    # IDLE and SUCCESS both show an empty, unstyled status line.
    return StatusSummary(text="", css_class=None, trigger_enabled=enabled)


def render_item(record: Any, display_field: str) -> str:
    if isinstance(record, dict):
        value = record.get(display_field)
        if value is not None:
            return str(value)
    return str(record)


def render_section(loader: ResourceLoader, display_field: str) -> SectionView:
    summary = project_status(loader.name, loader.status, loader.error_message, loader.has_trigger)
    items: Tuple[str, ...] = ()
    if loader.status is LoaderStatus.SUCCESS:
        items = tuple(render_item(record, display_field) for record in loader.records)

    return SectionView(
        name=loader.name,
        status=loader.status,
        text=summary.text,
        css_class=summary.css_class,
        trigger_enabled=summary.trigger_enabled,
        items=items,
    )
