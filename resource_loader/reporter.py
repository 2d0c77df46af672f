from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from colorama import Fore, Style, init

from resource_loader.loader import LoaderStatus
from resource_loader.status_view import SectionView

_STATUS_COLORS = {
    LoaderStatus.IDLE: Fore.WHITE,
    LoaderStatus.LOADING: Fore.YELLOW,
    LoaderStatus.SUCCESS: Fore.GREEN,
    LoaderStatus.ERROR: Fore.RED,
}


def section_failed(section: SectionView) -> bool:
    if section.status in (LoaderStatus.ERROR, LoaderStatus.LOADING):
        return True
    # An idle section without a button can never load.
    return section.status is LoaderStatus.IDLE and section.trigger_enabled is None


class Reporter:
    def __init__(self, use_color: bool = True) -> None:
        init(autoreset=True)
        self.use_color = use_color
        self.sections: List[SectionView] = []

    def add_section(self, section: SectionView) -> None:
        self.sections.append(section)

    @property
    def has_failures(self) -> bool:
        return any(section_failed(section) for section in self.sections)

    def render(self, use_color: Optional[bool] = None) -> str:
        if use_color is None:
            use_color = self.use_color

        lines = ["========== PAGE REPORT =========="]

        for section in self.sections:
            marker = f"[{section.status.value.upper()}]"
            if use_color:
                marker = f"{_STATUS_COLORS[section.status]}{marker}{Style.RESET_ALL}"

            header = f"{marker} {section.name}"
            if section.css_class:
                header += f" (.{section.css_class})"
            if section.trigger_enabled is not None:
                header += f", button {'enabled' if section.trigger_enabled else 'disabled'}"
            lines.append(header)

            if section.text:
                lines.append(f"    {section.text}")
            for index, item in enumerate(section.items, start=1):
                lines.append(f"    {index}. {item}")

        failed_count = sum(1 for section in self.sections if section_failed(section))
        lines.append("=================================")
        lines.append(f"Summary: sections={len(self.sections)}, failed={failed_count}")
        return "\n".join(lines)

    def print(self) -> None:
        print(self.render())

    def write(self, path: str | Path) -> None:
        output_path = Path(path)
        output_path.write_text(self.render(use_color=False), encoding="utf-8")
