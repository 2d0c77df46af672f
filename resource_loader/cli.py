from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from resource_loader.config_loader import (
    ConfigValidationError,
    PageConfig,
    default_page_config,
    load_page_config,
)
from resource_loader.loader import LoaderStatus
from resource_loader.page import ResourcePage
from resource_loader.reporter import Reporter

logger = logging.getLogger(__name__)


async def _load_page(config: PageConfig, load_users: bool) -> ResourcePage:
    page = ResourcePage(config)
    await page.posts.wait()

    if load_users and page.users.has_trigger:
        page.load_users()
    await page.wait()
    return page


def run(
    config_path: str | None = None,
    *,
    load_users: bool = False,
    report_file: str | None = None,
    use_color: bool = True,
) -> int:
    try:
        config = load_page_config(config_path) if config_path else default_page_config()
    except ConfigValidationError as exc:
        print(f"Config validation failed: {exc}")
        return 2

    page = asyncio.run(_load_page(config, load_users))

    reporter = Reporter(use_color=use_color)
    for section in page.snapshot().values():
        reporter.add_section(section)

    reporter.print()
    if report_file:
        reporter.write(report_file)
        logger.info("Report written to %s", report_file)

    expected = [page.posts, page.users] if load_users else [page.posts]
    unloaded = [loader.name for loader in expected if loader.status is not LoaderStatus.SUCCESS]
    if unloaded:
        logger.warning("Sections that did not load: %s", ", ".join(unloaded))

    return 1 if reporter.has_failures or unloaded else 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Load posts and users and report their status")
    parser.add_argument("--config", help="Path to YAML page config (defaults to jsonplaceholder)")
    parser.add_argument("--load-users", action="store_true", help="Press the 'Load users' button")
    parser.add_argument("--report-file", help="Optional output path for plain-text report")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    exit_code = run(
        args.config,
        load_users=args.load_users,
        report_file=args.report_file,
        use_color=not args.no_color,
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
