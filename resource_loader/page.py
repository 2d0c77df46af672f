from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

from resource_loader.config_loader import PageConfig, ResourceSpec, default_page_config
from resource_loader.loader import ResourceLoader
from resource_loader.request_engine import PerformRequest, RequestEngine
from resource_loader.status_view import SectionView, render_section

logger = logging.getLogger(__name__)


class ResourcePage:
    """Posts and users sections wired to their own loaders.

    Must be created inside a running event loop: the posts loader starts as
    part of construction.
    """

    def __init__(
        self,
        config: Optional[PageConfig] = None,
        perform_request: Optional[PerformRequest] = None,
    ) -> None:
        self.config = config or default_page_config()
        if perform_request is None:
            engine = RequestEngine(self.config.timeout_seconds, headers=self.config.headers)
            perform_request = engine.fetch

        self.posts = _build_loader(self.config.posts, perform_request)
        self.users = _build_loader(self.config.users, perform_request)
        logger.info("Page ready (posts=%s, users=%s)", self.posts.status.value, self.users.status.value)

    def load_users(self) -> Optional[asyncio.Task]:
        return self.users.trigger()

    async def wait(self) -> None:
        await asyncio.gather(self.posts.wait(), self.users.wait())

    def posts_section(self) -> SectionView:
        return render_section(self.posts, self.config.posts.display_field)

    def users_section(self) -> SectionView:
        return render_section(self.users, self.config.users.display_field)

    def snapshot(self) -> Dict[str, SectionView]:
        return {"posts": self.posts_section(), "users": self.users_section()}


def _build_loader(spec: ResourceSpec, perform_request: PerformRequest) -> ResourceLoader:
    return ResourceLoader(
        spec.name,
        spec.url,
        perform_request,
        result_cap=spec.result_cap,
        auto_start=spec.auto_start,
    )
