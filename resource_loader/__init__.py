from resource_loader.config_loader import (
    ConfigValidationError,
    PageConfig,
    ResourceSpec,
    default_page_config,
    load_page_config,
)
from resource_loader.loader import LoaderStatus, ResourceLoader, TriggerNotSupportedError
from resource_loader.page import ResourcePage
from resource_loader.reporter import Reporter
from resource_loader.request_engine import PerformRequest, RequestEngine, RequestResult
from resource_loader.status_view import SectionView, StatusSummary, project_status, render_section

__all__ = [
    "ConfigValidationError",
    "LoaderStatus",
    "PageConfig",
    "PerformRequest",
    "Reporter",
    "RequestEngine",
    "RequestResult",
    "ResourceLoader",
    "ResourcePage",
    "ResourceSpec",
    "SectionView",
    "StatusSummary",
    "TriggerNotSupportedError",
    "default_page_config",
    "load_page_config",
    "project_status",
    "render_section",
]
