"""Dependency injection container for placement runs."""

from __future__ import annotations

from typing import Any

from dependency_injector import containers, providers

from .pipeline import (
    CompanyLoader,
    OutputWriter,
    PlacementPipeline,
    PolicyLoader,
    StudentLoader,
)
from .schemas.config import AppConfig
from .sources import HTTPPolicyFetcher


class PlacementContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration(default=AppConfig().to_settings())

    policy_fetcher = providers.Singleton(
        HTTPPolicyFetcher,
        timeout=config.source.timeout,
        headers=config.source.headers,
    )

    student_loader = providers.Singleton(StudentLoader)
    company_loader = providers.Singleton(CompanyLoader)
    policy_loader = providers.Singleton(PolicyLoader)

    writer = providers.Singleton(
        OutputWriter,
        indent=config.report.indent,
    )

    pipeline = providers.Factory(
        PlacementPipeline,
        fetcher=policy_fetcher,
        student_loader=student_loader,
        company_loader=company_loader,
        policy_loader=policy_loader,
        writer=writer,
        default_policies=config.policies,
    )


def create_container(*, settings: dict[str, Any] | None = None) -> PlacementContainer:
    """Instantiate container with optional overrides.

    ``settings`` follows the ``AppConfig`` layout and is validated first.
    """

    container = PlacementContainer()
    app_config = AppConfig.model_validate(settings or {})
    container.config.from_dict(app_config.to_settings())
    return container
