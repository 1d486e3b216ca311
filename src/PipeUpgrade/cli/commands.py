"""Command implementations for the pipe-upgrade CLI.

Encapsulates business logic for each command, separated from CLI parameter
handling and resource management.
"""

from __future__ import annotations

from dataclasses import dataclass

import click

from PipeUpgrade.core.models import PLATFORM_BLOG_ID
from PipeUpgrade.services import InitService, UpgradePlan, UpgradeService
from PipeUpgrade.utils.log import log


@dataclass(slots=True)
class UpgradeCommand:
    """Runs the release upgrade step once."""

    upgrade_service: UpgradeService

    def execute(self) -> None:
        self.upgrade_service.perform()


@dataclass(slots=True)
class StatusCommand:
    """Reports stored and running versions without writing anything."""

    upgrade_service: UpgradeService

    def execute(self) -> UpgradePlan:
        """Log and echo the upgrade plan.

        Returns:
            The computed plan.
        """
        service = self.upgrade_service
        plan = service.plan()
        current = service.current_version() if plan is not UpgradePlan.NOT_INITIALIZED else "-"
        log.info("stored version [%s], running version [%s]: %s", current, service.to_version, plan.value)
        click.echo(f"stored:  {current}")
        click.echo(f"running: {service.to_version}")
        click.echo(f"plan:    {plan.value}")
        return plan


@dataclass(slots=True)
class InitCommand:
    """Seeds one blog with its version marker and default settings."""

    init_service: InitService
    blog_id: int = PLATFORM_BLOG_ID
    version: str | None = None

    def execute(self) -> None:
        if self.version is None:
            self.init_service.init_blog(self.blog_id)
        else:
            self.init_service.init_blog(self.blog_id, version=self.version)
