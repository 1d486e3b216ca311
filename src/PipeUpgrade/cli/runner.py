"""Command runner for coordinating CLI execution.

Manages component lifecycle, resource cleanup, logging configuration,
and error handling for command execution. This is the only place where
errors end the process.
"""

from __future__ import annotations

from typing import Callable

import click

from PipeUpgrade.cli.commands import InitCommand, StatusCommand, UpgradeCommand
from PipeUpgrade.config import AppConfig
from PipeUpgrade.services import InitService, UpgradeError, create_upgrade_service
from PipeUpgrade.storage import DatabaseManager, SqliteSettingStore, create_storage
from PipeUpgrade.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management.

    Handles logging configuration, component creation, database context
    management, and error handling for CLI commands.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run_upgrade(self, action: str) -> None:
        """Perform the release upgrade.

        Raises:
            click.Abort: When the upgrade cannot be completed.
        """
        self._run(
            action,
            lambda db, store: UpgradeCommand(create_upgrade_service(db, store)).execute(),
        )

    def run_status(self, action: str) -> None:
        """Report the upgrade plan.

        Raises:
            click.Abort: When the version marker is missing.
        """
        self._run(
            action,
            lambda db, store: StatusCommand(create_upgrade_service(db, store)).execute(),
        )

    def run_init(self, action: str, blog_id: int, version: str | None = None) -> None:
        """Initialize one blog.

        Raises:
            click.Abort: When the blog cannot be initialized.
        """
        self._run(
            action,
            lambda db, store: InitCommand(InitService(db, store), blog_id, version).execute(),
        )

    def _run(
        self,
        action: str,
        body: Callable[[DatabaseManager, SqliteSettingStore], object],
    ) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        try:
            db_manager, setting_store = create_storage(self.config)
            with db_manager:
                body(db_manager, setting_store)
        except UpgradeError as e:
            log.critical("%s", e)
            raise click.Abort from e
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.critical("%s failed: %s", action, e)
            raise click.Abort from e
