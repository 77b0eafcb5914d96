"""State shared by every CLI command."""

from __future__ import annotations

from dataclasses import dataclass

import click

from storefront.domain.model.caller import CallerContext
from storefront.infrastructure.bootstrap import Services


@dataclass
class CliState:
    services: Services
    user_id: str | None = None

    def caller(self) -> CallerContext:
        """The signed-in caller; commands that need one fail without it."""
        if not self.user_id:
            raise click.UsageError(
                "No caller given. Pass --user or set STOREFRONT_USER_ID."
            )
        try:
            return CallerContext(self.user_id)
        except ValueError as exc:
            raise click.UsageError(f"Invalid caller {self.user_id!r}: {exc}") from exc


pass_state = click.make_pass_decorator(CliState)
