"""`bo pages`: print the page-number window for a position."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from bo_table.pagination import PaginationDescriptor, build_pagination_strip

from bo_ui.tui.table_layout import pagination_text


def register_pages_command(app: typer.Typer, console: Console) -> None:
    """Register `bo pages` on the root app."""

    @app.command("pages")
    def pages(
        current: int = typer.Argument(..., min=1, help="Current page (1-based)."),
        total: int = typer.Argument(..., min=0, help="Total number of pages."),
        max_visible: int = typer.Option(5, "--max-visible", "-m", min=3, help="Page buttons in the window."),
        items: Optional[int] = typer.Option(None, "--items", help="Total items, enables the range label."),
        per_page: Optional[int] = typer.Option(None, "--per-page", min=1, help="Items per page."),
    ) -> None:
        """Show which page buttons a pagination bar renders."""
        strip = build_pagination_strip(
            PaginationDescriptor(
                current_page=current,
                total_pages=total,
                total_items=items,
                items_per_page=per_page,
                on_page_change=lambda _page: None,
            ),
            max_visible=max_visible,
        )
        console.print(pagination_text(strip), markup=False)
