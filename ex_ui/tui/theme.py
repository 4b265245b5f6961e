from __future__ import annotations

from rich.markup import escape

RICH_ACCENT = "blue"
RICH_ACCENT_BOLD = f"bold {RICH_ACCENT}"
RICH_BORDER_STYLE = RICH_ACCENT

PRESENTER_TEMPLATES: dict[str, str] = {
    "warning": "[yellow]⚠ {message}[/yellow]",
    "error": "[red]✖ {message}[/red]",
    "success": "[green]✔ {message}[/green]",
}

AVAILABILITY_MARKS: dict[tuple[bool, bool], str] = {
    (True, True): "[green]●[/green]",
    (True, False): "○",
    (False, False): "[dim]✕[/dim]",
}


def option_text(value: str, available: bool, checked: bool) -> str:
    mark = AVAILABILITY_MARKS.get((available, checked), "○")
    value = escape(value)
    label = value if available else f"[dim]{value}[/dim]"
    return f"{mark} {label}"
