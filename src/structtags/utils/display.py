from typing import Iterable, Mapping, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


class TagsDisplay:
    console = Console()

    @classmethod
    def build_tags_table(
        cls,
        tags: Mapping[str, Mapping[str, str]],
        tag_names: Optional[Iterable[str]] = None,
        title: str = "Field Tags",
    ) -> Table:
        """Build a table with one row per field and one column per tag name."""
        if tag_names is None:
            seen = {}
            for tag_map in tags.values():
                for name in tag_map:
                    seen.setdefault(name, None)
            tag_names = list(seen)
        else:
            tag_names = list(tag_names)

        table = Table(
            title=title,
            show_header=True,
            header_style="bold magenta",
            show_lines=True,
        )
        table.add_column("Field", style="cyan", no_wrap=True)
        for name in tag_names:
            table.add_column(name, style="green")

        for field, tag_map in tags.items():
            row = [field]
            for name in tag_names:
                if name in tag_map:
                    row.append(repr(tag_map[name]))
                else:
                    row.append("[dim]-[/]")
            table.add_row(*row)

        return table

    @classmethod
    def display_tags(
        cls,
        tags: Mapping[str, Mapping[str, str]],
        tag_names: Optional[Iterable[str]] = None,
    ):
        cls.console.print(cls.build_tags_table(tags, tag_names))

    @classmethod
    def build_info_panel(cls, field: str, tag: str, info: Mapping[str, str]) -> Panel:
        content = Text()
        if not info:
            content.append("(empty)", style="dim")
        for idx, (key, value) in enumerate(info.items()):
            if idx:
                content.append("\n")
            content.append(f"{key}: ", style="bold white")
            content.append(value, style="yellow")

        return Panel(
            content,
            title=f"[bold blue]{field}.{tag}",
            border_style="blue",
        )

    @classmethod
    def display_info(cls, field: str, tag: str, info: Mapping[str, str]):
        cls.console.print(cls.build_info_panel(field, tag, info))
