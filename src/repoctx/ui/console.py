"""Rich-powered console output for repoctx."""

from __future__ import annotations

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from repoctx import __version__
from repoctx.analysis.models import HealthReport, Severity
from repoctx.context.models import Context
from repoctx.project import ProjectContext

_SEVERITY_STYLE = {Severity.HIGH: "red", Severity.MEDIUM: "yellow", Severity.LOW: "dim"}


class Console:
    """Terminal output for repoctx using Rich."""

    def __init__(self) -> None:
        self.console = RichConsole()

    def banner(self) -> None:
        self.console.print(
            Panel(
                f"[bold cyan]repoctx[/bold cyan] [dim]v{__version__}[/dim]\n"
                "[dim]Relevance-ranked, budgeted repository context[/dim]",
                border_style="cyan",
                padding=(1, 2),
            )
        )

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {message}")

    def info(self, message: str) -> None:
        self.console.print(f"[blue]i[/blue] {message}")

    def loading_progress(self) -> Progress:
        """Create a progress bar for loading repository files."""
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TimeElapsedColumn(),
            console=self.console,
        )

    def show_stats(self, project: ProjectContext) -> None:
        """Display analysis statistics in a table."""
        meta = project.metadata
        quality = project.analysis.quality
        graph_stats = project.analysis.dependencies.get_stats()

        table = Table(title="Repository Analysis", border_style="cyan")
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right", style="cyan")

        table.add_row("Name", meta.name or "-")
        table.add_row("Language", meta.language or "-")
        table.add_row("Framework", meta.framework or "-")
        table.add_section()
        table.add_row("Files", str(len(project.content.files)))
        table.add_row("Functions", str(quality.total_functions))
        table.add_row("Classes", str(quality.total_classes))
        table.add_row("Modules", str(len(project.structure.modules)))
        table.add_row("Routes", str(len(project.structure.routes)))
        table.add_section()
        table.add_row("Script files in graph", str(graph_stats["files"]))
        table.add_row("Resolved imports", str(graph_stats["resolved_imports"]))
        table.add_row("Circular groups", str(graph_stats["circular_groups"]))
        table.add_section()
        table.add_row("Avg complexity", f"{quality.avg_complexity:.1f}")
        table.add_row("Code smells", str(len(quality.code_smells)))
        table.add_row("Security findings", str(len(project.analysis.security)))

        if project.analysis.patterns:
            table.add_section()
            for p in project.analysis.patterns:
                table.add_row(f"  {p.type}", f"{p.confidence:.2f}")

        self.console.print(table)

    def show_context_summary(self, context: Context) -> None:
        budget_color = "red" if context.over_budget else "green"
        self.console.print()
        self.console.print("[bold]Context[/bold]")
        self.console.print(
            f"  Intent: {context.intent.type.value} ({context.intent.scope.value})"
        )
        self.console.print(
            f"  Tokens: [{budget_color}]{context.estimated_tokens:,}[/{budget_color}]"
            f" / {context.token_budget:,}"
        )
        self.console.print(
            f"  Files: {len(context.relevant_files)}  "
            f"Functions: {len(context.relevant_functions)}  "
            f"Classes: {len(context.relevant_classes)}"
        )
        if context.compression_steps:
            self.console.print(f"  Compression: {', '.join(context.compression_steps)}")
        if context.over_budget:
            self.warning("Context is still over budget after compression")
        self.console.print()

    def show_health(self, report: HealthReport) -> None:
        score = report.score
        color = "green" if score >= 70 else "yellow" if score >= 40 else "red"

        lines = [f"[bold]Score:[/bold] [{color}]{score}/100[/{color}]", ""]
        for title, items in (
            ("Strengths", report.strengths),
            ("Weaknesses", report.weaknesses),
            ("Opportunities", report.opportunities),
            ("Risks", report.risks),
        ):
            if items:
                lines.append(f"[bold]{title}[/bold]")
                lines.extend(f"  {item.area}: {item.description}" for item in items)
        self.console.print(
            Panel("\n".join(lines), title="[bold]Project Health[/bold]", border_style=color)
        )

        if report.recommendations:
            table = Table(title="Recommendations", border_style="cyan")
            table.add_column("Priority")
            table.add_column("Area", style="bold")
            table.add_column("Action")
            table.add_column("Impact", style="dim")
            for rec in report.recommendations:
                style = _SEVERITY_STYLE[rec.priority]
                table.add_row(
                    f"[{style}]{rec.priority.value}[/{style}]", rec.area, rec.action, rec.impact
                )
            self.console.print(table)
