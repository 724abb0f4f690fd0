"""Display functions for carousel commands - pure functions for Rich output."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...constants import JobStatus, SlideStatusValue
from ...jobs.models import GenerationJob
from ...pipeline import CarouselResult
from .params import CarouselGenerationParams

_STATUS_STYLES = {
    JobStatus.PENDING.value: "dim",
    JobStatus.GENERATING.value: "cyan",
    JobStatus.COMPLETED.value: "green",
    JobStatus.FAILED.value: "red",
}


def _styled_status(status: JobStatus | SlideStatusValue) -> str:
    style = _STATUS_STYLES.get(status.value, "white")
    return f"[{style}]{status.value}[/{style}]"


def show_generation_config(console: Console, params: CarouselGenerationParams) -> None:
    """Display carousel generation configuration panel."""
    if params.background_image:
        background_info = f"Supplied ({params.background_image.name})"
    elif params.background_style:
        background_info = f"Generate ({params.background_style})"
    else:
        background_info = "Solid fill"

    console.print(Panel(
        f"Generating carousel for [cyan]{params.content_id}[/cyan]\n"
        f"Slides: [green]{params.slides_file}[/green]\n"
        f"Visual style: [yellow]{params.visual_style or 'default'}[/yellow]\n"
        f"Text style: [yellow]{params.text_style or 'default'}[/yellow]\n"
        f"Design preset: [yellow]{params.design_preset or 'custom'}[/yellow]\n"
        f"Background: [yellow]{background_info}[/yellow]\n"
        f"Numbered slides: [yellow]{'Yes' if params.numbered else 'No'}[/yellow]\n"
        f"Store: [dim]{params.store_dir}[/dim]",
        title="Carousel Generation",
    ))


def show_generation_result(console: Console, result: CarouselResult) -> None:
    """Display the outcome of a generation run."""
    if result.images:
        table = Table(title="Slides")
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Template", style="yellow")
        table.add_column("Image", style="white")
        for image in result.images:
            table.add_row(str(image.slide_number), image.template, image.image_url)
        console.print(table)

    lines = [f"[bold]Job:[/] {result.job_id}"]
    if result.design:
        lines.append(f"[bold]Design:[/] {result.design.preset} ({result.design.system.visual_style.value})")
    lines.append(f"[bold]Background generated:[/] {'Yes' if result.background_generated else 'No'}")
    if result.background_error:
        lines.append(f"[yellow]Background error:[/] {result.background_error}")
    for slide_error in result.slide_errors:
        lines.append(f"[red]Slide {slide_error.slide_number}:[/] {slide_error.error}")

    if not result.success:
        title, border, headline = "Failed", "red", f"[bold red]{result.error or 'Generation failed'}[/bold red]"
    elif result.slide_errors or result.background_error:
        title, border, headline = "Completed with warnings", "yellow", (
            f"[bold yellow]{len(result.images)} slide(s) generated[/bold yellow]"
        )
    else:
        title, border, headline = "Complete", "green", (
            f"[bold green]{len(result.images)} slide(s) generated[/bold green]"
        )

    console.print(Panel(headline + "\n\n" + "\n".join(lines), title=title, border_style=border))


def show_job(console: Console, job: GenerationJob) -> None:
    """Display a job with its slide statuses."""
    lines = [
        f"[bold]Content:[/] {job.content_id}",
        f"[bold]Status:[/] {_styled_status(job.status)}",
        f"[bold]Progress:[/] {job.progress}%",
        f"[bold]Step:[/] {job.current_step or '-'}",
        f"[bold]Slides:[/] {job.completed_items}/{job.total_items}",
    ]
    if job.error_code:
        lines.append(f"[bold]Error code:[/] [red]{job.error_code}[/red]")
    if job.error_message:
        lines.append(f"[bold]Error:[/] {job.error_message}")
    console.print(Panel("\n".join(lines), title=f"Job {job.id}"))

    table = Table(title="Slide Status")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Status")
    table.add_column("Error", style="red")
    for entry in job.slide_statuses:
        table.add_row(str(entry.slide_number), _styled_status(entry.status), entry.error or "")
    console.print(table)


def show_jobs_table(console: Console, content_id: str, jobs: list[GenerationJob]) -> None:
    """Display table of jobs for a content item."""
    if not jobs:
        console.print(f"[yellow]No jobs found for {content_id}.[/yellow]")
        return

    table = Table(title=f"Jobs for {content_id}")
    table.add_column("ID", style="cyan")
    table.add_column("Status")
    table.add_column("Progress", justify="right")
    table.add_column("Slides", justify="right")
    table.add_column("Created", style="dim")

    for job in jobs:
        table.add_row(
            job.id,
            _styled_status(job.status),
            f"{job.progress}%",
            f"{job.completed_items}/{job.total_items}",
            job.created_at.strftime("%Y-%m-%d %H:%M:%S"),
        )

    console.print(table)
    console.print(f"\nTotal: {len(jobs)} job(s)")


def show_cleanup_result(console: Console, content_id: str, deleted: int) -> None:
    """Display cleanup summary."""
    if deleted:
        console.print(f"[green]Deleted {deleted} finished job(s) for {content_id}.[/green]")
    else:
        console.print(f"[yellow]No finished jobs to delete for {content_id}.[/yellow]")


def show_styles(
    console: Console,
    visual_styles: Iterable[str],
    text_styles: Mapping[str, str],
    background_styles: Mapping[str, Iterable[str]],
    design_presets: Iterable[str],
) -> None:
    """Display the available style names."""
    console.print(Panel(", ".join(visual_styles), title="Visual Styles"))

    text_table = Table(title="Text Styles")
    text_table.add_column("Name", style="cyan")
    text_table.add_column("Aesthetic", style="white")
    for name, aesthetic in text_styles.items():
        text_table.add_row(name, aesthetic)
    console.print(text_table)

    bg_table = Table(title="Background Styles")
    bg_table.add_column("Category", style="cyan")
    bg_table.add_column("Keys", style="white")
    for category, keys in background_styles.items():
        bg_table.add_row(category, ", ".join(keys))
    console.print(bg_table)

    console.print(Panel(", ".join(design_presets), title="Design Presets"))


def show_carousel_error(console: Console, error: str, details: Optional[dict] = None) -> None:
    """Display command error."""
    console.print(f"\n[red]Error: {error}[/red]")
    if details:
        for key, value in details.items():
            console.print(f"  [dim]{key}:[/dim] [yellow]{value}[/yellow]")
