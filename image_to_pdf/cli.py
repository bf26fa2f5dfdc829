"""
Command-line interface for Image to PDF.
"""

import logging
import os
import sys

import click
from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn, TimeRemainingColumn
from rich.table import Table

from image_to_pdf import __version__
from image_to_pdf.builder import ImageToPdfBuilder
from image_to_pdf.exceptions import ImageToPdfException
from image_to_pdf.geometry import DEFAULT_DPI, page_geometry, validate_dpi
from image_to_pdf.codec import image_info
from image_to_pdf.progress import ChainedProgress, RichProgressObserver
from image_to_pdf.sources import load_image
from image_to_pdf.utils import find_images, format_file_size, format_points

console = Console()


def _progress_columns():
    return (
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeRemainingColumn(),
    )


def _check_dpi(ctx, param, value):
    try:
        return validate_dpi(value)
    except ImageToPdfException as exc:
        raise click.BadParameter(exc.message)


def _check_workers(ctx, param, value):
    if value is not None and value < 1:
        raise click.BadParameter("must be at least 1")
    return value


dpi_option = click.option(
    '--dpi',
    default=DEFAULT_DPI,
    show_default=True,
    type=float,
    callback=_check_dpi,
    help='Resolution used to convert pixels to page size'
)
parallel_option = click.option(
    '--parallel/--sequential',
    default=False,
    help='Load images on a worker thread pool'
)
workers_option = click.option(
    '--workers', '-w',
    default=None,
    type=int,
    callback=_check_workers,
    help='Maximum number of loader threads (with --parallel)'
)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """
    Image to PDF CLI - Combine images into a PDF, one page per image.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )


@cli.command(name="build")
@click.argument('sources', nargs=-1, required=True)
@click.option(
    '--output', '-o',
    required=True,
    help='Path of the PDF to write',
    type=click.Path(dir_okay=False)
)
@dpi_option
@click.option(
    '--title', '-t',
    default='',
    help='Document title stored in the PDF metadata',
    type=str
)
@parallel_option
@workers_option
@click.option(
    '--no-progress',
    is_flag=True,
    help='Do not display a progress bar'
)
def build(sources, output, dpi, title, parallel, workers, no_progress):
    """
    Build a PDF from image files or URLs, in the order given.

    Examples:

        image-to-pdf build scan1.png scan2.png -o scans.pdf

        image-to-pdf build *.jpg -o album.pdf --dpi 150 --title "Album"

        image-to-pdf build https://example.com/a.png b.png -o mixed.pdf --parallel
    """
    try:
        console.print(f"\n[bold cyan]Loading {len(sources)} image(s)...[/bold cyan]")
        builder = ImageToPdfBuilder.from_sources(
            sources, parallel=parallel, max_workers=workers, dpi=dpi, title=title
        )

        console.print(f"[bold cyan]Assembling {len(builder)} page(s) at {dpi:g} DPI...[/bold cyan]")
        with Progress(*_progress_columns(), console=console, disable=no_progress) as progress:
            observer = RichProgressObserver(progress, "Assembling pages")
            document = builder.create(observer)

        destination = document.save_to(output)

        summary = Table(title="PDF Created", show_header=False)
        summary.add_column("Property", style="cyan")
        summary.add_column("Value", style="green")
        summary.add_row("Output", os.path.abspath(destination))
        summary.add_row("Pages", str(document.page_count))
        summary.add_row("DPI", f"{document.dpi:g}")
        if document.title:
            summary.add_row("Title", document.title)
        summary.add_row("Size", format_file_size(destination.stat().st_size))

        console.print()
        console.print(summary)
        console.print(f"\n[bold green]✓ Successfully created {os.path.basename(destination)}[/bold green]\n")

    except Exception as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


@cli.command(name="info")
@click.argument('sources', nargs=-1, required=True)
@dpi_option
def show_info(sources, dpi):
    """
    Show pixel size and resulting page size for each image.

    Example:

        image-to-pdf info cover.png page1.jpg --dpi 150
    """
    try:
        table = Table(title=f"Page Layout at {dpi:g} DPI")
        table.add_column("#", style="cyan", width=4)
        table.add_column("Source", style="green")
        table.add_column("Pixels", justify="right")
        table.add_column("Mode")
        table.add_column("Page (pt)", justify="right", style="magenta")

        for index, source in enumerate(sources, 1):
            info = image_info(load_image(source))
            geometry = page_geometry(info.width, info.height, dpi)
            table.add_row(
                str(index),
                os.path.basename(str(source)) or str(source),
                f"{info.width} x {info.height}",
                info.mode,
                f"{format_points(geometry.width_pt)} x {format_points(geometry.height_pt)}",
            )

        console.print()
        console.print(table)
        console.print()

    except Exception as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


@cli.command(name="batch")
@click.argument('directories', nargs=-1, required=True, type=click.Path(exists=True, file_okay=False))
@click.option(
    '--output-dir', '-o',
    default='./output',
    help='Directory for the generated PDFs',
    type=click.Path(file_okay=False)
)
@dpi_option
@parallel_option
@workers_option
def batch(directories, output_dir, dpi, parallel, workers):
    """
    Create one PDF per directory of images.

    Each PDF is named and titled after its directory; images are ordered
    by file name.

    Examples:

        image-to-pdf batch chapter-01 chapter-02 -o volumes

        image-to-pdf batch scans/* --dpi 200 --parallel
    """
    try:
        results = []
        failures = []

        with ChainedProgress(*_progress_columns(), console=console) as progress:
            previous = None
            for directory in directories:
                name = os.path.basename(os.path.normpath(directory))
                try:
                    images = find_images(directory)
                    if not images:
                        failures.append((name, "no images found"))
                        continue
                    builder = ImageToPdfBuilder.from_sources(
                        images, parallel=parallel, max_workers=workers, dpi=dpi, title=name
                    )
                    observer = RichProgressObserver(progress, name, after=previous)
                    document = builder.create(observer)
                    previous = observer
                    destination = document.save_to(os.path.join(output_dir, f"{name}.pdf"))
                    results.append((name, destination, document.page_count))
                except (ImageToPdfException, OSError) as exc:
                    failures.append((name, str(exc)))

        console.print("\n[bold]Batch Summary[/bold]")
        console.print("=" * 50)

        summary_table = Table(show_header=False)
        summary_table.add_column("Metric", style="cyan")
        summary_table.add_column("Value", style="green")
        summary_table.add_row("Total Directories", str(len(directories)))
        summary_table.add_row("✓ Successful", f"[green]{len(results)}[/green]")
        summary_table.add_row("✗ Failed", f"[red]{len(failures)}[/red]")
        summary_table.add_row("Output Directory", os.path.abspath(output_dir))
        console.print(summary_table)

        if results:
            console.print("\n[bold green]Created:[/bold green]")
            for name, destination, pages in results:
                console.print(f"  ✓ {name} → {os.path.basename(destination)} ({pages} page(s))")

        if failures:
            console.print("\n[bold red]Failed Directories:[/bold red]")
            for name, error in failures:
                console.print(f"  ✗ {name}: {error}")

        console.print()
        sys.exit(0 if not failures else 1)

    except Exception as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


if __name__ == '__main__':
    cli()
