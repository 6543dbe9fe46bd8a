"""Rich CLI formatting helpers for Bioleptic commands."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

console = Console()


def print_header(title: str):
    """Print a styled section header."""
    console.print(Panel(Text(title, style="bold cyan"), border_style="dim"))


def _kv_table(title: str) -> Table:
    table = Table(title=title, border_style="cyan", show_header=False, padding=(0, 2))
    table.add_column("Metric", style="dim")
    table.add_column("Value", style="bold")
    return table


def print_compress_results(stats: dict):
    table = _kv_table("Compression Results")
    table.add_row("Input", stats["input_path"])
    table.add_row("Output", stats["output_path"])
    table.add_row("Samples", f"{stats['n_samples']:,}")
    table.add_row("Raw size", f"{stats['raw_bytes']:,} bytes")
    table.add_row("Compressed", f"{stats['compressed_bytes']:,} bytes")
    table.add_row("Ratio", f"[green]{stats['ratio']:.1f}x[/green]")
    table.add_row(
        "Options",
        f"{stats['method']}, scale {stats['scale']}, cutoff {stats['cutoff_level']}",
    )
    table.add_row("Time", f"{stats['elapsed_sec'] * 1000:.0f}ms")
    console.print(table)


def print_decompress_results(stats: dict):
    table = _kv_table("Decompression Results")
    table.add_row("Input", stats["input_path"])
    table.add_row("Output", stats["output_path"])
    table.add_row("Samples", f"{stats['n_samples']:,}")
    table.add_row("Dtype", stats["dtype"])
    table.add_row("Time", f"{stats['elapsed_sec'] * 1000:.0f}ms")
    console.print(table)


def print_header_info(name: str, header, file_size: int):
    """Print the decoded fields of a stream header."""
    raw_bytes = header.signal_length * 4
    table = Table(title=f"Bioleptic File Info: {name}", border_style="cyan")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Format", f"Bioleptic v{header.version} ({header.magic.decode()})")
    table.add_row("Method", header.compression_method_enum().name)
    table.add_row("Levels", str(header.levels))
    table.add_row("Scale", str(header.scale))
    table.add_row("Samples", f"{header.signal_length:,}")
    table.add_row("Min / Max", f"{header.min_f32:.6g} / {header.max_f32:.6g}")
    table.add_row("Mean (normalized)", f"{header.mean_f32:.6g}")
    table.add_row("Payload", f"{header.compressed_size:,} bytes")
    table.add_row("File Size", f"{file_size:,} bytes")
    table.add_row("Ratio", f"{raw_bytes / max(file_size, 1):.1f}x")
    console.print(table)


def print_tryit_results(rows: list, raw_bytes: int):
    """Print one row per (method, scale, cutoff) combination, best ratio first."""
    table = Table(title="Bioleptic Options Comparison", border_style="cyan", padding=(0, 1))
    table.add_column("Method", style="bold")
    table.add_column("Scale", justify="right")
    table.add_column("Cutoff")
    table.add_column("Size", justify="right")
    table.add_column("Ratio", justify="right", style="green")
    table.add_column("PRD %", justify="right")

    for row in sorted(rows, key=lambda r: -r["ratio"]):
        table.add_row(
            row["method"],
            str(row["scale"]),
            row["cutoff_level"],
            f"{row['compressed_bytes']:,}",
            f"{row['ratio']:.2f}x",
            f"{row['prd']:.4f}",
        )

    console.print()
    console.print(table)
    console.print(f"\n  [dim]Raw float32 size: {raw_bytes:,} bytes[/dim]")
