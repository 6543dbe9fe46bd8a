"""CLI entry point: python -m bioleptic <command>"""

import argparse
import sys

_METHODS = ["cdf97", "cdf53", "sym4", "db4"]
_CUTOFFS = ["low", "medium", "high"]


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="bioleptic",
        description="Bioleptic lossy wavelet codec for 1-D signals",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- compress ---
    compress_parser = subparsers.add_parser("compress", help="Compress a signal file")
    compress_parser.add_argument("input", type=str, help="Input file (.npy, .csv, .tsv, .txt, .f32)")
    compress_parser.add_argument("-o", "--output", type=str, required=True, help="Output file path")
    compress_parser.add_argument("-m", "--method", type=str, default="cdf97", choices=_METHODS,
                                 help="Wavelet family (default: cdf97)")
    compress_parser.add_argument("-s", "--scale", type=int, default=11,
                                 help="Quantization scale 6..12 (default: 11)")
    compress_parser.add_argument("-c", "--cutoff", type=str, default="low", choices=_CUTOFFS,
                                 help="Detail thresholding cutoff (default: low)")

    # --- decompress ---
    decompress_parser = subparsers.add_parser("decompress", help="Decompress a Bioleptic file")
    decompress_parser.add_argument("input", type=str, help="Compressed Bioleptic file")
    decompress_parser.add_argument("-o", "--output", type=str, required=True,
                                   help="Output file (.npy, .csv, .tsv, .f32)")

    # --- info ---
    info_parser = subparsers.add_parser("info", help="Show the header of a Bioleptic file")
    info_parser.add_argument("input", type=str, help="Compressed Bioleptic file")

    # --- tryit ---
    tryit_parser = subparsers.add_parser(
        "tryit", help="Compare every method and cutoff on your signal",
    )
    tryit_parser.add_argument("input", type=str, help="Signal file (.npy, .csv, .tsv, .txt, .f32)")
    tryit_parser.add_argument("-s", "--scale", type=int, nargs="+", default=[11],
                              help="Quantization scales to try (default: 11)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    from .cli_formatting import console

    try:
        if args.command == "compress":
            _cmd_compress(args)
        elif args.command == "decompress":
            _cmd_decompress(args)
        elif args.command == "info":
            _cmd_info(args)
        elif args.command == "tryit":
            _cmd_tryit(args)
    except (ValueError, OSError) as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        return 1
    return 0


def _cmd_compress(args):
    from . import compress_file
    from .cli_formatting import console, print_compress_results
    from .config import CompressionOptions

    options = CompressionOptions(method=args.method, scale=args.scale, cutoff_level=args.cutoff)
    console.print(f"[bold]Compressing[/bold] {args.input} ({args.method}, scale {args.scale})...")
    stats = compress_file(args.input, args.output, options)
    print_compress_results(stats)


def _cmd_decompress(args):
    from . import decompress_file
    from .cli_formatting import console, print_decompress_results

    console.print(f"[bold]Decompressing[/bold] {args.input}...")
    stats = decompress_file(args.input, args.output)
    print_decompress_results(stats)


def _cmd_info(args):
    from pathlib import Path
    from . import read_header
    from .cli_formatting import print_header_info

    path = Path(args.input)
    data = path.read_bytes()
    header = read_header(data)
    print_header_info(path.name, header, len(data))


def _cmd_tryit(args):
    from pathlib import Path
    from . import load_signal
    from .cli_formatting import console, print_header, print_tryit_results
    from .config import CompressionOptions
    from .evaluation.metrics import evaluate_roundtrip

    signal = load_signal(args.input)
    print_header(f"{Path(args.input).name}: {signal.size:,} samples")

    rows = []
    with console.status("Running codec grid..."):
        for scale in args.scale:
            for method in _METHODS:
                for cutoff in _CUTOFFS:
                    options = CompressionOptions(method=method, scale=scale, cutoff_level=cutoff)
                    result = evaluate_roundtrip(signal, options)
                    result.update(method=method, scale=scale, cutoff_level=cutoff)
                    rows.append(result)

    print_tryit_results(rows, raw_bytes=signal.nbytes)


if __name__ == "__main__":
    sys.exit(main())
