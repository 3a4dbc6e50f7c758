"""CLI entry point for the CGA Composite Artifact Color Simulator."""

import argparse
import logging
import multiprocessing
import os
import sys

from tqdm import tqdm

from cga_composite.constants import (
    DEFAULT_HUE, DEFAULT_SAT, DEFAULT_LUMA, SAMPLE_METHODS, METHOD_FAST,
)

_IMAGE_EXTENSIONS = ('.png', '.bmp', '.gif', '.jpg', '.jpeg', '.tif', '.tiff')

# Output file name per decoded mode
_OUTPUT_NAMES = {
    'rgb': 'out.png',
    'luma': 'out_luma.png',
    'chroma': 'out_chroma.png',
}
_COMPOSITE_NAME = 'out_composite.png'
_PREVIEW_NAME = 'out_preview.png'


def _process_frame(frame, out_dir, hue, sat, luma, method, integer, preview):
    """Encode one RGBA frame and write the composite and decoded images.

    Returns the list of written paths.
    """
    from cga_composite.encoder import encode_frame
    from cga_composite.decoder import decode_all, box_filter_rgb
    from cga_composite.image_io import save_composite, save_rgba

    os.makedirs(out_dir, exist_ok=True)
    written = []

    signal = encode_frame(frame, integer=integer)
    path = os.path.join(out_dir, _COMPOSITE_NAME)
    save_composite(path, signal)
    written.append(path)

    decoded = decode_all(signal, hue=hue, sat=sat, luma=luma, method=method)
    for output, result in decoded.items():
        path = os.path.join(out_dir, _OUTPUT_NAMES[output])
        save_rgba(path, result)
        written.append(path)

    if preview:
        path = os.path.join(out_dir, _PREVIEW_NAME)
        save_rgba(path, box_filter_rgb(frame))
        written.append(path)

    return written


def _load_frame(path):
    """Load and width-check an input image, exiting on failure."""
    from cga_composite.image_io import load_image, prepare_frame

    try:
        return prepare_frame(load_image(path))
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_image(args):
    """Run a single image through the CGA composite pipeline."""
    frame = _load_frame(args.input)
    print(f"Input: {args.input} ({frame.shape[1]}x{frame.shape[0]})")
    print(f"Encoding ({'float' if args.float else 'integer'} path) and "
          f"decoding ({args.method})...")

    written = _process_frame(frame, args.output, args.hue, args.sat, args.luma,
                             args.method, not args.float, args.preview)
    for path in written:
        print(f"Wrote {path}")


def _batch_worker(job):
    """Worker process: load one image and write its outputs.

    Must be at module level for pickling by multiprocessing.
    Returns (input path, error message or None).
    """
    from cga_composite.image_io import load_image, prepare_frame

    path, out_dir, hue, sat, luma, method, integer, preview = job
    try:
        frame = prepare_frame(load_image(path))
        _process_frame(frame, out_dir, hue, sat, luma, method, integer, preview)
    except (ValueError, OSError) as e:
        return path, str(e)
    return path, None


def _get_num_workers():
    """Get number of parallel workers (leave one core free for I/O)."""
    return max(1, (os.cpu_count() or 2) - 1)


def cmd_batch(args):
    """Process every image in a directory, one output directory per image."""
    if not os.path.isdir(args.input):
        print(f"Error: '{args.input}' is not a directory")
        sys.exit(1)

    names = sorted(n for n in os.listdir(args.input)
                   if n.lower().endswith(_IMAGE_EXTENSIONS))
    if not names:
        print(f"Error: No images found in '{args.input}'")
        sys.exit(1)

    jobs = []
    for name in names:
        stem = os.path.splitext(name)[0]
        jobs.append((os.path.join(args.input, name),
                     os.path.join(args.output, stem),
                     args.hue, args.sat, args.luma, args.method,
                     not args.float, args.preview))

    workers = min(_get_num_workers(), len(jobs))
    print(f"Batch: {len(jobs)} images from {args.input} -> {args.output}, "
          f"{workers} workers")

    failures = []
    with multiprocessing.Pool(workers) as pool:
        for path, error in tqdm(pool.imap(_batch_worker, jobs),
                                total=len(jobs), unit='image', desc='Processing'):
            if error:
                failures.append((path, error))

    for path, error in failures:
        print(f"Skipped {path}: {error}")
    print(f"Done: {len(jobs) - len(failures)} of {len(jobs)} images")
    if failures:
        sys.exit(1)


def cmd_colorbars(args):
    """Generate the CGA color bar pattern and run it through the pipeline."""
    from cga_composite.colorbars import generate_colorbars
    from cga_composite.image_io import save_rgba

    print("Generating CGA color bars...")
    bars = generate_colorbars(640, args.height)

    written = _process_frame(bars, args.output, args.hue, args.sat, args.luma,
                             args.method, not args.float, args.preview)
    if args.save_png:
        save_rgba(args.save_png, bars)
        written.append(args.save_png)
    for path in written:
        print(f"Wrote {path}")


def _add_decode_args(parser):
    """Add picture control and decoder flags to an argparse subparser."""
    group = parser.add_argument_group('decoder')
    group.add_argument('--hue', type=float, default=DEFAULT_HUE,
                       help=f'Hue rotation in radians (default: {DEFAULT_HUE})')
    group.add_argument('--sat', type=float, default=DEFAULT_SAT,
                       help=f'Saturation gain (default: {DEFAULT_SAT})')
    group.add_argument('--luma', type=float, default=DEFAULT_LUMA,
                       help=f'Brightness gain (default: {DEFAULT_LUMA})')
    group.add_argument('--method', choices=SAMPLE_METHODS, default=METHOD_FAST,
                       help='Chroma sampling method (default: fast)')
    group.add_argument('--float', action='store_true',
                       help='Use the floating-point encoder (models edge slew)')
    group.add_argument('--preview', action='store_true',
                       help='Also write a box-filtered RGB preview')
    parser.add_argument('-d', '--debug', action='store_true',
                        help='Print stage timings')


def main():
    parser = argparse.ArgumentParser(
        description="CGA Composite Artifact Color Simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  python main.py image screenshot.png -o out/
  python main.py image screenshot.png --hue 0.5 --sat 1.2 --method accurate
  python main.py batch screenshots/ -o out/
  python main.py colorbars -o bars/ --save-png bars.png
        """)

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # image
    p_img = subparsers.add_parser('image', help='Simulate composite output for one image')
    p_img.add_argument('input', help='Input image, 640 or 320 pixels wide')
    p_img.add_argument('-o', '--output', default='.', help='Output directory')
    _add_decode_args(p_img)

    # batch
    p_bat = subparsers.add_parser('batch', help='Simulate every image in a directory')
    p_bat.add_argument('input', help='Input directory')
    p_bat.add_argument('-o', '--output', default='out', help='Output directory')
    _add_decode_args(p_bat)

    # colorbars
    p_cb = subparsers.add_parser('colorbars', help='Simulate the CGA color bar pattern')
    p_cb.add_argument('-o', '--output', default='.', help='Output directory')
    p_cb.add_argument('--height', type=int, default=200, help='Pattern height')
    p_cb.add_argument('--save-png', default=None, help='Also save source pattern as PNG')
    _add_decode_args(p_cb)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(name)s: %(message)s')

    commands = {
        'image': cmd_image,
        'batch': cmd_batch,
        'colorbars': cmd_colorbars,
    }
    commands[args.command](args)


if __name__ == '__main__':
    main()
