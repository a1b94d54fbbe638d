"""
Command line interface for the Huffman file compressor.
"""

import argparse
import sys

from archiver import Archiver, DEFAULT_FRAGMENT, DEFAULT_SUFFIX


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='huffpack',
        description='Huffman file compressor',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  huffpack compress example.txt            # writes example.txt.huf
  huffpack decompress example.txt.huf      # writes example_unc.txt
  huffpack info example.txt.huf
        """
    )
    parser.add_argument('-q', '--quiet', action='store_true', help='Do not print progress')
    parser.add_argument('--suffix', default=DEFAULT_SUFFIX,
                        help=f'Suffix of compressed files (default: {DEFAULT_SUFFIX})')
    parser.add_argument('--fragment', default=DEFAULT_FRAGMENT,
                        help=f'Inserted before the extension of decompressed files (default: {DEFAULT_FRAGMENT})')

    subparsers = parser.add_subparsers(dest='command', help='Command')

    compress_parser = subparsers.add_parser('compress', help='Compress files')
    compress_parser.add_argument('files', nargs='+', help='Files to compress')
    compress_parser.add_argument('-o', '--output', help='Output path (single input only)')
    compress_parser.add_argument('--show-bits', action='store_true', help='Print the encoded bit string')

    decompress_parser = subparsers.add_parser('decompress', help='Decompress files')
    decompress_parser.add_argument('files', nargs='+', help='Files to decompress')
    decompress_parser.add_argument('-o', '--output', help='Output path (single input only)')
    decompress_parser.add_argument('--show-bits', action='store_true', help='Print the decoded bit string')

    info_parser = subparsers.add_parser('info', help='Show the code table of a compressed file')
    info_parser.add_argument('file', help='Compressed file')

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if getattr(args, 'output', None) and len(args.files) > 1:
        parser.error('--output requires exactly one input file')

    archiver = Archiver(
        suffix=args.suffix,
        fragment=args.fragment,
        verbose=not args.quiet,
        keep_bits=getattr(args, 'show_bits', False)
    )

    try:
        if args.command == 'compress':
            for path in args.files:
                result = archiver.compress_file(path, args.output)
                if args.show_bits:
                    print(result.bits)

        elif args.command == 'decompress':
            for path in args.files:
                result = archiver.decompress_file(path, args.output)
                if args.show_bits:
                    print(result.bits)

        elif args.command == 'info':
            archiver.list_file(args.file)

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
