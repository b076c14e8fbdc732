from __future__ import annotations

import argparse
import logging
import random
import sys

from .server import DEFAULT_CONFIG, serve
from .text import TextChain

logger = logging.getLogger(__name__)


def load_chain(path, order, random_seed=None):
    rng = None
    if random_seed is not None:
        rng = random.Random(random_seed)
    chain = TextChain(order=order, rng=rng)
    chain.feed_file(path)
    logger.info(f"Trained order-{order} chain on {path}: {len(chain)} windows")
    return chain


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Word-level Markov chain text generator.")
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging.')
    subparsers = parser.add_subparsers(dest='command', required=True)

    generate_parser = subparsers.add_parser('generate', help='Train on a text file and print generated sentences.')
    generate_parser.add_argument('--input', type=str, required=True, help='Training text, one sentence per line.')
    generate_parser.add_argument('--order', type=int, default=1, help='Order of the Markov chain.')
    generate_parser.add_argument('--count', type=int, default=1, help='Number of sentences to generate.')
    generate_parser.add_argument('--seed', type=str, default=None, help='Optional word every sentence starts with.')
    generate_parser.add_argument('--random-seed', type=int, default=None, help='Optional random seed for reproducibility.')

    serve_parser = subparsers.add_parser('serve', help='Train on a text file and serve generation over HTTP.')
    serve_parser.add_argument('--input', type=str, required=True, help='Training text, one sentence per line.')
    serve_parser.add_argument('--order', type=int, default=1, help='Order of the Markov chain.')
    serve_parser.add_argument('--host', type=str, default=DEFAULT_CONFIG["host"], help='Host (default: 127.0.0.1)')
    serve_parser.add_argument('--port', type=int, default=DEFAULT_CONFIG["port"], help='Port (default: 11435)')
    serve_parser.add_argument('--random-seed', type=int, default=None, help='Optional random seed for reproducibility.')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )

    if args.order < 1:
        print("error: --order must be at least 1", file=sys.stderr)
        return 2
    try:
        chain = load_chain(args.input, args.order, args.random_seed)
    except (OSError, UnicodeDecodeError) as e:
        print(f"error: cannot read {args.input}: {e}", file=sys.stderr)
        return 2
    if chain.is_empty():
        print(f"error: {args.input} contains no words", file=sys.stderr)
        return 1

    if args.command == 'generate':
        if args.count < 0:
            print("error: --count must not be negative", file=sys.stderr)
            return 2
        if args.seed is None:
            sentences = chain.str_iter_for(args.count)
        else:
            sentences = (chain.generate_str_from_token(args.seed) for _ in range(args.count))
        for sentence in sentences:
            print(sentence)
        return 0
    elif args.command == 'serve':
        serve(chain, {"host": args.host, "port": args.port})
        return 0
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
