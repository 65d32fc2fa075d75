#!/usr/bin/env python3
'''
 $ python -m pngstash encode image.png ruSt 'hello world'
 $ python -m pngstash decode image.png ruSt
'''
import logging
import os
import sys

from .commands import encode, decode, remove, print_chunks
from .exceptions import PngStashException


logger = logging.getLogger(__name__)

# command -> (minimum, maximum) number of arguments
COMMANDS = {
    'encode': (3, 4),
    'decode': (2, 2),
    'remove': (2, 2),
    'print': (1, 1),
}


def usage(progname):
    print(f'''usage: {progname} encode <png file> <chunk type> <message> [<output file>]
       {progname} decode <png file> <chunk type>
       {progname} remove <png file> <chunk type>
       {progname} print <png file>''', file=sys.stderr)
    sys.exit(1)


def run(command, args):
    if command == 'encode':
        encode(*args)
        print('Done.')
    elif command == 'decode':
        print(decode(*args))
    elif command == 'remove':
        chunk = remove(*args)
        print(f'Removed {chunk}')
    else:
        for line in print_chunks(*args):
            print(line)


def main(argv=None):
    argv = sys.argv if argv is None else argv

    logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)

    progname = os.path.basename(argv[0]) if argv else 'pngstash'

    if len(argv) < 2 or argv[1] not in COMMANDS:
        usage(progname)

    command, args = argv[1], argv[2:]
    n_min, n_max = COMMANDS[command]

    if not n_min <= len(args) <= n_max:
        usage(progname)

    try:
        run(command, args)
    except (PngStashException, OSError) as e:
        print(f'Error while running {command} on {args[0]}: {e}', file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
