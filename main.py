#!/usr/bin/env python3
"""
main.py

Entry point for checking robot programs.

With file names as arguments, each file is parsed and the program is printed
in canonical form. Without arguments, the user is asked for file names until
an empty line is entered.
"""

import os
import sys

from config import settings
from logic import parse_file
from logging_config import setup_logging

SEPARATOR = "================="


def show(filename):
    program = parse_file(filename)
    print("Parsing completed")
    if program is not None:
        print(SEPARATOR + "\nProgram:")
        print(program)
    print(SEPARATOR)


def main(argv=None):
    setup_logging(settings.log_level, settings.log_file)
    args = sys.argv[1:] if argv is None else argv

    if args:
        for filename in args:
            if os.path.exists(filename):
                print(f"Parsing '{filename}'")
                show(filename)
            else:
                print(f"Can't find file '{filename}'")
    else:
        while True:
            filename = input("Enter the program file to load (empty to quit): ").strip()
            if not filename:
                break
            show(filename)
    print("Done")


if __name__ == '__main__':
    main()
