"""
File-level helpers around the parser: read a robot program, parse it once,
and run the resulting tree against a robot handle.
"""

import logging

from config import settings
from nodes import RobotInterrupted
from parser import ParserFailure, TokenStream, parse_program

logger = logging.getLogger(__name__)


def parse_text(text):
    """Parse program text into a Program node. Raises ParserFailure."""
    s = TokenStream.from_text(text)
    logger.debug("Tokenized %d tokens", len(s.tokens))
    program = parse_program(s)
    logger.debug("Parsed %d top-level statements", len(program.statements))
    return program


def parse_file(filename):
    """
    Parse the robot program in `filename`.

    Returns the Program node, or None when the file cannot be read or does
    not parse; the reason is logged.
    """
    try:
        with open(filename, 'r', encoding=settings.source_encoding) as file:
            source_code = file.read()
    except OSError as e:
        logger.error("Robot program source file %s could not be read: %s", filename, e)
        return None
    try:
        program = parse_text(source_code)
    except ParserFailure as e:
        logger.error("Parser error in %s:\n%s", filename, e)
        return None
    logger.info("Parsed %s", filename)
    return program


def check_file(filename):
    return parse_file(filename) is not None


def run_program(program, robot):
    """
    Execute `program` once against `robot`.

    Returns True when the program ran to completion and False when the robot
    stopped it by raising RobotInterrupted. EvaluationError propagates.
    """
    try:
        program.execute(robot)
    except RobotInterrupted as e:
        logger.info("Robot stopped: %s", e)
        return False
    return True
