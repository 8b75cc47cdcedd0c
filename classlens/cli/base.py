""" Argument parsing and logging shared by the command line tools. """

import argparse
import logging
import platform
import sys
import zipfile
from .. import __version__
from ..common import logformat, ClassFormatError


version_text = 'classlens {} on {} {} on {}'.format(
    __version__, platform.python_implementation(), platform.python_version(),
    platform.platform())


def log_level(s):
    """ Converts a level name such as 'debug' into a logging level """
    level = logging.getLevelName(s.upper())
    if not isinstance(level, int):
        raise ValueError('Invalid log level: {}'.format(s))
    return level


def positive_int(s):
    """ Converts a string into an integer of at least one """
    value = int(s)
    if value < 1:
        raise ValueError('Must be at least 1: {}'.format(s))
    return value


class OnceAction(argparse.Action):
    """ Use this action to enforce that an option is only given once """
    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest, None) is not None:
            raise argparse.ArgumentError(
                self, '{} given more than once'.format(option_string))
        setattr(namespace, self.dest, values)


base_parser = argparse.ArgumentParser(add_help=False)
base_parser.add_argument(
    '--log', help='Log level (debug,info,warning,error)', metavar='log-level',
    type=log_level, default='warning')
base_parser.add_argument(
    '--report', metavar='report-file', action=OnceAction,
    help='Also write the log to this file',
    type=argparse.FileType('w'))
base_parser.add_argument(
    '--verbose', '-v', action='count', default=0,
    help='Show debug messages, give twice to also log each constant')
base_parser.add_argument(
    '--version', '-V', action='version', version=version_text,
    help='Display version and exit')

# Parent for commands which inspect a single class file:
class_file_parser = argparse.ArgumentParser(add_help=False)
class_file_parser.add_argument(
    'class_file', metavar='java class file', type=argparse.FileType('rb'),
    help='class file to inspect')


class ColoredFormatter(logging.Formatter):
    """ Log formatter which colors the messages with vt100 codes """
    level_colors = {
        logging.DEBUG: 36,  # cyan
        logging.WARNING: 33,  # yellow
        logging.ERROR: 31,  # red
        logging.CRITICAL: 31,
    }

    def format(self, record):
        msg = super().format(record)
        color = self.level_colors.get(record.levelno)
        if color is None:
            return msg
        return '\033[1;{}m{}\033[0m'.format(color, msg)


class LogSetup:
    """ Context manager that attaches logging while a command runs.

    Errors in the class file being processed, and files that cannot be
    read, are reported and end the program with exit status 1.
    """
    def __init__(self, args):
        self.args = args
        self.logger = logging.getLogger()
        self.handlers = []

    def __enter__(self):
        self.logger.setLevel(logging.DEBUG)
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(ColoredFormatter(logformat))
        if self.args.verbose > 0:
            console_handler.setLevel(logging.DEBUG)
        else:
            console_handler.setLevel(self.args.log)
        self.handlers.append(console_handler)

        if self.args.report:
            file_handler = logging.StreamHandler(self.args.report)
            file_handler.setFormatter(logging.Formatter(logformat))
            self.handlers.append(file_handler)

        for handler in self.handlers:
            self.logger.addHandler(handler)
        self.logger.debug('Loggers attached')
        self.logger.debug(version_text)
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        failed = self.report_error(exc_value)

        self.logger.debug('Removing loggers')
        for handler in self.handlers:
            self.logger.removeHandler(handler)
        self.handlers = []
        if self.args.report:
            self.args.report.close()

        if failed:
            sys.exit(1)

    def report_error(self, exc_value):
        """ Log an error which ends the command, if it is one we expect """
        if isinstance(exc_value, ClassFormatError):
            self.logger.error('Error processing file: %s', exc_value)
            if exc_value.offset is not None:
                self.logger.debug('Problem found at byte %s', exc_value.offset)
            exc_value.print(file=sys.stderr)
            return True
        elif isinstance(exc_value, zipfile.BadZipFile):
            self.logger.error('Not a valid jar file: %s', exc_value)
            return True
        elif isinstance(exc_value, OSError):
            self.logger.error('Cannot read file: %s', exc_value)
            return True
        return False
