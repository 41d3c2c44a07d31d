import os
import logging

from argparse import ArgumentParser, Namespace
from dataclasses import dataclass

from PyPotx.Options import Options
from PyPotx.Helpers.Resources import config_dir

@dataclass
class LoggerOptions():
    file_handler: logging.FileHandler|None
    log_path: str

def InitLogger(logfilename: str, debug: bool = False) -> LoggerOptions:
    """ Initialise the logger with a file handler and return the path to the log file """
    log_path = os.path.join(config_dir, f"{logfilename}.log")
    file_handler = None

    if debug:
        logging_level = logging.DEBUG
    else:
        level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
        logging_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(format='%(levelname)s: %(message)s', encoding='utf-8', level=logging_level)

    if debug:
        logging.debug("Debug logging enabled")

    # Create file handler with the same logging level
    try:
        os.makedirs(config_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8', mode='w')
        file_handler.setLevel(logging_level)
        file_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logging.getLogger('').addHandler(file_handler)
    except OSError as e:
        logging.warning(f"Unable to create log file at {log_path}: {e}")

    return LoggerOptions(file_handler=file_handler, log_path=log_path)

def CreateArgParser(description : str) -> ArgumentParser:
    """
    Create the argument parser for the extraction command
    """
    parser = ArgumentParser(description=description)
    parser.add_argument('mode', nargs='?', default=None, help="Output mode: single (default), multiple or core")
    parser.add_argument('--modules', type=str, default=None, help="Comma delimited list of modules to extract translatable strings from")
    parser.add_argument('--files', type=str, default=None, help="Comma delimited list of files to extract translatable strings from")
    parser.add_argument('--folder', type=str, default=None, help="Folder to begin translation extraction in. When no other option is set this defaults to the current directory")
    parser.add_argument('--api', type=str, default=None, help="Drupal core version to use for extraction settings (5, 6, 7 or 8)")
    parser.add_argument('--language', type=str, default=None, help="Language to include in the po file headers")
    parser.add_argument('-o', '--output', type=str, default=None, help="Folder to write the catalog files to")
    parser.add_argument('--project', type=str, default=None, help="Project name to use in the catalog headers")
    parser.add_argument('--threads', type=int, default=None, help="Number of files to scan in parallel")
    parser.add_argument('--debug', action='store_true', help="Run with DEBUG log level")
    return parser

def CreateOptions(args: Namespace, **kwargs) -> Options:
    """ Create options from the command line arguments """
    options = {
        'mode': args.mode,
        'modules': args.modules,
        'files': args.files,
        'folder': args.folder,
        'api': args.api,
        'language': args.language,
        'output_dir': args.output,
        'project_name': args.project,
        'max_threads': args.threads,
    }

    for key, value in kwargs.items():
        options[key] = value

    return Options(options)
