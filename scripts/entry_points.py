"""Entry point functions for the potx command line tool."""

import os
import sys
import logging

# Add the parent directory to the sys path so that modules can be found
base_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(base_path)


def potx(argv : list[str]|None = None) -> int:
    """Entry point for the potx command. Returns the process exit code."""
    from scripts.potx_common import InitLogger, CreateArgParser, CreateOptions
    from PyPotx.Helpers.Localization import initialize_localization
    from PyPotx.PotxError import ConfigError
    from PyPotx.PotxRunner import PotxRunner

    parser = CreateArgParser("Extract translatable strings from Drupal source code into po files")
    args = parser.parse_args(argv)

    InitLogger("potx", args.debug)
    initialize_localization()

    try:
        runner = PotxRunner(CreateOptions(args))

    except ConfigError as e:
        logging.error(str(e))
        return 2

    outcome = runner.Run()

    for error in outcome.errors:
        logging.error(error)

    return 0 if outcome.success else 1


def main():
    sys.exit(potx())


if __name__ == '__main__':
    main()
