import os
import logging
import sys
import argparse
from datetime import datetime
import unittest

# Add the parent directory to the sys path so that modules can be found
base_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(base_path)

from PyPotx.Helpers.Tests import create_logfile, end_logfile, separator

logging.getLogger().setLevel(logging.DEBUG)

def run_unit_tests(results_path : str, pattern : str = "test_*.py") -> bool:
    """
    Run all unit tests in PyPotx.UnitTests and log the results.
    """
    log_file = create_logfile(results_path, "unit_tests.log")

    logging.info(separator)
    logging.info("Running unit tests at " + datetime.now().strftime("%Y-%m-%d at %H:%M"))
    logging.info(separator)

    tests_directory = os.path.join(base_path, 'PyPotx', 'UnitTests')
    suite = unittest.TestLoader().discover(tests_directory, pattern=pattern, top_level_dir=base_path)
    result = unittest.runner.TextTestRunner(verbosity=2).run(suite)

    logging.info(separator)
    logging.info("Completed unit tests at " + datetime.now().strftime("%Y-%m-%d at %H:%M"))
    logging.info(separator)

    end_logfile(log_file)
    return result.wasSuccessful()

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run unit tests")
    parser.add_argument('test', nargs='?', help="Specify the name of a test file to run (without .py)", default=None)
    args = parser.parse_args()

    results_directory = os.path.join(base_path, 'test_results')
    os.makedirs(results_directory, exist_ok=True)

    pattern = f"{args.test}.py" if args.test else "test_*.py"
    sys.exit(0 if run_unit_tests(results_directory, pattern) else 1)
