#!/usr/bin/env python3
"""
Unit Tests for the Command Line Entry Point
============================================

Tests the CLI end to end:
- Generated and file-provided sizes
- JSON output
- Exit codes for bad input and bad configuration
- Logging setup
"""

import sys
import os
import io
import json
import logging
import tempfile
import unittest
from contextlib import redirect_stdout

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from tags_cloud.logging_config import LOGGER_NAME, setup_logging
from tags_cloud.main import EXIT_OK, EXIT_USAGE, main


class CLITestCase(unittest.TestCase):
    """Shared temp dir and stdout capture."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = self._tmp.name

    def tearDown(self):
        logger = logging.getLogger(LOGGER_NAME)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        self._tmp.cleanup()

    def run_cli(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(list(argv))
        return code, out.getvalue()

    def write_json(self, name, data):
        path = os.path.join(self.tmp, name)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f)
        return path


class TestCLIRuns(CLITestCase):
    """Test successful runs."""

    def test_generated_sizes_with_output(self):
        """Test random sizes are laid out and written as JSON."""
        output = os.path.join(self.tmp, 'cloud.json')
        code, text = self.run_cli('--sizes', 'random', '--count', '30',
                                  '--center', '5', '-5', '--output', output)
        self.assertEqual(code, EXIT_OK)
        self.assertIn('Rectangles:', text)

        with open(output, 'r', encoding='utf-8') as f:
            data = json.load(f)
        self.assertEqual(data['center'], {'x': 5, 'y': -5})
        self.assertEqual(len(data['rectangles']), 30)
        self.assertEqual(data['metrics']['overlaps'], 0)

    def test_sizes_file(self):
        """Test sizes read from a JSON file."""
        path = self.write_json('sizes.json', [[3, 4], [5, 6], {'width': 7, 'height': 2}])
        output = os.path.join(self.tmp, 'cloud.json')
        code, _ = self.run_cli('--sizes-file', path, '--center', '3', '4', '--output', output)
        self.assertEqual(code, EXIT_OK)
        with open(output, 'r', encoding='utf-8') as f:
            data = json.load(f)
        first = data['rectangles'][0]
        self.assertEqual(first, {'x': 2, 'y': 2, 'width': 3, 'height': 4})

    def test_config_and_no_compaction(self):
        """Test a config file combined with --no-compaction."""
        config = self.write_json('layout.json', {'angle_step': 0.2, 'cell_size': 16})
        code, _ = self.run_cli('--count', '20', '--config', config, '--no-compaction')
        self.assertEqual(code, EXIT_OK)


class TestCLIErrors(CLITestCase):
    """Test user errors map to exit code 2."""

    def test_invalid_size_in_file(self):
        """Test a non-positive size stops the run."""
        path = self.write_json('sizes.json', [[3, 4], [0, 6]])
        code, _ = self.run_cli('--sizes-file', path)
        self.assertEqual(code, EXIT_USAGE)

    def test_malformed_sizes_file(self):
        """Test a sizes file that is not a list."""
        path = self.write_json('sizes.json', {'width': 3})
        code, _ = self.run_cli('--sizes-file', path)
        self.assertEqual(code, EXIT_USAGE)

    def test_missing_sizes_file(self):
        """Test a path that does not exist."""
        code, _ = self.run_cli('--sizes-file', os.path.join(self.tmp, 'nope.json'))
        self.assertEqual(code, EXIT_USAGE)

    def test_unknown_config_key(self):
        """Test a config file with an unknown setting."""
        config = self.write_json('layout.json', {'spiral_speed': 3})
        code, _ = self.run_cli('--config', config)
        self.assertEqual(code, EXIT_USAGE)

    def test_negative_count(self):
        """Test a negative --count."""
        code, _ = self.run_cli('--count', '-3')
        self.assertEqual(code, EXIT_USAGE)


class TestLoggingSetup(CLITestCase):
    """Test setup_logging()."""

    def test_repeated_setup_does_not_duplicate_handlers(self):
        """Test calling setup twice keeps one console handler."""
        setup_logging(logging.INFO)
        logger = setup_logging(logging.DEBUG)
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)

    def test_log_file(self):
        """Test messages reach the optional log file."""
        path = os.path.join(self.tmp, 'run.log')
        logger = setup_logging(logging.INFO, log_file=path)
        self.assertEqual(len(logger.handlers), 2)
        logging.getLogger('tags_cloud.cloud_layouter').info("placed something")
        for handler in logger.handlers:
            handler.flush()
        with open(path, 'r', encoding='utf-8') as f:
            self.assertIn("placed something", f.read())


if __name__ == '__main__':
    unittest.main()
