import logging
import os
import tempfile
import unittest

from plox.lang.log import ROOT, get_logger, setup_logging


class LogTestCase(unittest.TestCase):

    def setUp(self):
        self.directory = tempfile.TemporaryDirectory()
        self.addCleanup(self.directory.cleanup)
        self.addCleanup(setup_logging)  # back to stderr, which also closes the log file

    def read(self, path):
        with open(path, encoding="utf-8") as file:
            return file.read()

    def test_log_file(self):
        path = os.path.join(self.directory.name, "plox.log")
        setup_logging("INFO", path)

        get_logger("plox.core.parser").info("parsed")
        get_logger("plox.core.parser").debug("too detailed")
        get_logger("elsewhere").warning("not ours")

        output = self.read(path)
        self.assertIn("INFO plox.core.parser: parsed", output)
        self.assertNotIn("too detailed", output)
        self.assertNotIn("not ours", output)

    def test_reconfigure(self):
        first = os.path.join(self.directory.name, "first.log")
        second = os.path.join(self.directory.name, "second.log")

        setup_logging("DEBUG", first)
        logger = setup_logging("DEBUG", second)
        self.assertEqual(1, len(logger.handlers))
        self.assertEqual(logging.DEBUG, logger.level)

        get_logger(ROOT + ".main").debug("only in second")
        self.assertEqual("", self.read(first))
        self.assertIn("only in second", self.read(second))


if __name__ == '__main__':
    unittest.main()
