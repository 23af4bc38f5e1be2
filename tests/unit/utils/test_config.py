import argparse
import unittest

from loguru import logger

from clmm.constants import DEFAULT_TICK_SPACING
from clmm.states.tick_array_bitmap import TickArrayBitmapIndex
from clmm.utils.config import add_args, config, nest, setup_logging


class TestLogging(unittest.TestCase):
    def tearDown(self):
        logger.remove()
        logger.disable("clmm")

    def test_package_logs_once_enabled(self):
        messages = []
        setup_logging("DEBUG", sink=messages.append)
        TickArrayBitmapIndex(1).flip_bit(60)
        self.assertTrue(messages)
        self.assertIn("DEBUG", messages[0])

    def test_level_filters_records(self):
        messages = []
        setup_logging("WARNING", sink=messages.append)
        TickArrayBitmapIndex(1).flip_bit(60)
        self.assertEqual(messages, [])


class TestConfig(unittest.TestCase):
    def test_nest(self):
        namespace = argparse.Namespace(**{"pool.tick_spacing": 10, "logging.level": "INFO", "tick": 5})
        conf = nest(namespace)
        self.assertEqual(conf.pool.tick_spacing, 10)
        self.assertEqual(conf.logging.level, "INFO")
        self.assertEqual(conf.tick, 5)

    def test_defaults(self):
        parser = argparse.ArgumentParser()
        add_args(parser)
        conf = config(parser, [])
        self.assertEqual(conf.pool.tick_spacing, DEFAULT_TICK_SPACING)
        self.assertEqual(conf.pool.decimals_0, 0)
        self.assertTrue(conf.version)

    def test_level_is_case_insensitive(self):
        parser = argparse.ArgumentParser()
        add_args(parser)
        conf = config(parser, ["--logging.level", "debug"])
        self.assertEqual(conf.logging.level, "DEBUG")


if __name__ == "__main__":
    unittest.main()
