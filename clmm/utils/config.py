# The MIT License (MIT)
# Copyright © 2026 clmm-core contributors

# Permission is hereby granted, free of charge, to any person obtaining a copy of this software and associated
# documentation files (the “Software”), to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so, subject to the following conditions:

# The above copyright notice and this permission notice shall be included in all copies or substantial portions of
# the Software.

# THE SOFTWARE IS PROVIDED “AS IS”, WITHOUT WARRANTY OF ANY KIND, EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO
# THE WARRANTIES OF MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL
# THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION
# OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER
# DEALINGS IN THE SOFTWARE.

import argparse
import os
import sys
from types import SimpleNamespace

from dotenv import load_dotenv
from loguru import logger

from clmm import __version__
from clmm.constants import DEFAULT_TICK_SPACING

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def setup_logging(level: str = "INFO", sink=None) -> None:
    """
    Route the package's log records to `sink` at `level`.
    The package stays silent until this (or logger.enable("clmm")) is called.
    """
    logger.remove()
    logger.add(
        sink if sink is not None else sys.stderr,
        level=level,
        backtrace=False,
        diagnose=False,
        format="{time:YYYY-MM-DD at HH:mm:ss} | {level} | {name}:{function} | {message}",
    )
    logger.enable("clmm")


def tick_spacing_arg(value: str) -> int:
    """argparse type for --pool.tick_spacing, rejects values outside (0, 2^16)"""
    try:
        tick_spacing = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid tick spacing: {value!r}") from None
    if not 0 < tick_spacing < 2**16:
        raise argparse.ArgumentTypeError(f"tick spacing must be in (0, 65536), got {tick_spacing}")
    return tick_spacing


def add_args(parser) -> None:
    """
    Adds relevant arguments to the parser for operation.
    """

    parser.add_argument(
        "--logging.level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Minimum level of log records to print.",
        default=os.getenv("CLMM_LOG_LEVEL", "WARNING").upper(),
    )

    parser.add_argument(
        "--pool.tick_spacing",
        type=tick_spacing_arg,
        help="Tick spacing used to compute tick array start indices.",
        default=os.getenv("CLMM_TICK_SPACING", str(DEFAULT_TICK_SPACING)),
    )

    parser.add_argument(
        "--pool.decimals_0",
        type=int,
        help="Decimals of token_0, used when printing human readable prices.",
        default=int(os.getenv("CLMM_DECIMALS_0", "0")),
    )

    parser.add_argument(
        "--pool.decimals_1",
        type=int,
        help="Decimals of token_1, used when printing human readable prices.",
        default=int(os.getenv("CLMM_DECIMALS_1", "0")),
    )


def nest(namespace: argparse.Namespace) -> SimpleNamespace:
    """Turn dotted option names ("pool.tick_spacing") into nested attributes (conf.pool.tick_spacing)"""
    root = SimpleNamespace()
    for key, value in vars(namespace).items():
        node = root
        *parents, leaf = key.split(".")
        for part in parents:
            if not hasattr(node, part):
                setattr(node, part, SimpleNamespace())
            node = getattr(node, part)
        setattr(node, leaf, value)
    return root


def config(parser: argparse.ArgumentParser, argv=None) -> SimpleNamespace:
    """
    Returns the configuration object parsed from `argv`, with dotted options nested.
    """
    conf = nest(parser.parse_args(argv))
    conf.version = __version__
    return conf


def load_env() -> None:
    # values already in the environment win over the .env file
    load_dotenv(override=False)
