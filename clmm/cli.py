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
import sys

from loguru import logger

from clmm import __version__
from clmm.exceptions import ClmmError
from clmm.states.tick_array import get_array_start_index
from clmm.states.tick_array_bitmap import TickArrayBitmapIndex
from clmm.utils.config import add_args, config, load_env, setup_logging
from clmm.utils.fixed_point_64 import sqrt_price_x64_to_price
from clmm.utils.tick_math import check_tick_boundary, get_sqrt_price_at_tick, get_tick_at_sqrt_price


def tick_to_sqrt_price(conf) -> None:
    print(get_sqrt_price_at_tick(conf.tick))


def sqrt_price_to_tick(conf) -> None:
    print(get_tick_at_sqrt_price(conf.sqrt_price_x64))


def start_index(conf) -> None:
    check_tick_boundary(conf.tick)
    tick_spacing = conf.pool.tick_spacing
    start = get_array_start_index(conf.tick, tick_spacing)
    address = TickArrayBitmapIndex(tick_spacing).address(start)
    print(f"start_index={start} side={address.side.value} block={address.block} word={address.word} bit={address.bit}")


def price(conf) -> None:
    if conf.sqrt_price_x64 is None:
        sqrt_price_x64 = get_sqrt_price_at_tick(conf.tick)
    else:
        get_tick_at_sqrt_price(conf.sqrt_price_x64)  # validates the domain
        sqrt_price_x64 = conf.sqrt_price_x64
    print(sqrt_price_x64_to_price(sqrt_price_x64, conf.pool.decimals_0, conf.pool.decimals_1))


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    add_args(common)

    parser = argparse.ArgumentParser(prog="clmm", description="Tick, sqrt price and tick array bitmap utilities.")
    parser.add_argument("--version", action="version", version=__version__)
    commands = parser.add_subparsers(dest="command", required=True)

    cmd = commands.add_parser("tick-to-sqrt-price", parents=[common], help="Q64.64 sqrt price of a tick")
    cmd.add_argument("tick", type=int)
    cmd.set_defaults(func=tick_to_sqrt_price)

    cmd = commands.add_parser("sqrt-price-to-tick", parents=[common], help="greatest tick at or below a Q64.64 sqrt price")
    cmd.add_argument("sqrt_price_x64", type=int)
    cmd.set_defaults(func=sqrt_price_to_tick)

    cmd = commands.add_parser("start-index", parents=[common], help="tick array start index and bitmap address of a tick")
    cmd.add_argument("tick", type=int)
    cmd.set_defaults(func=start_index)

    cmd = commands.add_parser("price", parents=[common], help="human readable price of a tick or Q64.64 sqrt price")
    source = cmd.add_mutually_exclusive_group(required=True)
    source.add_argument("--tick", type=int)
    source.add_argument("--sqrt_price_x64", type=int)
    cmd.set_defaults(func=price)

    return parser


def main(argv=None) -> int:
    load_env()
    conf = config(build_parser(), argv)
    setup_logging(conf.logging.level)
    logger.debug(f"Running {conf.command} with clmm {conf.version}")
    try:
        conf.func(conf)
    except ClmmError as err:
        logger.error(err)
        print(f"error: {err}", file=sys.stderr)
        return 1
    return 0
