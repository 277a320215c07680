"""Shared click options for building a NodeState"""

import click


def identity_options(func):
    """--machine, --next and --length"""
    func = click.option('--length', 'sequence_length', type=click.IntRange(min=1), default=4,
                        help='sequence_length (>= 1)')(func)
    func = click.option('--next', 'next_node', type=int, default=0,
                        help='next_node peer id')(func)
    func = click.option('--machine', 'machine_num', type=int, default=0,
                        help='machine_num')(func)
    return func


def position_options(func):
    """--index and --pulses"""
    func = click.option('--pulses', 'pulses_since_banged', type=click.IntRange(min=0), default=0,
                        help='pulses_since_banged')(func)
    func = click.option('--index', 'sequence_index', type=click.IntRange(min=-1), default=-1,
                        help='sequence_index (-1 = idle)')(func)
    return func
