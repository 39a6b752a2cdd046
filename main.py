"""
Command line entry point: split a CSV file into training/[validation/]testing CSVs.
"""
import argparse
import importlib.util
import logging
import warnings

import config as default_config
from core.errors import SmallStrataWarning, SplitError
from core.log_utils import setup_logging
from data.loaders import load_csv, save_subsets
from splitting.initial import (
    initial_split,
    initial_time_split,
    initial_validation_split,
    initial_validation_time_split,
)

logger = logging.getLogger(__name__)


def load_config(path=None):
    """
    Load a config module from a file path, or the default config module.
    Names missing from the file fall back to the default config.
    """
    if path is None:
        return default_config
    spec = importlib.util.spec_from_file_location('config', path)
    config = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(config)
    for name in dir(default_config):
        if name.isupper() and not hasattr(config, name):
            setattr(config, name, getattr(default_config, name))
    return config


def build_parser():
    parser = argparse.ArgumentParser(description='Split a CSV dataset into training, validation and testing subsets.')
    parser.add_argument('--input', required=True, help='Path to the input CSV file')
    parser.add_argument('--output-dir', required=True, help='Directory for <subset>.csv outputs')
    parser.add_argument('--policy', choices=['random', 'time'], default='random', help='Random sampling or time-ordered cut')
    parser.add_argument('--prop', type=float, nargs='+', help='Training proportion, or training and validation proportions')
    parser.add_argument('--strata', type=str, default=None, help='Column to stratify on')
    parser.add_argument('--unit', type=str, default=None, help='Column identifying experimental units')
    parser.add_argument('--seed', type=int, default=None, help='Random seed (defaults to config.RANDOM_SEED)')
    parser.add_argument('--config', type=str, default=None, help='Path to an alternative config file')
    parser.add_argument('--log-file', type=str, default=None, help='Log to this file instead of the console')
    return parser


def run_split(args, config):
    data = load_csv(args.input)
    prop = args.prop
    three_way = prop is not None and len(prop) == 2
    if prop is not None and len(prop) not in (1, 2):
        raise SystemExit(f"--prop takes one or two values, got {len(prop)}")

    if args.policy == 'time':
        if args.strata or args.unit:
            logger.warning("--strata and --unit are ignored by the time policy")
        if three_way:
            plan = initial_validation_time_split(data, prop=tuple(prop), tolerance=config.PROPORTION_TOLERANCE)
        else:
            plan = initial_time_split(data, prop=prop[0] if prop else config.TRAIN_PROPORTION,
                                      tolerance=config.PROPORTION_TOLERANCE)
    else:
        seed = args.seed if args.seed is not None else config.RANDOM_SEED
        options = dict(strata=args.strata, unit=args.unit, seed=seed, breaks=config.STRATA_BREAKS,
                       tolerance=config.PROPORTION_TOLERANCE)
        if three_way:
            plan = initial_validation_split(data, prop=tuple(prop), **options)
        else:
            plan = initial_split(data, prop=prop[0] if prop else config.TRAIN_PROPORTION, **options)

    logger.info(f"Split sizes: {plan.sizes()}")
    return save_subsets(plan, args.output_dir)


def main(argv=None):
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    setup_logging(args.log_file, level=config.LOG_LEVEL, log_format=config.LOG_FORMAT)
    with warnings.catch_warnings():
        warnings.simplefilter('always', SmallStrataWarning)
        try:
            return run_split(args, config)
        except (SplitError, KeyError) as e:
            logger.error(f"Split failed: {e}")
            raise SystemExit(2) from e


if __name__ == "__main__":
    main()
