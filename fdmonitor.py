import argparse
import sys
import time

import yaml

from fdgroups import SKIP_COUNT, group_descriptors
from logging_config import configure_logging, get_logger
from procs import find_pid, list_descriptors, parse_pid
from report import LABEL_WIDTH, MAX_NUMBERS, render

log = get_logger(__name__)

CONFIG_FILE = "/etc/default/fdmonitor.yaml"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULTS = {
    "interval": 1.0,
    "skip_count": SKIP_COUNT,
    "max_numbers": MAX_NUMBERS,
    "label_width": LABEL_WIDTH,
    "log_level": "INFO",
}


class ConfigError(ValueError):
    pass


def _check(config, key, minimum, whole=False):
    value = config[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{key}: expected a number, got {value!r}")
    if whole:
        if isinstance(value, float) and not value.is_integer():
            raise ConfigError(f"{key}: expected a whole number, got {value!r}")
        value = int(value)
    else:
        value = float(value)
    if value < minimum:
        raise ConfigError(f"{key}: must be >= {minimum}, got {value}")
    config[key] = value


'''
settings from the `fdmonitor` section of a yaml file, on top of DEFAULTS.
A missing default file is fine; a missing explicit one is an error.
'''
def get_configuration(file=None):
    config = dict(DEFAULTS)
    config_data = {}
    try:
        with open(file or CONFIG_FILE, "r") as file_object:
            generator_obj = yaml.load_all(file_object, Loader=yaml.SafeLoader)
            for data in generator_obj:
                config_data = data or {}
    except FileNotFoundError:
        if file is not None:
            raise ConfigError(f"config file not found: {file}")
        return config
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid config file {file or CONFIG_FILE}: {e}")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"cannot read config file {file or CONFIG_FILE}: {e}")

    section = config_data.get("fdmonitor") if isinstance(config_data, dict) else None
    if section is None:
        return config
    if not isinstance(section, dict):
        raise ConfigError("fdmonitor: expected a mapping")

    config.update({k: v for k, v in section.items() if k in DEFAULTS})
    _check(config, "interval", 0)
    _check(config, "skip_count", 0, whole=True)
    _check(config, "max_numbers", 1, whole=True)
    _check(config, "label_width", 0, whole=True)
    config["log_level"] = str(config["log_level"]).upper()
    if config["log_level"] not in LOG_LEVELS:
        raise ConfigError(f"log_level: unknown level {config['log_level']!r}")
    return config


def resolve(target):
    pid = parse_pid(target)
    if pid is None:
        pid = find_pid(target)
    return pid


'''
one enumerate-group-report cycle, returns the exit code
'''
def run_pass(target, config, out=None):
    if out is None:
        out = sys.stdout
    pid = resolve(target)
    if pid is None:
        print(f'process "{target}" not found', file=out)
        return 1

    try:
        records = list_descriptors(pid)
    except OSError as e:
        log.error("cannot read descriptor table", pid=pid, error=str(e))
        return 1

    groups = group_descriptors(records, skip_count=config["skip_count"])
    for line in render(groups, config["max_numbers"], config["label_width"]):
        print(line, file=out)
    return 0


def watch(target, config, out=None, sleep=time.sleep):
    rc = run_pass(target, config, out)
    while rc == 0:
        sleep(config["interval"])
        rc = run_pass(target, config, out)
    return rc


class UsageParser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser():
    parser = UsageParser(prog="fdmonitor", description="Show the open file descriptors of a process grouped by target.")
    parser.add_argument("target", help="pid or process name")
    parser.add_argument("-w", "--watch", action="store_true", help="refresh until the process goes away")
    parser.add_argument("-i", "--interval", type=float, help="seconds between refreshes in watch mode")
    parser.add_argument("-c", "--config", help=f"yaml config file (default {CONFIG_FILE})")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        config = get_configuration(args.config)
    except ConfigError as e:
        print(f"fdmonitor: {e}", file=sys.stderr)
        return 1
    if args.interval is not None:
        if args.interval < 0:
            print("fdmonitor: interval must be >= 0", file=sys.stderr)
            return 1
        config["interval"] = args.interval
    configure_logging(args.log_level or config["log_level"])

    if not args.watch:
        return run_pass(args.target, config)
    try:
        return watch(args.target, config)
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
