import argparse
import logging
import sys
import time
from pathlib import Path

from .config import ConfigError, load_config
from .watcher import build_handler, run_watcher, trigger_recompile

logger = logging.getLogger("evc")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
                        prog='evc',
                        description='Compile .evc component templates to ERB',
                        epilog='Watches the configured sources unless --once is given')
    parser.add_argument('config')
    parser.add_argument('--once', action='store_true', help='compile once and exit')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO,
                        format='%(asctime)s - %(message)s',
                        datefmt='%Y-%m-%d %H:%M:%S')
    base_path = Path('.')

    if args.once:
        config = load_config(args.config, base_path)
        failures = trigger_recompile(config.write_pairs, build_handler())
        return 1 if failures else 0

    while True:
        try:
            run_watcher(load_config(args.config, base_path))
            return 0
        except (ConfigError, OSError) as e:
            logger.error("Error: %s", e)
            logger.error("Please check your configuration and try again, attempting to reload in 3 seconds...")
            time.sleep(3)


if __name__ == '__main__':
    sys.exit(main())
