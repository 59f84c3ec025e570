from pathlib import Path
from typing import Dict, Set

import yaml


class ConfigError(ValueError):
    pass


class BuildConfig:
    """
    Build settings read from a YAML file:

        write:
          - src: views/index.html.evc
            dst: build/index.html.erb
        watch:
          - partials/*.evc

    Paths and globs are resolved against `base_path`.
    """

    def __init__(self, write_pairs: Dict[Path, Path], watch_paths: Set[Path]):
        self.write_pairs = write_pairs
        self.watch_paths = watch_paths

    @classmethod
    def from_dict(cls, cfg, base_path: Path = Path('.')) -> "BuildConfig":
        if not isinstance(cfg, dict):
            raise ConfigError("Configuration must be a mapping")
        if not cfg.get('write'):
            raise ConfigError("Configuration needs a non-empty 'write' list")

        write_pairs = {}
        for to_write in cfg['write']:
            if not isinstance(to_write, dict) or 'src' not in to_write or 'dst' not in to_write:
                raise ConfigError(f"Each 'write' entry needs 'src' and 'dst': {to_write!r}")
            write_pairs[base_path / to_write['src']] = base_path / to_write['dst']

        watch_paths = {watch_path for watch_path_str in cfg.get('watch') or []
                       for watch_path in base_path.glob(watch_path_str)}

        return cls(write_pairs, watch_paths)


def load_config(path, base_path: Path = Path('.')) -> BuildConfig:
    with open(path, "r") as f:
        try:
            cfg = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    return BuildConfig.from_dict(cfg, base_path)
