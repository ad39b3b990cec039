"""YAML configuration loader for future matchers."""

import logging
from pathlib import Path
from typing import Iterator, Optional

import yaml

from future_pytest.config.models import FutureMatcherConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """
    Resolve and read the future matcher YAML file of a test project.

    Discovery is confined to the project: it starts in the directory pytest
    was invoked from and climbs no higher than the rootdir.
    """

    DEFAULT_CONFIG_NAMES = (
        "future_matchers.yaml",
        "future_matchers.yml",
        ".future_matchers.yaml",
        ".future_matchers.yml",
    )

    @classmethod
    def load(
        cls,
        config_path: Optional[str | Path] = None,
        root_dir: Optional[Path] = None,
        start_dir: Optional[Path] = None,
    ) -> FutureMatcherConfig:
        """
        Build the configuration for a test run.

        Args:
            config_path: Explicit config file; relative paths resolve against root_dir.
            root_dir: Project root (pytest's rootpath). Defaults to the current directory.
            start_dir: Directory discovery starts from. Defaults to root_dir.

        Returns:
            FutureMatcherConfig read from the file, or defaults when there is none.

        Raises:
            FileNotFoundError: If config_path is given but doesn't exist.
            ValueError: If the file does not hold a mapping or fails validation.
        """
        root_dir = (root_dir or Path.cwd()).resolve()

        if config_path is not None:
            path = Path(config_path)
            if not path.is_absolute():
                path = root_dir / path
            if not path.is_file():
                raise FileNotFoundError(f"Configuration file not found: {path}")
            return cls._read(path)

        found = cls.find_config_file(start_dir or root_dir, root_dir)
        if found is None:
            logger.debug(f"No future matcher configuration under {root_dir}, using defaults")
            return FutureMatcherConfig()
        return cls._read(found)

    @classmethod
    def find_config_file(cls, start_dir: Path, root_dir: Path) -> Optional[Path]:
        """First default-named file between start_dir and root_dir, nearest wins."""
        for directory in cls._search_dirs(start_dir, root_dir):
            for name in cls.DEFAULT_CONFIG_NAMES:
                candidate = directory / name
                if candidate.is_file():
                    return candidate
        return None

    @staticmethod
    def _search_dirs(start_dir: Path, root_dir: Path) -> Iterator[Path]:
        start_dir, root_dir = start_dir.resolve(), root_dir.resolve()
        if start_dir != root_dir and root_dir not in start_dir.parents:
            # Invoked from outside the project: only the rootdir is searched
            yield root_dir
            return
        yield start_dir
        for parent in start_dir.parents:
            if root_dir not in parent.parents and parent != root_dir:
                return
            yield parent
            if parent == root_dir:
                return

    @classmethod
    def _read(cls, path: Path) -> FutureMatcherConfig:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        if data is None:
            data = {}
        elif not isinstance(data, dict):
            raise ValueError(
                f"{path}: expected a mapping of settings, got {type(data).__name__}"
            )

        logger.info(f"Future matcher configuration: {path}")
        return FutureMatcherConfig.model_validate(data)

    @classmethod
    def merge_configs(
        cls, base: FutureMatcherConfig, override: FutureMatcherConfig
    ) -> FutureMatcherConfig:
        """Merge two configurations; fields explicitly set on override win."""
        merged = {**base.model_dump(), **override.model_dump(exclude_unset=True)}
        return FutureMatcherConfig.model_validate(merged)
