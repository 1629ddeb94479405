# -----------------------------------------------------------------------------
# hunkscope - Dual Licensed Software
# Copyright (c) 2025 Adem Can
#
# This file is part of hunkscope.
#
# hunkscope is available under a dual-license:
#   1. AGPLv3 (Affero General Public License v3)
#      - See LICENSE.txt and LICENSE-AGPL.txt
#      - Online: https://www.gnu.org/licenses/agpl-3.0.html
#
#   2. Commercial License
#      - For proprietary or revenue-generating use,
#        including SaaS, embedding in closed-source software,
#        or avoiding AGPL obligations.
#      - See LICENSE.txt and COMMERCIAL-LICENSE.txt
#      - Contact: ademfcan@gmail.com
#
# By using this file, you agree to the terms of one of the two licenses above.
# -----------------------------------------------------------------------------


import os
import tomllib
from pathlib import Path
from typing import TypeVar

from loguru import logger
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from hunkscope.core.exceptions import ConfigurationError

ConfigT = TypeVar("ConfigT", bound=BaseModel)


class ConfigLoader:
    """Loads configuration from several sources and merges them into one model."""

    @staticmethod
    def get_full_config(
        config_model: type[ConfigT],
        input_args: dict,
        local_config_path: Path,
        env_app_prefix: str,
        global_config_path: Path,
        custom_config_path: Path | None = None,
    ) -> tuple[ConfigT, list[str], bool]:
        """
        Merge configuration with priority: input args, custom config,
        local config, environment variables, global config.

        Returns:
            The built model, the names of the sources that contributed,
            and whether any field fell back to its default
        """
        source_names = [
            "Input Args",
            "Local Config",
            "Environment Variables",
            "Global Config",
        ]
        sources = [
            input_args,
            ConfigLoader.load_toml(local_config_path),
            ConfigLoader.load_env(env_app_prefix),
            ConfigLoader.load_toml(global_config_path),
        ]

        if custom_config_path is not None:
            if not custom_config_path.exists():
                raise ConfigurationError(
                    f"Custom config file not found: {custom_config_path}"
                )
            sources.insert(1, ConfigLoader.load_toml(custom_config_path))
            source_names.insert(1, "Custom Config")

        for name, source in zip(source_names, sources, strict=True):
            logger.debug(f"{name=} keys={sorted(source)}")

        built_model, used_indexes, used_defaults = ConfigLoader.build(
            config_model, sources
        )

        return built_model, [source_names[i] for i in sorted(used_indexes)], used_defaults

    @staticmethod
    def load_toml(path: Path) -> dict:
        """Load a TOML file, returning an empty dict if it is missing or invalid."""
        if not path.exists():
            logger.debug(f"{path} does not exist")
            return {}

        data = {}
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            logger.warning(f"Failed to load {path}: {e}")

        return data

    @staticmethod
    def load_env(app_prefix: str) -> dict:
        """Collect variables starting with the app prefix, keyed by the lowercased rest."""
        data = {}
        for k, v in os.environ.items():
            if k.lower().startswith(app_prefix.lower()):
                data[k[len(app_prefix) :].lower()] = v

        return data

    @staticmethod
    def build(
        config_model: type[ConfigT], sources: list[dict]
    ) -> tuple[ConfigT, set[int], bool]:
        """Take each field from the highest priority source that provides it."""
        remaining_keys = set(config_model.model_fields.keys())

        final_data = {}
        used_indices = set()

        for i, source in enumerate(sources):
            if not remaining_keys:
                break

            contributions = source.keys() & remaining_keys
            if contributions:
                used_indices.add(i)
                for key in contributions:
                    final_data[key] = source[key]
                remaining_keys -= contributions

        try:
            model = config_model.model_validate(final_data)
        except PydanticValidationError as e:
            raise ConfigurationError("Invalid configuration", str(e)) from e

        return model, used_indices, bool(remaining_keys)
