# Copyright 2024 Heinrich Krupp
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Storage factory for MCP Analogy Memory.

Creates and loads the file-backed pattern library.
"""

import logging
from pathlib import Path

from .pattern_library import PatternLibrary

logger = logging.getLogger(__name__)


def create_pattern_library(storage_path: str | Path | None = None) -> PatternLibrary:
    """
    Create and load the pattern library.

    Args:
        storage_path: Override for the JSON file; defaults to ``settings.paths.patterns_file``.

    Returns:
        Loaded PatternLibrary instance
    """
    if storage_path is None:
        from ..config import settings

        storage_path = settings.paths.patterns_file

    logger.info(f"Creating pattern library at {storage_path}")
    library = PatternLibrary(storage_path).load()
    logger.info(f"Pattern library ready with {len(library)} patterns")
    return library
