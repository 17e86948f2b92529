"""
ModuleLoader - Load learning modules and their questions from disk.

Content layout (one directory per module):

    <content_dir>/<module_id>/module.yaml     registry entry + round graph
    <content_dir>/<module_id>/questions.json  schema + questions per round

Question files are cached per path until clear_cache() is called.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from platolearn.config import CONTENT_DIR
from platolearn.errors import ContentError
from platolearn.schemas import LearningModule, QuestionData, Round

logger = logging.getLogger(__name__)

MODULE_FILE = "module.yaml"


class ModuleLoader:
    """
    Read-only access to module content.

    The registry (module.yaml files) is read once on construction; question
    files are read lazily.
    """

    def __init__(self, content_dir: Optional[str | Path] = None):
        """
        Initialize loader and read the module registry.

        Args:
            content_dir: Directory holding one subdirectory per module
                (default: packaged content, or PLATOLEARN_CONTENT_DIR)
        """
        self.content_dir = Path(content_dir) if content_dir else CONTENT_DIR
        if not self.content_dir.is_dir():
            raise ContentError(f"Content directory not found: {self.content_dir}")
        self._modules: dict[str, LearningModule] = {}
        self._module_dirs: dict[str, Path] = {}
        self._question_cache: dict[Path, QuestionData] = {}
        self._load_registry()

    def _load_registry(self):
        for module_file in sorted(self.content_dir.glob(f"*/{MODULE_FILE}")):
            module = self._read_module_file(module_file)
            if module.id in self._modules:
                raise ContentError(f"Duplicate module id {module.id!r} in {module_file}")
            self._modules[module.id] = module
            self._module_dirs[module.id] = module_file.parent
        logger.info(f"Loaded {len(self._modules)} module(s) from {self.content_dir}")

    @staticmethod
    def _read_module_file(path: Path) -> LearningModule:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
            return LearningModule.model_validate(data)
        except (OSError, yaml.YAMLError, ValidationError) as e:
            logger.error(f"Failed to load module from {path}: {e}")
            raise ContentError(f"Invalid module file {path}: {e}") from e

    # -------------------------------------------------------------------------
    # Registry
    # -------------------------------------------------------------------------

    def get_all_modules(self) -> list[LearningModule]:
        return list(self._modules.values())

    def get_module(self, module_id: str) -> Optional[LearningModule]:
        return self._modules.get(module_id)

    def _require_module(self, module_id: str) -> LearningModule:
        module = self.get_module(module_id)
        if module is None:
            raise ContentError(f"Unknown module: {module_id}")
        return module

    # -------------------------------------------------------------------------
    # Questions
    # -------------------------------------------------------------------------

    def load_questions(self, module_id: str) -> QuestionData:
        """
        Load the question data for a module.

        Raises:
            ContentError: If the module is unknown or its questions file is
                missing or invalid
        """
        module = self._require_module(module_id)
        path = (self._module_dirs[module_id] / module.questions_path).resolve()

        cached = self._question_cache.get(path)
        if cached is not None:
            return cached

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = QuestionData.model_validate(json.load(f))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Failed to load questions from {path}: {e}")
            raise ContentError(f"Invalid questions file {path}: {e}") from e

        self._question_cache[path] = data
        return data

    def clear_cache(self):
        """Drop cached question data so edited files are re-read."""
        self._question_cache.clear()

    def get_round(self, module_id: str, round_id: str) -> Optional[Round]:
        """
        Get a round from the registry with its questions filled in.

        Returns None if the module has no such round.
        """
        module = self._require_module(module_id)
        rnd = module.get_round(round_id)
        if rnd is None:
            return None

        questions = []
        for question_round in self.load_questions(module_id).rounds:
            if question_round.id == round_id:
                questions = question_round.questions
                break
        return rnd.model_copy(update={"questions": questions})
