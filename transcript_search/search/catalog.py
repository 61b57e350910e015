"""Lesson and course lookups over static JSON fixtures"""

from typing import Dict, List, Optional, Set, Any
from pathlib import Path
import json
import logging

from pydantic import BaseModel

from transcript_search.search.config import search_config

logger = logging.getLogger(__name__)


class Lesson(BaseModel):
    id: int
    title: str
    module_id: Optional[int] = None


class Module(BaseModel):
    id: int
    course_id: int
    title: str = ""


class Course(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    status: Optional[str] = None


def load_fixture(fixtures_dir: str, name: str) -> List[Dict[str, Any]]:
    """Load a JSON list fixture, returning [] when the file is missing"""
    path = Path(fixtures_dir) / name
    if not path.exists():
        logger.warning(f"Fixture not found: {path}")
        return []

    with open(path, 'r', encoding='utf-8') as file:
        return json.load(file)


class LessonCatalog:
    """Read-only lesson/module/course store"""

    def __init__(
        self,
        lessons: Optional[List[Lesson]] = None,
        modules: Optional[List[Module]] = None,
        courses: Optional[List[Course]] = None
    ):
        self._lessons: Dict[int, Lesson] = {lesson.id: lesson for lesson in lessons or []}
        self._modules: Dict[int, Module] = {module.id: module for module in modules or []}
        self._courses: Dict[int, Course] = {course.id: course for course in courses or []}

    @classmethod
    def from_fixtures(cls, fixtures_dir: Optional[str] = None) -> "LessonCatalog":
        """Build the catalog from lessons.json, modules.json and courses.json"""
        fixtures_dir = fixtures_dir or search_config.fixtures_dir
        catalog = cls(
            lessons=[Lesson.model_validate(item) for item in load_fixture(fixtures_dir, "lessons.json")],
            modules=[Module.model_validate(item) for item in load_fixture(fixtures_dir, "modules.json")],
            courses=[Course.model_validate(item) for item in load_fixture(fixtures_dir, "courses.json")]
        )
        logger.info(
            f"Catalog loaded: {len(catalog._lessons)} lessons, "
            f"{len(catalog._modules)} modules, {len(catalog._courses)} courses"
        )
        return catalog

    def get_lesson(self, lesson_id: int) -> Optional[Lesson]:
        return self._lessons.get(lesson_id)

    def get_course(self, course_id: int) -> Optional[Course]:
        return self._courses.get(course_id)

    def lesson_ids_for_course(self, course_id: int) -> Set[int]:
        """Ids of lessons whose module belongs to the course"""
        module_ids = {
            module.id for module in self._modules.values()
            if module.course_id == course_id
        }
        return {
            lesson.id for lesson in self._lessons.values()
            if lesson.module_id in module_ids
        }
