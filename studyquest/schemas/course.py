from pydantic import BaseModel, Field
from typing import Optional, List, Iterator, Tuple
from enum import Enum


class BadgeCriteriaType(str, Enum):
    COURSES_COMPLETED = "courses-completed"
    QUIZZES_ANSWERED = "quizzes-answered"
    SIMULATIONS_RUN = "simulations-run"


class SimulationType(str, Enum):
    CIRCUIT = "circuit"
    NETWORK = "network"


# Quiz Schemas
class Question(BaseModel):
    id: str
    text: str = ""
    type: str = "single"  # single, multiple
    options: List[str] = []
    answers: List[str] = []  # answer key, order-independent


class Quiz(BaseModel):
    title: str = ""
    description: Optional[str] = None
    questions: List[Question] = []


# Course Structure Schemas
class Lesson(BaseModel):
    id: str
    title: str = ""
    content: Optional[str] = None
    quiz: Optional[Quiz] = None
    circuit_id: Optional[str] = None
    network_id: Optional[str] = None

    def simulation_id(self, simulation_type: SimulationType) -> Optional[str]:
        if simulation_type == SimulationType.CIRCUIT:
            return self.circuit_id
        return self.network_id


class Module(BaseModel):
    id: str
    title: str = ""
    lessons: List[Lesson] = []


# Gamification Schemas
class BadgeCriteria(BaseModel):
    # Kept as a plain string so unknown types still load and are skipped later
    type: Optional[str] = None
    threshold: int = 0


class Badge(BaseModel):
    name: str
    description: str = ""
    icon_url: Optional[str] = None
    criteria: Optional[BadgeCriteria] = None


class GamificationSettings(BaseModel):
    points_per_lesson: int = Field(10, ge=0)
    points_per_quiz: int = Field(20, ge=0)
    points_per_simulation: int = Field(15, ge=0)
    badges: List[Badge] = []


class Course(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    instructor_id: Optional[str] = None
    modules: List[Module] = []
    gamification_settings: Optional[GamificationSettings] = None

    def iter_lessons(self) -> Iterator[Tuple[Module, Lesson]]:
        for module in self.modules:
            for lesson in module.lessons:
                yield module, lesson

    def lesson_ids(self) -> List[str]:
        return [lesson.id for _, lesson in self.iter_lessons()]

    def find_lesson(self, module_id: str, lesson_id: str) -> Optional[Lesson]:
        for module in self.modules:
            if module.id != module_id:
                continue
            for lesson in module.lessons:
                if lesson.id == lesson_id:
                    return lesson
        return None

    def find_simulation_lesson(
        self, simulation_id: str, simulation_type: SimulationType
    ) -> Optional[Lesson]:
        for _, lesson in self.iter_lessons():
            if lesson.simulation_id(simulation_type) == simulation_id:
                return lesson
        return None
