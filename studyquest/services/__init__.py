from .learning_service import LearningService

__all__ = ["LearningService"]
