"""
StudyQuest API
Courses, progress tracking and gamification
"""
__version__ = "1.0.0"
