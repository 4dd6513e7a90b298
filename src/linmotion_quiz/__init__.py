"""匀速直线运动随机题目生成"""
from linmotion_quiz.models import Question
from linmotion_quiz.pipeline import QuizSession, QuizState, generate_batch, generate_next, record_answer

__version__ = "0.1.0"

__all__ = [
    "Question",
    "QuizSession",
    "QuizState",
    "generate_batch",
    "generate_next",
    "record_answer",
]
