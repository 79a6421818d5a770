"""QuizRank: quiz generation, grading and leaderboards"""

__version__ = "1.0.0"
