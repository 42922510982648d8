from . import answers, questions

__all__ = ["answers", "questions"]
