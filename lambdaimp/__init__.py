# lambdaimp language package
# This package provides an interpreter and a static analyzer for a small
# imperative language built directly as Python AST objects.
from .interpreter import run_program, Interpreter
from .analyzer import analyze_program, Analyzer, AnalysisReport
from .environment import Environment
from .errors import LambdaError, ErrorVal
from .evaluator import evaluate

__all__ = [
    'run_program',
    'Interpreter',
    'analyze_program',
    'Analyzer',
    'AnalysisReport',
    'Environment',
    'LambdaError',
    'ErrorVal',
    'evaluate',
]
