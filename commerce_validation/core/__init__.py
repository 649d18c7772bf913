"""
Validation rule engine: rule models, rule factories, the evaluator and the
field validation session.
"""
