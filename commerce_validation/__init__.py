"""
commerce-validation: declarative field rules and request payload validation
for the commerce application.
"""

__version__ = "1.0.0"
