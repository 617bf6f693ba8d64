"""
Shared test subjects

Small classes with protected and private members used as the objects under
test throughout the suite.
"""

from .subjects import *

__all__ = [
    "AbstractGreeter",
    "AnnotatedService",
    "ClonableDocument",
    "ConstructorSideEffect",
    "Counter",
    "Dispatcher",
    "Fetcher",
    "FieldOnlyService",
    "InjectorService",
    "MailService",
    "SetterAndInjectorService",
    "SlottedPoint",
    "SnakeCaseService",
]
