"""Schema-to-model transformation engine.

Turns raw database metadata into the repository model consumed by the
code generator.
"""

from .model import RepositoryModel, Entity, Column, ForeignKey, ForeignKeyColumn, DateType
from .classifier import is_long_text, date_subtype
from .rules import RepositoryRules, StandardRepositoryRules, RuleResult, RuleFailure, apply_rule
from .builders import ColumnBuilder, ForeignKeyBuilder, EntityBuilder
from .assembler import RepositoryModelAssembler

__all__ = [
    # Model
    "RepositoryModel",
    "Entity",
    "Column",
    "ForeignKey",
    "ForeignKeyColumn",
    "DateType",
    # Classification
    "is_long_text",
    "date_subtype",
    # Rules
    "RepositoryRules",
    "StandardRepositoryRules",
    "RuleResult",
    "RuleFailure",
    "apply_rule",
    # Builders
    "ColumnBuilder",
    "ForeignKeyBuilder",
    "EntityBuilder",
    "RepositoryModelAssembler",
]
